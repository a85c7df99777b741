import logging

from ariba.domain.ports import ReminderNotifier

logger = logging.getLogger(__name__)


class LoggingNotifier(ReminderNotifier):
    """Records reminders in the log. Desktop delivery is left to the host."""

    def send(self, message: str) -> None:
        logger.info(f"Study reminder: {message}")
