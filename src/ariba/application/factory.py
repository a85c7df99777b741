"""
Collaborator Factory
Centralizes the wiring of storage and notification adapters.
"""

from ariba.application.card_service import CardService
from ariba.application.config import AppConfig
from ariba.domain.ports import CardStore, ReminderNotifier, ReviewLog
from ariba.infrastructure.notifier import LoggingNotifier
from ariba.infrastructure.store import JsonCardStore, JsonReviewLog


def get_card_store(config: AppConfig) -> CardStore:
    return JsonCardStore(config.deck_path)


def get_review_log(config: AppConfig) -> ReviewLog:
    return JsonReviewLog.beside(config.deck_path)


def get_card_service(config: AppConfig) -> CardService:
    return CardService(get_card_store(config), get_review_log(config))


def get_notifier(config: AppConfig) -> ReminderNotifier:
    return LoggingNotifier()
