"""
Ports (interfaces) for the external collaborators.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from .models import Card, ReviewEvent

Clock = Callable[[], int]
"""Zero-argument callable returning the current time in epoch seconds."""


class CardStore(ABC):
    """
    Port for persisting the card collection.

    Implementations:
        - JsonCardStore: A single deck file on disk.
    """

    @abstractmethod
    def load(self) -> list[Card]:
        """
        Load every stored card.

        Returns:
            Cards in stored order; empty if nothing has been saved yet.
        """
        pass

    @abstractmethod
    def save(self, cards: Sequence[Card]) -> None:
        """Replace the stored collection with `cards`."""
        pass


class ReminderNotifier(ABC):
    """Port for delivering study reminders to the user."""

    @abstractmethod
    def send(self, message: str) -> None:
        pass


class ReviewLog(ABC):
    """Port for the chronological review history used by streak analytics."""

    @abstractmethod
    def append(self, event: ReviewEvent) -> None:
        pass

    @abstractmethod
    def events(self) -> list[ReviewEvent]:
        """All recorded events, oldest first."""
        pass
