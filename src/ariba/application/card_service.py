"""Creating cards and applying reviews to a stored collection."""

import logging
from collections.abc import Iterable

from ulid import ULID

from ariba.domain.constants import CARD_ID_PREFIX, DEFAULT_EASINESS
from ariba.domain.models import Card, ReviewEvent
from ariba.domain.ports import CardStore, Clock, ReviewLog

from .clock import system_clock
from .scheduler import Sm2Scheduler

logger = logging.getLogger(__name__)


def generate_card_id() -> str:
    """Generate a stable card ID using ULID."""
    return f"{CARD_ID_PREFIX}{ULID()}"


def new_card(
    front_text: str,
    back_text: str,
    *,
    tags: Iterable[str] = (),
    difficulty: float = 0.0,
    easiness_factor: float = DEFAULT_EASINESS,
    card_id: str | None = None,
) -> Card:
    """A fresh, never-reviewed card."""
    return Card(
        id=card_id or generate_card_id(),
        front_text=front_text,
        back_text=back_text,
        difficulty=difficulty,
        easiness_factor=easiness_factor,
        interval=0,
        repetitions=0,
        next_review=0,
        tags=tuple(tags),
    )


class CardService:
    """
    Application service for a persisted deck.

    Depends on the CardStore and ReviewLog ports; the store owns the
    collection, this service only loads, transforms and saves it back.
    """

    def __init__(
        self,
        store: CardStore,
        review_log: ReviewLog | None = None,
        clock: Clock | None = None,
    ):
        self._store = store
        self._log = review_log
        self._clock = clock or system_clock

    def add(self, card: Card) -> Card:
        """
        Raises:
            KeyError: If a card with the same id is already stored.
        """
        cards = self._store.load()
        if any(c.id == card.id for c in cards):
            raise KeyError(f"Card {card.id} already exists")
        cards.append(card)
        self._store.save(cards)
        logger.info(f"Added card {card.id}")
        return card

    def review(self, card_id: str, grade: int) -> Card:
        """
        Schedule `card_id` with `grade`, persist the card and log the review.

        Raises:
            KeyError: If no card has that id.
            InvalidGrade: If grade is outside 0-5.
        """
        cards = self._store.load()
        for i, card in enumerate(cards):
            if card.id == card_id:
                break
        else:
            raise KeyError(f"No card with id {card_id}")

        now = self._clock()
        updated = Sm2Scheduler(lambda: now).schedule(card, grade)
        cards[i] = updated
        self._store.save(cards)

        if self._log is not None:
            self._log.append(ReviewEvent(card_id=card_id, review_time=now, grade=grade))
        logger.info(f"Reviewed {card_id} (grade {grade}): next in {updated.interval}d")
        return updated
