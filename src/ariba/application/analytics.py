"""
Analytics aggregator for a card collection.

This is a pure computation module with no I/O.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta, timezone

from ariba.domain.constants import (
    MASTERY_EASINESS,
    MASTERY_REPETITIONS,
    STREAK_LOOKBACK_DAYS,
)
from ariba.domain.errors import EmptyCollection, InvalidReviewTime
from ariba.domain.models import Card, LearningAnalytics, ReviewEvent
from ariba.domain.ports import Clock

from .clock import system_clock


def is_mastered(card: Card) -> bool:
    return card.easiness_factor > MASTERY_EASINESS and card.repetitions > MASTERY_REPETITIONS


def due_cards(cards: Iterable[Card], *, now: int) -> list[Card]:
    """Cards whose next review is at or before `now`, most overdue first."""
    return sorted((c for c in cards if c.is_due(now)), key=lambda c: (c.next_review, c.id))


def _utc_day(epoch: int):
    try:
        return datetime.fromtimestamp(epoch, tz=timezone.utc).date()
    except (ValueError, OverflowError, OSError) as e:
        raise InvalidReviewTime(epoch) from e


def compute_streak(reviews: Iterable[ReviewEvent], now: int) -> int:
    """
    Count consecutive UTC days with at least one review, walking back from today.

    A day without reviews ends the streak, except today: studying has not
    necessarily happened yet, so the count may start from yesterday.
    """
    days = {_utc_day(r.review_time) for r in reviews}
    if not days:
        return 0

    today = _utc_day(now)
    streak = 0
    for offset in range(STREAK_LOOKBACK_DAYS):
        if today - timedelta(days=offset) in days:
            streak += 1
        elif offset > 0:
            break
    return streak


class LearningAnalyzer:
    """
    Computes LearningAnalytics snapshots.

    Stateless and side-effect free. Callers must pass a consistent snapshot
    of the collection (e.g. a list copy), not a view being mutated.
    """

    def __init__(self, clock: Clock | None = None):
        self._clock = clock or system_clock

    def analyze(
        self,
        cards: Sequence[Card],
        reviews: Iterable[ReviewEvent] | None = None,
    ) -> LearningAnalytics:
        """
        Summarize `cards`.

        Args:
            cards: The full collection.
            reviews: Optional chronological review log. Without it the study
                streak cannot be known and is reported as None.

        Raises:
            EmptyCollection: If `cards` is empty; averages are undefined.
            InvalidReviewTime: If a review timestamp is not a valid date.
        """
        total = len(cards)
        if total == 0:
            raise EmptyCollection()

        mastered = sum(1 for c in cards if is_mastered(c))
        streak = compute_streak(reviews, self._clock()) if reviews is not None else None

        return LearningAnalytics(
            total_cards=total,
            mastered_cards=mastered,
            avg_response_time=sum(c.difficulty for c in cards) / total,
            success_rate=mastered / total,
            study_streak=streak,
        )


def analyze(
    cards: Sequence[Card],
    *,
    reviews: Iterable[ReviewEvent] | None = None,
    clock: Clock | None = None,
) -> LearningAnalytics:
    """Summarize a card collection. See LearningAnalyzer.analyze."""
    return LearningAnalyzer(clock).analyze(cards, reviews)
