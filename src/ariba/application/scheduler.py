"""
SM-2 scheduler.

This is a pure computation module: a card and a grade go in, a new card comes out.
The only external input is the clock, which is injected and sampled once per call.
"""

import logging
from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal

from ariba.domain.constants import (
    FIRST_INTERVAL,
    MAX_GRADE,
    MIN_EASINESS,
    MIN_GRADE,
    PASSING_GRADE,
    SECOND_INTERVAL,
    SECONDS_PER_DAY,
)
from ariba.domain.errors import InvalidGrade
from ariba.domain.models import Card
from ariba.domain.ports import Clock

from .clock import system_clock

logger = logging.getLogger(__name__)


def validate_grade(grade: object) -> int:
    # bool is an int subclass; True/False are not grades.
    if isinstance(grade, bool) or not isinstance(grade, int):
        raise InvalidGrade(grade)
    if not MIN_GRADE <= grade <= MAX_GRADE:
        raise InvalidGrade(grade)
    return grade


def round_half_away(value: float) -> int:
    """
    Round to the nearest integer, ties away from zero.

    The built-in round() uses banker's rounding (round(2.5) == 2), which would
    shorten intervals whose product lands exactly on .5.
    """
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def next_easiness(easiness_factor: float, grade: int) -> float:
    """
    SM-2 easiness update, floored at 1.3.

    EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
    """
    miss = MAX_GRADE - grade
    return max(easiness_factor + (0.1 - miss * (0.08 + miss * 0.02)), MIN_EASINESS)


def next_interval(card: Card, grade: int) -> tuple[int, int]:
    """Return (interval, repetitions) after a review with `grade`."""
    if grade < PASSING_GRADE:
        return FIRST_INTERVAL, 0

    if card.repetitions == 0:
        interval = FIRST_INTERVAL
    elif card.repetitions == 1:
        interval = SECOND_INTERVAL
    else:
        # Uses the easiness factor from before this review.
        interval = max(FIRST_INTERVAL, round_half_away(card.interval * card.easiness_factor))
    return interval, card.repetitions + 1


class Sm2Scheduler:
    """
    Computes the next review state of a card.

    Stateless apart from its clock, so one instance can be shared freely.
    """

    def __init__(self, clock: Clock | None = None):
        self._clock = clock or system_clock

    def schedule(self, card: Card, grade: int) -> Card:
        """
        Apply one review to `card`.

        Args:
            card: The card as it was before the review. Not modified.
            grade: 0 (total failure) to 5 (perfect recall).

        Returns:
            A new Card with updated easiness_factor, interval, repetitions
            and next_review; every other field is carried over.

        Raises:
            InvalidGrade: If grade is not an integer in [0, 5].
        """
        grade = validate_grade(grade)
        now = self._clock()

        interval, repetitions = next_interval(card, grade)
        updated = replace(
            card,
            easiness_factor=next_easiness(card.easiness_factor, grade),
            interval=interval,
            repetitions=repetitions,
            next_review=now + interval * SECONDS_PER_DAY,
        )
        logger.debug(
            f"Scheduled {card.id}: grade={grade} interval={interval} "
            f"reps={repetitions} ef={updated.easiness_factor:.2f}"
        )
        return updated


def schedule(card: Card, grade: int, *, clock: Clock | None = None) -> Card:
    """Schedule a single review. See Sm2Scheduler.schedule."""
    return Sm2Scheduler(clock).schedule(card, grade)
