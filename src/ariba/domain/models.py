"""
Domain models for scheduling and analytics.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass

from .constants import DEFAULT_EASINESS


@dataclass(frozen=True)
class Card:
    """
    One learnable fact and its scheduling state.

    Attributes:
        id: Opaque unique identifier, immutable once assigned.
        front_text: Prompt side, irrelevant to scheduling.
        back_text: Answer side, irrelevant to scheduling.
        difficulty: Estimated response difficulty. Analytics reads it as an
            average-response-time proxy.
        easiness_factor: SM-2 easiness, never below 1.3 after scheduling.
        interval: Days until the next review, at least 1 after scheduling.
        repetitions: Consecutive passing reviews (grade >= 3).
        next_review: Epoch seconds of the next scheduled review.
        tags: Ordered free-form labels, opaque to the scheduler.
    """

    id: str
    front_text: str
    back_text: str
    difficulty: float = 0.0
    easiness_factor: float = DEFAULT_EASINESS
    interval: int = 0
    repetitions: int = 0
    next_review: int = 0
    tags: tuple[str, ...] = ()

    def is_due(self, now: int) -> bool:
        return self.next_review <= now


@dataclass(frozen=True)
class ReviewEvent:
    """
    A single review log entry.

    Attributes:
        card_id: The card that was reviewed.
        review_time: Epoch timestamp of the review.
        grade: Grade given, 0-5.
    """

    card_id: str
    review_time: int
    grade: int


@dataclass(frozen=True)
class LearningAnalytics:
    """
    Point-in-time summary over a card collection.

    Regenerated on every request and never persisted.
    """

    total_cards: int
    mastered_cards: int
    avg_response_time: float  # mean of Card.difficulty
    success_rate: float  # mastered / total
    study_streak: int | None = None  # None when no review log was supplied
