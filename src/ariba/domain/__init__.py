# Domain Package
from .errors import (
    AribaError,
    EmptyCollection,
    InvalidGrade,
    InvalidReviewTime,
    ReadFailed,
    SerializationFailed,
    WriteFailed,
)
from .models import Card, LearningAnalytics, ReviewEvent

__all__ = [
    "Card",
    "LearningAnalytics",
    "ReviewEvent",
    "AribaError",
    "InvalidGrade",
    "InvalidReviewTime",
    "ReadFailed",
    "EmptyCollection",
    "SerializationFailed",
    "WriteFailed",
]
