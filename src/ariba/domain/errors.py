"""Error taxonomy for the ariba core and its boundary collaborators."""


class AribaError(Exception):
    """Base class for every error raised by ariba."""


class InvalidGrade(AribaError):
    """A review grade outside the 0-5 integer scale."""

    def __init__(self, grade: object):
        self.grade = grade
        super().__init__(f"Grade must be an integer between 0 and 5, got {grade!r}")


class EmptyCollection(AribaError):
    """Analytics requested over zero cards."""

    def __init__(self, message: str = "Cannot analyze an empty card collection"):
        super().__init__(message)


class SerializationFailed(AribaError):
    """Cards could not be encoded to, or decoded from, their textual form."""


class WriteFailed(AribaError):
    """A serialized deck could not be written to its destination."""

    def __init__(self, path: object, reason: str):
        self.path = path
        super().__init__(f"Could not write {path}: {reason}")


class ReadFailed(AribaError):
    """A stored deck or review log could not be read."""

    def __init__(self, path: object, reason: str):
        self.path = path
        super().__init__(f"Could not read {path}: {reason}")


class InvalidReviewTime(AribaError):
    """A review log entry whose timestamp is outside the representable range."""

    def __init__(self, review_time: object):
        self.review_time = review_time
        super().__init__(f"Review time out of range: {review_time!r}")
