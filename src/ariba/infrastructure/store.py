"""
File-backed storage collaborators.

JsonCardStore keeps the whole deck in one file; JsonReviewLog appends one
JSON object per line next to it.
"""

import json
import logging
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

from ariba.domain.errors import ReadFailed, SerializationFailed, WriteFailed
from ariba.domain.models import Card, ReviewEvent
from ariba.domain.ports import CardStore, ReviewLog

from .serialization import deserialize_cards, format_for_path, serialize_cards

logger = logging.getLogger(__name__)


def read_text(path: Path) -> str:
    """
    Read a UTF-8 file.

    Raises:
        SerializationFailed: If the bytes are not valid UTF-8.
        ReadFailed: On any OS-level error.
    """
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SerializationFailed(f"{path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ReadFailed(path, str(e)) from e


def write_atomic(path: Path, text: str) -> None:
    """
    Write `text` to `path` via a temp file in the same directory.

    Raises:
        WriteFailed: On any OS-level error.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        raise WriteFailed(path, str(e)) from e


class JsonCardStore(CardStore):
    """Stores the deck as a single deck document (JSON, or YAML by suffix)."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> list[Card]:
        if not self.path.exists():
            logger.debug(f"No deck at {self.path}, starting empty")
            return []
        return deserialize_cards(read_text(self.path))

    def save(self, cards: Sequence[Card]) -> None:
        write_atomic(self.path, serialize_cards(cards, format_for_path(str(self.path))))
        logger.debug(f"Saved {len(cards)} cards to {self.path}")


class JsonReviewLog(ReviewLog):
    """Append-only JSON-lines review history."""

    def __init__(self, path: Path):
        self.path = Path(path)

    @classmethod
    def beside(cls, deck_path: Path) -> "JsonReviewLog":
        deck_path = Path(deck_path)
        return cls(deck_path.with_name(f"{deck_path.stem}.reviews.jsonl"))

    def append(self, event: ReviewEvent) -> None:
        line = json.dumps(
            {"card_id": event.card_id, "review_time": event.review_time, "grade": event.grade}
        )
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(line + "\n")
        except OSError as e:
            raise WriteFailed(self.path, str(e)) from e

    def events(self) -> list[ReviewEvent]:
        if not self.path.exists():
            return []

        events = []
        for lineno, line in enumerate(read_text(self.path).splitlines(), 1):
            if not line.strip():
                continue
            try:
                data = json.loads(line)
                events.append(
                    ReviewEvent(
                        card_id=str(data["card_id"]),
                        review_time=int(data["review_time"]),
                        grade=int(data["grade"]),
                    )
                )
            except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                raise SerializationFailed(f"{self.path}:{lineno}: bad review entry: {e}") from e
        return sorted(events, key=lambda e: e.review_time)
