"""
Deck codec: Card collections to and from JSON or YAML text.

A deck document is a versioned envelope::

    {"version": 1, "cards": [{"id": ..., "front_text": ..., ...}, ...]}

A bare list of card records (the unversioned layout) is accepted on read.
"""

import json
import math
from collections.abc import Sequence
from typing import Any, Literal

import yaml  # type: ignore
import yaml.constructor
from pydantic import BaseModel, ConfigDict, ValidationError

from ariba.domain.constants import EXPORT_FORMAT_VERSION
from ariba.domain.errors import SerializationFailed
from ariba.domain.models import Card

DeckFormat = Literal["json", "yaml"]


class CardRecord(BaseModel):
    """Wire shape of a single card."""

    model_config = ConfigDict(extra="forbid")

    id: str
    front_text: str
    back_text: str
    difficulty: float
    easiness_factor: float
    interval: int
    repetitions: int
    next_review: int
    tags: list[str] = []

    @classmethod
    def from_card(cls, card: Card) -> "CardRecord":
        return cls(
            id=card.id,
            front_text=card.front_text,
            back_text=card.back_text,
            difficulty=card.difficulty,
            easiness_factor=card.easiness_factor,
            interval=card.interval,
            repetitions=card.repetitions,
            next_review=card.next_review,
            tags=list(card.tags),
        )

    def to_card(self) -> Card:
        return Card(
            id=self.id,
            front_text=self.front_text,
            back_text=self.back_text,
            difficulty=self.difficulty,
            easiness_factor=self.easiness_factor,
            interval=self.interval,
            repetitions=self.repetitions,
            next_review=self.next_review,
            tags=tuple(self.tags),
        )


class DeckDocument(BaseModel):
    version: int = EXPORT_FORMAT_VERSION
    cards: list[CardRecord]


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that forbids duplicate keys."""

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if key in seen:
                raise yaml.constructor.ConstructorError(
                    None, None, f"found duplicate key '{key}'", key_node.start_mark
                )
            seen.add(key)
        return super().construct_mapping(node, deep)


def format_for_path(path: str) -> DeckFormat:
    """Pick a format from the file suffix; anything but .yaml/.yml is JSON."""
    lowered = str(path).lower()
    if lowered.endswith((".yaml", ".yml")):
        return "yaml"
    return "json"


def serialize_cards(cards: Sequence[Card], fmt: DeckFormat = "json") -> str:
    """
    Encode `cards` as a deck document.

    Raises:
        SerializationFailed: On an unknown format or a value the encoder rejects.
    """
    for card in cards:
        if not (math.isfinite(card.difficulty) and math.isfinite(card.easiness_factor)):
            raise SerializationFailed(f"Card {card.id} has a non-finite numeric field")

    document = DeckDocument(cards=[CardRecord.from_card(c) for c in cards])
    payload = document.model_dump(mode="json")

    try:
        if fmt == "json":
            return json.dumps(payload, indent=2, ensure_ascii=False, allow_nan=False)
        if fmt == "yaml":
            return yaml.dump(
                payload,
                sort_keys=False,
                allow_unicode=True,
                default_flow_style=False,
                width=10**9,
            )
    except (TypeError, ValueError, yaml.YAMLError) as e:
        raise SerializationFailed(f"Serialization error: {e}") from e

    raise SerializationFailed(f"Unknown deck format: {fmt!r}")


def _parse(text: str) -> Any:
    if text.lstrip().startswith(("{", "[")):
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            pass  # flow-style YAML
    try:
        return yaml.load(text, Loader=UniqueKeyLoader)
    except yaml.YAMLError as e:
        raise SerializationFailed(f"Invalid deck: {e}") from e


def deserialize_cards(text: str) -> list[Card]:
    """
    Decode a deck document (JSON or YAML) back into Cards, in order.

    Raises:
        SerializationFailed: If the text is not a well-formed deck, or was
            written by a newer format version.
    """
    raw = _parse(text)
    if isinstance(raw, list):
        raw = {"version": EXPORT_FORMAT_VERSION, "cards": raw}
    if not isinstance(raw, dict):
        raise SerializationFailed("Deck must be a mapping or a list of cards")

    try:
        document = DeckDocument.model_validate(raw)
    except ValidationError as e:
        raise SerializationFailed(f"Invalid deck: {e}") from e

    if document.version > EXPORT_FORMAT_VERSION:
        raise SerializationFailed(
            f"Deck format version {document.version} is newer than supported "
            f"({EXPORT_FORMAT_VERSION})"
        )
    return [record.to_card() for record in document.cards]
