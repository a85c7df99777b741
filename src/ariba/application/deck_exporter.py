"""
Deck Exporter — writes a card collection to a caller-chosen file.

Blocking I/O; hosts should keep it off latency-sensitive paths.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from ariba.domain.models import Card
from ariba.infrastructure.serialization import DeckFormat, format_for_path, serialize_cards
from ariba.infrastructure.store import write_atomic

logger = logging.getLogger(__name__)


def export_deck(cards: Sequence[Card], file_path: Path | str, fmt: DeckFormat | None = None) -> str:
    """
    Serialize `cards` and write them to `file_path`.

    Args:
        cards: Cards to export, in order.
        file_path: Destination; parent directories are created.
        fmt: "json" or "yaml". Inferred from the suffix when omitted.

    Returns:
        A human-readable confirmation message.

    Raises:
        SerializationFailed: If the cards cannot be encoded.
        WriteFailed: If the file cannot be written.
    """
    path = Path(file_path)
    text = serialize_cards(cards, fmt or format_for_path(str(path)))
    write_atomic(path, text)

    logger.info(f"Exported {len(cards)} cards to {path}")
    return f"Deck exported: {len(cards)} cards to {path}"
