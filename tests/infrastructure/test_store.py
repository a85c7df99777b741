import pytest

from ariba.application.deck_exporter import export_deck
from ariba.domain.errors import ReadFailed, SerializationFailed, WriteFailed
from ariba.domain.models import ReviewEvent
from ariba.infrastructure.notifier import LoggingNotifier
from ariba.infrastructure.serialization import deserialize_cards
from ariba.infrastructure.store import JsonCardStore, JsonReviewLog

from conftest import NOW, make_card


def test_missing_deck_loads_empty(tmp_path):
    assert JsonCardStore(tmp_path / "deck.json").load() == []


def test_save_then_load(tmp_path):
    store = JsonCardStore(tmp_path / "nested" / "deck.json")
    cards = [make_card(id="a"), make_card(id="b", tags=("x",))]
    store.save(cards)
    assert store.load() == cards
    # No temp files left behind
    assert [p.name for p in store.path.parent.iterdir()] == ["deck.json"]


def test_yaml_store_by_suffix(tmp_path):
    store = JsonCardStore(tmp_path / "deck.yaml")
    store.save([make_card()])
    assert store.path.read_text(encoding="utf-8").startswith("version: 1")
    assert store.load() == [make_card()]


def test_save_into_file_path_fails(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    with pytest.raises(WriteFailed):
        JsonCardStore(blocker / "deck.json").save([make_card()])


def test_review_log_append_and_read(tmp_path):
    log = JsonReviewLog.beside(tmp_path / "deck.json")
    assert log.path.name == "deck.reviews.jsonl"
    assert log.events() == []

    log.append(ReviewEvent("b", NOW, 5))
    log.append(ReviewEvent("a", NOW - 100, 2))

    assert log.events() == [ReviewEvent("a", NOW - 100, 2), ReviewEvent("b", NOW, 5)]


def test_review_log_bad_line(tmp_path):
    path = tmp_path / "deck.reviews.jsonl"
    path.write_text('{"card_id": "a", "review_time": 1, "grade": 3}\n{"card_id": "a"}\n')
    with pytest.raises(SerializationFailed, match=":2:"):
        JsonReviewLog(path).events()


def test_export_deck_json(tmp_path):
    cards = [make_card(id="a"), make_card(id="b")]
    target = tmp_path / "out" / "export.json"

    message = export_deck(cards, target)

    assert message == f"Deck exported: 2 cards to {target}"
    assert deserialize_cards(target.read_text(encoding="utf-8")) == cards


def test_export_deck_explicit_format_overrides_suffix(tmp_path):
    target = tmp_path / "export.txt"
    export_deck([make_card()], target, "yaml")
    assert target.read_text(encoding="utf-8").startswith("version: 1")


def test_export_deck_write_failure(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    with pytest.raises(WriteFailed):
        export_deck([make_card()], blocker / "export.json")


def test_export_deck_serialization_failure_writes_nothing(tmp_path):
    target = tmp_path / "export.json"
    with pytest.raises(SerializationFailed):
        export_deck([make_card(easiness_factor=float("inf"))], target)
    assert not target.exists()


def test_logging_notifier(caplog):
    notifier = LoggingNotifier()
    with caplog.at_level("INFO"):
        notifier.send("Time to study!")
    assert "Time to study!" in caplog.text


def test_non_utf8_deck_fails_to_load(tmp_path):
    path = tmp_path / "deck.json"
    path.write_bytes(b"\xff\xfe{}")
    with pytest.raises(SerializationFailed, match="not valid UTF-8"):
        JsonCardStore(path).load()


def test_unreadable_deck_fails_to_load(tmp_path):
    # A directory in place of the deck file
    path = tmp_path / "deck.json"
    path.mkdir()
    with pytest.raises(ReadFailed):
        JsonCardStore(path).load()


def test_non_utf8_review_log(tmp_path):
    path = tmp_path / "deck.reviews.jsonl"
    path.write_bytes(b"\xff\xfe\n")
    with pytest.raises(SerializationFailed):
        JsonReviewLog(path).events()
