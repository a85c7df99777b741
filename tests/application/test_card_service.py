import re

import pytest

from ariba.application.card_service import CardService, generate_card_id, new_card
from ariba.domain.errors import InvalidGrade
from ariba.domain.models import ReviewEvent
from ariba.infrastructure.store import JsonCardStore, JsonReviewLog

from conftest import DAY, NOW, make_card


@pytest.fixture
def store(tmp_path):
    return JsonCardStore(tmp_path / "deck.json")


@pytest.fixture
def review_log(tmp_path):
    return JsonReviewLog(tmp_path / "deck.reviews.jsonl")


@pytest.fixture
def service(store, review_log, fixed_clock):
    return CardService(store, review_log, clock=fixed_clock)


def test_generate_card_id_is_ulid():
    assert re.fullmatch(r"card_[0-9A-HJKMNP-TV-Z]{26}", generate_card_id())
    assert generate_card_id() != generate_card_id()


def test_new_card_defaults():
    card = new_card("front", "back", tags=["b", "a"])
    assert card.id.startswith("card_")
    assert card.repetitions == 0
    assert card.interval == 0
    assert card.easiness_factor == 2.5
    assert card.next_review == 0
    assert card.tags == ("b", "a")
    assert card.is_due(0)


def test_add_and_duplicate(service, store):
    card = make_card(id="a")
    service.add(card)
    assert store.load() == [card]

    with pytest.raises(KeyError):
        service.add(make_card(id="a", front_text="other"))


def test_review_persists_card_and_logs_event(service, store, review_log):
    service.add(make_card(id="a", repetitions=1, interval=1))
    service.add(make_card(id="b"))

    updated = service.review("a", 4)

    assert updated.interval == 6
    assert updated.next_review == NOW + 6 * DAY
    assert store.load() == [updated, make_card(id="b")]
    assert review_log.events() == [ReviewEvent("a", NOW, 4)]


def test_review_unknown_card(service):
    with pytest.raises(KeyError):
        service.review("missing", 3)


def test_invalid_grade_leaves_deck_untouched(service, store, review_log):
    card = make_card(id="a")
    service.add(card)
    with pytest.raises(InvalidGrade):
        service.review("a", 9)
    assert store.load() == [card]
    assert review_log.events() == []
