import json

import pytest
import yaml

from ariba.domain.errors import SerializationFailed
from ariba.infrastructure.serialization import (
    deserialize_cards,
    format_for_path,
    serialize_cards,
)

from conftest import make_card


@pytest.fixture
def deck():
    return [
        make_card(
            id="card_a",
            difficulty=0.1 + 0.2,
            easiness_factor=1.9600000000000002,
            interval=15,
            repetitions=3,
            next_review=1792411200,
            tags=("zeta", "alpha", "mu"),
        ),
        make_card(id="card_b", front_text="Ça va?", back_text="How are you?", tags=()),
        make_card(id="123", front_text="yes", back_text="null"),
    ]


@pytest.mark.parametrize("fmt", ["json", "yaml"])
def test_round_trip_preserves_every_field(deck, fmt):
    restored = deserialize_cards(serialize_cards(deck, fmt))
    assert restored == deck
    assert restored[0].tags == ("zeta", "alpha", "mu")
    assert restored[0].difficulty == 0.1 + 0.2


def test_json_document_shape(deck):
    data = json.loads(serialize_cards(deck[:1]))
    assert data["version"] == 1
    assert list(data["cards"][0]) == [
        "id",
        "front_text",
        "back_text",
        "difficulty",
        "easiness_factor",
        "interval",
        "repetitions",
        "next_review",
        "tags",
    ]
    assert data["cards"][0]["tags"] == ["zeta", "alpha", "mu"]


def test_yaml_document_is_block_style(deck):
    text = serialize_cards(deck[:1], "yaml")
    assert text.startswith("version: 1\n")
    assert yaml.safe_load(text)["cards"][0]["id"] == "card_a"


def test_bare_list_accepted():
    text = json.dumps(
        [
            {
                "id": "x",
                "front_text": "f",
                "back_text": "b",
                "difficulty": 2.0,
                "easiness_factor": 2.5,
                "interval": 1,
                "repetitions": 1,
                "next_review": 100,
                "tags": ["t"],
            }
        ]
    )
    [card] = deserialize_cards(text)
    assert card.id == "x"
    assert card.tags == ("t",)


def test_empty_deck_round_trip():
    assert deserialize_cards(serialize_cards([])) == []


@pytest.mark.parametrize(
    "text",
    [
        "{not json",
        '{"version": 1, "cards": [{"id": "x"}]}',
        '{"version": 1, "cards": "nope"}',
        '"just a string"',
        "cards:\n  - id: a\n    id: b\n",
    ],
)
def test_malformed_input_fails(text):
    with pytest.raises(SerializationFailed):
        deserialize_cards(text)


def test_newer_version_rejected():
    with pytest.raises(SerializationFailed, match="newer"):
        deserialize_cards('{"version": 99, "cards": []}')


def test_unknown_format_rejected(deck):
    with pytest.raises(SerializationFailed, match="Unknown deck format"):
        serialize_cards(deck, "xml")


def test_non_finite_values_rejected():
    with pytest.raises(SerializationFailed):
        serialize_cards([make_card(difficulty=float("nan"))])


@pytest.mark.parametrize(
    "path,fmt",
    [("deck.json", "json"), ("deck.YAML", "yaml"), ("deck.yml", "yaml"), ("deck", "json")],
)
def test_format_for_path(path, fmt):
    assert format_for_path(path) == fmt


def test_flow_style_yaml_accepted():
    text = (
        "{version: 1, cards: [{id: a, front_text: f, back_text: b, difficulty: 1.5,"
        " easiness_factor: 2.5, interval: 1, repetitions: 1, next_review: 10, tags: [x, y]}]}"
    )
    [card] = deserialize_cards(text)
    assert card.id == "a"
    assert card.tags == ("x", "y")
