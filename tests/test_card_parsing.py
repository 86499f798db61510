"""Tests for turning model replies into cards."""

import json

import pytest

from conftest import CARD_JSON
from infocard.exceptions import ResponseFormatError
from infocard.providers.parsing import find_json_object, parse_card_reply


def test_plain_json_reply():
    card = parse_card_reply(json.dumps(CARD_JSON))
    assert card.title == "Company X Funding"
    assert card.description == CARD_JSON["description"]
    assert card.key_points == CARD_JSON["keyPoints"]
    assert card.tags == ["funding", "startup"]
    assert card.metadata == {}


def test_json_wrapped_in_prose_and_fences():
    raw = "Here is your card:\n```json\n" + json.dumps(CARD_JSON, indent=2) + "\n```\nHope it helps!"
    assert parse_card_reply(raw).title == "Company X Funding"


def test_trailing_braces_after_object_are_ignored():
    raw = json.dumps(CARD_JSON) + "\n\nNote: fields use {camelCase} names."
    assert parse_card_reply(raw).tags == ["funding", "startup"]


def test_leading_stray_brace_is_skipped():
    raw = "Use the format {title, ...}: " + json.dumps(CARD_JSON)
    assert parse_card_reply(raw).title == "Company X Funding"


def test_model_metadata_is_kept():
    payload = dict(CARD_JSON, metadata={"language": "en"})
    assert parse_card_reply(json.dumps(payload)).metadata == {"language": "en"}


def test_find_json_object_returns_none_without_object():
    assert find_json_object("no json here") is None
    assert find_json_object("[1, 2, 3]") is None


@pytest.mark.parametrize("missing", ["title", "description", "keyPoints", "tags"])
def test_missing_required_field_raises(missing):
    payload = {k: v for k, v in CARD_JSON.items() if k != missing}
    raw = json.dumps(payload)

    with pytest.raises(ResponseFormatError) as exc_info:
        parse_card_reply(raw)

    assert missing in exc_info.value.reason
    assert exc_info.value.raw_text == raw


@pytest.mark.parametrize(
    "field,value",
    [
        ("title", 42),
        ("title", "   "),
        ("description", ["not", "a", "string"]),
        ("keyPoints", "one point"),
        ("tags", {"a": 1}),
        ("tags", ["ok", 3]),
    ],
)
def test_wrongly_typed_field_raises(field, value):
    payload = dict(CARD_JSON, **{field: value})
    with pytest.raises(ResponseFormatError):
        parse_card_reply(json.dumps(payload))


def test_unparseable_reply_raises_with_generic_message():
    raw = "I could not produce a card, sorry. {broken"
    with pytest.raises(ResponseFormatError) as exc_info:
        parse_card_reply(raw)

    assert exc_info.value.raw_text == raw
    assert "broken" not in exc_info.value.message
