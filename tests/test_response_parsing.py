"""Tests for cleaning and parsing model output."""

import json

import pytest

from nutriscan.errors import MalformedResponseError
from nutriscan.services.analysis import clean_response_text, parse_record
from tests.conftest import APPLE_PAYLOAD

APPLE_JSON = json.dumps(APPLE_PAYLOAD)


@pytest.mark.parametrize(
    "wrapped",
    [
        APPLE_JSON,
        f"```json\n{APPLE_JSON}\n```",
        f"```JSON\n{APPLE_JSON}\n```",
        f"```\n{APPLE_JSON}\n```",
        f"  ```json\n{APPLE_JSON}\n```  \n",
        f"```json {APPLE_JSON}```",
        f"\n\n{APPLE_JSON}\n\n",
    ],
)
def test_clean_response_text_recovers_json(wrapped: str) -> None:
    assert clean_response_text(wrapped) == APPLE_JSON


def test_clean_response_text_keeps_multiline_body() -> None:
    body = json.dumps(APPLE_PAYLOAD, indent=2)

    assert clean_response_text(f"```json\n{body}\n```") == body


def test_parse_record_accepts_fenced_payload() -> None:
    record = parse_record(f"```json\n{APPLE_JSON}\n```")

    assert record.model_dump(by_alias=True) == APPLE_PAYLOAD


@pytest.mark.parametrize("missing", sorted(APPLE_PAYLOAD))
def test_parse_record_rejects_missing_field(missing: str) -> None:
    partial = {key: value for key, value in APPLE_PAYLOAD.items() if key != missing}

    with pytest.raises(MalformedResponseError):
        parse_record(json.dumps(partial))


@pytest.mark.parametrize(
    "raw",
    [
        '{"foodName": "Apple", "calories": 9',
        "Sorry, I can't help with that.",
        "[1, 2, 3]",
        json.dumps({**APPLE_PAYLOAD, "calories": "lots"}),
        json.dumps({**APPLE_PAYLOAD, "fat": -1}),
        json.dumps({**APPLE_PAYLOAD, "protein": True}),
        json.dumps({**APPLE_PAYLOAD, "calories": "95"}),
        json.dumps({**APPLE_PAYLOAD, "foodName": 42}),
    ],
)
def test_parse_record_rejects_invalid_payload(raw: str) -> None:
    with pytest.raises(MalformedResponseError) as exc_info:
        parse_record(raw)

    assert exc_info.value.raw_text == raw


def test_parse_record_rejects_deeply_nested_json() -> None:
    raw = "[" * 100000 + "]" * 100000

    with pytest.raises(MalformedResponseError) as exc_info:
        parse_record(raw)

    assert isinstance(exc_info.value.__cause__, RecursionError)
