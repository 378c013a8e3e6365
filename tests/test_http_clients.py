"""Tests for the OpenAI estimation adapter."""

import asyncio

from nutriscan.adapters.openai_estimation_client import OpenAIEstimationClient
from nutriscan.services.analysis import NUTRITION_SCHEMA


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str = '{"foodName": "Apple"}') -> None:
        self.responses = _FakeResponses(output_text)


def test_openai_client_returns_output_text() -> None:
    fake = _FakeOpenAI()
    client = OpenAIEstimationClient(client=fake)

    result = asyncio.run(
        client.generate(
            model="gpt-5.2",
            reasoning_effort="low",
            store=False,
            schema=NUTRITION_SCHEMA,
            prompt="Analyze apple",
        )
    )

    assert result == '{"foodName": "Apple"}'
    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["model"] == "gpt-5.2"
    assert payload["reasoning"] == {"effort": "low"}
    assert payload["store"] is False
    text_format = payload["text"]["format"]
    assert text_format["type"] == "json_schema"
    assert text_format["strict"] is True
    assert text_format["schema"] is NUTRITION_SCHEMA
    assert payload["input"][0]["content"][0]["text"] == "Analyze apple"


def test_openai_client_omits_reasoning_when_unset() -> None:
    fake = _FakeOpenAI(output_text="")
    client = OpenAIEstimationClient(client=fake)

    result = asyncio.run(
        client.generate(
            model="gpt-4o-mini",
            reasoning_effort=None,
            store=True,
            schema=NUTRITION_SCHEMA,
            prompt="Analyze toast",
        )
    )

    assert result == ""
    assert fake.responses.last_payload is not None
    assert "reasoning" not in fake.responses.last_payload


def test_create_builds_async_client() -> None:
    client = OpenAIEstimationClient.create("sk-test")

    assert client.client.api_key == "sk-test"
