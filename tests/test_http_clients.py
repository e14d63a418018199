"""Tests for the OpenAI estimation client."""

import asyncio
import json

import pytest

from calorie_tracker.adapters.openai_estimation_client import OpenAIEstimationClient


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str) -> None:
        self.responses = _FakeResponses(output_text)


def _generate(client: OpenAIEstimationClient, reasoning_effort: str | None):
    return asyncio.run(
        client.generate(
            model="gpt-5.2",
            reasoning_effort=reasoning_effort,
            store=False,
            schema_name="calorie_estimate",
            schema={"type": "object"},
            prompt="Estimate calories",
        )
    )


def test_openai_client_parses_output() -> None:
    fake = _FakeOpenAI(json.dumps({"calories": 120}))
    client = OpenAIEstimationClient(client=fake)

    result = _generate(client, "low")

    assert result == {"calories": 120}
    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["text"]["format"]["name"] == "calorie_estimate"
    assert payload["text"]["format"]["strict"] is True
    assert payload["reasoning"] == {"effort": "low"}


def test_openai_client_omits_reasoning_when_unset() -> None:
    fake = _FakeOpenAI(json.dumps({"calories": 120}))

    _generate(OpenAIEstimationClient(client=fake), None)

    assert "reasoning" not in fake.responses.last_payload


def test_openai_client_rejects_empty_output() -> None:
    client = OpenAIEstimationClient(client=_FakeOpenAI(""))

    with pytest.raises(RuntimeError):
        _generate(client, None)
