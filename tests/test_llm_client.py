"""Tests for the language model client wrapper."""

from types import SimpleNamespace

import openai
import pytest

from push_grader.errors import ConfigurationError, EmptyResponseError, LLMResponseError, MalformedResponseError
from push_grader.llm_client import LLMClient


class FakeCompletions:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error:
            raise self.error
        return self.response


def _client(response=None, error=None):
    completions = FakeCompletions(response, error)
    sdk = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return LLMClient(model="test-model", client=sdk), completions


def _response(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def test_returns_text():
    client, completions = _client(_response("APPROVED"))

    assert client.complete("Review this") == "APPROVED"
    assert completions.kwargs["model"] == "test-model"
    assert completions.kwargs["messages"] == [{"role": "user", "content": "Review this"}]
    assert "response_format" not in completions.kwargs


def test_json_mode():
    client, completions = _client(_response('{"test_cases": []}'))

    client.complete("Generate", json_mode=True)

    assert completions.kwargs["response_format"] == {"type": "json_object"}


def test_content_parts_are_joined():
    client, _ = _client(_response([{"type": "text", "text": "main"}, {"type": "text", "text": ".py"}]))

    assert client.complete("Pick") == "main.py"


@pytest.mark.parametrize("content", [None, "", "   \n"])
def test_empty_content(content):
    client, _ = _client(_response(content))

    with pytest.raises(EmptyResponseError):
        client.complete("Pick")


def test_no_choices():
    client, _ = _client(SimpleNamespace(choices=[]))

    with pytest.raises(EmptyResponseError):
        client.complete("Pick")


def test_choice_without_message():
    client, _ = _client(SimpleNamespace(choices=[SimpleNamespace(message=None)]))

    with pytest.raises(MalformedResponseError):
        client.complete("Pick")


def test_unexpected_content_type():
    client, _ = _client(_response(42))

    with pytest.raises(MalformedResponseError):
        client.complete("Pick")


def test_sdk_errors_are_wrapped():
    client, _ = _client(error=openai.OpenAIError("quota exceeded"))

    with pytest.raises(LLMResponseError, match="quota exceeded"):
        client.complete("Pick")


def test_api_key_required(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
        LLMClient()


def test_api_key_from_environment(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "from-env")

    client = LLMClient(base_url="https://llm.example/v1/")

    assert client.client.api_key == "from-env"
    assert str(client.client.base_url).startswith("https://llm.example/v1")
