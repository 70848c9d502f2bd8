"""Tests for inference response parsing and the provider adapters."""

import json
import math
from types import SimpleNamespace

import httpx
import pytest
from google.api_core import exceptions as google_exceptions

from candidate_review.config import settings
from candidate_review.core.errors import InferenceError
from candidate_review.services.ai import AIFactory
from candidate_review.services.ai.base import normalize_rating, normalize_summary, parse_suggestion
from candidate_review.services.ai.gemini_service import GeminiService
from candidate_review.services.ai.openai_service import OpenAIService
from candidate_review.services.ai.openrouter_service import OpenRouterService


def chat_completion(content: str) -> dict:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1760864400,
        "model": "gpt-4o-mini",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 10, "total_tokens": 20},
    }


def test_out_of_range_rating_is_clamped_and_summary_trimmed():
    suggestion = parse_suggestion('{"rating": 7, "summary": "  Strong fit  "}', version="gpt-4o-mini")

    assert suggestion.rating == 5
    assert suggestion.summary == "Strong fit"
    assert suggestion.version == "gpt-4o-mini"


@pytest.mark.parametrize(
    "raw, expected",
    [
        (0, 1),
        (-3, 1),
        (2.5, 3),
        (3.49, 3),
        ("4", 4),
        ("3.6", 4),
        (5, 5),
        (None, None),
        ("great", None),
        ("NaN", None),
        (math.inf, None),
        (True, None),
        ([4], None),
    ],
)
def test_normalize_rating(raw, expected):
    assert normalize_rating(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", None, 42, ["text"]])
def test_unusable_summary_becomes_none(raw):
    assert normalize_summary(raw) is None


def test_model_declining_is_not_an_error():
    suggestion = parse_suggestion('{"rating": "n/a", "summary": ""}')

    assert suggestion.rating is None
    assert suggestion.summary is None


@pytest.mark.parametrize("content", ["not json at all", "{rating: 4", "[1, 2]", "", None])
def test_unparseable_content_is_inference_error(content):
    with pytest.raises(InferenceError):
        parse_suggestion(content)


def test_markdown_fenced_json_is_accepted():
    suggestion = parse_suggestion('```json\n{"rating": 3, "summary": "Okay"}\n```')

    assert suggestion.rating == 3
    assert suggestion.summary == "Okay"


async def test_openrouter_parses_reply_and_sends_json_mode():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        seen["auth"] = request.headers["Authorization"]
        return httpx.Response(200, json=chat_completion('{"rating": 7, "summary": "  Strong fit  "}'))

    service = OpenRouterService(transport=httpx.MockTransport(handler))
    suggestion = await service.suggest_review("prompt text")

    assert suggestion.rating == 5
    assert suggestion.summary == "Strong fit"
    assert suggestion.version == settings.OPENROUTER_MODEL
    assert seen["body"]["response_format"] == {"type": "json_object"}
    assert seen["body"]["temperature"] == settings.AI_TEMPERATURE
    assert seen["body"]["messages"][-1] == {"role": "user", "content": "prompt text"}
    assert seen["auth"].startswith("Bearer ")


async def test_openrouter_server_error_is_inference_error():
    service = OpenRouterService(transport=httpx.MockTransport(lambda request: httpx.Response(500, text="boom")))

    with pytest.raises(InferenceError, match="500"):
        await service.suggest_review("prompt")


async def test_openrouter_non_json_body_is_inference_error():
    service = OpenRouterService(transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>")))

    with pytest.raises(InferenceError):
        await service.suggest_review("prompt")


async def test_openrouter_transport_failure_is_inference_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    service = OpenRouterService(transport=httpx.MockTransport(handler))

    with pytest.raises(InferenceError):
        await service.suggest_review("prompt")


async def test_openai_service_parses_reply(monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(json.loads(request.content))
        return httpx.Response(200, json=chat_completion('{"rating": 2, "summary": "Junior profile."}'))

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
        service = OpenAIService(http_client=http_client)
        suggestion = await service.suggest_review("prompt")

    assert suggestion.rating == 2
    assert suggestion.summary == "Junior profile."
    assert suggestion.version == settings.OPENAI_MODEL
    assert calls[0]["response_format"] == {"type": "json_object"}


async def test_openai_http_500_is_inference_error_without_retry(monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(500, json={"error": {"message": "server error", "type": "server_error"}})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
        service = OpenAIService(http_client=http_client)
        with pytest.raises(InferenceError):
            await service.suggest_review("prompt")

    assert len(calls) == 1


class TestAIFactory:
    @pytest.fixture(autouse=True)
    def clean_factory(self, monkeypatch):
        monkeypatch.setattr(settings, "OPENAI_API_KEY", "")
        monkeypatch.setattr(settings, "OPENROUTER_API_KEY", "")
        monkeypatch.setattr(settings, "GEMINI_API_KEY", "")
        monkeypatch.setattr(settings, "AI_PROVIDER", "openai")
        monkeypatch.setattr(settings, "AI_FALLBACK_PROVIDER", "")
        AIFactory.reset()
        yield
        AIFactory.reset()

    def test_no_credential_resolves_to_none(self):
        assert AIFactory.resolve_provider() is None

    def test_primary_provider_with_key(self, monkeypatch):
        monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")

        provider = AIFactory.resolve_provider()

        assert isinstance(provider, OpenAIService)
        assert AIFactory.resolve_provider() is provider

    def test_fallback_used_when_primary_has_no_key(self, monkeypatch):
        monkeypatch.setattr(settings, "AI_FALLBACK_PROVIDER", "openrouter")
        monkeypatch.setattr(settings, "OPENROUTER_API_KEY", "or-test")

        assert isinstance(AIFactory.resolve_provider(), OpenRouterService)

    def test_unknown_provider_is_rejected(self):
        with pytest.raises(ValueError, match="Unknown AI provider"):
            AIFactory.get_provider("mystery")

    def test_get_provider_requires_key(self):
        with pytest.raises(ValueError, match="OPENROUTER_API_KEY"):
            AIFactory.get_provider("openrouter")


class FakeGeminiModel:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate_content_async(self, prompt, generation_config=None):
        self.calls.append((prompt, generation_config))
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


async def test_gemini_service_parses_reply(monkeypatch):
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "gm-test")
    service = GeminiService()
    service.client = FakeGeminiModel(text='{"rating": 1.2, "summary": "Unrelated experience."}')

    suggestion = await service.suggest_review("prompt")

    assert suggestion.rating == 1
    assert suggestion.summary == "Unrelated experience."
    assert suggestion.version == settings.GEMINI_MODEL
    assert service.client.calls[0][1].response_mime_type == "application/json"


async def test_gemini_api_error_is_inference_error(monkeypatch):
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "gm-test")
    service = GeminiService()
    service.client = FakeGeminiModel(error=google_exceptions.ServiceUnavailable("backend down"))

    with pytest.raises(InferenceError):
        await service.suggest_review("prompt")
