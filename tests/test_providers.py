import pytest
import requests

from budgetbuddy.config import TestingConfig
from budgetbuddy.errors import AdviceProviderError
from budgetbuddy.services import providers
from budgetbuddy.services.providers import GeminiProvider, OpenAIProvider, build_provider


class FakeResponse:
    def __init__(self, body, status=200):
        self.body = body
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self.body, Exception):
            raise self.body
        return self.body


@pytest.fixture
def post(monkeypatch):
    calls = []

    def install(response):
        def fake_post(url, timeout=None, **kwargs):
            calls.append({"url": url, "timeout": timeout, **kwargs})
            if isinstance(response, Exception):
                raise response
            return response

        monkeypatch.setattr(providers.requests, "post", fake_post)
        return calls

    return install


def test_openai_request_and_reply(post):
    calls = post(FakeResponse({"choices": [{"message": {"content": '{"tips": ["a"]}'}}]}))
    provider = OpenAIProvider("sk-test", "gpt-test", "https://llm.example/v1/", timeout=7)

    assert provider.complete("hello") == '{"tips": ["a"]}'
    call = calls[0]
    assert call["url"] == "https://llm.example/v1/chat/completions"
    assert call["timeout"] == 7
    assert call["headers"]["Authorization"] == "Bearer sk-test"
    assert call["json"]["model"] == "gpt-test"
    assert call["json"]["messages"][1] == {"role": "user", "content": "hello"}
    assert call["json"]["response_format"] == {"type": "json_object"}


def test_gemini_request_and_reply(post):
    body = {"candidates": [{"content": {"parts": [{"text": "```json\n"}, {"text": '{"tips": []}\n```'}]}}]}
    calls = post(FakeResponse(body))
    provider = GeminiProvider("g-key", "gemini-test", timeout=3)

    assert provider.complete("hi") == '```json\n{"tips": []}\n```'
    call = calls[0]
    assert call["url"].endswith("/models/gemini-test:generateContent")
    assert call["params"] == {"key": "g-key"}
    assert call["json"]["contents"][0]["parts"][0]["text"] == "hi"


def test_transport_error_is_wrapped(post):
    post(requests.ConnectionError("refused"))
    with pytest.raises(AdviceProviderError):
        OpenAIProvider("k", "m").complete("x")


def test_timeout_is_wrapped(post):
    post(requests.Timeout("slow"))
    with pytest.raises(AdviceProviderError):
        GeminiProvider("k", "m").complete("x")


def test_http_error_status_is_wrapped(post):
    post(FakeResponse({"error": "quota"}, status=429))
    with pytest.raises(AdviceProviderError):
        OpenAIProvider("k", "m").complete("x")


def test_non_json_body_is_wrapped(post):
    post(FakeResponse(ValueError("not json")))
    with pytest.raises(AdviceProviderError):
        OpenAIProvider("k", "m").complete("x")


def test_unexpected_shape_is_wrapped(post):
    post(FakeResponse({"choices": []}))
    with pytest.raises(AdviceProviderError):
        OpenAIProvider("k", "m").complete("x")
    post(FakeResponse({"promptFeedback": {}}))
    with pytest.raises(AdviceProviderError):
        GeminiProvider("k", "m").complete("x")


def test_missing_key_fails_without_network(post):
    calls = post(FakeResponse({}))
    with pytest.raises(AdviceProviderError):
        OpenAIProvider("", "m").complete("x")
    assert calls == []


def test_build_provider_from_config():
    config = {k: getattr(TestingConfig, k) for k in dir(TestingConfig) if k.isupper()}
    assert isinstance(build_provider(config), OpenAIProvider)
    config["ADVICE_PROVIDER"] = "gemini"
    gemini = build_provider(config)
    assert isinstance(gemini, GeminiProvider)
    assert gemini.timeout == TestingConfig.ADVICE_TIMEOUT
    config["ADVICE_PROVIDER"] = "carrier-pigeon"
    with pytest.raises(ValueError):
        build_provider(config)


def test_gemini_parts_that_are_not_objects_are_wrapped(post):
    post(FakeResponse({"candidates": [{"content": {"parts": ["oops"]}}]}))
    with pytest.raises(AdviceProviderError):
        GeminiProvider("k", "m").complete("x")
