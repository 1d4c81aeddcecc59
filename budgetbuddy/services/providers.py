import requests

from ..errors import AdviceProviderError
from .tips import SYSTEM_PROMPT


class TextProvider:
    """Sends one prompt to a text-generation service and returns the raw reply text."""

    name = "base"

    def complete(self, prompt: str) -> str:
        raise NotImplementedError

    def _post(self, url, timeout, **kwargs):
        try:
            response = requests.post(url, timeout=timeout, **kwargs)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise AdviceProviderError(f"{self.name} request failed: {e}") from e
        except ValueError as e:
            raise AdviceProviderError(f"{self.name} returned a non-JSON body") from e


class OpenAIProvider(TextProvider):
    name = "openai"

    def __init__(self, api_key, model, base_url="https://api.openai.com/v1", timeout=30):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def complete(self, prompt):
        if not self.api_key:
            raise AdviceProviderError("OPENAI_API_KEY is not configured")
        body = self._post(
            f"{self.base_url}/chat/completions",
            self.timeout,
            headers={"Authorization": f"Bearer {self.api_key}"},
            json={
                "model": self.model,
                "messages": [
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                "response_format": {"type": "json_object"},
            },
        )
        try:
            return body["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise AdviceProviderError("openai response had no message content") from e


class GeminiProvider(TextProvider):
    name = "gemini"

    def __init__(self, api_key, model, base_url="https://generativelanguage.googleapis.com/v1beta", timeout=30):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def complete(self, prompt):
        if not self.api_key:
            raise AdviceProviderError("GEMINI_API_KEY is not configured")
        body = self._post(
            f"{self.base_url}/models/{self.model}:generateContent",
            self.timeout,
            params={"key": self.api_key},
            json={
                "systemInstruction": {"parts": [{"text": SYSTEM_PROMPT}]},
                "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            },
        )
        try:
            parts = body["candidates"][0]["content"]["parts"]
            return "".join(p.get("text", "") for p in parts)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise AdviceProviderError("gemini response had no readable candidates") from e


def build_provider(config) -> TextProvider:
    name = config.get("ADVICE_PROVIDER", "openai")
    timeout = config.get("ADVICE_TIMEOUT", 30)
    if name == "openai":
        return OpenAIProvider(
            config.get("OPENAI_API_KEY"),
            config.get("OPENAI_MODEL"),
            config.get("OPENAI_BASE_URL", "https://api.openai.com/v1"),
            timeout,
        )
    if name == "gemini":
        return GeminiProvider(
            config.get("GEMINI_API_KEY"),
            config.get("GEMINI_MODEL"),
            config.get("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"),
            timeout,
        )
    raise ValueError(f"Unknown ADVICE_PROVIDER: {name!r}")
