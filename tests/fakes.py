from __future__ import annotations

from types import SimpleNamespace
from typing import Any


def make_audio_response(data: Any) -> SimpleNamespace:
    """Shape of a google-genai generate_content response with one audio part."""
    part = SimpleNamespace(
        text=None,
        inline_data=SimpleNamespace(data=data, mime_type="audio/L16;rate=24000"),
    )
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


class FakeModels:
    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self._response = response
        self._error = error
        self.calls: list[dict[str, Any]] = []

    def generate_content(self, *, model: str, contents: Any, config: Any = None) -> Any:
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self._error is not None:
            raise self._error
        return self._response


class FakeGenaiClient:
    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.models = FakeModels(response=response, error=error)


class FakeClientFactory:
    """Records the API keys clients were built for."""

    def __init__(self, client: FakeGenaiClient) -> None:
        self.client = client
        self.api_keys: list[str] = []

    def __call__(self, api_key: str) -> FakeGenaiClient:
        self.api_keys.append(api_key)
        return self.client
