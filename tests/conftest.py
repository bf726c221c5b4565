"""Shared fixtures: isolated settings and an in-memory httpx transport."""

from __future__ import annotations

import json
from typing import Callable

import httpx
import pytest

from core.config import ENV_PREFIX, AppSettings

API_URL = "https://api.example.com"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ignore the developer's .env files and AUTOTRADING_* variables."""

    monkeypatch.setitem(AppSettings.model_config, "env_file", None)
    for name in ("API_URL", "HTTP_TIMEOUT_SECONDS", "USER_AGENT", "LOG_LEVEL"):
        monkeypatch.delenv(f"{ENV_PREFIX}{name}", raising=False)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(api_url=API_URL)


class RecordingTransport:
    """Wraps `httpx.MockTransport` and keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []
        self._handler = handler
        self.transport = httpx.MockTransport(self._handle)

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self._handler(request)
        if hasattr(result, "__await__"):
            result = await result
        return result

    def body(self, index: int = 0) -> object:
        return json.loads(self.requests[index].content)


@pytest.fixture
def recorder() -> Callable[..., RecordingTransport]:
    def _make(
        status_code: int = 200,
        *,
        json_body: object = None,
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
    ) -> RecordingTransport:
        if handler is None:
            def handler(request: httpx.Request) -> httpx.Response:
                if json_body is None:
                    return httpx.Response(status_code)
                return httpx.Response(status_code, json=json_body)

        return RecordingTransport(handler)

    return _make
