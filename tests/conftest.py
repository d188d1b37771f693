from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx
import pytest

from core.telegram_client import TelegramClient
from tools.telegram_tools import build_dispatcher


TEST_TOKEN = "123456:TEST-TOKEN"


class FakeBotAPI:
    """In-process stand-in for api.telegram.org.

    Records every request as (method, payload) and answers with whatever was
    configured through respond()/fail()/raise_for(); unconfigured methods
    answer {"ok": true, "result": true}.
    """

    def __init__(self) -> None:
        self.requests: list[tuple[str, dict]] = []
        self._responses: dict[str, Any] = {}
        self._default: Any = None

    def respond(self, method: str, result: Any) -> None:
        self._responses[method] = (200, {"ok": True, "result": result})

    def fail(self, method: str | None, error_code: int, description: str) -> None:
        answer = (error_code, {"ok": False, "error_code": error_code, "description": description})
        if method is None:
            self._default = answer
        else:
            self._responses[method] = answer

    def raise_for(self, method: str | None, error: Exception) -> None:
        if method is None:
            self._default = error
        else:
            self._responses[method] = error

    def calls(self, method: str) -> list[dict]:
        return [payload for name, payload in self.requests if name == method]

    def handler(self, request: httpx.Request) -> httpx.Response:
        method = request.url.path.rsplit("/", 1)[-1]
        payload = json.loads(request.content or b"{}")
        self.requests.append((method, payload))

        answer = self._responses.get(method, self._default)
        if answer is None:
            answer = (200, {"ok": True, "result": True})
        if isinstance(answer, Exception):
            raise answer
        status, body = answer
        return httpx.Response(status, json=body)


@pytest.fixture
def fake_api() -> FakeBotAPI:
    return FakeBotAPI()


@pytest.fixture
def client(fake_api: FakeBotAPI) -> TelegramClient:
    return TelegramClient(TEST_TOKEN, transport=httpx.MockTransport(fake_api.handler))


@pytest.fixture
def dispatcher(client: TelegramClient):
    return build_dispatcher(client)


@pytest.fixture
def invoke(dispatcher):
    def _invoke(name: str, args: Any = None) -> str:
        envelope = asyncio.run(dispatcher.invoke(name, args))
        assert len(envelope.content) >= 1
        assert envelope.content[0].type == "text"
        return envelope.first_text

    return _invoke
