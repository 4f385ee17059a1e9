"""Pytest configuration and fixtures."""

import json
from collections.abc import Callable
from datetime import date
from typing import Any, Union

import httpx
import pytest

from sentia.config.settings import Settings
from sentia.infrastructure.http import RequestConfig, TransportClient
from sentia.infrastructure.storage import InMemoryStore

BASE_URL = "https://vision.test/v1"
TODAY = date(2026, 10, 18)
IMAGE = b"\xff\xd8\xff\xe0fake-jpeg-bytes"

Route = Union[dict[str, Any], httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


class FakeVisionService:
    """Scripted stand-in for the remote vision service, served through httpx.MockTransport.

    Each endpoint maps to a queue of replies: a dict (200 JSON), an
    ``httpx.Response``, an exception to raise, or a callable. The last reply
    of a queue repeats.
    """

    def __init__(self) -> None:
        self.routes: dict[str, list[Route]] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def on(self, endpoint: str, *replies: Route) -> "FakeVisionService":
        self.routes[endpoint] = list(replies)
        return self

    def calls_to(self, endpoint: str) -> list[dict[str, Any]]:
        return [payload for path, payload in self.calls if path == endpoint]

    def handler(self, request: httpx.Request) -> httpx.Response:
        endpoint = request.url.path.removeprefix(httpx.URL(BASE_URL).path)
        payload = json.loads(request.content) if request.content else {}
        self.calls.append((endpoint, payload))

        replies = self.routes.get(endpoint)
        if not replies:
            return httpx.Response(404, json={"message": f"no route for {endpoint}"})
        reply = replies.pop(0) if len(replies) > 1 else replies[0]

        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, httpx.Response):
            return reply
        if callable(reply):
            return reply(request)
        return httpx.Response(200, json=reply)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class RecordingSleep:
    """Replacement for ``asyncio.sleep`` that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def settings():
    """Provide settings fixture."""
    return Settings(
        api_base_url=BASE_URL,
        storage_path="",
        log_level="DEBUG",
        _env_file=None,
    )


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def today():
    return lambda: TODAY


@pytest.fixture
def vision():
    return FakeVisionService()


@pytest.fixture
def sleep_recorder():
    return RecordingSleep()


@pytest.fixture
def client(vision, sleep_recorder):
    """Transport client wired to the fake vision service."""
    return TransportClient(
        BASE_URL,
        RequestConfig(timeout_ms=1000, max_retries=2, retry_delay_ms=1000),
        transport=vision.transport,
        sleep=sleep_recorder,
    )


@pytest.fixture
def image():
    return IMAGE


@pytest.fixture
def base_url():
    return BASE_URL
