from __future__ import annotations

import httpx
import pytest


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def api_key() -> str:
    return "test-key-123"


@pytest.fixture
def forecast() -> dict:
    return {
        "location": {"name": "London", "country": "United Kingdom", "lat": 51.52},
        "current": {"temp_c": 11.0, "air_quality": {"pm2_5": 4.2}},
        "forecast": {
            "forecastday": [{"date": "2026-10-18", "day": {"maxtemp_c": 13.1}}]
        },
    }


class Upstream:
    """Records outgoing requests and answers with a canned response."""

    def __init__(self, responder) -> None:
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def reply(self, status: int, json=None, content: bytes | None = None) -> None:
        if content is not None:
            self.responder = lambda request: httpx.Response(status, content=content)
        else:
            self.responder = lambda request: httpx.Response(status, json=json)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.MockTransport(self), follow_redirects=True
        )


@pytest.fixture
def upstream(forecast) -> Upstream:
    """Upstream answering 200 with ``forecast`` until told otherwise."""
    return Upstream(lambda request: httpx.Response(200, json=forecast))


@pytest.fixture
async def http(upstream):
    client = upstream.client()
    yield client
    await client.aclose()
