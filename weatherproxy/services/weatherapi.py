"""WeatherAPI.com forecast client (7-day forecast + air quality)."""
from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from weatherproxy.config import settings

log = logging.getLogger(__name__)

FORECAST_DAYS = "7"

# Characters encodeURIComponent leaves alone on top of quote()'s always-safe set.
_URI_COMPONENT_SAFE = "!~*'()"


def encode_component(value: str) -> str:
    """Percent-encode a query value the way browsers do ("New York" -> "New%20York")."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_forecast_url(api_key: str, city: str, base_url: str | None = None) -> str:
    """Build the upstream URL; the key is part of it, so never log the result."""
    base = base_url or settings.WEATHER_API_URL
    return (
        f"{base}"
        f"?key={encode_component(api_key)}"
        f"&q={encode_component(city)}"
        f"&days={FORECAST_DAYS}"
        f"&aqi=yes"
    )


async def fetch_forecast(
    client: httpx.AsyncClient, api_key: str, city: str
) -> tuple[int, Any]:
    """GET the forecast for *city* and return ``(status_code, parsed_json)``.

    Non-2xx responses are returned, not raised, because the body carries the
    provider's ``error`` object. Transport failures surface as
    ``httpx.HTTPError`` and an unparseable body as ``ValueError``.
    """
    resp = await client.get(build_forecast_url(api_key, city))
    data = resp.json()
    log.debug("WeatherAPI answered %s for %r", resp.status_code, city)
    return resp.status_code, data
