"""Browser-facing proxy for the WeatherAPI forecast endpoint.

``handle`` walks a fixed sequence: CORS preflight, method gate, ``city``
validation, key check, upstream call, then translation of whatever came back.
The first branch that matches produces the response. The API key arrives as
an argument and is never written to a response body or a log line.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import httpx
from pydantic import BaseModel

from weatherproxy.config import settings
from weatherproxy.services import weatherapi

log = logging.getLogger(__name__)

EXAMPLE_PATH = "/api/weather?city=Boston"
UNMAPPED_STATUS = 502  # upstream failure we have no better status for


class ProxyResponse(BaseModel):
    """What the route hands back to the browser."""

    status_code: int
    headers: dict[str, str]
    body: str = ""


def cors_headers() -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": settings.CORS_ORIGIN,
        "Access-Control-Allow-Headers": "Content-Type",
        "Content-Type": "application/json",
    }


def _reply(status_code: int, payload: Any) -> ProxyResponse:
    return ProxyResponse(
        status_code=status_code, headers=cors_headers(), body=json.dumps(payload)
    )


def upstream_status(code: Any, status_map: Mapping[int, int] | None = None) -> int:
    """Map a WeatherAPI error code to the HTTP status we return."""
    table = settings.ERROR_STATUS_MAP if status_map is None else status_map
    # WeatherAPI may send the code as "1006" as well as 1006.
    try:
        return table.get(int(code), UNMAPPED_STATUS)
    except (TypeError, ValueError):
        return UNMAPPED_STATUS


def _upstream_error(data: Any) -> tuple[Any, str]:
    error = data.get("error") if isinstance(data, dict) else None
    if not isinstance(error, dict):
        error = {}
    code = error.get("code")
    message = error.get("message")
    return (
        "unknown" if code is None else code,
        "Unknown error from WeatherAPI." if message is None else message,
    )


async def handle(
    method: str,
    query_params: Mapping[str, str] | None,
    api_key: str,
    client: httpx.AsyncClient,
) -> ProxyResponse:
    if method == "OPTIONS":
        return ProxyResponse(status_code=204, headers=cors_headers())

    if method != "GET":
        return _reply(405, {"error": "Method not allowed. Use GET."})

    params = query_params or {}
    city = (params.get("city") or "").strip()
    if not city:
        return _reply(
            400,
            {
                "error": "Missing required query parameter: city",
                "example": EXAMPLE_PATH,
            },
        )

    if not api_key:
        log.error("WEATHER_API_KEY environment variable is not set.")
        return _reply(500, {"error": "Server configuration error: API key not set."})

    try:
        status, data = await weatherapi.fetch_forecast(client, api_key, city)
    except (httpx.HTTPError, ValueError) as e:
        log.error("Unexpected error fetching weather data: %s", e)
        return _reply(
            500,
            {
                "error": "Failed to fetch weather data. Please try again later.",
                "detail": str(e),
            },
        )

    if not 200 <= status < 300:
        code, message = _upstream_error(data)
        log.error("WeatherAPI error [%s]: %s", code, message)
        return _reply(upstream_status(code), {"error": message, "code": code})

    return _reply(200, data)
