from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

load_dotenv()

log = logging.getLogger(__name__)

# WeatherAPI error codes -> HTTP status returned to the browser.
# https://www.weatherapi.com/docs/#intro-error-codes
DEFAULT_ERROR_STATUS_MAP: dict[int, int] = {
    1006: 404,  # No matching location found
    2006: 401,  # Invalid API key
    2007: 403,  # API key has exceeded monthly quota
    2008: 403,  # API key has been disabled
    9000: 400,  # Json body passed in bulk request is invalid
    9001: 400,  # Json body is too large
}


def _status_map(key: str) -> dict[int, int]:
    """Parse ``code:status,code:status`` pairs from env, merged over defaults."""
    mapping = dict(DEFAULT_ERROR_STATUS_MAP)
    raw = os.getenv(key, "")
    for pair in (x.strip() for x in raw.split(",")):
        if not pair:
            continue
        code, _, status = pair.partition(":")
        try:
            mapping[int(code)] = int(status)
        except ValueError:
            log.warning("Ignoring malformed %s entry %r", key, pair)
    return mapping


def get_api_key() -> str:
    """Read the upstream key at request time so rotation needs no restart."""
    return os.getenv("WEATHER_API_KEY", "")


class Settings:
    # --- Server ---
    HOST: str = os.getenv("WEATHERPROXY_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("WEATHERPROXY_PORT", "8100"))

    # --- Upstream (WeatherAPI.com) ---
    WEATHER_API_URL: str = os.getenv(
        "WEATHER_API_URL", "https://api.weatherapi.com/v1/forecast.json"
    )
    WEATHER_TIMEOUT: float = float(os.getenv("WEATHER_TIMEOUT", "5.0"))
    ERROR_STATUS_MAP: dict[int, int] = _status_map("WEATHER_ERROR_STATUS_MAP")

    # Tighten to your frontend's origin in production.
    CORS_ORIGIN: str = os.getenv("WEATHER_CORS_ORIGIN", "*")

    @classmethod
    def validate(cls) -> None:
        """Log a warning when the upstream key is missing.

        A missing key is reported per request as a 500, so startup carries on.
        """
        if not get_api_key():
            log.warning(
                "Missing env var WEATHER_API_KEY; every /api/weather call will return 500"
            )


settings = Settings()
