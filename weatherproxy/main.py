"""WeatherProxy: keeps the WeatherAPI key server-side for browser clients."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from weatherproxy.config import Settings, settings
from weatherproxy.routes import health
from weatherproxy.routes import weather as weather_routes

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
# httpx logs full request URLs at INFO, and ours carry the API key.
logging.getLogger("httpx").setLevel(logging.WARNING)
log = logging.getLogger("weatherproxy")


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.WEATHER_TIMEOUT),
        follow_redirects=True,
    )
    app.state.http = client

    Settings.validate()

    log.info(
        "WeatherProxy started, upstream %s, port %s",
        settings.WEATHER_API_URL,
        settings.PORT,
    )
    yield

    await client.aclose()
    log.info("WeatherProxy shutdown complete")


app = FastAPI(
    title="WeatherProxy",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(weather_routes.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "weatherproxy.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level="info",
    )
