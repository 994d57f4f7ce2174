from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, Request, Response

from weatherproxy import proxy
from weatherproxy.config import get_api_key

router = APIRouter(prefix="/api")

# Every method is routed so the handler, not the framework, answers 405.
_METHODS = ["GET", "OPTIONS", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http


@router.api_route("/weather", methods=_METHODS)
async def weather(
    request: Request,
    api_key: str = Depends(get_api_key),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    result = await proxy.handle(
        request.method, request.query_params, api_key, client
    )
    return Response(
        content=result.body,
        status_code=result.status_code,
        headers=result.headers,
    )
