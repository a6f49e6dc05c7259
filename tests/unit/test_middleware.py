"""Tests for the raw ASGI middleware (size limit, timeout, request id)."""

import asyncio

from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from newsecho.middleware import RequestSizeLimitMiddleware, TimeoutMiddleware
from newsecho.middleware.request_id import sanitize_request_id


def _app() -> FastAPI:
    app = FastAPI()

    @app.post("/echo")
    async def echo(request: Request) -> dict:
        return {"size": len(await request.body())}

    @app.get("/slow")
    async def slow() -> dict:
        await asyncio.sleep(5)
        return {"ok": True}

    return app


async def test_declared_oversized_body_is_rejected() -> None:
    app = RequestSizeLimitMiddleware(_app(), max_bytes=10)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/echo", content=b"x" * 11)
    assert response.status_code == 413
    assert response.json()["error"] == "PAYLOAD_TOO_LARGE"


async def test_small_body_passes_through() -> None:
    app = RequestSizeLimitMiddleware(_app(), max_bytes=10)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/echo", content=b"x" * 10)
    assert response.status_code == 200
    assert response.json() == {"size": 10}


async def test_chunked_oversized_body_is_rejected() -> None:
    async def chunks():
        for _ in range(4):
            yield b"x" * 5

    app = RequestSizeLimitMiddleware(_app(), max_bytes=10)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/echo", content=chunks())
    assert response.status_code == 413


async def test_slow_request_times_out_with_504() -> None:
    app = TimeoutMiddleware(_app(), timeout_seconds=0.05)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/slow")
    assert response.status_code == 504
    assert response.json()["error"] == "GATEWAY_TIMEOUT"


def test_sanitize_request_id() -> None:
    assert sanitize_request_id("req_01-abc") == "req_01-abc"
    assert sanitize_request_id("  padded  ") == "padded"
    assert len(sanitize_request_id("has space")) == 36
    assert len(sanitize_request_id("x" * 65)) == 36
    assert len(sanitize_request_id(None)) == 36
