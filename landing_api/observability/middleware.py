from __future__ import annotations

import uuid
from time import perf_counter
from typing import Any, Callable

import structlog
from starlette.datastructures import MutableHeaders


class RequestContextMiddleware:
    """Tags each API request with an `X-Request-ID` and logs its outcome.

    The id, path and method are bound to structlog contextvars so counter-store
    and contact-store log lines from the same request share them. The access line
    carries the final status code and elapsed time.
    """

    def __init__(self, app: Callable[..., Any]) -> None:
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        request_id = str(uuid.uuid4())
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=scope.get("path"),
            method=scope.get("method"),
        )

        start = perf_counter()
        status_code: int = 500

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code

            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 500))
                headers = MutableHeaders(scope=message)
                headers["X-Request-ID"] = request_id

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed_ms = (perf_counter() - start) * 1000.0
            structlog.get_logger("access").info(
                "http_request",
                status_code=status_code,
                elapsed_ms=round(elapsed_ms, 2),
            )
            structlog.contextvars.clear_contextvars()


def cors_headers(allow_origin: str = "*") -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }


class CORSMiddleware:
    """Allow-all CORS for the landing page.

    Preflight (any OPTIONS request) is answered here with an empty 200 and never
    reaches the router; every other response gets the allow headers appended.
    """

    def __init__(self, app: Callable[..., Any], allow_origin: str = "*") -> None:
        self.app = app
        self.allow_origin = allow_origin

    def _apply(self, headers: MutableHeaders) -> None:
        for name, value in cors_headers(self.allow_origin).items():
            headers[name] = value

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        if scope.get("method") == "OPTIONS":
            headers = MutableHeaders()
            self._apply(headers)
            headers["Content-Length"] = "0"
            await send({"type": "http.response.start", "status": 200, "headers": headers.raw})
            await send({"type": "http.response.body", "body": b""})
            return

        async def send_wrapper(message: dict[str, Any]) -> None:
            if message.get("type") == "http.response.start":
                self._apply(MutableHeaders(scope=message))
            await send(message)

        await self.app(scope, receive, send_wrapper)
