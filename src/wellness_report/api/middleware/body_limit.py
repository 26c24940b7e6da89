"""Reject oversized request bodies, declared or streamed."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

log = logging.getLogger(__name__)

PAYLOAD_TOO_LARGE_MESSAGE = "Payload muito grande"


class BodyLimitMiddleware:
    """ASGI middleware answering 413 once a body exceeds ``max_bytes``.

    A declared ``Content-Length`` is checked before anything is read.
    Chunked bodies carry no length, so the bytes handed to the app are
    counted as they arrive; on overflow the app sees a disconnect and its
    own response is replaced by the 413.
    """

    def __init__(self, app: ASGIApp, max_bytes: int) -> None:
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared is not None:
            try:
                too_large = int(declared) > self.max_bytes
            except ValueError:
                await JSONResponse(status_code=400, content={"error": "Invalid Content-Length"})(scope, receive, send)
                return
            if too_large:
                await _payload_too_large(scope, receive, send)
                return

        received = 0
        exceeded = False
        response_started = False

        async def limited_receive() -> Message:
            nonlocal received, exceeded
            if exceeded:
                return {"type": "http.disconnect"}
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    exceeded = True
                    return {"type": "http.disconnect"}
            return message

        async def guarded_send(message: Message) -> None:
            nonlocal response_started
            if exceeded:
                return
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, guarded_send)
        except Exception:
            if not exceeded:
                raise
            log.debug("Request aborted after %d streamed bytes", received)

        if exceeded and not response_started:
            await _payload_too_large(scope, receive, send)


async def _payload_too_large(scope: Scope, receive: Receive, send: Send) -> None:
    response = JSONResponse(status_code=413, content={"error": PAYLOAD_TOO_LARGE_MESSAGE})
    await response(scope, receive, send)


def register_body_limit(app: FastAPI, max_bytes: int) -> None:
    """Install ``BodyLimitMiddleware``; add it before CORS so CORS stays outermost."""
    app.add_middleware(BodyLimitMiddleware, max_bytes=max_bytes)
