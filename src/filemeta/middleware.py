"""ASGI middleware – cap how many body bytes a request may feed the app."""

from __future__ import annotations

import logging

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from src.filemeta.errors import RequestBodyTooLargeError

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware:
    """
    Count request body bytes as the app reads them and stop at *max_body_size*.

    The error is raised from ``receive``, i.e. inside whichever handler is
    consuming the body, so the regular exception handlers turn it into a 400.
    """

    def __init__(self, app: ASGIApp, max_body_size: int) -> None:
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    logger.info(
                        "Request body exceeded %d bytes on %s", self.max_body_size, scope.get("path"),
                    )
                    raise RequestBodyTooLargeError(self.max_body_size)
            return message

        await self.app(scope, limited_receive, send)
