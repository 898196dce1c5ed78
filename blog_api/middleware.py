"""
Access logging for the Blog API.

``AccessLogMiddleware`` is plain ASGI so it sees the final status of
every request, including the 400/404/500 responses produced by the
exception handlers in ``errors.py``.
"""
import logging
import time

from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("blog_api.access")


class AccessLogMiddleware:
    """
    Log one line per HTTP request and expose its latency.

    - ``X-Response-Time-Ms`` is added to every response.
    - 5xx responses are logged at WARNING, everything else at INFO.
    - A request whose app raises before a response starts is logged at
      ERROR and the exception is re-raised.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        status_code: int | None = None

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                elapsed_ms = (time.perf_counter() - start) * 1000
                headers = list(message.get("headers", []))
                headers.append((b"x-response-time-ms", f"{elapsed_ms:.2f}".encode()))
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            if status_code is None:
                logger.error(
                    "%s %s failed after %.2f ms",
                    scope["method"], scope["path"], (time.perf_counter() - start) * 1000,
                )
            raise

        elapsed_ms = (time.perf_counter() - start) * 1000
        level = logging.WARNING if status_code and status_code >= 500 else logging.INFO
        logger.log(level, "%s %s %s %.2f ms", scope["method"], scope["path"], status_code, elapsed_ms)
