"""Request ID middleware.

Assigns an X-Request-Id header to each response, echoing the caller's value
when one was supplied so upstream proxies can correlate logs.
"""

from __future__ import annotations

import logging
import uuid

logger = logging.getLogger(__name__)


class RequestIdMiddleware:
    def __init__(self, app, header_name: str = "X-Request-Id") -> None:  # type: ignore[no-untyped-def]
        self.app = app
        self.header_name = header_name
        self._header_key = header_name.lower().encode("latin-1")

    async def __call__(self, scope, receive, send):  # type: ignore[no-untyped-def]
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        incoming = None
        for k, v in scope.get("headers") or []:
            if k.lower() == self._header_key and v:
                incoming = v.decode("latin-1")
                break
        request_id = incoming or str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_wrapper(message):  # type: ignore[no-untyped-def]
            if message.get("type") == "http.response.start":
                headers = list(message.get("headers") or [])
                if not any(k.lower() == self._header_key for k, _ in headers):
                    headers.append((self.header_name.encode("latin-1"), request_id.encode("latin-1")))
                message = {**message, "headers": headers}
            if message.get("type") == "http.response.start" and int(message.get("status", 200)) >= 500:
                logger.warning("request_failed request_id=%s status=%s", request_id, message.get("status"))
            await send(message)

        await self.app(scope, receive, send_wrapper)


__all__ = ["RequestIdMiddleware"]
