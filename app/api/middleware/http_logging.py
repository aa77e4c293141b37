"""
HTTP request/response logging middleware.

Writes one record before a request is handed downstream and one after the
response is produced. The response is captured by replacing the ASGI
``send`` callable with a buffering decorator; once the downstream stage
finishes, the buffered messages are logged and forwarded unchanged, so the
client receives exactly the bytes the handler produced.

Implemented as a pure ASGI middleware because it needs to see the raw
response messages.
"""

from __future__ import annotations

import logging
import time
import uuid

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.core.config import Settings, get_settings
from app.core.validators import is_textual_content_type, matches_path_prefix

logger = logging.getLogger(__name__)

SKIP_LOGGING_PATHS = (
    "/favicon.ico",
    "/robots.txt",
    "/static",
    "/css",
    "/js",
    "/images",
    "/health",
)

ALWAYS_SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "set-cookie"})

TRUNCATION_MARKER = "... (truncated)"


class ResponseCapture:
    """
    Send decorator that holds back one HTTP response.

    Messages written by downstream stages are buffered in order. flush()
    forwards them unmodified to the wrapped send; release() drops anything
    still buffered. Exactly one of the two ends the capture.
    """

    def __init__(self, send: Send) -> None:
        self._send = send
        self._messages: list[Message] = []
        self._body = bytearray()
        self.status_code: int | None = None
        self.headers = Headers()

    async def __call__(self, message: Message) -> None:
        if message["type"] == "http.response.start":
            self.status_code = message["status"]
            self.headers = Headers(raw=list(message.get("headers", [])))
        elif message["type"] == "http.response.body":
            self._body.extend(message.get("body", b""))
        self._messages.append(message)

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    async def flush(self) -> None:
        """Forward every buffered message to the real send, in order."""
        messages, self._messages = self._messages, []
        for message in messages:
            await self._send(message)

    def release(self) -> None:
        """Discard buffered state."""
        self._messages = []
        self._body = bytearray()


async def _read_request_body(receive: Receive) -> tuple[bytes, Receive]:
    """
    Drain the request body and return a receive that replays it.

    Args:
        receive: The original ASGI receive callable

    Returns:
        Tuple of the full body and a receive callable that yields the
        buffered body first, then delegates to the original
    """
    chunks: list[bytes] = []
    pending: list[Message] = []
    while True:
        message = await receive()
        if message["type"] != "http.request":
            pending.append(message)
            break
        chunks.append(message.get("body", b""))
        if not message.get("more_body", False):
            break

    body = b"".join(chunks)
    pending.insert(0, {"type": "http.request", "body": body, "more_body": False})

    async def replay() -> Message:
        if pending:
            return pending.pop(0)
        return await receive()

    return body, replay


def _content_length(headers: Headers) -> int:
    try:
        return int(headers.get("content-length", "0"))
    except ValueError:
        return 0


class HttpLoggingMiddleware:
    """Log request and response metadata, and optionally bodies."""

    def __init__(self, app: ASGIApp, settings: Settings | None = None) -> None:
        self.app = app
        self.settings = settings or get_settings()
        self._sensitive_headers = ALWAYS_SENSITIVE_HEADERS | {
            self.settings.api_key_header.lower()
        }

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or matches_path_prefix(
            scope["path"], SKIP_LOGGING_PATHS
        ):
            await self.app(scope, receive, send)
            return

        request_id = uuid.uuid4().hex[:8]
        started = time.perf_counter()

        receive = await self._log_request(scope, receive, request_id)

        capture = ResponseCapture(send)
        try:
            await self.app(scope, receive, capture)
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            self._log_response(capture, request_id, elapsed_ms)
            await capture.flush()
        finally:
            capture.release()

    def _header_lines(self, headers: Headers) -> list[str]:
        return [
            f"  {name}: {value}"
            for name, value in headers.items()
            if name.lower() not in self._sensitive_headers
        ]

    async def _log_request(
        self, scope: Scope, receive: Receive, request_id: str
    ) -> Receive:
        headers = Headers(scope=scope)
        path = scope["path"]
        query = scope.get("query_string", b"").decode("latin-1")
        if query:
            path = f"{path}?{query}"

        lines = [
            f"[{request_id}] === INCOMING REQUEST ===",
            f"Method: {scope['method']}",
            f"Path: {path}",
            f"Protocol: HTTP/{scope.get('http_version', '1.1')}",
            f"Host: {headers.get('host', '')}",
            f"User-Agent: {headers.get('user-agent', '')}",
            f"Content-Type: {headers.get('content-type', '')}",
            f"Content-Length: {headers.get('content-length', '')}",
            "Headers:",
            *self._header_lines(headers),
        ]

        if (
            self.settings.enable_request_body_logging
            and is_textual_content_type(headers.get("content-type"))
            and _content_length(headers) > 0
        ):
            body, receive = await _read_request_body(receive)
            if body:
                lines.append(f"Body: {body.decode('utf-8', errors='replace')}")

        logger.info("\n".join(lines), extra={"request_id": request_id})
        return receive

    def _log_response(
        self, capture: ResponseCapture, request_id: str, elapsed_ms: int
    ) -> None:
        headers = capture.headers
        content_length = headers.get("content-length") or str(len(capture.body))

        lines = [
            f"[{request_id}] === OUTGOING RESPONSE ===",
            f"Status Code: {capture.status_code}",
            f"Content-Type: {headers.get('content-type', '')}",
            f"Content-Length: {content_length}",
            f"Elapsed Time: {elapsed_ms}ms",
            "Headers:",
            *self._header_lines(headers),
        ]

        if self.settings.enable_response_body_logging and is_textual_content_type(
            headers.get("content-type")
        ):
            text = capture.body.decode("utf-8", errors="replace")
            if text:
                limit = self.settings.max_response_body_length
                if len(text) > limit:
                    text = f"{text[:limit]}{TRUNCATION_MARKER}"
                lines.append(f"Body: {text}")

        logger.info("\n".join(lines), extra={"request_id": request_id})
