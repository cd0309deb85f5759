"""Concrete transport implementation using httpx (injected where Transport is needed)."""
from __future__ import annotations

import io
import os
from contextlib import ExitStack
from http.cookiejar import CookieJar
from typing import Any

import httpx

from oneshot.app.constants import HEADER_ENCODING
from oneshot.app.domain.errors import TransportError
from oneshot.app.infrastructure.cookies.file_cookie_jar import load_cookie_jar, save_cookie_jar
from oneshot.app.ports.transport import TransportRequest, TransportResult


def _status_line(response: httpx.Response) -> str:
    return f"{response.http_version} {response.status_code} {response.reason_phrase}".rstrip()


def build_header_block(response: httpx.Response) -> bytes:
    """Rebuild the wire header block, one section per hop, oldest first."""
    sections = []
    for hop in [*response.history, response]:
        lines = [_status_line(hop).encode(HEADER_ENCODING)]
        lines.extend(key + b": " + value for key, value in hop.headers.raw)
        sections.append(b"\r\n".join(lines) + b"\r\n\r\n")
    return b"".join(sections)


class _TraceBuffer:
    """Collects a curl-style verbose trace of one transfer."""

    def __init__(self) -> None:
        self._buffer = io.StringIO()

    def on_trace(self, event_name: str, info: dict[str, Any]) -> None:
        self._buffer.write(f"* {event_name}\n")

    def on_request(self, request: httpx.Request) -> None:
        target = request.url.raw_path.decode("ascii")
        self._buffer.write(f"> {request.method} {target} HTTP/1.1\n")
        self._write_headers(">", request.headers)
        self._buffer.write(">\n")

    def on_response(self, response: httpx.Response) -> None:
        self._buffer.write(f"< {_status_line(response)}\n")
        self._write_headers("<", response.headers)
        self._buffer.write("<\n")

    def _write_headers(self, prefix: str, headers: httpx.Headers) -> None:
        for key, value in headers.raw:
            self._buffer.write(f"{prefix} {key.decode(HEADER_ENCODING)}: {value.decode(HEADER_ENCODING)}\n")

    def getvalue(self) -> str:
        return self._buffer.getvalue()


def _trace_text(trace: _TraceBuffer | None) -> str | None:
    return trace.getvalue() if trace is not None else None


def _append_cookie_header(http_request: httpx.Request, cookie_header: str | None) -> None:
    """Send explicit cookies after any the jar already put on the request."""
    if not cookie_header:
        return
    existing = http_request.headers.get("Cookie")
    http_request.headers["Cookie"] = f"{existing}; {cookie_header}" if existing else cookie_header


class HttpxTransport:
    """Transport implementation using a short-lived httpx.Client per transfer."""

    def __init__(self, transport: httpx.BaseTransport | None = None) -> None:
        self._transport = transport

    def perform(self, request: TransportRequest) -> TransportResult:
        trace = _TraceBuffer() if request.verbose else None
        jar = load_cookie_jar(request.cookie_jar_path) if request.cookie_jar_path else None

        with ExitStack() as stack:
            client = stack.enter_context(self._create_client(request, jar, trace))
            files = self._open_files(request, stack)
            headers = dict(request.headers)
            if not any(key.lower() == "user-agent" for key in headers):
                headers["User-Agent"] = request.user_agent
            extensions = {"trace": trace.on_trace} if trace is not None else None
            try:
                http_request = client.build_request(
                    request.method,
                    request.url,
                    headers=headers,
                    content=request.content,
                    files=files or None,
                    extensions=extensions,
                )
                _append_cookie_header(http_request, request.cookie_header)
                response = client.send(http_request, auth=request.basic_auth)
            except (httpx.InvalidURL, httpx.HTTPError) as exc:
                raise TransportError(type(exc).__name__, str(exc), debug_trace=_trace_text(trace)) from exc

        if jar is not None:
            save_cookie_jar(jar)

        header_block = build_header_block(response)
        return TransportResult(
            status_code=response.status_code,
            header_size=len(header_block),
            raw=header_block + response.content,
            debug_trace=_trace_text(trace),
        )

    def _create_client(
        self,
        request: TransportRequest,
        jar: CookieJar | None,
        trace: _TraceBuffer | None,
    ) -> httpx.Client:
        timeout = httpx.Timeout(request.timeout.total_seconds, connect=request.timeout.connect_seconds)
        kwargs: dict[str, Any] = {
            "timeout": timeout,
            "verify": request.verify_tls,
            "follow_redirects": False,
        }
        if jar is not None:
            kwargs["cookies"] = jar
        if trace is not None:
            kwargs["event_hooks"] = {"request": [trace.on_request], "response": [trace.on_response]}
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return httpx.Client(**kwargs)

    def _open_files(self, request: TransportRequest, stack: ExitStack) -> list[tuple[str, Any]]:
        """Multipart parts: plain fields first, then files opened for streaming."""
        parts: list[tuple[str, Any]] = [(name, (None, value)) for name, value in request.form_fields]
        for form_file in request.form_files:
            try:
                handle = stack.enter_context(open(form_file.path, "rb"))
            except OSError as exc:
                raise TransportError("FileReadError", f"cannot open {form_file.path}: {exc}") from exc
            parts.append((form_file.field_name, (os.path.basename(form_file.path), handle)))
        return parts
