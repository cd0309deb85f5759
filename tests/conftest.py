from __future__ import annotations

from typing import Iterable

import pytest

from oneshot.app.application.http_client import HttpClient
from oneshot.app.config.settings import Settings
from oneshot.app.domain.errors import TransportError
from oneshot.app.ports.transport import TransportRequest, TransportResult


def raw_result(
    status_line: str = "HTTP/1.1 200 OK",
    headers: Iterable[tuple[str, str]] = (),
    body: bytes = b"",
    *,
    preamble: str = "",
    debug_trace: str | None = None,
) -> TransportResult:
    """Build transport output the way a wire response looks: header block, blank line, body."""
    lines = [status_line, *(f"{key}: {value}" for key, value in headers)]
    block = (preamble + "\r\n".join(lines) + "\r\n\r\n").encode("iso-8859-1")
    return TransportResult(
        status_code=int(status_line.split()[1]),
        header_size=len(block),
        raw=block + body,
        debug_trace=debug_trace,
    )


class RecordingTransport:
    """Implements Transport for tests; replays queued outcomes and records every request."""

    def __init__(self, *outcomes: TransportResult | TransportError) -> None:
        self._outcomes = list(outcomes) or [raw_result()]
        self.requests: list[TransportRequest] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def perform(self, request: TransportRequest) -> TransportResult:
        self.requests.append(request)
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, TransportError):
            raise outcome
        return outcome


@pytest.fixture()
def settings() -> Settings:
    return Settings()


@pytest.fixture()
def transport() -> RecordingTransport:
    return RecordingTransport(
        raw_result(
            headers=[("Content-Type", "application/json"), ("Set-Cookie", "session=abc; Path=/")],
            body=b'{"ok": true}',
        )
    )


@pytest.fixture()
def make_client(settings: Settings):
    def _make(url: str = "http://example.com/", method: str = "GET", *, transport=None) -> HttpClient:
        return HttpClient(url, method, transport=transport or RecordingTransport(), settings=settings)

    return _make
