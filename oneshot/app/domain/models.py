"""Domain models."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ResponseCookie:
    """One parsed ``Set-Cookie`` entry (value object)."""

    name: str
    value: str
    expires: int = 0
    domain: str | None = None
    path: str | None = None
    secure: bool = False
    httponly: bool = False


@dataclass(frozen=True)
class DecodedResponse:
    """Structured view of one raw response: header block split off and parsed."""

    status_line: str
    headers: dict[str, str]
    cookies: dict[str, ResponseCookie]
    body: bytes


@dataclass
class ResponseState:
    """Outcome of one execution. Written once; cleared by HttpClient.reset()."""

    executed: bool = False
    raw_response: bytes | None = None
    status_code: int = 0
    status_line: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    cookies: dict[str, str] = field(default_factory=dict)
    cookie_records: dict[str, ResponseCookie] = field(default_factory=dict)
    body: bytes = b""
    debug_trace: str | None = None
