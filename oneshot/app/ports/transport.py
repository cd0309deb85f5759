"""Transport port: contract for performing one blocking HTTP transfer.

The executor depends on this port; infrastructure (e.g. httpx) implements it.
The transport hands back the header block and the body in a single buffer
together with the header block length, so decoding is independent of the
library that moved the bytes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class RequestTimeout:
    """Connect and overall timeouts in seconds."""

    connect_seconds: float
    total_seconds: float


@dataclass(frozen=True)
class FormFile:
    """Multipart file part; the file is opened by path when the request is sent."""

    field_name: str
    path: str


@dataclass(frozen=True)
class TransportRequest:
    """Fully assembled options for one transfer."""

    method: str
    url: str
    timeout: RequestTimeout
    user_agent: str
    headers: dict[str, str] = field(default_factory=dict)
    cookie_header: str | None = None
    content: bytes | None = None
    form_fields: list[tuple[str, str]] = field(default_factory=list)
    form_files: list[FormFile] = field(default_factory=list)
    basic_auth: tuple[str, str] | None = None
    verify_tls: bool = True
    cookie_jar_path: str | None = None
    verbose: bool = False


@dataclass(frozen=True)
class TransportResult:
    """Raw transfer output: ``raw`` is the header block followed by the body."""

    status_code: int
    header_size: int
    raw: bytes
    debug_trace: str | None = None


@runtime_checkable
class Transport(Protocol):
    """Port: perform one HTTP transfer. Implementations live in infrastructure."""

    def perform(self, request: TransportRequest) -> TransportResult:
        """Send the request; raise TransportError on any transfer failure."""
        ...
