"""Error kinds raised by the client.

Configuration errors are raised by the setter that received the bad value;
execution errors surface from the first accessor that triggers the request.
"""
from __future__ import annotations


class HttpClientError(Exception):
    """Base for every client failure."""


class InvalidArgumentError(HttpClientError, ValueError):
    """Raised when a configuration value is not allowed (e.g. unknown method)."""


class UnsupportedOperationError(HttpClientError):
    """Raised when an option does not apply to the configured method."""


class MissingFileError(HttpClientError, FileNotFoundError):
    """Raised when an upload path does not point at an existing regular file."""


class DecodeError(HttpClientError, ValueError):
    """Raised when the response body cannot be decoded as JSON."""


class TransportError(HttpClientError):
    """Raised when the transfer itself fails (DNS, connect, timeout, TLS, ...).

    ``code`` is the transport's native error identifier, ``message`` its text.
    ``debug_trace`` holds whatever verbose trace was captured before the failure.
    """

    def __init__(self, code: str, message: str, *, debug_trace: str | None = None) -> None:
        super().__init__(f"transport error: {message} ({code})")
        self.code = code
        self.message = message
        self.debug_trace = debug_trace
