from oneshot.app.application.http_client import HttpClient
from oneshot.app.composition import create_http_client
from oneshot.app.config.settings import Settings
from oneshot.app.constants import HttpMethod
from oneshot.app.domain.errors import (
    DecodeError,
    HttpClientError,
    InvalidArgumentError,
    MissingFileError,
    TransportError,
    UnsupportedOperationError,
)
from oneshot.app.domain.models import ResponseCookie

__all__ = [
    "HttpClient",
    "create_http_client",
    "Settings",
    "HttpMethod",
    "HttpClientError",
    "InvalidArgumentError",
    "UnsupportedOperationError",
    "MissingFileError",
    "TransportError",
    "DecodeError",
    "ResponseCookie",
]
