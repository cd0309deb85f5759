"""Client-level constants shared across modules."""
from __future__ import annotations


class HttpMethod:
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    ALL = (GET, POST, PUT, PATCH, DELETE)


DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_USER_AGENT = "HttpClient"

SET_COOKIE_HEADER = "Set-Cookie"
# Header bytes are decoded and re-encoded as Latin-1 so no octet is lost.
HEADER_ENCODING = "iso-8859-1"
