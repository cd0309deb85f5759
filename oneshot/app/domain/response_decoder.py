"""Response decoder: split raw transport output into status line, headers, cookies and body.

The transport reports the byte length of the header block, so the body is
cut at that offset instead of at the first blank line. Header blocks may hold
several sections (interim 1xx responses, proxy CONNECT replies, redirect hops);
only the last section describes the response whose body follows.
"""
from __future__ import annotations

from http.cookiejar import http2time
from urllib.parse import unquote_plus

from oneshot.app.constants import HEADER_ENCODING, SET_COOKIE_HEADER
from oneshot.app.domain.models import DecodedResponse, ResponseCookie


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return value[1:-1]
    return value


def parse_set_cookie(value: str) -> ResponseCookie:
    name = ""
    cookie_value = ""
    expires = 0
    domain: str | None = None
    path: str | None = None
    secure = False
    httponly = False

    for idx, part in enumerate(value.split("; ")):
        if idx == 0:
            if "=" in part:
                raw_name, _, raw_value = part.partition("=")
                name = unquote_plus(raw_name)
                cookie_value = unquote_plus(_strip_quotes(raw_value))
            continue

        if "=" not in part:
            flag = part.strip().lower()
            if flag == "httponly":
                httponly = True
            elif flag == "secure":
                secure = True
            continue

        key, _, attr = part.partition("=")
        key = key.strip().lower()
        if key == "path":
            path = attr
        elif key == "domain":
            domain = attr
        elif key == "expires":
            parsed = http2time(attr)
            expires = int(parsed) if parsed is not None else 0
        # Max-Age, SameSite and unknown attributes never touch name/value.

    return ResponseCookie(
        name=name,
        value=cookie_value,
        expires=expires,
        domain=domain,
        path=path,
        secure=secure,
        httponly=httponly,
    )


def parse_headers(raw_headers: str) -> tuple[str, dict[str, str], dict[str, ResponseCookie]]:
    """Parse a header block into (status line, header map, cookies by name)."""
    normalized = raw_headers.replace("\r\n", "\n")
    sections = normalized.strip().split("\n\n")
    last_section = sections[-1]

    status_line = ""
    headers: dict[str, str] = {}
    cookies: dict[str, ResponseCookie] = {}
    for line in last_section.split("\n"):
        if ": " not in line:
            if line and not status_line:
                status_line = line
            continue
        key, _, value = line.partition(": ")
        if key.lower() == SET_COOKIE_HEADER.lower():
            cookie = parse_set_cookie(value)
            if cookie.name:
                cookies[cookie.name] = cookie
        else:
            headers[key] = value
    return status_line, headers, cookies


def decode_response(raw: bytes, header_size: int) -> DecodedResponse:
    header_block = raw[:header_size].decode(HEADER_ENCODING)
    body = raw[header_size:]
    status_line, headers, cookies = parse_headers(header_block)
    return DecodedResponse(
        status_line=status_line,
        headers=headers,
        cookies=cookies,
        body=body,
    )
