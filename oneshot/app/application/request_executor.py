from __future__ import annotations

import time
from typing import Any

from loguru import logger

from oneshot.app.constants import HttpMethod
from oneshot.app.core import SERVICE_NAME
from oneshot.app.domain.errors import TransportError
from oneshot.app.domain.models import ResponseState
from oneshot.app.domain.request_spec import RequestSpec, build_cookie_header, build_query_url
from oneshot.app.domain.response_decoder import decode_response
from oneshot.app.ports.transport import (
    FormFile,
    RequestTimeout,
    Transport,
    TransportRequest,
)


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def _form_fields(params: dict[str, Any]) -> list[tuple[str, str]]:
    fields: list[tuple[str, str]] = []
    for name, value in params.items():
        if isinstance(value, (list, tuple)):
            fields.extend((name, str(item)) for item in value)
        else:
            fields.append((name, str(value)))
    return fields


def assemble_request(spec: RequestSpec) -> TransportRequest:
    """Translate a RequestSpec into transport options.

    GET sends params in the query string and never carries a payload. Other
    methods send the raw body verbatim when it is non-empty; otherwise params and
    files become a multipart form.
    """
    url = spec.url
    content: bytes | None = None
    form_fields: list[tuple[str, str]] = []
    form_files: list[FormFile] = []

    if spec.method == HttpMethod.GET:
        url = build_query_url(url, spec.params)
    elif spec.body:
        content = spec.body
    else:
        form_fields = _form_fields(spec.params)
        form_files = [FormFile(field_name=name, path=path) for name, path in spec.files.items()]

    return TransportRequest(
        method=spec.method,
        url=url,
        timeout=RequestTimeout(connect_seconds=spec.connect_timeout, total_seconds=spec.timeout),
        user_agent=spec.user_agent,
        headers=dict(spec.headers),
        cookie_header=build_cookie_header(spec.cookies),
        content=content,
        form_fields=form_fields,
        form_files=form_files,
        basic_auth=spec.basic_auth,
        verify_tls=spec.verify_tls,
        cookie_jar_path=spec.cookie_jar_path,
        verbose=spec.debug,
    )


class RequestExecutor:
    """
    Performs the one transfer described by a RequestSpec and decodes its output.

    Transport failures propagate unchanged; nothing is retried. Caching and the
    executed-once guard belong to the caller (HttpClient).
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def execute(self, spec: RequestSpec) -> ResponseState:
        request = assemble_request(spec)
        _log("http_request_started", method=request.method, url=request.url)
        started = time.monotonic()
        try:
            result = self._transport.perform(request)
        except TransportError as exc:
            logger.bind(
                service_name=SERVICE_NAME,
                event="http_request_failed",
                method=request.method,
                url=request.url,
                code=exc.code,
            ).warning("{}", exc.message)
            raise

        decoded = decode_response(result.raw, result.header_size)
        _log(
            "http_request_completed",
            method=request.method,
            url=request.url,
            status_code=result.status_code,
            elapsed_seconds=round(time.monotonic() - started, 3),
        )
        return ResponseState(
            executed=True,
            raw_response=result.raw,
            status_code=result.status_code,
            status_line=decoded.status_line,
            headers=decoded.headers,
            cookies={name: cookie.value for name, cookie in decoded.cookies.items()},
            cookie_records=decoded.cookies,
            body=decoded.body,
            debug_trace=result.debug_trace,
        )
