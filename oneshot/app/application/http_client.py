"""HttpClient facade: fluent request configuration with lazy, cached execution.

The request is sent on the first call to any result accessor and the outcome
is cached until ``reset()``. ``clone()`` (and ``copy.copy``) give an
independent client that has not been executed yet.

Example::

    client = create_http_client("https://httpbin.org/get")
    client.set_params({"foo": "bar"})
    data = client.get_json_body()
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Mapping

from loguru import logger

from oneshot.app.config.settings import Settings
from oneshot.app.constants import HttpMethod
from oneshot.app.core import SERVICE_NAME
from oneshot.app.domain.errors import DecodeError, TransportError
from oneshot.app.domain.models import ResponseCookie, ResponseState
from oneshot.app.domain.request_spec import RequestSpec
from oneshot.app.application.request_executor import RequestExecutor
from oneshot.app.ports.transport import Transport


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def _charset(content_type: str | None) -> str | None:
    if not content_type:
        return None
    for part in content_type.split(";")[1:]:
        key, _, value = part.strip().partition("=")
        if key.lower() == "charset" and value:
            return value.strip('"')
    return None


class HttpClient:
    """One HTTP call: configure with the ``set_*`` methods, then read results."""

    def __init__(
        self,
        url: str,
        method: str = HttpMethod.GET,
        *,
        transport: Transport,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or Settings()
        self._spec = RequestSpec(
            url=url,
            method=method,
            connect_timeout=settings.connect_timeout_seconds,
            timeout=settings.timeout_seconds,
            user_agent=settings.user_agent,
            verify_tls=settings.verify_tls,
        )
        self._transport = transport
        self._executor = RequestExecutor(transport)
        self._state = ResponseState()

    @property
    def spec(self) -> RequestSpec:
        return self._spec

    @property
    def executed(self) -> bool:
        return self._state.executed

    # configuration

    def set_url(self, url: str, method: str = HttpMethod.GET) -> "HttpClient":
        self._spec.set_url(url, method)
        return self

    def set_timeout(self, connect_timeout: float, timeout: float) -> "HttpClient":
        self._spec.set_timeout(connect_timeout, timeout)
        return self

    def set_user_agent(self, user_agent: str) -> "HttpClient":
        self._spec.user_agent = user_agent
        return self

    def set_basic_auth(self, username: str, password: str) -> "HttpClient":
        self._spec.basic_auth = (username, password)
        return self

    def set_header(self, key: str, value: str) -> "HttpClient":
        self._spec.headers[key] = value
        return self

    def set_cookie(self, key: str, value: str) -> "HttpClient":
        self._spec.cookies[key] = value
        return self

    def set_cookie_jar(self, file_path: str | os.PathLike[str]) -> "HttpClient":
        """Load cookies from and save received cookies to ``file_path`` on each request."""
        self._spec.cookie_jar_path = os.fspath(file_path)
        return self

    def set_params(self, params: Mapping[str, Any]) -> "HttpClient":
        self._spec.params = dict(params)
        return self

    def set_file(self, form_name: str, file_path: str | os.PathLike[str]) -> "HttpClient":
        self._spec.set_file(form_name, file_path)
        return self

    def set_body(self, data: Any) -> "HttpClient":
        """Set a raw request body that replaces params and files for non-GET methods.

        Passing a stream transfers ownership: it is rewound, read to the end and
        closed, so the caller cannot use it afterwards.
        """
        self._spec.set_body(data)
        return self

    def set_debug(self, enabled: bool = True) -> "HttpClient":
        self._spec.debug = bool(enabled)
        return self

    def set_verify_tls(self, enabled: bool) -> "HttpClient":
        """Turning this off skips certificate and hostname checks for https URLs."""
        self._spec.verify_tls = bool(enabled)
        return self

    # results

    def get_response(self) -> bytes:
        self._execute()
        return self._state.raw_response or b""

    def get_response_code(self) -> int:
        self._execute()
        return self._state.status_code

    def get_status_line(self) -> str:
        self._execute()
        return self._state.status_line

    def get_headers(self) -> dict[str, str]:
        self._execute()
        return dict(self._state.headers)

    def get_cookies(self) -> dict[str, str]:
        self._execute()
        return dict(self._state.cookies)

    def get_cookie_records(self) -> dict[str, ResponseCookie]:
        self._execute()
        return dict(self._state.cookie_records)

    def get_body(self) -> bytes:
        self._execute()
        return self._state.body

    def get_text(self) -> str:
        self._execute()
        content_type = next(
            (value for key, value in self._state.headers.items() if key.lower() == "content-type"),
            None,
        )
        encoding = _charset(content_type) or "utf-8"
        try:
            return self._state.body.decode(encoding, errors="replace")
        except LookupError:
            return self._state.body.decode("utf-8", errors="replace")

    def get_json_body(self) -> Any:
        self._execute()
        try:
            return json.loads(self._state.body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise DecodeError(f"response body is not valid JSON: {exc}") from exc

    def save_to_file(self, file_path: str | os.PathLike[str]) -> int:
        self._execute()
        return Path(file_path).write_bytes(self._state.body)

    def get_debug_info(self) -> str | None:
        """Trace of the last execution when debug was enabled; never triggers a request."""
        return self._state.debug_trace

    # lifecycle

    def reset(self) -> "HttpClient":
        """Forget the cached response so the next accessor sends the request again."""
        self._state = ResponseState()
        _log("http_client_reset", url=self._spec.url)
        return self

    def clone(self) -> "HttpClient":
        other = object.__new__(HttpClient)
        other._spec = self._spec.copy()
        other._transport = self._transport
        other._executor = RequestExecutor(self._transport)
        other._state = ResponseState()
        return other

    def __copy__(self) -> "HttpClient":
        return self.clone()

    def __deepcopy__(self, memo: dict[int, Any]) -> "HttpClient":
        return self.clone()

    def _execute(self) -> None:
        if self._state.executed:
            return
        try:
            self._state = self._executor.execute(self._spec)
        except TransportError as exc:
            # Not marked executed: the caller may fix the configuration and ask again.
            self._state = ResponseState(debug_trace=exc.debug_trace)
            raise
