"""Unit tests for the HttpClient facade: lazy execution, caching, reset and clone."""
from __future__ import annotations

import copy
import io

import pytest

from oneshot.app.domain.errors import (
    DecodeError,
    InvalidArgumentError,
    TransportError,
    UnsupportedOperationError,
)
from tests.conftest import RecordingTransport, raw_result


def test_configuration_does_not_send(make_client, transport):
    client = make_client(transport=transport)
    client.set_header("X-A", "1").set_cookie("a", "b").set_params({"q": "1"}).set_timeout(1, 2)
    assert transport.calls == 0
    assert client.executed is False


def test_accessors_share_one_transfer(make_client, transport):
    client = make_client(transport=transport)
    assert client.get_response_code() == 200
    assert client.get_headers() == {"Content-Type": "application/json"}
    assert client.get_cookies() == {"session": "abc"}
    assert client.get_json_body() == {"ok": True}
    assert client.get_body() == b'{"ok": true}'
    assert client.get_response().startswith(b"HTTP/1.1 200 OK\r\n")
    assert client.get_status_line() == "HTTP/1.1 200 OK"
    assert transport.calls == 1
    assert client.executed is True


def test_reset_forces_new_transfer(make_client, transport):
    client = make_client(transport=transport)
    client.get_body()
    client.reset()
    assert client.executed is False
    client.get_body()
    assert transport.calls == 2


def test_reset_keeps_configuration_and_allows_new_url(make_client, transport):
    client = make_client("http://example.com/first", transport=transport)
    client.set_header("X-A", "1")
    client.get_body()
    client.reset().set_url("http://example.com/second")
    client.get_body()
    assert [r.url for r in transport.requests] == ["http://example.com/first", "http://example.com/second"]
    assert transport.requests[1].headers == {"X-A": "1"}


def test_changes_after_execution_wait_for_reset(make_client, transport):
    client = make_client(transport=transport)
    client.get_body()
    client.set_url("http://example.com/other")
    client.get_body()
    assert transport.calls == 1


def test_clone_of_executed_client_sends_its_own_request(make_client, transport):
    client = make_client(transport=transport)
    client.get_body()
    other = client.clone()
    assert other.executed is False
    assert other.get_response_code() == 200
    assert transport.calls == 2


def test_copy_module_clones(make_client, transport):
    client = make_client(transport=transport)
    client.get_body()
    for other in (copy.copy(client), copy.deepcopy(client)):
        assert other.executed is False
        assert other.spec is not client.spec


def test_clone_configuration_is_independent(make_client, transport):
    client = make_client(transport=transport)
    client.set_header("X-A", "1")
    other = client.clone().set_header("X-B", "2")
    assert client.spec.headers == {"X-A": "1"}
    assert other.spec.headers == {"X-A": "1", "X-B": "2"}


def test_invalid_method_fails_before_network(make_client, transport):
    with pytest.raises(InvalidArgumentError):
        make_client(method="HEAD", transport=transport)
    client = make_client(transport=transport)
    with pytest.raises(InvalidArgumentError):
        client.set_url("http://example.com/", "HEAD")
    assert transport.calls == 0


def test_set_file_on_get_client(make_client, tmp_path):
    upload = tmp_path / "a.txt"
    upload.write_text("x")
    with pytest.raises(UnsupportedOperationError):
        make_client().set_file("file", upload)


def test_set_body_takes_ownership_of_stream(make_client, transport):
    stream = io.BytesIO(b"raw payload")
    client = make_client(method="PUT", transport=transport).set_body(stream)
    assert stream.closed
    client.get_body()
    assert transport.requests[0].content == b"raw payload"


def test_transport_error_leaves_client_unexecuted_for_retry(make_client):
    transport = RecordingTransport(
        TransportError("ConnectError", "connection refused", debug_trace="* connect failed"),
        raw_result(body=b"ok"),
    )
    client = make_client("http://bad.invalid/", transport=transport).set_debug()
    with pytest.raises(TransportError):
        client.get_body()
    assert client.executed is False
    assert client.get_debug_info() == "* connect failed"

    client.set_url("http://example.com/")
    assert client.get_body() == b"ok"
    assert client.executed is True
    assert transport.calls == 2


def test_malformed_json_raises_decode_error(make_client):
    client = make_client(transport=RecordingTransport(raw_result(body=b"<html>not json</html>")))
    with pytest.raises(DecodeError):
        client.get_json_body()
    with pytest.raises(ValueError):
        client.get_json_body()


def test_empty_body_is_not_json(make_client):
    with pytest.raises(DecodeError):
        make_client().get_json_body()


def test_save_to_file_writes_body(make_client, tmp_path):
    body = b"\x00\x01binary\xff"
    client = make_client(transport=RecordingTransport(raw_result(body=body)))
    target = tmp_path / "out.bin"
    assert client.save_to_file(target) == len(body)
    assert target.read_bytes() == body


def test_save_to_file_missing_directory_raises(make_client, tmp_path):
    with pytest.raises(OSError):
        make_client().save_to_file(tmp_path / "missing" / "out.bin")


def test_get_text_uses_declared_charset(make_client):
    body = "café".encode("latin-1")
    client = make_client(
        transport=RecordingTransport(
            raw_result(headers=[("Content-Type", "text/plain; charset=ISO-8859-1")], body=body)
        )
    )
    assert client.get_text() == "café"


def test_get_text_defaults_to_utf8(make_client):
    client = make_client(transport=RecordingTransport(raw_result(body="café".encode("utf-8"))))
    assert client.get_text() == "café"


def test_debug_info_does_not_trigger_request(make_client, transport):
    client = make_client(transport=transport).set_debug()
    assert client.get_debug_info() is None
    assert transport.calls == 0


def test_debug_info_after_execution(make_client):
    client = make_client(transport=RecordingTransport(raw_result(debug_trace="> GET / HTTP/1.1\n")))
    client.set_debug().get_response_code()
    assert client.get_debug_info() == "> GET / HTTP/1.1\n"
    assert client.reset().get_debug_info() is None


def test_cookie_records_expose_attributes(make_client):
    client = make_client(
        transport=RecordingTransport(
            raw_result(headers=[("Set-Cookie", "sid=1; Domain=example.com; Path=/; Secure")])
        )
    )
    record = client.get_cookie_records()["sid"]
    assert record.domain == "example.com"
    assert record.secure is True
    assert client.get_cookies() == {"sid": "1"}


def test_settings_supply_defaults(transport):
    from oneshot.app.application.http_client import HttpClient
    from oneshot.app.config.settings import Settings

    settings = Settings(
        ONESHOT_CONNECT_TIMEOUT_SECONDS=2,
        ONESHOT_TIMEOUT_SECONDS=4,
        ONESHOT_USER_AGENT="custom/2.0",
        ONESHOT_VERIFY_TLS=False,
    )
    client = HttpClient("https://example.com/", transport=transport, settings=settings)
    client.get_body()
    request = transport.requests[0]
    assert request.timeout.connect_seconds == 2
    assert request.timeout.total_seconds == 4
    assert request.user_agent == "custom/2.0"
    assert request.verify_tls is False
