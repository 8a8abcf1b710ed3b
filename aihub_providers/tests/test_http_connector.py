"""HttpConnector: header assembly and result normalization."""

from __future__ import annotations

import json

import httpx
import pytest

from aihub_providers.base.errors import ErrorCode
from aihub_providers.base.http import HttpConnector
from aihub_providers.base.http.connector import normalize_response_headers
from aihub_providers.base.models import ProviderConfig
from aihub_providers.config.defaults import DEFAULT_HEADERS

URL = "https://api.test/v1/chat/completions"


def _config(name: str = "openai", **kwargs) -> ProviderConfig:
    kwargs.setdefault("default_headers", dict(DEFAULT_HEADERS))
    return ProviderConfig(name=name, **kwargs)


def test_openai_bearer_auth_and_defaults():
    headers = HttpConnector.build_headers(_config(api_key="sk-1"))
    assert headers["Authorization"] == "Bearer sk-1"  # nosec B101
    assert headers["Accept"] == "application/json"  # nosec B101
    assert headers["Content-Type"] == "application/json"  # nosec B101
    assert "OpenAI-Organization" not in headers  # nosec B101


def test_openai_organization_header():
    headers = HttpConnector.build_headers(_config(api_key="sk-1", organization="org-9"))
    assert headers["OpenAI-Organization"] == "org-9"  # nosec B101


def test_anthropic_uses_x_api_key_and_version():
    headers = HttpConnector.build_headers(_config("anthropic", api_key="k1"))
    assert headers["x-api-key"] == "k1"  # nosec B101
    assert headers["anthropic-version"] == "2023-06-01"  # nosec B101
    assert "Authorization" not in headers  # nosec B101


def test_caller_auth_header_is_never_overwritten():
    cfg = _config("anthropic", api_key="k1", headers={"X-API-KEY": "custom", "Anthropic-Version": "2024-01-01"})
    headers = HttpConnector.build_headers(cfg)
    assert headers["X-API-KEY"] == "custom"  # nosec B101
    assert "x-api-key" not in headers  # nosec B101
    assert headers["Anthropic-Version"] == "2024-01-01"  # nosec B101
    cfg = _config(api_key="sk-1", headers={"authorization": "Token abc"})
    headers = HttpConnector.build_headers(cfg)
    assert headers == {**DEFAULT_HEADERS, "authorization": "Token abc"}  # nosec B101


def test_no_auth_header_without_key():
    headers = HttpConnector.build_headers(_config())
    assert headers == DEFAULT_HEADERS  # nosec B101


def test_custom_headers_win_over_defaults():
    headers = HttpConnector.build_headers(_config(headers={"Accept": "text/event-stream", "X-Trace": "1"}))
    assert headers["Accept"] == "text/event-stream"  # nosec B101
    assert headers["X-Trace"] == "1"  # nosec B101


def test_build_url_concatenates():
    cfg = _config(base_url="https://api.test/v1", chat_path="/chat/completions")
    assert HttpConnector.build_url(cfg) == URL  # nosec B101


def test_post_json_success(stub_connector, captured_requests):
    reply = httpx.Response(200, json={"choices": [{"message": {"content": "hi"}}]}, headers={"X-Request-Id": "r1"})
    result = stub_connector(reply).post_json(URL, {"Authorization": "Bearer k"}, {"model": "m"}, timeout=5)
    assert result.status == 200  # nosec B101
    assert result.error is None  # nosec B101
    assert result.ok  # nosec B101
    assert result.body["choices"][0]["message"]["content"] == "hi"  # nosec B101
    assert json.loads(result.raw) == result.body  # nosec B101
    assert result.headers["X-Request-Id"] == "r1"  # nosec B101
    sent = captured_requests[0]
    assert sent.method == "POST"  # nosec B101
    assert str(sent.url) == URL  # nosec B101
    assert sent.headers["authorization"] == "Bearer k"  # nosec B101
    assert json.loads(sent.content) == {"model": "m"}  # nosec B101


@pytest.mark.parametrize("status", [400, 401, 404, 429, 500, 503])
def test_http_error_status_is_not_a_transport_error(stub_connector, status):
    reply = httpx.Response(status, json={"error": {"message": "nope"}})
    result = stub_connector(reply).post_json(URL, {}, {})
    assert result.status == status  # nosec B101
    assert result.error is None  # nosec B101
    assert result.body == {"error": {"message": "nope"}}  # nosec B101
    assert not result.ok  # nosec B101


def test_non_json_body_keeps_raw(stub_connector):
    result = stub_connector(httpx.Response(502, text="<html>Bad gateway</html>")).post_json(URL, {}, {})
    assert result.status == 502  # nosec B101
    assert result.body is None  # nosec B101
    assert result.raw == "<html>Bad gateway</html>"  # nosec B101
    assert result.error is None  # nosec B101


def test_scalar_json_body_is_not_decoded(stub_connector):
    result = stub_connector(httpx.Response(200, text='"just a string"')).post_json(URL, {}, {})
    assert result.body is None  # nosec B101
    assert result.raw == '"just a string"'  # nosec B101


def test_empty_body(stub_connector):
    result = stub_connector(httpx.Response(204)).post_json(URL, {}, {})
    assert result.status == 204  # nosec B101
    assert result.body is None  # nosec B101
    assert result.raw == ""  # nosec B101


@pytest.mark.parametrize(
    "exc,code",
    [
        (httpx.ConnectError, ErrorCode.UNAVAILABLE),
        (httpx.ReadTimeout, ErrorCode.TIMEOUT),
        (httpx.ConnectTimeout, ErrorCode.TIMEOUT),
        (httpx.RemoteProtocolError, ErrorCode.TRANSIENT),
    ],
)
def test_transport_failures_become_status_zero(stub_connector, exc, code):
    result = stub_connector(exc).post_json(URL, {}, {"model": "m"})
    assert result.status == 0  # nosec B101
    assert result.body is None  # nosec B101
    assert result.raw == ""  # nosec B101
    assert result.headers == {}  # nosec B101
    assert result.error  # nosec B101
    assert result.error_code is code  # nosec B101


@pytest.mark.parametrize("url", ["", "/chat/completions", "ftp://api.test/x", "api.test/v1"])
def test_invalid_url_short_circuits(stub_connector, captured_requests, url):
    result = stub_connector(httpx.Response(200)).post_json(url, {}, {})
    assert result.status == 0  # nosec B101
    assert result.error  # nosec B101
    assert result.error_code is ErrorCode.VALIDATION  # nosec B101
    assert captured_requests == []  # nosec B101


def test_injected_client_is_reused_and_left_open(captured_requests):
    def handler(request: httpx.Request) -> httpx.Response:
        captured_requests.append(request)
        return httpx.Response(200, json={"n": len(captured_requests)})

    client = httpx.Client(transport=httpx.MockTransport(handler))
    connector = HttpConnector(client=client)
    assert connector.post_json(URL, {}, {}).body == {"n": 1}  # nosec B101
    assert connector.post_json(URL, {}, {}).body == {"n": 2}  # nosec B101
    assert not client.is_closed  # nosec B101
    client.close()


def test_unserializable_payload_raises(stub_connector):
    with pytest.raises(TypeError):
        stub_connector(httpx.Response(200)).post_json(URL, {}, {"bad": object()})


def test_normalize_response_headers_joins_repeats():
    raw = [(b"Set-Cookie", b"a=1"), (b"Content-Type", b"application/json"), (b"set-cookie", b"b=2")]
    assert normalize_response_headers(raw) == {  # nosec B101
        "Set-Cookie": "a=1, b=2",
        "Content-Type": "application/json",
    }


def test_response_multi_value_headers(stub_connector):
    reply = httpx.Response(200, json={}, headers=[("X-Multi", "one"), ("X-Multi", "two")])
    result = stub_connector(reply).post_json(URL, {}, {})
    assert result.headers["X-Multi"] == "one, two"  # nosec B101


def test_unencodable_header_becomes_validation_failure(stub_connector, captured_requests):
    result = stub_connector(httpx.Response(200)).post_json(URL, {"X-Title": "Café"}, {})
    assert result.status == 0  # nosec B101
    assert result.error.startswith("invalid request")  # nosec B101
    assert result.error_code is ErrorCode.VALIDATION  # nosec B101
    assert captured_requests == []  # nosec B101
