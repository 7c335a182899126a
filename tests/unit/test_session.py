"""Unit tests for napalm_eapi.client.session and napalm_eapi.client.http."""

from __future__ import annotations

import dataclasses
import json

import pytest
import requests
import responses as rsps_lib

from napalm_eapi.client.errors import (
    CODE_INVALID_PARAMS,
    CODE_INVALID_REQUEST,
    CODE_METHOD_NOT_FOUND,
    CODE_PARSE_ERROR,
    JSONRPC_PROTOCOL_CODES,
    EapiAuthError,
    EapiCommandError,
    EapiParseError,
    EapiProtocolError,
    EapiRequestError,
    EapiResponseError,
    UnsupportedOperationError,
)
from napalm_eapi.client.http import EapiHTTP, _normalise_base_url
from napalm_eapi.client.session import EapiCredentials, EapiSession
from napalm_eapi.vendor.eos.commands import COMMAND_API

BASE_URL = "https://192.0.2.10"
URL = f"{BASE_URL}{COMMAND_API}"
CREDS = EapiCredentials(username="admin", password="secret")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_session() -> EapiSession:
    return EapiSession(base_url=BASE_URL, credentials=CREDS)


def _json(payload: dict[str, object]) -> str:
    return json.dumps(payload)


def _ok(result: list[object], request_id: str = "napalm-eapi-1") -> str:
    return _json({"jsonrpc": "2.0", "id": request_id, "result": result})


# ---------------------------------------------------------------------------
# errors.py: constants and exception hierarchy
# ---------------------------------------------------------------------------

def test_protocol_codes_cover_reserved_range() -> None:
    assert CODE_PARSE_ERROR in JSONRPC_PROTOCOL_CODES
    assert CODE_INVALID_REQUEST in JSONRPC_PROTOCOL_CODES
    assert 1002 not in JSONRPC_PROTOCOL_CODES


def test_protocol_error_is_command_error() -> None:
    err = EapiProtocolError(code=CODE_INVALID_PARAMS, message="bad params")
    assert isinstance(err, EapiCommandError)
    assert "code=-32602" in str(err)


def test_command_error_message() -> None:
    err = EapiCommandError(code=1002, message="invalid command", commands=["foo"])
    assert "code=1002" in str(err)
    assert "invalid command" in str(err)
    assert err.errors == []


def test_request_error_wraps_cause() -> None:
    cause = ConnectionError("refused")
    err = EapiRequestError(url="https://host/command-api", cause=cause)
    assert "https://host/command-api" in str(err)
    assert err.cause is cause


def test_response_error_stores_status() -> None:
    err = EapiResponseError(status_code=500, url="https://host/command-api")
    assert err.status_code == 500
    assert "500" in str(err)


def test_unsupported_operation_error_message() -> None:
    err = UnsupportedOperationError(operation="create", interface="Ethernet1")
    assert "'create'" in str(err)
    assert "'Ethernet1'" in str(err)


# ---------------------------------------------------------------------------
# http.py: URL normalisation
# ---------------------------------------------------------------------------

def test_normalise_base_url_strips_slash() -> None:
    assert _normalise_base_url("https://192.0.2.10/") == "https://192.0.2.10"


def test_normalise_base_url_adds_https_scheme() -> None:
    assert _normalise_base_url("192.0.2.10") == "https://192.0.2.10"


def test_normalise_base_url_preserves_http() -> None:
    assert _normalise_base_url("http://192.0.2.10/") == "http://192.0.2.10"


# ---------------------------------------------------------------------------
# http.py: EapiHTTP
# ---------------------------------------------------------------------------

@rsps_lib.activate
def test_http_post_json_success() -> None:
    rsps_lib.add(rsps_lib.POST, URL, body=_ok([{}]), status=200)
    http = EapiHTTP(BASE_URL, username="admin", password="secret")
    resp = http.post_json(COMMAND_API, {"x": 1})
    assert resp.status_code == 200
    assert json.loads(rsps_lib.calls[0].request.body) == {"x": 1}
    http.close()


@rsps_lib.activate
def test_http_sends_basic_auth_and_user_agent() -> None:
    rsps_lib.add(rsps_lib.POST, URL, body=_ok([{}]), status=200)
    http = EapiHTTP(BASE_URL, username="admin", password="secret")
    http.post_json(COMMAND_API, {})
    headers = rsps_lib.calls[0].request.headers
    assert headers["Authorization"].startswith("Basic ")
    assert headers["User-Agent"].startswith("napalm-eapi/")
    http.close()


@rsps_lib.activate
def test_http_401_raises_auth_error() -> None:
    rsps_lib.add(rsps_lib.POST, URL, status=401)
    http = EapiHTTP(BASE_URL, username="admin", password="wrong")
    with pytest.raises(EapiAuthError):
        http.post_json(COMMAND_API, {})
    http.close()


@rsps_lib.activate
def test_http_non2xx_raises_response_error() -> None:
    rsps_lib.add(rsps_lib.POST, URL, status=500)
    http = EapiHTTP(BASE_URL, username="admin", password="secret")
    with pytest.raises(EapiResponseError) as exc_info:
        http.post_json(COMMAND_API, {})
    assert exc_info.value.status_code == 500
    http.close()


@rsps_lib.activate
def test_http_connection_error_raises_request_error() -> None:
    rsps_lib.add(
        rsps_lib.POST,
        URL,
        body=requests.exceptions.ConnectionError("refused"),
    )
    http = EapiHTTP(BASE_URL, username="admin", password="secret")
    with pytest.raises(EapiRequestError):
        http.post_json(COMMAND_API, {})
    http.close()


def test_http_context_manager_returns_self() -> None:
    with EapiHTTP(BASE_URL, username="a", password="b") as http:
        assert isinstance(http, EapiHTTP)


# ---------------------------------------------------------------------------
# session.py: EapiCredentials
# ---------------------------------------------------------------------------

def test_credentials_frozen() -> None:
    creds = EapiCredentials(username="u", password="p")
    with pytest.raises(dataclasses.FrozenInstanceError):
        creds.username = "other"  # type: ignore[misc]


def test_session_base_url_normalised() -> None:
    session = EapiSession(base_url="192.0.2.10/", credentials=CREDS)
    assert session.base_url == "https://192.0.2.10"


# ---------------------------------------------------------------------------
# session.py: run_commands request framing
# ---------------------------------------------------------------------------

@rsps_lib.activate
def test_run_commands_builds_jsonrpc_request() -> None:
    rsps_lib.add(rsps_lib.POST, URL, body=_ok([{}, {"hostname": "leaf1"}]), status=200)
    session = _make_session()
    session.run_commands(["enable", "show hostname"])

    body = json.loads(rsps_lib.calls[0].request.body)
    assert body["jsonrpc"] == "2.0"
    assert body["method"] == "runCmds"
    assert body["params"] == {
        "version": 1,
        "cmds": ["enable", "show hostname"],
        "format": "json",
    }
    assert body["id"] == "napalm-eapi-1"


@rsps_lib.activate
def test_run_commands_increments_request_id() -> None:
    rsps_lib.add(rsps_lib.POST, URL, body=_ok([{}]), status=200)
    rsps_lib.add(rsps_lib.POST, URL, body=_ok([{}]), status=200)
    session = _make_session()
    session.run_commands(["enable"])
    session.run_commands(["enable"])
    ids = [json.loads(c.request.body)["id"] for c in rsps_lib.calls]
    assert ids == ["napalm-eapi-1", "napalm-eapi-2"]


@rsps_lib.activate
def test_run_commands_text_format() -> None:
    rsps_lib.add(
        rsps_lib.POST,
        URL,
        body=_ok([{"output": ""}, {"output": "leaf1\n"}]),
        status=200,
    )
    session = _make_session()
    result = session.run_commands(["enable", "show hostname"], encoding="text")
    assert json.loads(rsps_lib.calls[0].request.body)["params"]["format"] == "text"
    assert result[1] == {"output": "leaf1\n"}


@rsps_lib.activate
def test_run_commands_returns_result_list() -> None:
    rsps_lib.add(rsps_lib.POST, URL, body=_ok([{}, {"hostname": "leaf1"}]), status=200)
    session = _make_session()
    assert session.run_commands(["enable", "show hostname"]) == [{}, {"hostname": "leaf1"}]


@rsps_lib.activate
def test_run_commands_accepts_command_objects() -> None:
    rsps_lib.add(rsps_lib.POST, URL, body=_ok([{}]), status=200)
    session = _make_session()
    session.run_commands([{"cmd": "enable", "input": "pw"}])
    cmds = json.loads(rsps_lib.calls[0].request.body)["params"]["cmds"]
    assert cmds == [{"cmd": "enable", "input": "pw"}]


# ---------------------------------------------------------------------------
# session.py: error envelopes
# ---------------------------------------------------------------------------

@rsps_lib.activate
def test_run_commands_error_raises_command_error() -> None:
    rsps_lib.add(
        rsps_lib.POST,
        URL,
        body=_json({
            "jsonrpc": "2.0",
            "id": "napalm-eapi-1",
            "error": {
                "code": 1002,
                "message": "CLI command 3 of 3 'foo' failed: invalid command",
                "data": [{}, {}, {"errors": ["Invalid input (at token 0: 'foo')"]}],
            },
        }),
        status=200,
    )
    session = _make_session()
    with pytest.raises(EapiCommandError) as exc_info:
        session.run_commands(["enable", "configure terminal", "foo"])
    err = exc_info.value
    assert not isinstance(err, EapiProtocolError)
    assert err.code == 1002
    assert err.commands == ["enable", "configure terminal", "foo"]
    assert err.errors == ["Invalid input (at token 0: 'foo')"]


@rsps_lib.activate
def test_run_commands_error_without_data() -> None:
    rsps_lib.add(
        rsps_lib.POST,
        URL,
        body=_json({"jsonrpc": "2.0", "id": "x", "error": {"code": -32602, "message": "bad"}}),
        status=200,
    )
    session = _make_session()
    with pytest.raises(EapiProtocolError) as exc_info:
        session.run_commands(["enable"])
    assert exc_info.value.code == CODE_INVALID_PARAMS
    assert exc_info.value.errors == []


@rsps_lib.activate
def test_run_commands_non_json_raises_parse_error() -> None:
    rsps_lib.add(rsps_lib.POST, URL, body="<html>error</html>", status=200)
    session = _make_session()
    with pytest.raises(EapiParseError):
        session.run_commands(["enable"])


@rsps_lib.activate
def test_run_commands_missing_result_raises_parse_error() -> None:
    rsps_lib.add(rsps_lib.POST, URL, body=_json({"jsonrpc": "2.0", "id": "x"}), status=200)
    session = _make_session()
    with pytest.raises(EapiParseError):
        session.run_commands(["enable"])


@rsps_lib.activate
def test_run_commands_non_object_body_raises_parse_error() -> None:
    rsps_lib.add(rsps_lib.POST, URL, body="[1, 2]", status=200)
    session = _make_session()
    with pytest.raises(EapiParseError):
        session.run_commands(["enable"])


@rsps_lib.activate
def test_run_commands_unknown_method_raises_protocol_error() -> None:
    rsps_lib.add(
        rsps_lib.POST,
        URL,
        body=_json({
            "jsonrpc": "2.0",
            "id": "napalm-eapi-1",
            "error": {"code": CODE_METHOD_NOT_FOUND, "message": "Method not found"},
        }),
        status=200,
    )
    session = _make_session()
    with pytest.raises(EapiProtocolError) as exc_info:
        session.run_commands(["enable"])
    assert exc_info.value.commands == ["enable"]
