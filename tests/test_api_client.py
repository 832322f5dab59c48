from unittest.mock import Mock, patch

import pytest
import requests

from chat_ui.api_client import AuthClient
from chat_ui.errors import GatewayError, TransportError


def fake_response(status, json_data):
    r = Mock()
    r.status_code = status
    r.ok = status < 400
    if isinstance(json_data, Exception):
        r.json.side_effect = json_data
    else:
        r.json.return_value = json_data
    return r


def test_login_success():
    body = {"token": "t", "user": {"id": "1", "username": "alice", "email": "a@x.com"}}
    with patch("chat_ui.api_client.requests.request", return_value=fake_response(200, body)) as req:
        assert AuthClient("http://api/").login("a@x.com", "pw1") == body
    req.assert_called_once_with("POST", "http://api/auth/login", json={"email": "a@x.com", "password": "pw1"})


def test_server_error_message_is_surfaced():
    body = {"error": "conflict", "message": "A user with this email already exists"}
    with patch("chat_ui.api_client.requests.request", return_value=fake_response(409, body)):
        with pytest.raises(GatewayError) as e:
            AuthClient("http://api").register("alice", "a@x.com", "pw1")
    assert e.value.status_code == 409
    assert e.value.kind == "conflict"
    assert e.value.message == "A user with this email already exists"


def test_non_json_error_falls_back():
    with patch("chat_ui.api_client.requests.request", return_value=fake_response(502, ValueError())):
        with pytest.raises(GatewayError) as e:
            AuthClient("http://api").login("a@x.com", "pw1")
    assert e.value.message == "Authentication failed"


def test_no_response_is_transport_error():
    with patch("chat_ui.api_client.requests.request", side_effect=requests.ConnectionError()):
        with pytest.raises(TransportError):
            AuthClient("http://api").login("a@x.com", "pw1")


def test_me_sends_bearer():
    with patch("chat_ui.api_client.requests.request", return_value=fake_response(200, {"id": "1"})) as req:
        AuthClient("http://api").me("tok")
    assert req.call_args.kwargs["headers"] == {"Authorization": "Bearer tok"}
