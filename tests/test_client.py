import base64

import pytest
import requests


def test_send_sets_accept_and_basic_auth(client, session):
    session.reply(json_data={"ok": True})

    req = client.build_request("GET", "/api/contacts/1")
    out = client.send_request(req)

    assert out == {"ok": True}
    sent = session.last_request
    assert sent.url == "https://mautic.example.com/api/contacts/1"
    assert sent.headers["Accept"] == "application/json; charset=utf-8"
    expected = base64.b64encode(b"admin:secret").decode()
    assert sent.headers["Authorization"] == f"Basic {expected}"


def test_timeout_passed_through(client, session):
    session.reply(json_data={})

    client.send_request(client.build_request("GET", "/hooks"), timeout=2.5)
    assert session.sent[-1][1]["timeout"] == 2.5


def test_environment_ca_bundle_applied(client, session, monkeypatch, tmp_path):
    bundle = str(tmp_path / "ca.pem")
    monkeypatch.delenv("CURL_CA_BUNDLE", raising=False)
    monkeypatch.setenv("REQUESTS_CA_BUNDLE", bundle)
    session.reply(json_data={})

    client.send_request(client.build_request("GET", "/hooks"))
    assert session.sent[-1][1]["verify"] == bundle


def test_no_default_timeout(client, session):
    session.reply(json_data={})

    client.send_request(client.build_request("GET", "/hooks"))
    assert session.sent[-1][1]["timeout"] is None


def test_response_closed_on_success(client, session):
    response = session.reply(json_data={"hook": {"id": 1}})

    client.send_request(client.build_request("GET", "/hooks/1"))
    assert response.closed is True


def test_response_closed_on_decode_error(client, session):
    from mautic_client import DecodeError

    response = session.reply(text="{broken")

    with pytest.raises(DecodeError):
        client.send_request(client.build_request("GET", "/hooks/1"))
    assert response.closed is True


def test_response_closed_on_api_error(client, session):
    from mautic_client import ApiError

    response = session.reply(status_code=500, text="oops")

    with pytest.raises(ApiError):
        client.send_request(client.build_request("GET", "/hooks/1"))
    assert response.closed is True


def test_empty_body_decodes_to_none(client, session):
    session.reply(text="")

    out = client.send_request(client.build_request("DELETE", "/hooks/1/delete"))
    assert out is None


def test_null_body_decodes_to_none(client, session):
    session.reply(text="null")

    out = client.send_request(client.build_request("DELETE", "/hooks/1/delete"))
    assert out is None


def test_text_decode_returns_body_verbatim(client, session):
    from mautic_client import Decode

    session.reply(text="<html>not json</html>")

    out = client.send_request(client.build_request("GET", "/"), decode=Decode.TEXT)
    assert out == "<html>not json</html>"


def test_transport_failure_raises_transport_error(client, session):
    from mautic_client import TransportError

    session.error = requests.ConnectionError("connection refused")

    with pytest.raises(TransportError) as excinfo:
        client.send_request(client.build_request("GET", "/hooks"))
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_api_error_carries_status_and_messages(client, session):
    from mautic_client import ApiError

    session.reply(status_code=404, json_data={
        "errors": [{"message": "Item was not found.", "code": 404, "type": None}],
    })

    with pytest.raises(ApiError) as excinfo:
        client.send_request(client.build_request("GET", "/api/contacts/999"))
    assert excinfo.value.status_code == 404
    assert excinfo.value.messages == ["Item was not found."]


def test_decode_response_without_client(session):
    from mautic_client import DecodeError, decode_response

    assert decode_response(session.reply(text='{"total": 0}')) == {"total": 0}
    with pytest.raises(DecodeError):
        decode_response(session.reply(text="not json"))
