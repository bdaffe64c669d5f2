"""Unit tests for utils helpers and ApiClient."""

from unittest.mock import MagicMock

import pytest
import requests

from errors import ApiError
from utils import ApiClient, format_mac, is_valid_url, is_valid_uuid


class TestFormatMac:
    @pytest.mark.parametrize("mac", [
        "AA:BB:CC:DD:EE:FF",
        "aa-bb-cc-dd-ee-ff",
        "AABBCCDDEEFF",
        "Aa:Bb:Cc:Dd:Ee:Ff",
    ])
    def test_separator_and_case_insensitive(self, mac):
        assert format_mac(mac) == "aa:bb:cc:dd:ee:ff"

    @pytest.mark.parametrize("mac", ["AA-BB-CC-DD-EE-FF", "abc", "zz:yy", "", "aabbc:cdd-eeff0"])
    def test_idempotent(self, mac):
        assert format_mac(format_mac(mac)) == format_mac(mac)

    def test_odd_length_is_grouped_not_rejected(self):
        assert format_mac("AABBC") == "aa:bb:c"

    def test_non_hex_is_kept(self):
        assert format_mac("ZZ-11-22") == "zz:11:22"

    def test_empty(self):
        assert format_mac("") == ""


def test_is_valid_url():
    assert is_valid_url("https://unifi.example.com")
    assert is_valid_url("http://192.168.1.1:8443/proxy/network/integration")
    assert not is_valid_url("not-a-url")
    assert not is_valid_url("ftp://example.com")
    assert not is_valid_url(None)


def test_is_valid_uuid():
    assert is_valid_uuid("550e8400-e29b-41d4-a716-446655440000")
    assert is_valid_uuid("550E8400-E29B-41D4-A716-446655440000")
    assert not is_valid_uuid("not-a-uuid")
    assert not is_valid_uuid("550e8400e29b41d4a716446655440000")
    assert not is_valid_uuid(None)


class TestApiClient:
    @pytest.fixture
    def session(self):
        session = MagicMock(spec=requests.Session)
        session.headers = {}
        return session

    def test_headers_and_url(self, session):
        response = MagicMock(ok=True, content=b"[]")
        response.json.return_value = []
        session.request.return_value = response

        client = ApiClient("Test", "https://api.example.com/v1/", headers={"X-API-KEY": "k"},
                           timeout=5, session=session)
        assert client.request("/things", params={"a": 1}) == []

        assert session.headers["X-API-KEY"] == "k"
        assert session.headers["Content-Type"] == "application/json"
        session.request.assert_called_once_with(
            "GET", "https://api.example.com/v1/things", params={"a": 1}, json=None, timeout=5
        )

    def test_error_status_raises(self, session):
        session.request.return_value = MagicMock(ok=False, status_code=404, reason="Not Found", text="missing")

        client = ApiClient("Test", "https://api.example.com", session=session)
        with pytest.raises(ApiError, match="Test API error: 404 Not Found - missing") as exc_info:
            client.request("/things")
        assert exc_info.value.status_code == 404

    def test_connection_error_raises(self, session):
        session.request.side_effect = requests.ConnectionError("refused")

        client = ApiClient("Test", "https://api.example.com", session=session)
        with pytest.raises(ApiError, match="request failed"):
            client.request("/things")

    def test_empty_body_returns_none(self, session):
        session.request.return_value = MagicMock(ok=True, content=b"")

        client = ApiClient("Test", "https://api.example.com", session=session)
        assert client.request("/things/1", "PATCH", body={"name": "x"}) is None

    def test_invalid_json_raises(self, session):
        response = MagicMock(ok=True, content=b"<html>", status_code=200)
        response.json.side_effect = ValueError("Expecting value")
        session.request.return_value = response

        client = ApiClient("Test", "https://api.example.com", session=session)
        with pytest.raises(ApiError, match="invalid JSON"):
            client.request("/things")
