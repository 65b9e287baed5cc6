"""Tests for api/http.py - HTTP client abstraction."""

from __future__ import annotations

import pytest

from ghbackup.api.http import HttpClient, HttpError, HttpResponse, MockHttpClient, RealHttpClient
from ghbackup.core.result import Err, Ok


class TestHttpError:
    def test_str_with_status(self) -> None:
        error = HttpError(url="https://example.com/api", status=500, message="Internal Error")
        assert str(error) == "HTTP 500: Internal Error (https://example.com/api)"

    def test_str_without_status(self) -> None:
        error = HttpError(url="https://example.com", status=0, message="Timeout")
        assert str(error) == "Timeout (https://example.com)"

    def test_is_frozen(self) -> None:
        error = HttpError(url="https://example.com", status=404, message="Not Found")
        with pytest.raises(AttributeError):
            error.status = 500  # type: ignore[misc]


class TestHttpResponse:
    def test_header_lookup_ignores_case(self) -> None:
        response = HttpResponse(url="u", status=200, body=b"", headers={"link": "<x>; rel=next"})
        assert response.header("Link") == "<x>; rel=next"
        assert response.header("LINK") == "<x>; rel=next"
        assert response.header("X-Other") is None

    def test_json(self) -> None:
        response = HttpResponse(url="u", status=200, body=b'[{"name": "a"}]')
        assert response.json() == [{"name": "a"}]

    def test_json_invalid(self) -> None:
        response = HttpResponse(url="u", status=200, body=b"<html>")
        with pytest.raises(ValueError):
            response.json()


class TestMockHttpClient:
    def test_isinstance_check(self) -> None:
        assert isinstance(MockHttpClient(), HttpClient)

    def test_serves_json_and_records_calls(self) -> None:
        client = MockHttpClient()
        client.set_json("https://api/x", {"type": "User"}, headers={"Link": "l"})

        result = client.get("https://api/x")

        assert isinstance(result, Ok)
        assert result.value.json() == {"type": "User"}
        assert result.value.header("link") == "l"
        assert client.calls == ["https://api/x"]

    def test_unknown_url_is_404(self) -> None:
        result = MockHttpClient().get("https://api/missing")

        assert isinstance(result, Err)
        assert result.error.status == 404

    def test_non_2xx_status_is_error(self) -> None:
        client = MockHttpClient()
        client.set_json("https://api/x", {}, status=301)

        result = client.get("https://api/x")

        assert isinstance(result, Err)
        assert result.error.status == 301

    def test_set_error(self) -> None:
        client = MockHttpClient()
        client.set_error("https://api/x", HttpError(url="https://api/x", status=0, message="down"))

        result = client.get("https://api/x")

        assert isinstance(result, Err)
        assert result.error.message == "down"


class TestRealHttpClient:
    def test_isinstance_check(self) -> None:
        assert isinstance(RealHttpClient(), HttpClient)

    def test_authorization_header_only_with_token(self) -> None:
        anonymous = RealHttpClient()._headers  # pyright: ignore[reportPrivateUsage]
        authed = RealHttpClient("s3cret")._headers  # pyright: ignore[reportPrivateUsage]
        assert "Authorization" not in anonymous
        assert authed["Authorization"] == "Bearer s3cret"

    def test_invalid_url_is_error(self) -> None:
        result = RealHttpClient().get("not a url")

        assert isinstance(result, Err)
        assert result.error.status == 0
