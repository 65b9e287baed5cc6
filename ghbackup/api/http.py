"""HTTP client abstraction for the hosting service API.

This module provides:
- HttpClient: Protocol for HTTP GET (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from ghbackup import __version__
from ghbackup.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpResponse",
    "MockHttpClient",
    "RealHttpClient",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """A successful (2xx) response.

    Attributes:
        url: The requested URL
        status: HTTP status code
        headers: Response headers as received
        body: Raw response body
    """

    url: str
    status: int
    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)

    def header(self, name: str) -> str | None:
        """Look up a header, ignoring case."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    def json(self) -> object:
        """Decode the body as UTF-8 JSON.

        Raises:
            ValueError: If the body is not valid UTF-8 JSON.
        """
        return json.loads(self.body.decode("utf-8"))


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP GET requests.

    Implementations return `Err` for transport failures and for any status
    outside the 2xx range.
    """

    def get(self, url: str) -> Result[HttpResponse, HttpError]:
        """Fetch a URL.

        Args:
            url: Fully-qualified URL to fetch

        Returns:
            Ok with the response, or Err with HttpError
        """
        ...


class RealHttpClient:
    """HTTP client using urllib.

    Handles:
    - HTTPS with system certificates
    - Bearer authentication when a token is given
    - Timeout handling
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        timeout: float = 30.0,
        user_agent: str = f"ghbackup/{__version__}",
    ) -> None:
        self.timeout = timeout
        self._headers = {
            "User-Agent": user_agent,
            "Accept": "application/vnd.github+json",
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        self._ssl_context = ssl.create_default_context()

    def get(self, url: str) -> Result[HttpResponse, HttpError]:
        try:
            req = urllib.request.Request(url, headers=self._headers)
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                status: int = response.status
                body = response.read()
                headers = {key: value for key, value in response.headers.items()}
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

        if not 200 <= status < 300:
            return Err(HttpError(url=url, status=status, message="Unexpected status"))
        return Ok(HttpResponse(url=url, status=status, body=body, headers=headers))


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_json("https://api.example.com/users/octocat", {"type": "User"})
        result = client.get("https://api.example.com/users/octocat")
        assert isinstance(result, Ok)
    """

    def __init__(self) -> None:
        self._responses: dict[str, HttpResponse | HttpError] = {}
        self.calls: list[str] = []

    def set_json(
        self,
        url: str,
        data: object,
        *,
        headers: Mapping[str, str] | None = None,
        status: int = 200,
    ) -> None:
        """Serve `data` encoded as JSON for `url`."""
        self.set_body(url, json.dumps(data).encode("utf-8"), headers=headers, status=status)

    def set_body(
        self,
        url: str,
        body: bytes,
        *,
        headers: Mapping[str, str] | None = None,
        status: int = 200,
    ) -> None:
        """Serve a raw body for `url`."""
        self._responses[url] = HttpResponse(
            url=url, status=status, body=body, headers=dict(headers or {})
        )

    def set_error(self, url: str, error: HttpError) -> None:
        self._responses[url] = error

    def get(self, url: str) -> Result[HttpResponse, HttpError]:
        self.calls.append(url)

        response = self._responses.get(url)
        if response is None:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))
        if isinstance(response, HttpError):
            return Err(response)
        if not 200 <= response.status < 300:
            return Err(HttpError(url=url, status=response.status, message="Unexpected status"))
        return Ok(response)
