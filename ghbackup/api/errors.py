"""Errors raised while talking to the hosting service API.

All of them are fatal for a run: without the account type or the complete
repository list there is nothing trustworthy to mirror.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from ghbackup.api.http import HttpError

__all__ = ["ApiError", "ApiErrorKind", "from_http_error"]

ApiErrorKind = Literal["transport", "status", "decode", "account_type"]


@dataclass(frozen=True, slots=True)
class ApiError:
    """Fatal error from account classification or repository listing.

    Attributes:
        kind: Category of failure
        message: Human-readable description
        url: Request URL, when the error concerns one request
        status: HTTP status code, 0 when no response was received
        hint: Optional suggestion shown to the user
    """

    kind: ApiErrorKind
    message: str
    url: str | None = None
    status: int = 0
    hint: str | None = None


def from_http_error(error: HttpError) -> ApiError:
    """Lift an HttpError into an ApiError, with hints for common statuses."""
    if error.status == 0:
        return ApiError(kind="transport", message=str(error), url=error.url)

    hint: str | None = None
    if error.status == 404:
        hint = "Check the account name (and the API URL for self-hosted instances)"
    elif error.status in (401, 403):
        hint = "Pass a valid token with --token or GITHUB_TOKEN to raise the rate limit"
    return ApiError(
        kind="status",
        message=str(error),
        url=error.url,
        status=error.status,
        hint=hint,
    )
