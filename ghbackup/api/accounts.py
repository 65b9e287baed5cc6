"""Account classification.

Users and organizations list their repositories under different API paths,
so the account type must be known before enumeration starts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING
from urllib.parse import quote

from ghbackup.api.errors import ApiError, from_http_error
from ghbackup.core.result import Err, Ok, Result
from ghbackup.core.structured import as_str_dict, get_str

if TYPE_CHECKING:
    from ghbackup.api.http import HttpClient

__all__ = ["Account", "AccountKind", "classify_account"]


class AccountKind(Enum):
    """Kind of account, keyed by the API's `type` field."""

    USER = "User"
    ORGANIZATION = "Organization"

    @property
    def path_segment(self) -> str:
        """Collection name in repository listing URLs."""
        return "users" if self is AccountKind.USER else "orgs"

    @property
    def label(self) -> str:
        return "user" if self is AccountKind.USER else "org"


@dataclass(frozen=True, slots=True)
class Account:
    name: str
    kind: AccountKind

    def repos_url(self, api_url: str) -> str:
        """First page of this account's repository listing (no paging params)."""
        return f"{api_url}/{self.kind.path_segment}/{quote(self.name, safe='')}/repos"


def classify_account(http: HttpClient, api_url: str, name: str) -> Result[Account, ApiError]:
    """Look up `name` and decide whether it is a user or an organization.

    Args:
        http: HTTP client (carries authentication)
        api_url: API root without trailing slash
        name: Account name

    Returns:
        Ok(Account), or Err(ApiError) for transport failures, non-2xx
        statuses, undecodable bodies and unknown account types
    """
    url = f"{api_url}/users/{quote(name, safe='')}"
    result = http.get(url)
    if isinstance(result, Err):
        return result.map_err(from_http_error)

    try:
        data = as_str_dict(result.value.json())
    except ValueError as e:
        return Err(ApiError(kind="decode", message=f"JSON parse error: {e}", url=url))
    if data is None:
        return Err(ApiError(kind="decode", message="Expected JSON object", url=url))

    raw_type = get_str(data, "type")
    try:
        kind = AccountKind(raw_type)
    except ValueError:
        return Err(
            ApiError(
                kind="account_type",
                message=f"Unknown type of account {raw_type!r} for name {name}",
                url=url,
            )
        )
    return Ok(Account(name=name, kind=kind))
