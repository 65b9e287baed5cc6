"""Fetching and decoding one page of a repository listing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ghbackup.api.errors import ApiError, from_http_error
from ghbackup.api.links import parse_next_link
from ghbackup.core.config import CloneProtocol
from ghbackup.core.result import Err, Ok, Result
from ghbackup.core.structured import as_obj_list, as_str_dict, get_str

if TYPE_CHECKING:
    from ghbackup.api.http import HttpClient

__all__ = ["RepoDescriptor", "RepoPage", "fetch_page"]


@dataclass(frozen=True, slots=True)
class RepoDescriptor:
    """What is needed to clone a repository.

    Attributes:
        name: Repository name, unique within its account
        clone_url: URL handed to `git clone`
    """

    name: str
    clone_url: str


@dataclass(frozen=True, slots=True)
class RepoPage:
    repos: list[RepoDescriptor]
    next_url: str | None = None


def _is_safe_name(name: str) -> bool:
    """True if `name` can be used as a single directory below the backup root."""
    if not name or name in (".", ".."):
        return False
    if "/" in name or "\\" in name:
        return False
    # Rejects NUL and other control characters.
    return name.isprintable()


def fetch_page(
    http: HttpClient,
    url: str,
    *,
    protocol: CloneProtocol = CloneProtocol.GIT,
) -> Result[RepoPage, ApiError]:
    """GET one listing page and decode its repositories.

    Args:
        http: HTTP client
        url: Fully-qualified page URL
        protocol: Selects the field used as clone URL

    Returns:
        Ok(RepoPage) with the decoded repositories (remote order kept) and
        the next page URL from the Link header, or Err(ApiError)
    """
    result = http.get(url)
    if isinstance(result, Err):
        return result.map_err(from_http_error)
    response = result.value

    try:
        items = as_obj_list(response.json())
    except ValueError as e:
        return Err(ApiError(kind="decode", message=f"JSON parse error: {e}", url=url))
    if items is None:
        return Err(ApiError(kind="decode", message="Expected JSON array", url=url))

    repos: list[RepoDescriptor] = []
    for index, item in enumerate(items):
        data = as_str_dict(item)
        if data is None:
            return Err(ApiError(kind="decode", message=f"Item {index} is not an object", url=url))

        name = get_str(data, "name")
        clone_url = get_str(data, protocol.url_field)
        if name is None or clone_url is None:
            return Err(
                ApiError(
                    kind="decode",
                    message=f"Item {index} lacks 'name' or '{protocol.url_field}'",
                    url=url,
                )
            )
        if not _is_safe_name(name):
            return Err(
                ApiError(kind="decode", message=f"Invalid repository name: {name!r}", url=url)
            )
        repos.append(RepoDescriptor(name=name, clone_url=clone_url))

    return Ok(RepoPage(repos=repos, next_url=parse_next_link(response.header("Link"))))
