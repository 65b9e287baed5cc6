"""Repository enumeration across all pages of an account's listing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ghbackup.api.links import with_page_size
from ghbackup.api.pages import RepoDescriptor, fetch_page
from ghbackup.core.config import MAX_PAGE_SIZE, CloneProtocol
from ghbackup.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from ghbackup.api.accounts import Account
    from ghbackup.api.errors import ApiError
    from ghbackup.api.http import HttpClient
    from ghbackup.sync.events import EventSink

__all__ = ["RepositoryEnumerator"]


class RepositoryEnumerator:
    """Collect every repository of an account, page by page.

    Pages are fetched sequentially since each next URL comes from the
    previous response. Results keep page order, then remote order within a
    page. Repositories are not deduplicated.
    """

    def __init__(
        self,
        *,
        http: HttpClient,
        api_url: str,
        sink: EventSink,
        per_page: int = MAX_PAGE_SIZE,
        protocol: CloneProtocol = CloneProtocol.GIT,
    ) -> None:
        self._http = http
        self._api_url = api_url
        self._sink = sink
        self._per_page = per_page
        self._protocol = protocol

    def list_repos(self, account: Account) -> Result[list[RepoDescriptor], ApiError]:
        """Return all repositories of `account`.

        Any failing page aborts the listing; no partial set is returned.
        """
        repos: list[RepoDescriptor] = []
        url: str | None = with_page_size(account.repos_url(self._api_url), self._per_page)

        while url is not None:
            page = fetch_page(self._http, url, protocol=self._protocol)
            if isinstance(page, Err):
                return page
            repos.extend(page.value.repos)
            url = page.value.next_url

        self._sink.info(
            f"Backup for {account.kind.label} {account.name} with {len(repos)} repositories"
        )
        return Ok(repos)
