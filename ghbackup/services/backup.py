"""One backup run: classify the account, list its repositories, sync them.

Fatal failures (API, backup directory) come back as `Err(BackupError)`.
Per-repository failures only appear on the event sink; the caller checks
`sink.has_errors` for the final exit status.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from ghbackup.api.accounts import Account, classify_account
from ghbackup.api.http import RealHttpClient
from ghbackup.api.repos import RepositoryEnumerator
from ghbackup.core.result import Err, Ok, Result
from ghbackup.sync.dispatcher import DispatchReport, SyncDispatcher

if TYPE_CHECKING:
    from ghbackup.api.errors import ApiError
    from ghbackup.api.http import HttpClient
    from ghbackup.core.config import SyncConfig
    from ghbackup.sync.dispatcher import SyncError
    from ghbackup.sync.events import EventSink
    from ghbackup.sync.git import GitRunner

__all__ = ["BackupError", "BackupService", "BackupSummary"]


@dataclass(frozen=True, slots=True)
class BackupError:
    """Fatal error that ended a run before every repository was handled."""

    kind: Literal["api", "account_type", "filesystem"]
    message: str
    hint: str | None = None

    @classmethod
    def from_api(cls, error: ApiError) -> BackupError:
        kind: Literal["api", "account_type"] = (
            "account_type" if error.kind == "account_type" else "api"
        )
        return cls(kind=kind, message=error.message, hint=error.hint)

    @classmethod
    def from_sync(cls, error: SyncError) -> BackupError:
        return cls(kind="filesystem", message=error.message, hint=error.hint)


@dataclass(frozen=True, slots=True)
class BackupSummary:
    account: Account
    total: int
    report: DispatchReport


class BackupService:
    """Mirror all repositories of `config.account` into `config.root`."""

    def __init__(
        self,
        *,
        config: SyncConfig,
        sink: EventSink,
        http: HttpClient | None = None,
        git: GitRunner | None = None,
    ) -> None:
        self._config = config
        self._sink = sink
        self._http = http or RealHttpClient(config.token)
        self._git = git

    def run(self) -> Result[BackupSummary, BackupError]:
        config = self._config

        account_result = classify_account(self._http, config.api_url, config.account)
        if isinstance(account_result, Err):
            return account_result.map_err(BackupError.from_api)
        account = account_result.value

        enumerator = RepositoryEnumerator(
            http=self._http,
            api_url=config.api_url,
            sink=self._sink,
            per_page=config.per_page,
            protocol=config.protocol,
        )
        repos_result = enumerator.list_repos(account)
        if isinstance(repos_result, Err):
            return repos_result.map_err(BackupError.from_api)
        repos = repos_result.value

        if repos:
            try:
                config.root.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                return Err(
                    BackupError(
                        kind="filesystem",
                        message=(
                            f"cannot create backup directory {config.root}: {e.strerror or e}"
                        ),
                    )
                )

        dispatcher = SyncDispatcher(
            root=config.root,
            sink=self._sink,
            git=self._git,
            workers=config.workers,
        )
        dispatch_result = dispatcher.run(repos)
        if isinstance(dispatch_result, Err):
            return dispatch_result.map_err(BackupError.from_sync)

        return Ok(BackupSummary(account=account, total=len(repos), report=dispatch_result.value))
