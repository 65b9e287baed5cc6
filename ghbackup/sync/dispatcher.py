"""Concurrent clone/update of a repository set.

A fixed number of worker threads drain one shared queue. Each repository is
claimed by exactly one worker, so no two workers ever touch the same local
path. A failing clone or pull is reported as an Error event and the run goes
on; a failing existence check stops the dispatch since the state of the
backup directory can no longer be trusted.
"""

from __future__ import annotations

import queue
import threading
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from ghbackup.core.config import DEFAULT_WORKERS
from ghbackup.core.result import Err, Ok, Result
from ghbackup.sync.git import GitCli, GitRunner

if TYPE_CHECKING:
    from ghbackup.api.pages import RepoDescriptor
    from ghbackup.sync.events import EventSink

__all__ = [
    "DispatchReport",
    "SyncAction",
    "SyncDispatcher",
    "SyncError",
    "worker_count",
]


@dataclass(frozen=True, slots=True)
class SyncError:
    """Fatal error during dispatch."""

    kind: Literal["filesystem"]
    message: str
    path: Path | None = None
    hint: str | None = None


class SyncAction(Enum):
    CLONED = "Cloned "
    UPDATED = "Updated"


@dataclass(frozen=True, slots=True)
class DispatchReport:
    """Outcome of one dispatch.

    Attributes:
        workers: Number of worker threads started
        cloned: Names of newly cloned repositories
        updated: Names of updated repositories
        failed: Names of repositories whose clone/pull failed
    """

    workers: int
    cloned: tuple[str, ...] = ()
    updated: tuple[str, ...] = ()
    failed: tuple[str, ...] = ()

    @property
    def processed(self) -> int:
        return len(self.cloned) + len(self.updated) + len(self.failed)


def worker_count(repos: int, limit: int) -> int:
    """Workers needed for `repos` items under a concurrency `limit`."""
    return max(0, min(repos, limit))


@dataclass
class _RunState:
    """Mutable bookkeeping shared by the workers of one run."""

    lock: threading.Lock = field(default_factory=threading.Lock)
    cloned: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    fatal: SyncError | None = None

    def record(self, name: str, action: SyncAction | None) -> None:
        with self.lock:
            match action:
                case SyncAction.CLONED:
                    self.cloned.append(name)
                case SyncAction.UPDATED:
                    self.updated.append(name)
                case None:
                    self.failed.append(name)

    def abort(self, error: SyncError) -> None:
        with self.lock:
            if self.fatal is None:
                self.fatal = error

    @property
    def aborted(self) -> bool:
        with self.lock:
            return self.fatal is not None


def _exists(path: Path) -> bool:
    """Existence check that only treats "not found" as absence.

    Raises:
        OSError: For any other failure (permissions, I/O errors).
    """
    try:
        path.stat()
    except FileNotFoundError:
        return False
    return True


class SyncDispatcher:
    """Clone new repositories and pull existing ones into `root`."""

    def __init__(
        self,
        *,
        root: Path,
        sink: EventSink,
        git: GitRunner | None = None,
        workers: int = DEFAULT_WORKERS,
    ) -> None:
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self._root = root
        self._sink = sink
        self._git = git or GitCli()
        self._workers = workers

    def run(self, repos: Sequence[RepoDescriptor]) -> Result[DispatchReport, SyncError]:
        """Process every repository once and wait for all workers.

        Returns:
            Ok(DispatchReport), or Err(SyncError) if an existence check
            failed; in that case remaining repositories are not processed
        """
        count = worker_count(len(repos), self._workers)
        if count == 0:
            return Ok(DispatchReport(workers=0))

        jobs: queue.Queue[RepoDescriptor | None] = queue.Queue()
        for repo in repos:
            jobs.put(repo)
        # One stop marker per worker seals the queue.
        for _ in range(count):
            jobs.put(None)

        state = _RunState()
        threads = [
            threading.Thread(target=self._work, args=(jobs, state), name=f"sync-worker-{i}")
            for i in range(count)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        if state.fatal is not None:
            return Err(state.fatal)
        return Ok(
            DispatchReport(
                workers=count,
                cloned=tuple(state.cloned),
                updated=tuple(state.updated),
                failed=tuple(state.failed),
            )
        )

    def _work(self, jobs: queue.Queue[RepoDescriptor | None], state: _RunState) -> None:
        while True:
            repo = jobs.get()
            if repo is None:
                return
            if state.aborted:
                continue
            try:
                self._sync_repo(repo, state)
            except Exception as e:  # noqa: BLE001
                # A dead worker would leave its share of the queue unprocessed.
                state.record(repo.name, None)
                self._sink.error(f"{repo.name!r}: {type(e).__name__}: {e}")

    def _sync_repo(self, repo: RepoDescriptor, state: _RunState) -> None:
        dest = self._root / repo.name

        try:
            exists = _exists(dest)
        except OSError as e:
            state.abort(
                SyncError(
                    kind="filesystem",
                    message=f"cannot check {dest}: {e.strerror or e}",
                    path=dest,
                    hint="Check permissions on the backup directory",
                )
            )
            return

        if exists:
            action = SyncAction.UPDATED
            result = self._git.pull(dest)
        else:
            action = SyncAction.CLONED
            result = self._git.clone(repo.clone_url, dest)

        match result:
            case Ok(_):
                state.record(repo.name, action)
                self._sink.info(f"{action.value} repository: {repo.name}")
            case Err(error):
                state.record(repo.name, None)
                message = f"{repo.name}: {error}"
                if error.detail:
                    message += f": {error.detail}"
                self._sink.error(message)
