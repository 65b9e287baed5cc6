"""Git invocations used by the sync workers.

Both operations are opaque to the dispatcher: they succeed, or they fail
with a ProcessError carrying git's diagnostics.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from ghbackup.core.result import Result
from ghbackup.platform.process import ProcessError, run

__all__ = ["GitCli", "GitRunner"]

# Fail instead of waiting for a username/password that nobody will type.
_NON_INTERACTIVE = {"GIT_TERMINAL_PROMPT": "0"}


class GitRunner(Protocol):
    def clone(self, url: str, dest: Path) -> Result[str, ProcessError]:
        """Clone `url` into `dest` (which must not exist)."""
        ...

    def pull(self, repo_dir: Path) -> Result[str, ProcessError]:
        """Update the working tree at `repo_dir` from its upstream."""
        ...


class GitCli:
    """GitRunner backed by the `git` executable."""

    def __init__(self, git: str = "git", *, timeout: float | None = None) -> None:
        self._git = git
        self._timeout = timeout

    def clone(self, url: str, dest: Path) -> Result[str, ProcessError]:
        return run(
            [self._git, "clone", url, str(dest)],
            cwd=dest.parent,
            extra_env=_NON_INTERACTIVE,
            timeout=self._timeout,
        )

    def pull(self, repo_dir: Path) -> Result[str, ProcessError]:
        return run(
            [self._git, "pull"],
            cwd=repo_dir,
            extra_env=_NON_INTERACTIVE,
            timeout=self._timeout,
        )
