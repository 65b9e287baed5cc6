"""Tests for ghbackup.sync.git against real local repositories."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from ghbackup.core.result import Err, Ok
from ghbackup.sync.git import GitCli

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not available")


def _git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=False,
    )
    if result.returncode != 0:
        raise RuntimeError(
            f"git {' '.join(args)} failed (code {result.returncode}): {result.stderr.strip()}"
        )
    return result.stdout.strip()


def _init_remote_repo(tmp_path: Path, name: str) -> tuple[str, Path]:
    """Create a bare repo + push an initial commit, return (url, seed_dir)."""
    remote = tmp_path / f"{name}.git"
    seed = tmp_path / f"{name}-seed"

    _git(tmp_path, "init", "--bare", str(remote))

    seed.mkdir()
    _git(seed, "init", "-b", "main")
    _git(seed, "config", "user.email", "test@example.com")
    _git(seed, "config", "user.name", "Test")
    (seed / "README.md").write_text("v1\n", encoding="utf-8")
    _git(seed, "add", "README.md")
    _git(seed, "commit", "-m", "init")

    url = remote.as_uri()
    _git(seed, "remote", "add", "origin", url)
    _git(seed, "push", "-u", "origin", "main")
    _git(tmp_path, "--git-dir", str(remote), "symbolic-ref", "HEAD", "refs/heads/main")

    return url, seed


class TestGitCli:
    def test_clone_then_pull(self, tmp_path: Path) -> None:
        url, seed = _init_remote_repo(tmp_path, "hello")
        backup = tmp_path / "backup"
        backup.mkdir()
        dest = backup / "hello"
        git = GitCli()

        assert isinstance(git.clone(url, dest), Ok)
        assert (dest / "README.md").read_text(encoding="utf-8") == "v1\n"

        (seed / "README.md").write_text("v2\n", encoding="utf-8")
        _git(seed, "commit", "-am", "update")
        _git(seed, "push")

        assert isinstance(git.pull(dest), Ok)
        assert (dest / "README.md").read_text(encoding="utf-8") == "v2\n"

    def test_clone_unreachable_url_fails(self, tmp_path: Path) -> None:
        missing = (tmp_path / "missing.git").as_uri()

        result = GitCli().clone(missing, tmp_path / "missing")

        assert isinstance(result, Err)
        assert result.error.returncode != 0
        assert result.error.detail

    def test_pull_outside_repository_fails(self, tmp_path: Path) -> None:
        plain = tmp_path / "plain"
        plain.mkdir()

        result = GitCli().pull(plain)

        assert isinstance(result, Err)

    def test_missing_executable(self, tmp_path: Path) -> None:
        result = GitCli("git-does-not-exist-12345").pull(tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == -1
