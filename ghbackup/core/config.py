"""Typed run configuration.

A run is driven by one immutable `SyncConfig`. Values come from, in order of
precedence: command-line options (and their environment variables), an
optional TOML file, and the defaults below.

Config file layout:

    [github]
    api_url = "https://github.example.com/api/v3"
    token = "..."
    per_page = 100
    protocol = "https"

    [sync]
    workers = 8
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_int, get_str, get_table

__all__ = [
    "CloneProtocol",
    "ConfigError",
    "FileConfig",
    "SyncConfig",
    "build_config",
    "load_config",
    "DEFAULT_API_URL",
    "DEFAULT_WORKERS",
    "MAX_PAGE_SIZE",
]

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_WORKERS = 10
# Largest page size the GitHub REST API accepts.
MAX_PAGE_SIZE = 100


class CloneProtocol(StrEnum):
    """Which repository field supplies the URL handed to `git clone`."""

    GIT = "git"
    HTTPS = "https"
    SSH = "ssh"

    @property
    def url_field(self) -> str:
        match self:
            case CloneProtocol.GIT:
                return "git_url"
            case CloneProtocol.HTTPS:
                return "clone_url"
            case CloneProtocol.SSH:
                return "ssh_url"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when configuration cannot be loaded or is invalid."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class FileConfig:
    """Values read from a config file. Every field is optional."""

    api_url: str | None = None
    token: str | None = None
    per_page: int | None = None
    protocol: str | None = None
    workers: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> FileConfig:
        github: StrDict = get_table(data, "github") or {}
        sync: StrDict = get_table(data, "sync") or {}
        return cls(
            api_url=get_str(github, "api_url"),
            token=get_str(github, "token"),
            per_page=get_int(github, "per_page"),
            protocol=get_str(github, "protocol"),
            workers=get_int(sync, "workers"),
        )


@dataclass(frozen=True, slots=True)
class SyncConfig:
    """Immutable input to a single backup run.

    Attributes:
        account: User or organization name on the hosting service
        root: Local directory receiving one sub-directory per repository
        token: Optional secret attached to every API request
        workers: Upper bound on concurrent clone/pull operations
        api_url: API root, without trailing slash
        per_page: Page size requested when listing repositories
        protocol: Which clone URL to use
        verbose: Whether informational events are shown
    """

    account: str
    root: Path
    token: str | None = None
    workers: int = DEFAULT_WORKERS
    api_url: str = DEFAULT_API_URL
    per_page: int = MAX_PAGE_SIZE
    protocol: CloneProtocol = CloneProtocol.GIT
    verbose: bool = False


def load_config(path: Path) -> Result[FileConfig, ConfigError]:
    """Load and parse a TOML config file.

    Args:
        path: Path to the config file

    Returns:
        Ok(FileConfig) on success, Err(ConfigError) on failure
    """
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(FileConfig.from_dict(data))


def build_config(
    *,
    account: str,
    root: Path,
    file: FileConfig | None = None,
    token: str | None = None,
    workers: int | None = None,
    api_url: str | None = None,
    protocol: str | None = None,
    verbose: bool = False,
) -> Result[SyncConfig, ConfigError]:
    """Merge explicit values over file values over defaults and validate."""
    file = file or FileConfig()

    account = account.strip()
    if not account:
        return Err(ConfigError("Account name must not be empty"))

    resolved_workers = workers if workers is not None else file.workers
    if resolved_workers is None:
        resolved_workers = DEFAULT_WORKERS
    if resolved_workers < 1:
        return Err(
            ConfigError(
                f"workers must be at least 1 (got {resolved_workers})",
                hint="Use --workers 1 to sync one repository at a time",
            )
        )

    raw_protocol = protocol or file.protocol or CloneProtocol.GIT.value
    try:
        resolved_protocol = CloneProtocol(raw_protocol.lower())
    except ValueError:
        choices = ", ".join(p.value for p in CloneProtocol)
        return Err(
            ConfigError(f"Unknown clone protocol: {raw_protocol}", hint=f"Use one of: {choices}")
        )

    per_page = file.per_page if file.per_page is not None else MAX_PAGE_SIZE
    per_page = max(1, min(per_page, MAX_PAGE_SIZE))

    return Ok(
        SyncConfig(
            account=account,
            root=root,
            token=token or file.token,
            workers=resolved_workers,
            api_url=(api_url or file.api_url or DEFAULT_API_URL).rstrip("/"),
            per_page=per_page,
            protocol=resolved_protocol,
            verbose=verbose,
        )
    )
