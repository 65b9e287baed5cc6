"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ghbackup.core.errors import ErrorCode
from ghbackup.output.console import Style

if TYPE_CHECKING:
    from ghbackup.core.config import ConfigError
    from ghbackup.output.console import ConsoleProtocol
    from ghbackup.services.backup import BackupError

__all__ = ["backup_error_exit_code", "print_backup_error", "print_config_error"]


def print_backup_error(error: BackupError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def print_config_error(error: ConfigError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def backup_error_exit_code(error: BackupError) -> int:
    """Get exit code for a fatal backup error."""
    match error.kind:
        case "api":
            return int(ErrorCode.NETWORK_ERROR)
        case "account_type":
            return int(ErrorCode.USER_ERROR)
        case "filesystem":
            return int(ErrorCode.IO_ERROR)
