"""Exit codes for the backup command.

A run ends in exactly one of these states. Fatal errors during discovery
map to the code of their cause; a run that discovered everything but failed
to clone or update some repositories ends with SYNC_ERROR.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    These values are part of the CLI contract and should remain stable:
    - 0: Every repository was cloned or updated
    - 1: User error (bad arguments, bad config, unknown account type)
    - 3: Sync error (at least one clone/pull failed)
    - 4: Network error (API unreachable, bad status, undecodable response)
    - 5: I/O error (backup directory not usable)
    """

    OK = 0
    USER_ERROR = 1
    SYNC_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
