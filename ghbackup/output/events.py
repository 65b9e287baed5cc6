"""Rendering of sync events on a console."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ghbackup.output.console import Style
from ghbackup.sync.events import Error, Info

if TYPE_CHECKING:
    from ghbackup.output.console import ConsoleProtocol
    from ghbackup.sync.events import SyncEvent

__all__ = ["ConsoleEventPrinter"]


class ConsoleEventPrinter:
    """EventSink consumer: Info only when verbose, Error always."""

    def __init__(self, console: ConsoleProtocol, *, verbose: bool = False) -> None:
        self._console = console
        self._verbose = verbose

    def __call__(self, event: SyncEvent) -> None:
        match event:
            case Info(message=message):
                if self._verbose:
                    self._console.print(message, Style.DIM)
            case Error(message=message):
                self._console.error(message)
