"""Output abstraction layer."""

from .console import ConsoleProtocol, MockConsole, RichConsole, Style
from .events import ConsoleEventPrinter

__all__ = [
    "ConsoleEventPrinter",
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "Style",
]
