"""Ordered event channel between the sync engine and its reporter.

Workers and the enumerator emit `Info` and `Error` events from any thread.
A single delivery thread hands them to one consumer in emission order. The
sink never decides how an event is shown; that is the consumer's job.

Usage:
    with EventSink(printer) as sink:
        sink.info("Cloned  repository: hello-world")
    if sink.has_errors:
        ...
"""

from __future__ import annotations

import queue
import threading
from collections.abc import Callable
from dataclasses import dataclass
from types import TracebackType

__all__ = ["Error", "EventSink", "Info", "SyncEvent"]


@dataclass(frozen=True, slots=True)
class Info:
    message: str


@dataclass(frozen=True, slots=True)
class Error:
    message: str


SyncEvent = Info | Error


class EventSink:
    """Multi-writer, single-reader event channel.

    `emit` never blocks: the queue is unbounded, so a slow consumer cannot
    stall workers. `close` waits until every emitted event was delivered.
    An exception raised by the consumer is re-raised by `close`.
    """

    def __init__(self, consumer: Callable[[SyncEvent], None]) -> None:
        self._consumer = consumer
        self._queue: queue.SimpleQueue[SyncEvent | None] = queue.SimpleQueue()
        self._lock = threading.Lock()
        self._error_count = 0
        self._closed = False
        self._failure: Exception | None = None
        self._thread = threading.Thread(target=self._deliver, name="event-sink", daemon=True)
        self._thread.start()

    @property
    def error_count(self) -> int:
        with self._lock:
            return self._error_count

    @property
    def has_errors(self) -> bool:
        """True once any Error event was emitted."""
        return self.error_count > 0

    def emit(self, event: SyncEvent) -> None:
        with self._lock:
            if self._closed:
                raise RuntimeError("event sink is closed")
            if isinstance(event, Error):
                self._error_count += 1
            # Enqueue under the lock so queue order matches counting order.
            self._queue.put(event)

    def info(self, message: str) -> None:
        self.emit(Info(message))

    def error(self, message: str) -> None:
        self.emit(Error(message))

    def close(self) -> None:
        """Flush pending events and stop the delivery thread."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(None)
        self._thread.join()
        if self._failure is not None:
            raise self._failure

    def _deliver(self) -> None:
        while True:
            event = self._queue.get()
            if event is None:
                return
            if self._failure is not None:
                continue
            try:
                self._consumer(event)
            except Exception as e:  # noqa: BLE001
                # Re-raised from close() on the caller's thread.
                self._failure = e

    def __enter__(self) -> EventSink:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
