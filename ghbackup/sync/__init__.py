"""Concurrent synchronization of repositories into a local directory.

Usage:
    from ghbackup.sync import EventSink, SyncDispatcher

    with EventSink(print) as sink:
        result = SyncDispatcher(root=Path("backup"), sink=sink, workers=4).run(repos)
"""

from ghbackup.sync.dispatcher import (
    DispatchReport,
    SyncAction,
    SyncDispatcher,
    SyncError,
    worker_count,
)
from ghbackup.sync.events import Error, EventSink, Info, SyncEvent
from ghbackup.sync.git import GitCli, GitRunner

__all__ = [
    # dispatcher
    "DispatchReport",
    "SyncAction",
    "SyncDispatcher",
    "SyncError",
    "worker_count",
    # events
    "Error",
    "EventSink",
    "Info",
    "SyncEvent",
    # git
    "GitCli",
    "GitRunner",
]
