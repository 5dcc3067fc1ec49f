"""Core functionality"""
from .filesystem import LocalFileSystem
from .notifier import ConsoleNotifier, RecordingNotifier
from .sync_engine import SyncEngine, SyncResult
from .runner import SyncRunner

__all__ = [
    "LocalFileSystem",
    "ConsoleNotifier", "RecordingNotifier",
    "SyncEngine", "SyncResult",
    "SyncRunner",
]
