"""
Per-run walk state shared by the copier and the pruner
"""
import threading
from dataclasses import dataclass, field
from typing import Optional
from ..core.filesystem import LocalFileSystem


@dataclass
class WalkContext:
    """
    Everything one sync run needs while walking both trees.
    The running totals are kept here, under a lock, so that a failed or
    cancelled run can still report how far it got.
    """

    fs: LocalFileSystem
    ignore_exts: frozenset = frozenset()
    dry_run: bool = False
    cancel: Optional[threading.Event] = None
    max_workers: int = 1
    copied: int = 0
    deleted: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def cancelled(self) -> bool:
        return self.cancel is not None and self.cancel.is_set()

    def count_copy(self):
        with self._lock:
            self.copied += 1

    def count_delete(self):
        with self._lock:
            self.deleted += 1
