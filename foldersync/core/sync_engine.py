"""
Sync engine - runs the mirror copier then the extras pruner for one directory pair
"""
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union
from ..config import DEFAULT_MAX_WORKERS
from ..errors import FolderSyncError, SourceNotDirectoryError, SyncIOError
from ..operations.context import WalkContext
from ..operations.copier import copy_tree
from ..operations.pruner import prune_extras
from ..utils.ignore_patterns import normalize_ignore_exts
from ..utils.logging import log
from .filesystem import LocalFileSystem


@dataclass(frozen=True)
class SyncResult:
    copied: int = 0
    deleted: int = 0
    cancelled: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.copied or self.deleted)


class SyncEngine:
    """
    One-way mirror of a source directory onto a destination directory.

    The engine holds no state between runs: every call lists both trees
    afresh. The filesystem is injected so callers (and tests) can swap it.
    """

    def __init__(self, fs: Optional[LocalFileSystem] = None,
                 max_workers: int = DEFAULT_MAX_WORKERS):
        self.fs = fs or LocalFileSystem()
        self.max_workers = max(1, int(max_workers))

    def sync(self, source_dir: Union[str, Path], dest_dir: Union[str, Path],
             ignore_exts: Optional[Iterable[str]] = None,
             dry_run: bool = False,
             cancel: Optional[threading.Event] = None) -> SyncResult:
        """
        Copy new/changed files, then delete extras. Returns the combined counts.

        Raises SourceNotDirectoryError if *source_dir* is not a directory, and
        SyncIOError on the first failing filesystem call; the run stops there
        and the error's `partial` holds the counts reached so far. Setting
        *cancel* stops the walk between entries and returns a partial result
        flagged cancelled.
        """
        source = Path(source_dir).absolute()
        dest = Path(dest_dir).absolute()
        if not self.fs.is_dir(source):
            raise SourceNotDirectoryError(source)
        real_source, real_dest = source.resolve(), dest.resolve()
        if real_dest == real_source or real_source in real_dest.parents:
            raise FolderSyncError("Destination lies inside the source directory", detail=str(dest))
        if real_dest in real_source.parents:
            # pruning the destination would delete the source itself
            raise FolderSyncError("Destination contains the source directory", detail=str(dest))

        ctx = WalkContext(
            fs=self.fs,
            ignore_exts=normalize_ignore_exts(ignore_exts),
            dry_run=dry_run,
            cancel=cancel,
            max_workers=self.max_workers,
        )

        try:
            log(f"[copy] {source} → {dest}")
            copied = copy_tree(ctx, source, dest)
            if not ctx.cancelled():
                log(f"[prune] {dest}")
                deleted = prune_extras(ctx, source, dest)
            else:
                deleted = 0
        except SyncIOError as exc:
            exc.partial = SyncResult(copied=ctx.copied, deleted=ctx.deleted)
            raise

        result = SyncResult(copied=copied, deleted=deleted, cancelled=ctx.cancelled())
        log(f"[sync] copied={result.copied}  deleted={result.deleted}"
            f"{'  (cancelled)' if result.cancelled else ''}")
        return result
