"""
Descriptor-driven sync runs with user notifications
"""
import threading
import webbrowser
from pathlib import Path
from typing import Callable, Optional
from ..descriptor import load_descriptor, resolve_target
from ..errors import FolderSyncError, SyncIOError
from .notifier import ConsoleNotifier
from .sync_engine import SyncEngine, SyncResult


def open_in_file_manager(path: Path):
    webbrowser.open(Path(path).absolute().as_uri())


class SyncRunner:
    """
    Glue between a .sync descriptor and the engine.

    Every collaborator is passed in: the engine, where notifications go, the
    storage root used for name-only descriptors, and how a target is opened.
    """

    def __init__(self, engine: Optional[SyncEngine] = None,
                 notifier=None,
                 storage_path: Optional[Path] = None,
                 opener: Callable[[Path], None] = open_in_file_manager):
        self.engine = engine or SyncEngine()
        self.notifier = notifier or ConsoleNotifier()
        self.storage_path = storage_path
        self.opener = opener

    def run(self, descriptor_path: Path, dry_run: bool = False,
            cancel: Optional[threading.Event] = None) -> SyncResult:
        """
        Sync the directory holding *descriptor_path* to the descriptor's target.
        Failures are notified and then re-raised.
        """
        descriptor_path = Path(descriptor_path)
        try:
            descriptor = load_descriptor(descriptor_path)
            src_dir = descriptor_path.absolute().parent
            dst_dir = resolve_target(descriptor, src_dir, self.storage_path)
        except FolderSyncError as exc:
            self.notifier.error(exc.message, exc.detail)
            raise

        self.notifier.info(
            "Folder sync started..." if not dry_run else "Folder sync dry run...",
            f"src: {src_dir}\ndst: {dst_dir}",
        )

        try:
            result = self.engine.sync(src_dir, dst_dir, descriptor.ignore_exts,
                                      dry_run=dry_run, cancel=cancel)
        except SyncIOError as exc:
            partial = exc.partial or SyncResult()
            self.notifier.error(
                "Sync failed",
                f"{exc.message}\n(copied: {partial.copied}, deleted: {partial.deleted} before failure)",
            )
            raise
        except FolderSyncError as exc:
            self.notifier.error("Sync failed", exc.detail or exc.message)
            raise

        if result.cancelled:
            self.notifier.info(
                f"Folder sync cancelled (copied: {result.copied}, deleted: {result.deleted})")
        elif result.changed and dry_run:
            self.notifier.success(
                f"Dry run: would copy {result.copied}, delete {result.deleted}")
        elif result.changed:
            self.notifier.success(
                f"Folder synced (copied: {result.copied}, deleted: {result.deleted})")
        else:
            self.notifier.success("Nothing to sync")
        return result

    def open_target(self, descriptor_path: Path) -> Path:
        """Resolve the descriptor's target and hand it to the opener."""
        descriptor_path = Path(descriptor_path)
        try:
            descriptor = load_descriptor(descriptor_path)
            target = resolve_target(descriptor, descriptor_path.absolute().parent,
                                    self.storage_path)
        except FolderSyncError as exc:
            self.notifier.error(exc.message, exc.detail)
            raise
        self.opener(target)
        return target
