"""
Local filesystem access used by the copier and the pruner
"""
import functools
import os
import shutil
from pathlib import Path
from ..errors import SyncIOError

CHUNK_SIZE = 65536


def io_op(operation: str):
    """Decorator: turn any OSError raised by a filesystem call into SyncIOError."""

    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(self, path, *args, **kwargs):
            try:
                return fn(self, path, *args, **kwargs)
            except OSError as exc:
                raise SyncIOError(operation, exc.filename or path, exc) from exc

        return wrapper

    return decorator


class LocalFileSystem:
    """
    Thin wrapper over os / shutil.
    Every method takes a Path and raises SyncIOError on failure; the walkers
    never see a bare OSError.
    """

    # ── queries ─────────────────────────────────────────────────────────────

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    @io_op("list")
    def list_dir(self, path: Path, follow_symlinks: bool = True) -> list[tuple[str, bool]]:
        """
        Return [(name, is_dir), …] for the direct children of *path*, sorted by name.
        With follow_symlinks=False a link to a directory is reported as a file.
        """
        with os.scandir(path) as it:
            entries = [(e.name, e.is_dir(follow_symlinks=follow_symlinks)) for e in it]
        return sorted(entries)

    @io_op("compare")
    def same_content(self, path: Path, other: Path) -> bool:
        """Byte-for-byte comparison of two files."""
        if path.stat().st_size != other.stat().st_size:
            return False
        with open(path, "rb") as a, open(other, "rb") as b:
            while True:
                chunk_a = a.read(CHUNK_SIZE)
                chunk_b = b.read(CHUNK_SIZE)
                if chunk_a != chunk_b:
                    return False
                if not chunk_a:
                    return True

    # ── mutations ───────────────────────────────────────────────────────────

    @io_op("create-dir")
    def make_dirs(self, path: Path):
        path.mkdir(parents=True, exist_ok=True)

    @io_op("copy")
    def copy_file(self, src: Path, dst: Path):
        # contents only; permissions and timestamps are not carried over
        shutil.copyfile(src, dst)

    @io_op("remove")
    def remove_file(self, path: Path):
        path.unlink()

    @io_op("remove")
    def remove_tree(self, path: Path):
        # a link is removed, never the tree it points to
        if path.is_symlink():
            path.unlink()
        else:
            shutil.rmtree(path)
