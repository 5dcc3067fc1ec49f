"""
Mirror copier: bring new and changed source files over to the destination
"""
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from ..config import DESCRIPTOR_FILE
from ..utils.logging import action, vlog
from ..utils.ignore_patterns import is_ignored
from .context import WalkContext


def copy_tree(ctx: WalkContext, source_dir: Path, dest_dir: Path) -> int:
    """
    Mirror *source_dir* into *dest_dir* and return how many entries were copied.

    Subdirectories are walked depth-first as they are listed. Files of one
    directory are copied after its subdirectories, fanned out over
    ctx.max_workers threads when that is more than one. The descriptor file
    is never mirrored, at any level.
    """
    copied = 0
    if not ctx.dry_run:
        ctx.fs.make_dirs(dest_dir)

    files: list[str] = []
    for name, is_dir in ctx.fs.list_dir(source_dir):
        if ctx.cancelled():
            vlog(f"  [CANCEL] stopping in {source_dir}")
            return copied
        if name == DESCRIPTOR_FILE:
            continue
        if is_dir:
            copied += _enter_dir(ctx, source_dir / name, dest_dir / name)
        else:
            files.append(name)

    if ctx.max_workers > 1 and len(files) > 1:
        copied += _copy_files_parallel(ctx, source_dir, dest_dir, files)
    else:
        for name in files:
            if ctx.cancelled():
                vlog(f"  [CANCEL] stopping in {source_dir}")
                return copied
            copied += _copy_file(ctx, source_dir / name, dest_dir / name)
    return copied


def _enter_dir(ctx: WalkContext, src: Path, dst: Path) -> int:
    """Recurse into a source subdirectory; creating its destination counts as one copy."""
    created = 0
    if not ctx.fs.is_dir(dst):
        if ctx.fs.exists(dst):
            # a file stands where the source has a directory: source type wins
            if not ctx.dry_run:
                ctx.fs.remove_file(dst)
            action("REPLACE", f"file → dir  {dst}", ctx.dry_run)
        if not ctx.dry_run:
            ctx.fs.make_dirs(dst)
        action("MKDIR", str(dst), ctx.dry_run)
        ctx.count_copy()
        created = 1
    return created + copy_tree(ctx, src, dst)


def _copy_file(ctx: WalkContext, src: Path, dst: Path) -> int:
    """Copy one file unless it is ignored or already identical. Returns 0 or 1."""
    if is_ignored(src.name, ctx.ignore_exts):
        vlog(f"  [IGNORE] {src}")
        return 0

    if ctx.fs.is_dir(dst):
        if not ctx.dry_run:
            ctx.fs.remove_tree(dst)
        action("REPLACE", f"dir → file  {dst}", ctx.dry_run)
    elif ctx.fs.exists(dst) and ctx.fs.same_content(src, dst):
        vlog(f"  [SKIP] {dst}")
        return 0

    if not ctx.dry_run:
        ctx.fs.copy_file(src, dst)
    action("COPY", f"{src} → {dst}", ctx.dry_run)
    ctx.count_copy()
    return 1


def _copy_files_parallel(ctx: WalkContext, source_dir: Path, dest_dir: Path,
                         files: list[str]) -> int:
    """
    Fan the file copies of one directory out over a thread pool and join them.
    The first failure cancels whatever has not started yet and is re-raised.
    """
    copied = 0
    with ThreadPoolExecutor(max_workers=ctx.max_workers) as pool:
        futures = [
            pool.submit(_copy_file_unless_cancelled, ctx, source_dir / name, dest_dir / name)
            for name in files
        ]
        try:
            for future in as_completed(futures):
                copied += future.result()
        finally:
            for future in futures:
                future.cancel()
    return copied


def _copy_file_unless_cancelled(ctx: WalkContext, src: Path, dst: Path) -> int:
    if ctx.cancelled():
        return 0
    return _copy_file(ctx, src, dst)
