"""
Extras pruner: delete destination entries that no longer exist in the source
"""
from pathlib import Path
from ..utils.logging import action, vlog
from ..utils.ignore_patterns import is_ignored
from .context import WalkContext


def prune_extras(ctx: WalkContext, source_dir: Path, dest_dir: Path) -> int:
    """
    Delete every entry under *dest_dir* that has no counterpart in *source_dir*.
    Returns the number of deletions; a removed directory counts once no
    matter how much it contained.

    Files with an ignored extension are never deleted. A symlink in the
    destination is treated as a file, so an extra link is unlinked and its
    target left alone. A destination entry whose source counterpart has the
    other type is left alone: the copier replaces it, except for a directory
    shadowing an ignored source file, which is pruned.
    """
    if not ctx.fs.is_dir(dest_dir):
        return 0

    deleted = 0
    for name, is_dir in ctx.fs.list_dir(dest_dir, follow_symlinks=False):
        if ctx.cancelled():
            vlog(f"  [CANCEL] stopping in {dest_dir}")
            return deleted

        src = source_dir / name
        dst = dest_dir / name

        if not is_dir and is_ignored(name, ctx.ignore_exts):
            vlog(f"  [IGNORE] {dst}")
            continue

        if is_dir:
            if ctx.fs.is_dir(src):
                deleted += prune_extras(ctx, src, dst)
            elif ctx.fs.exists(src) and not is_ignored(name, ctx.ignore_exts):
                vlog(f"  [KEEP] {dst}  (source has a file; copier replaces it)")
            else:
                _delete(ctx, dst, tree=True)
                deleted += 1
        elif not ctx.fs.exists(src):
            _delete(ctx, dst, tree=False)
            deleted += 1

    return deleted


def _delete(ctx: WalkContext, path: Path, tree: bool):
    if not ctx.dry_run:
        if tree:
            ctx.fs.remove_tree(path)
        else:
            ctx.fs.remove_file(path)
    action("DEL-DIR" if tree else "DEL", str(path), ctx.dry_run)
    ctx.count_delete()
