"""
Extension-based ignore filter (the descriptor's "ignoreExts" list)
"""
from typing import Iterable, Optional
from .file_utils import extension_of


def normalize_ignore_exts(raw: Optional[Iterable[str]]) -> frozenset:
    """
    Build the ignore set from a descriptor list.
    None means "ignore nothing". A stray leading dot is tolerated ("log" and
    ".log" both ignore *.log).
    """
    if raw is None:
        return frozenset()
    exts = set()
    for ext in raw:
        ext = str(ext)
        if ext.startswith("."):
            ext = ext[1:]
        exts.add(ext)
    return frozenset(exts)


def is_ignored(name: str, ignore_exts: frozenset) -> bool:
    """Check if a file name's extension is in the ignore set"""
    return extension_of(name) in ignore_exts
