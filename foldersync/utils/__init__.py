"""Utilities (logging, ignore filter, file names)"""
from .logging import action, log, vlog, warn, set_verbose
from .ignore_patterns import normalize_ignore_exts, is_ignored
from .file_utils import extension_of

__all__ = [
    "action", "log", "vlog", "warn", "set_verbose",
    "normalize_ignore_exts", "is_ignored",
    "extension_of",
]
