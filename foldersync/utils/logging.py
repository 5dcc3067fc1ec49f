"""
Console output for foldersync

Every line carries an HH:MM:SS stamp. The walks report one line per
destination change, tagged by what happened:

    [COPY ✓]   file copied            [MKDIR ✓]  directory created
    [DEL ✓]    file deleted           [DEL-DIR ✓] directory tree deleted
    [REPLACE ✓] entry of the wrong type replaced

A dry run prints the same tags with a -DRY suffix instead of the check
mark. [SKIP], [IGNORE] and [CANCEL] lines only appear in verbose mode.
Warnings and errors go to stderr so stdout stays a plain action log.
"""
import sys
from datetime import datetime

_verbose = False


def set_verbose(verbose: bool):
    """Turn the verbose-only lines ([SKIP], [IGNORE], ...) on or off."""
    global _verbose
    _verbose = verbose


def log(msg: str):
    ts = datetime.now().strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def vlog(msg: str):
    """log() only in verbose mode."""
    if _verbose:
        log(msg)


def action(tag: str, msg: str, dry_run: bool = False):
    """Log one destination change, e.g. action("COPY", "a → b") -> "  [COPY ✓] a → b"."""
    log(f"  [{tag}-DRY] {msg}" if dry_run else f"  [{tag} ✓] {msg}")


def warn(msg: str):
    """Stamped warning on stderr."""
    ts = datetime.now().strftime("%H:%M:%S")
    print(f"[{ts}] ⚠  {msg}", file=sys.stderr, flush=True)
