#!/usr/bin/env python3
"""
foldersync  -  One-way folder mirroring driven by a .sync descriptor
===================================================================

Subcommands:
  init      Create a .sync descriptor in a directory.
  run       Mirror the directory holding the nearest .sync to its target.
  open      Open the target directory of the nearest .sync.

Run 'foldersync <subcommand> --help' for more details.
"""
import argparse
import json
import signal
import sys
import threading
from pathlib import Path


def _fail(message: str, detail=None):
    from foldersync.core.notifier import ConsoleNotifier
    ConsoleNotifier().error(message, detail)
    sys.exit(1)


def _locate_descriptor(path_arg):
    """A .sync path, a directory holding one, or (None) the nearest one above cwd."""
    from foldersync import config as _cfg

    if path_arg:
        path = Path(path_arg)
        if path.is_dir():
            path = path / _cfg.DESCRIPTOR_FILE
        return path
    found = _cfg.find_descriptor()
    if found is None:
        _fail("no .sync file found in this directory or any parent.",
              "Run 'foldersync init' to create one.")
    return found


def _load_settings():
    import yaml
    from foldersync import config as _cfg

    try:
        return _cfg.load_settings()
    except (OSError, ValueError, yaml.YAMLError) as exc:
        _fail("Failed to load global config", f"{_cfg.get_global_config_file()}: {exc}")


# ── init ─────────────────────────────────────────────────────────────────────

def cmd_init(args):
    """Create a .sync descriptor (default: in the current directory)."""
    from foldersync.descriptor import create_descriptor
    from foldersync.errors import DescriptorExistsError, FolderSyncError

    directory = Path(args.directory or Path.cwd())
    ignore_exts = [e for e in (args.ignore or "").split(",") if e]

    if args.dry_run:
        data = {"name": args.name or directory.resolve().name}
        if args.target:
            data["target"] = args.target
        if ignore_exts:
            data["ignoreExts"] = ignore_exts
        print(f"[dry-run] Would write {directory / '.sync'}:")
        print(json.dumps(data, indent=2))
        return

    try:
        path = create_descriptor(directory, name=args.name, target=args.target,
                                 ignore_exts=ignore_exts, force=args.force)
    except DescriptorExistsError as exc:
        _fail(exc.message, f"{exc.detail}\nUse --force to overwrite.")
    except FolderSyncError as exc:
        _fail(exc.message, exc.detail)
    print(f"Created {path}")
    if args.verbose:
        print(path.read_text(encoding="utf-8"))


# ── run ──────────────────────────────────────────────────────────────────────

def cmd_run(args):
    """Mirror a directory to the target of its .sync descriptor."""
    from foldersync.core import SyncEngine, SyncRunner
    from foldersync.errors import FolderSyncError
    from foldersync.utils.logging import set_verbose, warn

    settings = _load_settings()
    set_verbose(args.verbose or settings.verbose)
    descriptor_path = _locate_descriptor(args.path)

    engine = SyncEngine(max_workers=args.jobs or settings.max_workers)
    runner = SyncRunner(engine=engine,
                        storage_path=Path(args.storage) if args.storage else settings.storage_path)

    # First Ctrl-C stops the walk between entries and keeps what was done
    cancel = threading.Event()

    def _on_sigint(signum, frame):
        if cancel.is_set():
            raise KeyboardInterrupt
        warn("Interrupted by user. Finishing the current entry …")
        cancel.set()

    previous = signal.signal(signal.SIGINT, _on_sigint)
    try:
        result = runner.run(descriptor_path, dry_run=args.dry_run, cancel=cancel)
    except FolderSyncError:
        # already reported by the runner's notifier
        sys.exit(1)
    except KeyboardInterrupt:
        warn("Interrupted by user.")
        sys.exit(130)
    finally:
        signal.signal(signal.SIGINT, previous)

    if result.cancelled:
        sys.exit(130)


# ── open ─────────────────────────────────────────────────────────────────────

def cmd_open(args):
    """Open the target directory of a .sync descriptor."""
    from foldersync.core import SyncRunner
    from foldersync.core.runner import open_in_file_manager
    from foldersync.errors import FolderSyncError

    settings = _load_settings()
    descriptor_path = _locate_descriptor(args.path)
    opener = print if args.print_only else open_in_file_manager
    runner = SyncRunner(storage_path=Path(args.storage) if args.storage else settings.storage_path,
                        opener=opener)
    try:
        runner.open_target(descriptor_path)
    except FolderSyncError:
        sys.exit(1)


# ── main ──────────────────────────────────────────────────────────────────────

def main(argv=None):
    """CLI entry point for foldersync"""
    parser = argparse.ArgumentParser(
        prog="foldersync",
        description="One-way folder mirroring driven by a .sync descriptor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # ── init ──────────────────────────────────────────────────────────────────
    init_p = subparsers.add_parser(
        "init",
        help="Create a .sync descriptor",
        description="Create a .sync descriptor naming where this directory is mirrored to.",
    )
    init_p.add_argument("directory", nargs="?", metavar="DIR",
                        help="Directory to describe (default: current directory)")
    init_p.add_argument("--name", metavar="NAME",
                        help="Name under the storage root (default: directory name)")
    init_p.add_argument("--target", metavar="PATH",
                        help="Explicit destination directory (wins over --name)")
    init_p.add_argument("--ignore", metavar="EXTS",
                        help="Comma-separated extensions to ignore, e.g. log,tmp")
    init_p.add_argument("--force", action="store_true",
                        help="Overwrite an existing .sync")
    init_p.add_argument("-n", "--dry-run", action="store_true",
                        help="Preview without writing files")
    init_p.add_argument("-v", "--verbose", action="store_true",
                        help="Show extra output")

    # ── run ───────────────────────────────────────────────────────────────────
    run_p = subparsers.add_parser(
        "run",
        help="Mirror a directory to its .sync target",
        description="Copy new/changed files to the target and delete extras there.",
    )
    run_p.add_argument("path", nargs="?", metavar="PATH",
                       help=".sync file or directory holding one (default: nearest .sync)")
    run_p.add_argument("--storage", metavar="DIR",
                       help="Storage root for name-only descriptors (overrides config)")
    run_p.add_argument("-j", "--jobs", type=int, metavar="N",
                       help="Parallel file copies per directory (default: from config, 1)")
    run_p.add_argument("-n", "--dry-run", action="store_true",
                       help="Preview without applying changes")
    run_p.add_argument("-v", "--verbose", action="store_true",
                       help="Show every file, not just actions")

    # ── open ──────────────────────────────────────────────────────────────────
    open_p = subparsers.add_parser(
        "open",
        help="Open the .sync target directory",
        description="Resolve the .sync target and open it in the file manager.",
    )
    open_p.add_argument("path", nargs="?", metavar="PATH",
                        help=".sync file or directory holding one (default: nearest .sync)")
    open_p.add_argument("--storage", metavar="DIR",
                        help="Storage root for name-only descriptors (overrides config)")
    open_p.add_argument("--print", dest="print_only", action="store_true",
                        help="Print the target path instead of opening it")

    args = parser.parse_args(argv)

    if args.command == "init":
        cmd_init(args)
    elif args.command == "run":
        if args.jobs is not None and args.jobs < 1:
            run_p.error("--jobs must be at least 1")
        cmd_run(args)
    elif args.command == "open":
        cmd_open(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
