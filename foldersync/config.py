"""
Configuration for foldersync
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import yaml

# ══════════════════════════════════════════════════════════════════════════════
#  DEFAULTS
# ══════════════════════════════════════════════════════════════════════════════

# Descriptor file living in the source directory; never mirrored
DESCRIPTOR_FILE = ".sync"

CONFIG_FILE_NAME = "config.yaml"

# Overrides storage_path from config.yaml
STORAGE_PATH_ENV = "FOLDERSYNC_STORAGE_PATH"

# Threads used for the file copies of one directory (1 = sequential)
DEFAULT_MAX_WORKERS = 1


@dataclass(frozen=True)
class Settings:
    storage_path: Optional[Path] = None
    max_workers: int = DEFAULT_MAX_WORKERS
    verbose: bool = False


# ══════════════════════════════════════════════════════════════════════════════
#  GLOBAL CONFIG FILE  ── $XDG_CONFIG_HOME/foldersync/config.yaml
# ══════════════════════════════════════════════════════════════════════════════

def get_global_config_dir() -> Path:
    """Return the global config directory for foldersync."""
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg:
        return Path(xdg) / "foldersync"
    if os.name == "nt":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "foldersync"
    return Path.home() / ".config" / "foldersync"


def get_global_config_file() -> Path:
    return get_global_config_dir() / CONFIG_FILE_NAME


def load_global_config() -> dict:
    """Load config.yaml from the foldersync config directory ({} if absent)."""
    cfg_path = get_global_config_file()
    if not cfg_path.is_file():
        return {}
    with cfg_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{cfg_path}: expected a mapping at the top level")
    return data


def load_settings(data: Optional[dict] = None) -> Settings:
    """
    Build Settings from the global config dict (loaded from disk when omitted).
    Supports keys: storage_path, max_workers, verbose.
    The FOLDERSYNC_STORAGE_PATH environment variable wins over storage_path.
    """
    if data is None:
        data = load_global_config()

    storage = os.environ.get(STORAGE_PATH_ENV) or data.get("storage_path")
    storage_path = Path(str(storage)).expanduser() if storage else None

    return Settings(
        storage_path=storage_path,
        max_workers=int(data.get("max_workers", DEFAULT_MAX_WORKERS)),
        verbose=bool(data.get("verbose", False)),
    )


# ══════════════════════════════════════════════════════════════════════════════
#  DESCRIPTOR DISCOVERY  ── .sync (searched upward)
# ══════════════════════════════════════════════════════════════════════════════

def find_descriptor(start: Optional[Path] = None) -> Optional[Path]:
    """
    Search upward from *start* (default: cwd) for a .sync file.
    Returns the Path if found, or None if no .sync exists in any parent.
    """
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / DESCRIPTOR_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent
