"""
.sync descriptor: parsing, target resolution and bootstrap

A descriptor is a small JSON object stored as `.sync` in the directory to be
mirrored:

    {
      "name": "my-project",          # joined onto the configured storage root
      "target": "/backup/my-project", # used verbatim, wins over name
      "ignoreExts": ["log", "tmp"]    # extensions (no dot) never copied or deleted
    }
"""
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from .config import DESCRIPTOR_FILE
from .errors import DescriptorExistsError, InvalidDescriptorError, SourceNotDirectoryError


@dataclass(frozen=True)
class SyncDescriptor:
    name: Optional[str] = None
    target: Optional[str] = None
    ignore_exts: tuple = ()


def parse_descriptor(text: str, origin: str = DESCRIPTOR_FILE) -> SyncDescriptor:
    """Parse descriptor JSON; raises InvalidDescriptorError on bad JSON or bad field types."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidDescriptorError("Failed to parse .sync file", detail=str(exc)) from exc
    if not isinstance(data, dict):
        raise InvalidDescriptorError("Failed to parse .sync file",
                                     detail=f"{origin}: expected a JSON object")

    fields = {}
    for key in ("name", "target"):
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise InvalidDescriptorError(f"Invalid '{key}' in .sync file",
                                         detail=f"{origin}: must be a string")
        fields[key] = value or None

    exts = data.get("ignoreExts")
    if exts is None:
        exts = []
    if not isinstance(exts, list) or not all(isinstance(e, str) for e in exts):
        raise InvalidDescriptorError("Invalid 'ignoreExts' in .sync file",
                                     detail=f"{origin}: must be a list of strings")

    return SyncDescriptor(name=fields["name"], target=fields["target"], ignore_exts=tuple(exts))


def load_descriptor(path: Path) -> SyncDescriptor:
    """Read and parse a .sync file."""
    path = Path(path)
    if path.name != DESCRIPTOR_FILE:
        raise InvalidDescriptorError("File is not valid .sync", detail=str(path))
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidDescriptorError("Failed to read .sync file",
                                     detail=f"{path}: {exc.strerror or exc}") from exc
    return parse_descriptor(text, origin=str(path))


def resolve_target(descriptor: SyncDescriptor, source_dir: Path,
                   storage_path: Optional[Path]) -> Path:
    """
    Destination directory for a descriptor.

    `target` is used as given; a relative target is taken relative to the
    source directory. Otherwise `name` is joined onto *storage_path*; a name
    that is absolute or climbs out with `..` is rejected. With neither,
    InvalidDescriptorError.
    """
    if descriptor.target:
        target = Path(descriptor.target).expanduser()
        if not target.is_absolute():
            target = Path(source_dir) / target
        return target
    if descriptor.name and storage_path:
        name = Path(descriptor.name)
        if name.is_absolute() or name.drive or ".." in name.parts:
            raise InvalidDescriptorError("Invalid 'name' in .sync file",
                                         detail=f"{descriptor.name}: must stay under the storage root")
        return Path(storage_path) / name
    raise InvalidDescriptorError("Missing target or name in config",
                                 detail=str(Path(source_dir) / DESCRIPTOR_FILE))


def create_descriptor(directory: Path, name: Optional[str] = None,
                      target: Optional[str] = None,
                      ignore_exts: Optional[list] = None,
                      force: bool = False) -> Path:
    """
    Write a new .sync into *directory* and return its path.
    The name defaults to the directory's own name.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise SourceNotDirectoryError(directory)
    path = directory / DESCRIPTOR_FILE
    if path.exists() and not force:
        raise DescriptorExistsError(path)

    data: dict = {"name": name or directory.resolve().name}
    if target:
        data["target"] = target
    if ignore_exts:
        data["ignoreExts"] = list(ignore_exts)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    return path
