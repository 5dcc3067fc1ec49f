"""foldersync - one-way folder mirroring driven by a .sync descriptor."""
from .core import SyncEngine, SyncResult, SyncRunner
from .descriptor import SyncDescriptor, create_descriptor, load_descriptor, resolve_target
from .errors import (
    DescriptorExistsError,
    FolderSyncError,
    InvalidDescriptorError,
    SourceNotDirectoryError,
    SyncIOError,
)

__version__ = "0.1.0"

__all__ = [
    "SyncEngine",
    "SyncResult",
    "SyncRunner",
    "SyncDescriptor",
    "create_descriptor",
    "load_descriptor",
    "resolve_target",
    "FolderSyncError",
    "InvalidDescriptorError",
    "SourceNotDirectoryError",
    "DescriptorExistsError",
    "SyncIOError",
]
