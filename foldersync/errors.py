"""
Exception hierarchy for foldersync
"""
from pathlib import Path
from typing import Optional, Union


class FolderSyncError(Exception):
    """Base class for every error foldersync raises on purpose."""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class InvalidDescriptorError(FolderSyncError):
    """The .sync descriptor cannot be parsed or resolves to no target."""


class SourceNotDirectoryError(FolderSyncError):
    """The path given as a sync source is not a directory."""

    def __init__(self, path: Union[str, Path]):
        super().__init__("Selected item is not directory", detail=str(path))
        self.path = Path(path)


class DescriptorExistsError(FolderSyncError):
    """A .sync descriptor already exists where a new one would be written."""

    def __init__(self, path: Union[str, Path]):
        super().__init__(".sync already exists", detail=str(path))
        self.path = Path(path)


class SyncIOError(FolderSyncError):
    """
    A filesystem call failed during a walk.
    `partial` is the SyncResult accumulated before the failure; the engine
    fills it in on the way out.
    """

    def __init__(self, operation: str, path: Union[str, Path], cause: OSError):
        reason = cause.strerror or str(cause)
        super().__init__(f"{operation} failed: {path}: {reason}", detail=str(path))
        self.operation = operation
        self.path = Path(path)
        self.partial = None
