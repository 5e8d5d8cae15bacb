"""Backend-agnostic file-system contract, errors and helpers."""

from bucketfs.filesystem.base import FileSystem
from bucketfs.filesystem.errors import (
    BatchDeleteError,
    FileSystemConfigError,
    FileSystemError,
    InvalidPathError,
    PersistenceError,
    StreamReadFailureError,
    StreamWriteFailureError,
)
from bucketfs.filesystem.guard import MutationGuard, MutationSwitch, allow_all, deny_all
from bucketfs.filesystem.models import BinaryContent

__all__ = [
    "BatchDeleteError",
    "BinaryContent",
    "FileSystem",
    "FileSystemConfigError",
    "FileSystemError",
    "InvalidPathError",
    "MutationGuard",
    "MutationSwitch",
    "PersistenceError",
    "StreamReadFailureError",
    "StreamWriteFailureError",
    "allow_all",
    "deny_all",
]
