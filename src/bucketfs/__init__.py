"""bucketfs: hierarchical file-system semantics over S3-compatible storage.

Backends:
- S3FileSystem: S3-compatible object storage (AWS S3, MinIO, R2, ...)

Environment Variables:
    BUCKETFS_TYPE: Backend type class (default: "s3")
    BUCKETFS_ENDPOINT, BUCKETFS_KEY, BUCKETFS_SECRET: Required S3 options
    BUCKETFS_BUCKET, BUCKETFS_REGION, BUCKETFS_ENDPOINT_STYLE: Optional S3 options
"""

from bucketfs.filesystem import (
    BinaryContent,
    FileSystem,
    FileSystemConfigError,
    FileSystemError,
    InvalidPathError,
    PersistenceError,
    StreamReadFailureError,
    StreamWriteFailureError,
)
from bucketfs.registry import FileSystemRegistry, default_registry
from bucketfs.s3 import S3EndpointStyle, S3FileSystem, S3FileSystemConfig

__version__ = "0.1.0"

__all__ = [
    "BinaryContent",
    "FileSystem",
    "FileSystemConfigError",
    "FileSystemError",
    "FileSystemRegistry",
    "InvalidPathError",
    "PersistenceError",
    "S3EndpointStyle",
    "S3FileSystem",
    "S3FileSystemConfig",
    "StreamReadFailureError",
    "StreamWriteFailureError",
    "default_registry",
]
