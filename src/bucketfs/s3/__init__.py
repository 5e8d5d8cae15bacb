"""S3-compatible file-system backend."""

from bucketfs.s3.config import S3EndpointStyle, S3FileSystemConfig, parse_endpoint_style
from bucketfs.s3.filesystem import S3FileSystem

__all__ = [
    "S3EndpointStyle",
    "S3FileSystem",
    "S3FileSystemConfig",
    "parse_endpoint_style",
]
