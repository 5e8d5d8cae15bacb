"""Configuration for the S3-compatible file-system backend.

Options (declarative names; environment variables use the
``<PREFIX>_<OPTION>`` form, e.g. ``BUCKETFS_ENDPOINT_STYLE``):

    endpoint            Base URL of the object-storage service (required)
    key                 Access key ID (required)
    secret              Secret access key (required)
    bucket              Target bucket (default: empty, must be set before use)
    region              Region (default: us-east-1)
    endpoint-style      "subdomain" (default) or "path" addressing
    multipart-threshold Payload size in bytes from which uploads go multipart
                        (default: 8 MiB)
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Self

from bucketfs.filesystem.config import (
    FileSystemConfig,
    optional_int,
    optional_str,
    required_str,
)
from bucketfs.filesystem.errors import FileSystemConfigError

S3_TYPECLASS = "s3"
DEFAULT_REGION = "us-east-1"
DEFAULT_MULTIPART_THRESHOLD = 8 * 1024 * 1024


class S3EndpointStyle(str, Enum):
    """Endpoint addressing style."""

    SUBDOMAIN = "subdomain"
    PATH = "path"

    @property
    def addressing_style(self) -> str:
        """Return the matching botocore ``addressing_style`` value."""
        if self is S3EndpointStyle.SUBDOMAIN:
            return "virtual"
        return "path"


def parse_endpoint_style(value: str | S3EndpointStyle) -> S3EndpointStyle:
    """Parse an endpoint style name (case-insensitive).

    Raises:
        FileSystemConfigError: If the value names no known style.
    """
    if isinstance(value, S3EndpointStyle):
        return value

    normalized = value.strip().lower()
    for style in S3EndpointStyle:
        if style.value == normalized:
            return style

    allowed = ", ".join(style.value for style in S3EndpointStyle)
    raise FileSystemConfigError(f"Unknown endpoint style {value!r} (expected one of: {allowed})")


class S3FileSystemConfig(FileSystemConfig):
    """Configuration for an S3-compatible file system.

    Endpoint and credentials are fixed at construction. Bucket, region,
    endpoint style and multipart threshold may be adjusted through the
    ``with_*`` builders until the configuration is bound to a file system,
    which freezes it.
    """

    def __init__(
        self,
        endpoint: str,
        access_key: str,
        access_secret: str,
        bucket: str = "",
        region: str = DEFAULT_REGION,
        endpoint_style: S3EndpointStyle = S3EndpointStyle.SUBDOMAIN,
        multipart_threshold: int = DEFAULT_MULTIPART_THRESHOLD,
    ) -> None:
        self._endpoint = endpoint
        self._access_key = access_key
        self._access_secret = access_secret
        self._bucket = bucket
        self._region = region
        self._endpoint_style = endpoint_style
        self._multipart_threshold = multipart_threshold
        self._frozen = False

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(endpoint={self._endpoint!r}, bucket={self._bucket!r}, "
            f"region={self._region!r}, endpoint_style={self._endpoint_style.value!r})"
        )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def access_key(self) -> str:
        return self._access_key

    @property
    def access_secret(self) -> str:
        return self._access_secret

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def region(self) -> str:
        return self._region

    @property
    def endpoint_style(self) -> S3EndpointStyle:
        return self._endpoint_style

    @property
    def multipart_threshold(self) -> int:
        return self._multipart_threshold

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Reject further builder calls."""
        self._frozen = True

    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise FileSystemConfigError("Configuration is already bound to a file system")

    def with_bucket(self, bucket: str) -> Self:
        """Set the target bucket."""
        self._ensure_mutable()
        self._bucket = bucket
        return self

    def with_region(self, region: str) -> Self:
        """Set the region."""
        self._ensure_mutable()
        if not region:
            raise FileSystemConfigError("Region must not be empty")
        self._region = region
        return self

    def with_endpoint_style(self, style: S3EndpointStyle | str) -> Self:
        """Set the endpoint addressing style."""
        self._ensure_mutable()
        self._endpoint_style = parse_endpoint_style(style)
        return self

    def with_multipart_threshold(self, threshold: int) -> Self:
        """Set the payload size from which uploads use multipart transfer."""
        self._ensure_mutable()
        if threshold <= 0:
            raise FileSystemConfigError("Multipart threshold must be positive")
        self._multipart_threshold = threshold
        return self

    def require_bucket(self) -> str:
        """Return the bucket, failing if none has been set.

        Raises:
            FileSystemConfigError: If the bucket is empty.
        """
        if not self._bucket:
            raise FileSystemConfigError("Bucket is not configured")
        return self._bucket

    @classmethod
    def type_class(cls) -> str:
        return S3_TYPECLASS

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> Self:
        """Build a configuration from declarative options."""
        config = cls(
            required_str(payload, "endpoint"),
            required_str(payload, "key"),
            required_str(payload, "secret"),
        )

        bucket = optional_str(payload, "bucket")
        if bucket is not None:
            config.with_bucket(bucket)

        region = optional_str(payload, "region")
        if region is not None:
            config.with_region(region)

        endpoint_style = optional_str(payload, "endpoint-style")
        if endpoint_style is not None:
            config.with_endpoint_style(endpoint_style)

        multipart_threshold = optional_int(payload, "multipart-threshold")
        if multipart_threshold is not None:
            config.with_multipart_threshold(multipart_threshold)

        return config
