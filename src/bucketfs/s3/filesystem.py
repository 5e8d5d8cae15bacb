"""S3-compatible file-system backend.

Emulates a hierarchical file system over a flat object namespace:
- Files are objects at their normalized key
- Directories are zero-length marker objects whose key ends with "/",
  or exist implicitly as a prefix shared by other keys
- Directory deletion removes every object under the prefix

Probes degrade to False, reads and writes raise typed errors, and
deletes/creates return booleans. There is no retry or timeout handling
here; both come from the boto3 client configuration.
"""

from __future__ import annotations

import io
import logging
from typing import Any

from boto3.exceptions import S3UploadFailedError
from boto3.s3.transfer import TransferConfig
from botocore.exceptions import BotoCoreError, ClientError

from bucketfs.filesystem.base import FileSystem
from bucketfs.filesystem.config import FileSystemConfig
from bucketfs.filesystem.errors import (
    BatchDeleteError,
    FileSystemConfigError,
    FileSystemError,
    PersistenceError,
    StreamReadFailureError,
    StreamWriteFailureError,
)
from bucketfs.filesystem.guard import MutationGuard, allow_all
from bucketfs.filesystem.mime import resolve_mime_type
from bucketfs.filesystem.models import BinaryContent
from bucketfs.filesystem.paths import (
    DELIMITER,
    directory_prefix,
    is_directory_path,
    normalize_path,
)
from bucketfs.filesystem.tracing import traced_fs_operation
from bucketfs.s3.client import (
    build_client,
    delete_matching_objects,
    does_object_exist,
    error_status,
)
from bucketfs.s3.config import S3FileSystemConfig

logger = logging.getLogger(__name__)

UPLOAD_ACL = "private"

# Listing errors that simply mean "no such directory" in a flat namespace
_ABSENT_DIRECTORY_STATUSES = frozenset({403, 404})


class S3FileSystem(FileSystem):
    """File system backed by an S3-compatible bucket.

    The configuration is frozen on construction. The transport client is
    built once from it (or injected) and shared by all operations.
    """

    def __init__(
        self,
        config: S3FileSystemConfig,
        *,
        client: Any = None,
        guard: MutationGuard = allow_all,
    ) -> None:
        """Initialize the file system.

        Args:
            config: S3 configuration; frozen by this call.
            client: Pre-built boto3 S3 client. If None, one is created from
                the configuration.
            guard: Mutation guard consulted before every write.
        """
        config.freeze()
        self._config = config
        self._client = client if client is not None else build_client(config)
        self._guard = guard
        self._transfer_config = TransferConfig(multipart_threshold=config.multipart_threshold)
        logger.debug("S3FileSystem initialized: %r", config)

    @classmethod
    def from_config(cls, config: FileSystemConfig, **options: Any) -> S3FileSystem:
        """Registry factory: build a file system from a generic configuration.

        Raises:
            FileSystemConfigError: If the configuration is not an S3 configuration.
        """
        if not isinstance(config, S3FileSystemConfig):
            raise FileSystemConfigError(
                f"Expected S3FileSystemConfig, got {type(config).__name__}"
            )
        return cls(config, **options)

    @property
    def backend_name(self) -> str:
        """Return the backend identifier."""
        return "s3"

    @property
    def config(self) -> S3FileSystemConfig:
        return self._config

    @property
    def client(self) -> Any:
        return self._client

    @traced_fs_operation("is_file_exist")
    def is_file_exist(self, path: str) -> bool:
        """Check whether an object exists at the exact key."""
        try:
            key = normalize_path(path)
            bucket = self._config.require_bucket()
        except FileSystemError:
            return False

        try:
            return does_object_exist(self._client, bucket, key)
        except (ClientError, BotoCoreError) as e:
            logger.debug("File probe failed: bucket=%s key=%s error=%s", bucket, key, e)
            return False

    @traced_fs_operation("read_file")
    def read_file(self, path: str) -> BinaryContent:
        """Fetch an object and buffer its whole body."""
        key = normalize_path(path)
        bucket = self._config.require_bucket()

        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise StreamReadFailureError(path=path, cause=e) from e

        body = response.get("Body")
        if body is None:
            raise StreamReadFailureError("Object response has no body", path=path)

        try:
            data = body.read()
        except (BotoCoreError, OSError) as e:
            raise StreamReadFailureError(path=path, cause=e) from e
        finally:
            body.close()

        mime_type = response.get("ContentType") or None
        logger.debug("Read object: bucket=%s key=%s size=%d", bucket, key, len(data))
        return BinaryContent(data=data, mime_type=mime_type)

    @traced_fs_operation("write_file")
    def write_file(self, path: str, content: BinaryContent | bytes | str) -> None:
        """Upload an object, resolving its content type if not given."""
        if isinstance(content, BinaryContent):
            self._upload_object(path, content.data, content.mime_type)
        else:
            self._upload_object(path, BinaryContent.create(content).data, None)

    @traced_fs_operation("delete_file")
    def delete_file(self, path: str) -> bool:
        """Delete an object and confirm it is gone.

        The extra existence check after the delete guards against backends
        that acknowledge a delete without applying it.
        """
        if not self.is_file_exist(path):
            return False

        key = normalize_path(path)
        bucket = self._config.require_bucket()

        try:
            self._client.delete_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            logger.debug("Delete failed: bucket=%s key=%s error=%s", bucket, key, e)
            return False

        try:
            return not does_object_exist(self._client, bucket, key)
        except (ClientError, BotoCoreError) as e:
            logger.warning("Delete unconfirmed: bucket=%s key=%s error=%s", bucket, key, e)
            return False

    @traced_fs_operation("is_directory_exist")
    def is_directory_exist(self, path: str) -> bool:
        """Check whether any object lives under the directory prefix."""
        try:
            prefix = directory_prefix(normalize_path(path))
            bucket = self._config.require_bucket()
        except FileSystemError:
            return False

        try:
            response = self._client.list_objects_v2(Bucket=bucket, Prefix=prefix, MaxKeys=1)
        except ClientError as e:
            if error_status(e) in _ABSENT_DIRECTORY_STATUSES:
                return False
            logger.warning("Directory probe failed: bucket=%s prefix=%s error=%s", bucket, prefix, e)
            return False
        except BotoCoreError as e:
            logger.warning("Directory probe failed: bucket=%s prefix=%s error=%s", bucket, prefix, e)
            return False

        return bool(response.get("Contents") or response.get("CommonPrefixes"))

    @traced_fs_operation("create_directory")
    def create_directory(self, path: str) -> bool:
        """Upload a zero-length directory marker. Idempotent."""
        if not is_directory_path(path):
            path = f"{path}{DELIMITER}"

        try:
            self._upload_object(path, b"", None)
        except FileSystemError as e:
            logger.debug("Create directory failed: path=%s error=%s", path, e)
            return False
        return True

    @traced_fs_operation("delete_directory")
    def delete_directory(self, path: str, is_empty: bool = True) -> bool:
        """Delete every object under the directory prefix.

        ``is_empty`` does not gate anything: deletion is always recursive,
        whether or not the directory holds files. Callers must not rely on a
        non-recursive delete being refused.
        """
        if not self.is_directory_exist(path):
            return False

        prefix = directory_prefix(normalize_path(path))
        bucket = self._config.require_bucket()

        try:
            delete_matching_objects(self._client, bucket, prefix)
        except (ClientError, BotoCoreError, BatchDeleteError) as e:
            logger.warning("Delete directory failed: bucket=%s prefix=%s error=%s", bucket, prefix, e)
            return False
        return True

    def _upload_object(self, path: str, body: bytes, mime_type: str | None) -> None:
        """Upload a file or, for paths ending in "/", a directory marker.

        Raises:
            PersistenceError: If the guard vetoes the write or the upload fails.
            StreamWriteFailureError: If a multipart upload fails.
            InvalidPathError: If the path fails validation.
            FileSystemConfigError: If no bucket is configured.
        """
        if not self._guard():
            raise PersistenceError("Write vetoed by mutation guard", path=path)

        key = normalize_path(path)
        bucket = self._config.require_bucket()
        is_directory = is_directory_path(path)

        params: dict[str, Any] = {"ACL": UPLOAD_ACL}
        if is_directory:
            key = directory_prefix(key)
        else:
            params["ContentType"] = (
                mime_type if mime_type is not None else resolve_mime_type(key, body)
            )

        if len(body) < self._config.multipart_threshold:
            if not is_directory:
                params["ContentLength"] = len(body)
            try:
                self._client.put_object(Bucket=bucket, Key=key, Body=body, **params)
            except (ClientError, BotoCoreError) as e:
                raise PersistenceError(path=path, cause=e) from e
        else:
            # upload_fileobj surfaces raw ClientError/BotoCoreError from any part
            try:
                self._client.upload_fileobj(
                    io.BytesIO(body),
                    bucket,
                    key,
                    ExtraArgs=params,
                    Config=self._transfer_config,
                )
            except (S3UploadFailedError, ClientError, BotoCoreError) as e:
                raise StreamWriteFailureError(path=path, cause=e) from e

        logger.debug("Stored object: bucket=%s key=%s size=%d", bucket, key, len(body))
