"""S3 transport client construction and helpers.

The boto3 client owns request signing, retries, timeouts and multipart
transfer. The helpers here only add the few composite operations the file
system needs on top of the plain client API.
"""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from bucketfs.filesystem.errors import BatchDeleteError
from bucketfs.s3.config import S3FileSystemConfig

logger = logging.getLogger(__name__)

# DeleteObjects accepts at most 1000 keys per request
MAX_DELETE_BATCH = 1000


def build_client(config: S3FileSystemConfig) -> Any:
    """Create an S3 client for the configured endpoint and credentials.

    Args:
        config: S3 file-system configuration.

    Returns:
        A boto3 S3 client, safe to share across threads.
    """
    client = boto3.client(
        "s3",
        endpoint_url=config.endpoint,
        region_name=config.region,
        aws_access_key_id=config.access_key,
        aws_secret_access_key=config.access_secret,
        config=Config(s3={"addressing_style": config.endpoint_style.addressing_style}),
    )
    logger.info(
        "S3 client created: endpoint=%s region=%s style=%s",
        config.endpoint,
        config.region,
        config.endpoint_style.value,
    )
    return client


def error_status(error: ClientError) -> int | None:
    """Extract the HTTP status code from a botocore ClientError."""
    status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    if status is not None:
        return int(status)

    code = error.response.get("Error", {}).get("Code", "")
    if isinstance(code, str) and code.isdigit():
        return int(code)
    return None


def does_object_exist(client: Any, bucket: str, key: str) -> bool:
    """Check whether an object exists at the exact key.

    Returns:
        True if HEAD succeeds, False if the backend reports 404.

    Raises:
        ClientError: For any other client-side error status.
        BotoCoreError: For transport failures.
    """
    try:
        client.head_object(Bucket=bucket, Key=key)
    except ClientError as e:
        if error_status(e) == 404:
            return False
        raise
    return True


def delete_matching_objects(client: Any, bucket: str, prefix: str) -> int:
    """Delete every object whose key starts with the prefix.

    Args:
        client: boto3 S3 client.
        bucket: Bucket name.
        prefix: Key prefix (callers pass a directory prefix ending in "/").

    Returns:
        Number of objects deleted.

    Raises:
        BatchDeleteError: If the backend refused to delete some keys.
        ClientError: If listing or deleting fails outright.
        BotoCoreError: For transport failures.
    """
    paginator = client.get_paginator("list_objects_v2")
    deleted = 0

    for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
        keys = [obj["Key"] for obj in page.get("Contents", [])]
        for start in range(0, len(keys), MAX_DELETE_BATCH):
            batch = keys[start : start + MAX_DELETE_BATCH]
            response = client.delete_objects(
                Bucket=bucket,
                Delete={"Objects": [{"Key": key} for key in batch], "Quiet": True},
            )
            errors = response.get("Errors", [])
            if errors:
                failed = [error.get("Key", "") for error in errors]
                raise BatchDeleteError(
                    f"Failed to delete {len(failed)} object(s) under prefix",
                    path=prefix,
                    failed_keys=failed,
                )
            deleted += len(batch)

    logger.debug("Deleted %d object(s): bucket=%s prefix=%s", deleted, bucket, prefix)
    return deleted
