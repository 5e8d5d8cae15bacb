"""Pytest configuration and fixtures for bucketfs tests.

S3 behavior is exercised against moto's in-process backend; tests that
must prove no request was issued use a MagicMock client instead.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any
from unittest.mock import MagicMock

import boto3
import pytest
from moto import mock_aws

from bucketfs.s3.config import S3FileSystemConfig
from bucketfs.s3.filesystem import S3FileSystem

TEST_BUCKET = "bucketfs-test"
TEST_REGION = "us-east-1"
TEST_ENDPOINT = "https://s3.us-east-1.amazonaws.com"


@pytest.fixture(autouse=True)
def aws_test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Use fake credentials and keep tracing off unless a test enables it."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    monkeypatch.delenv("BUCKETFS_OTEL_ENABLED", raising=False)


@pytest.fixture
def s3_client() -> Iterator[Any]:
    """Create a moto-backed S3 client with the test bucket in place."""
    with mock_aws():
        client = boto3.client("s3", region_name=TEST_REGION)
        client.create_bucket(Bucket=TEST_BUCKET)
        yield client


@pytest.fixture
def s3_config() -> S3FileSystemConfig:
    """Return an unfrozen configuration pointing at the test bucket."""
    return S3FileSystemConfig(TEST_ENDPOINT, "testing", "testing", bucket=TEST_BUCKET)


@pytest.fixture
def fs(s3_config: S3FileSystemConfig, s3_client: Any) -> S3FileSystem:
    """Create an S3FileSystem over the moto backend."""
    return S3FileSystem(s3_config, client=s3_client)


@pytest.fixture
def mock_client() -> MagicMock:
    """Return a MagicMock standing in for the boto3 client."""
    return MagicMock(name="s3_client")


@pytest.fixture
def mock_fs(s3_config: S3FileSystemConfig, mock_client: MagicMock) -> S3FileSystem:
    """Create an S3FileSystem whose client records every call."""
    return S3FileSystem(s3_config, client=mock_client)
