"""Tests for S3 file-system configuration and client construction."""

from __future__ import annotations

from pathlib import Path

import pytest

from bucketfs.filesystem.config import env_payload, load_config_file
from bucketfs.filesystem.errors import FileSystemConfigError
from bucketfs.s3.client import build_client, error_status
from bucketfs.s3.config import (
    DEFAULT_MULTIPART_THRESHOLD,
    DEFAULT_REGION,
    S3EndpointStyle,
    S3FileSystemConfig,
    parse_endpoint_style,
)

MINIO_ENDPOINT = "http://localhost:9000"

REQUIRED_OPTIONS = {
    "endpoint": MINIO_ENDPOINT,
    "key": "AKIAEXAMPLE",
    "secret": "s3cr3t-value",
}


class TestFromMapping:
    """Tests for declarative configuration."""

    def test_required_options_only_uses_defaults(self) -> None:
        config = S3FileSystemConfig.from_mapping(REQUIRED_OPTIONS)

        assert config.endpoint == MINIO_ENDPOINT
        assert config.access_key == "AKIAEXAMPLE"
        assert config.access_secret == "s3cr3t-value"
        assert config.bucket == ""
        assert config.region == DEFAULT_REGION == "us-east-1"
        assert config.endpoint_style is S3EndpointStyle.SUBDOMAIN
        assert config.multipart_threshold == DEFAULT_MULTIPART_THRESHOLD

    def test_all_options(self) -> None:
        config = S3FileSystemConfig.from_mapping(
            {
                **REQUIRED_OPTIONS,
                "bucket": "media",
                "region": "eu-west-2",
                "endpoint-style": "PATH",
                "multipart-threshold": "1048576",
            }
        )

        assert config.bucket == "media"
        assert config.region == "eu-west-2"
        assert config.endpoint_style is S3EndpointStyle.PATH
        assert config.multipart_threshold == 1048576

    @pytest.mark.parametrize("missing", ["endpoint", "key", "secret"])
    def test_missing_required_option_raises(self, missing: str) -> None:
        payload = {k: v for k, v in REQUIRED_OPTIONS.items() if k != missing}

        with pytest.raises(FileSystemConfigError, match=missing):
            S3FileSystemConfig.from_mapping(payload)

    def test_empty_optional_values_are_unset(self) -> None:
        config = S3FileSystemConfig.from_mapping(
            {**REQUIRED_OPTIONS, "bucket": "", "region": "  ", "endpoint-style": ""}
        )

        assert config.bucket == ""
        assert config.region == DEFAULT_REGION
        assert config.endpoint_style is S3EndpointStyle.SUBDOMAIN

    @pytest.mark.parametrize("value", ["abc", "0", "-5"])
    def test_invalid_multipart_threshold_raises(self, value: str) -> None:
        with pytest.raises(FileSystemConfigError):
            S3FileSystemConfig.from_mapping({**REQUIRED_OPTIONS, "multipart-threshold": value})

    def test_type_class(self) -> None:
        assert S3FileSystemConfig.type_class() == "s3"


class TestFromEnv:
    """Tests for environment-based configuration."""

    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BUCKETFS_ENDPOINT", MINIO_ENDPOINT)
        monkeypatch.setenv("BUCKETFS_KEY", "env-key")
        monkeypatch.setenv("BUCKETFS_SECRET", "env-secret")
        monkeypatch.setenv("BUCKETFS_BUCKET", "env-bucket")
        monkeypatch.setenv("BUCKETFS_ENDPOINT_STYLE", "path")

        config = S3FileSystemConfig.from_env()

        assert config.access_key == "env-key"
        assert config.bucket == "env-bucket"
        assert config.endpoint_style is S3EndpointStyle.PATH

    def test_custom_prefix_and_explicit_environ(self) -> None:
        environ = {
            "ARCHIVE_FS_ENDPOINT": MINIO_ENDPOINT,
            "ARCHIVE_FS_KEY": "k",
            "ARCHIVE_FS_SECRET": "s",
            "ARCHIVE_FS_REGION": "ap-south-1",
            "BUCKETFS_BUCKET": "ignored",
        }

        config = S3FileSystemConfig.from_env("ARCHIVE_FS", environ)

        assert config.region == "ap-south-1"
        assert config.bucket == ""

    def test_missing_required_variable_raises(self) -> None:
        with pytest.raises(FileSystemConfigError):
            S3FileSystemConfig.from_env("NOTHING_SET", {})

    def test_env_payload_maps_option_names(self) -> None:
        payload = env_payload(
            "FS", {"FS_ENDPOINT_STYLE": "path", "FS_": "x", "OTHER_KEY": "y", "FS_KEY": "k"}
        )

        assert payload == {"endpoint-style": "path", "key": "k"}


class TestEndpointStyle:
    """Tests for endpoint style parsing."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("subdomain", S3EndpointStyle.SUBDOMAIN),
            ("Subdomain", S3EndpointStyle.SUBDOMAIN),
            (" path ", S3EndpointStyle.PATH),
            (S3EndpointStyle.PATH, S3EndpointStyle.PATH),
        ],
    )
    def test_parse(self, value: str | S3EndpointStyle, expected: S3EndpointStyle) -> None:
        assert parse_endpoint_style(value) is expected

    def test_unknown_style_raises(self) -> None:
        with pytest.raises(FileSystemConfigError, match="virtual-host"):
            parse_endpoint_style("virtual-host")

    def test_addressing_style_mapping(self) -> None:
        assert S3EndpointStyle.SUBDOMAIN.addressing_style == "virtual"
        assert S3EndpointStyle.PATH.addressing_style == "path"


class TestBuilder:
    """Tests for the fluent builder and freezing."""

    def test_builders_chain(self) -> None:
        config = (
            S3FileSystemConfig(MINIO_ENDPOINT, "k", "s")
            .with_bucket("b")
            .with_region("eu-central-1")
            .with_endpoint_style("path")
            .with_multipart_threshold(1024)
        )

        assert config.bucket == "b"
        assert config.region == "eu-central-1"
        assert config.endpoint_style is S3EndpointStyle.PATH
        assert config.multipart_threshold == 1024

    def test_frozen_config_rejects_builders(self) -> None:
        config = S3FileSystemConfig(MINIO_ENDPOINT, "k", "s", bucket="b")
        config.freeze()

        with pytest.raises(FileSystemConfigError):
            config.with_bucket("other")
        with pytest.raises(FileSystemConfigError):
            config.with_region("eu-west-1")
        with pytest.raises(FileSystemConfigError):
            config.with_endpoint_style(S3EndpointStyle.PATH)
        assert config.bucket == "b"

    def test_empty_region_rejected(self) -> None:
        with pytest.raises(FileSystemConfigError):
            S3FileSystemConfig(MINIO_ENDPOINT, "k", "s").with_region("")

    def test_require_bucket(self) -> None:
        config = S3FileSystemConfig(MINIO_ENDPOINT, "k", "s")

        with pytest.raises(FileSystemConfigError, match="Bucket"):
            config.require_bucket()
        assert config.with_bucket("b").require_bucket() == "b"

    def test_repr_hides_credentials(self) -> None:
        config = S3FileSystemConfig(MINIO_ENDPOINT, "AKIAEXAMPLE", "s3cr3t-value", bucket="b")

        text = repr(config)

        assert "s3cr3t-value" not in text
        assert "AKIAEXAMPLE" not in text
        assert "bucket='b'" in text


class TestConfigFile:
    """Tests for YAML configuration files."""

    def test_top_level_options(self, tmp_path: Path) -> None:
        path = tmp_path / "fs.yaml"
        path.write_text(
            "endpoint: http://localhost:9000\nkey: k\nsecret: s\nbucket: media\n",
            encoding="utf-8",
        )

        payload = load_config_file(path)

        assert S3FileSystemConfig.from_mapping(payload).bucket == "media"

    def test_nested_filesystem_section(self, tmp_path: Path) -> None:
        path = tmp_path / "app.yaml"
        path.write_text(
            "filesystem:\n  type: s3\n  endpoint: http://localhost:9000\n"
            "  key: k\n  secret: s\n  endpoint-style: path\n"
            "logging:\n  level: INFO\n",
            encoding="utf-8",
        )

        payload = load_config_file(path)

        assert payload["type"] == "s3"
        assert "logging" not in payload

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileSystemConfigError, match="not found"):
            load_config_file(tmp_path / "absent.yaml")

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("endpoint: [unclosed\n", encoding="utf-8")

        with pytest.raises(FileSystemConfigError, match="Invalid YAML"):
            load_config_file(path)

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(FileSystemConfigError, match="mapping"):
            load_config_file(path)


class TestBuildClient:
    """Tests for boto3 client construction (no requests are sent)."""

    def test_path_style_client(self) -> None:
        config = S3FileSystemConfig(MINIO_ENDPOINT, "k", "s", region="eu-west-1")
        config.with_endpoint_style(S3EndpointStyle.PATH)

        client = build_client(config)

        assert client.meta.endpoint_url == MINIO_ENDPOINT
        assert client.meta.region_name == "eu-west-1"
        assert client.meta.config.s3["addressing_style"] == "path"

    def test_subdomain_style_client(self) -> None:
        client = build_client(S3FileSystemConfig(MINIO_ENDPOINT, "k", "s"))

        assert client.meta.config.s3["addressing_style"] == "virtual"


class TestErrorStatus:
    """Tests for HTTP status extraction from client errors."""

    def test_status_from_response_metadata(self) -> None:
        from botocore.exceptions import ClientError

        error = ClientError(
            {"Error": {"Code": "NoSuchKey"}, "ResponseMetadata": {"HTTPStatusCode": 404}},
            "GetObject",
        )
        assert error_status(error) == 404

    def test_status_from_numeric_code(self) -> None:
        from botocore.exceptions import ClientError

        error = ClientError({"Error": {"Code": "403"}}, "HeadObject")
        assert error_status(error) == 403

    def test_status_unknown(self) -> None:
        from botocore.exceptions import ClientError

        error = ClientError({"Error": {"Code": "SlowDown"}}, "PutObject")
        assert error_status(error) is None
