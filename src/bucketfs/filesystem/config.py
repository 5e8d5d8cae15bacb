"""bucketfs file-system configuration base.

Configurations are built from a declarative mapping (e.g. a YAML
document) or from environment variables sharing a common prefix:

    <PREFIX>_<OPTION>   e.g. BUCKETFS_ENDPOINT_STYLE -> "endpoint-style"
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Self

import yaml

from bucketfs.filesystem.errors import FileSystemConfigError

DEFAULT_ENV_PREFIX = "BUCKETFS"


def env_payload(prefix: str, environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Collect prefixed environment variables into option names.

    Args:
        prefix: Variable prefix without the trailing underscore.
        environ: Environment mapping (defaults to os.environ).

    Returns:
        Mapping of lowercase, dash-separated option names to raw values.
    """
    if environ is None:
        environ = os.environ

    head = f"{prefix}_"
    payload: dict[str, str] = {}
    for name, value in environ.items():
        if name.startswith(head) and len(name) > len(head):
            option = name[len(head) :].lower().replace("_", "-")
            payload[option] = value
    return payload


def optional_str(payload: Mapping[str, Any], option: str) -> str | None:
    """Read an optional string option, treating empty values as unset."""
    value = payload.get(option)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def required_str(payload: Mapping[str, Any], option: str) -> str:
    """Read a required string option.

    Raises:
        FileSystemConfigError: If the option is missing or empty.
    """
    value = optional_str(payload, option)
    if value is None:
        raise FileSystemConfigError(f"Missing required option: {option}")
    return value


def optional_int(payload: Mapping[str, Any], option: str) -> int | None:
    """Read an optional positive integer option.

    Raises:
        FileSystemConfigError: If the value is not a positive integer.
    """
    raw = optional_str(payload, option)
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError as e:
        raise FileSystemConfigError(f"Option {option} must be an integer, got {raw!r}") from e
    if value <= 0:
        raise FileSystemConfigError(f"Option {option} must be positive, got {value}")
    return value


class FileSystemConfig(ABC):
    """Base class for backend-specific file-system configuration."""

    @classmethod
    @abstractmethod
    def type_class(cls) -> str:
        """Return the registry discriminator for this configuration (e.g. "s3")."""
        ...

    @classmethod
    @abstractmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> Self:
        """Build a configuration from declarative options.

        Raises:
            FileSystemConfigError: If required options are missing or invalid.
        """
        ...

    @classmethod
    def from_env(
        cls,
        prefix: str = DEFAULT_ENV_PREFIX,
        environ: Mapping[str, str] | None = None,
    ) -> Self:
        """Build a configuration from prefixed environment variables."""
        return cls.from_mapping(env_payload(prefix, environ))


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Load declarative file-system options from a YAML document.

    Options may sit at the top level or under a ``filesystem`` key.

    Raises:
        FileSystemConfigError: If the file is missing, unreadable, or is not
            a YAML mapping.
    """
    config_path = Path(path)
    path_str = str(config_path)

    if not config_path.is_file():
        raise FileSystemConfigError(f"Config file not found: {path_str}")

    try:
        with config_path.open("r", encoding="utf-8") as f:
            document = yaml.safe_load(f.read())
    except OSError as e:
        raise FileSystemConfigError(f"Failed to read config file {path_str}: {e}") from e
    except yaml.YAMLError as e:
        raise FileSystemConfigError(f"Invalid YAML in config file {path_str}: {e}") from e

    if isinstance(document, dict) and isinstance(document.get("filesystem"), dict):
        document = document["filesystem"]

    if not isinstance(document, dict):
        raise FileSystemConfigError(
            f"Config file must contain a mapping, got {type(document).__name__}"
        )

    return document
