"""File-system provider registry.

Maps a type-class discriminator (e.g. "s3") to the configuration class
and the factory that builds the file system. The default registry is
populated explicitly with every built-in backend; nothing is discovered
by scanning modules.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from bucketfs.filesystem.base import FileSystem
from bucketfs.filesystem.config import (
    DEFAULT_ENV_PREFIX,
    FileSystemConfig,
    env_payload,
    load_config_file,
    optional_str,
)
from bucketfs.filesystem.errors import FileSystemConfigError
from bucketfs.s3.config import S3_TYPECLASS, S3FileSystemConfig
from bucketfs.s3.filesystem import S3FileSystem

logger = logging.getLogger(__name__)

FileSystemFactory = Callable[..., FileSystem]


class FileSystemNotRegisteredError(FileSystemConfigError):
    """Raised when a requested type class is not in the registry."""

    def __init__(self, type_class: str) -> None:
        self.type_class = type_class
        super().__init__(f"File system type not registered: {type_class}")


class DuplicateFileSystemError(FileSystemConfigError):
    """Raised when attempting to register a type class that already exists."""

    def __init__(self, type_class: str) -> None:
        self.type_class = type_class
        super().__init__(f"File system type already registered: {type_class}")


@dataclass(frozen=True, slots=True)
class FileSystemProvider:
    """Describes a registered file-system backend.

    Attributes:
        type_class: Discriminator used in configuration ("type" option).
        config_type: Configuration class for this backend.
        factory: Callable taking the configuration (plus keyword options
            such as ``guard``) and returning a FileSystem.
    """

    type_class: str
    config_type: type[FileSystemConfig]
    factory: FileSystemFactory


@dataclass
class FileSystemRegistry:
    """Registry of file-system backends.

    Lookups fail closed: unknown type classes raise
    FileSystemNotRegisteredError.
    """

    default_type: str = S3_TYPECLASS
    _providers: dict[str, FileSystemProvider] = field(default_factory=dict)

    def register(self, config_type: type[FileSystemConfig], factory: FileSystemFactory) -> None:
        """Register a backend under its configuration's type class.

        Raises:
            DuplicateFileSystemError: If the type class is already registered.
        """
        type_class = config_type.type_class()
        if type_class in self._providers:
            raise DuplicateFileSystemError(type_class)

        self._providers[type_class] = FileSystemProvider(
            type_class=type_class,
            config_type=config_type,
            factory=factory,
        )
        logger.info("Registered file system type: %s (%s)", type_class, config_type.__name__)

    def get(self, type_class: str) -> FileSystemProvider:
        """Look up a backend by type class.

        Raises:
            FileSystemNotRegisteredError: If the type class is not registered.
        """
        provider = self._providers.get(type_class)
        if provider is None:
            raise FileSystemNotRegisteredError(type_class)
        return provider

    def type_classes(self) -> list[str]:
        """Return registered type classes, sorted."""
        return sorted(self._providers)

    def config_from_mapping(self, payload: Mapping[str, Any]) -> FileSystemConfig:
        """Build a configuration, dispatching on the "type" option."""
        type_class = optional_str(payload, "type") or self.default_type
        return self.get(type_class).config_type.from_mapping(payload)

    def config_from_env(
        self,
        prefix: str = DEFAULT_ENV_PREFIX,
        environ: Mapping[str, str] | None = None,
    ) -> FileSystemConfig:
        """Build a configuration from ``<PREFIX>_*`` environment variables."""
        return self.config_from_mapping(env_payload(prefix, environ))

    def create(self, config: FileSystemConfig, **options: Any) -> FileSystem:
        """Instantiate the file system for a configuration.

        Args:
            config: Backend configuration.
            **options: Keyword options forwarded to the factory (e.g. ``guard``).

        Raises:
            FileSystemNotRegisteredError: If the type class is not registered.
            FileSystemConfigError: If the configuration class does not match.
        """
        provider = self.get(config.type_class())
        if not isinstance(config, provider.config_type):
            raise FileSystemConfigError(
                f"Expected {provider.config_type.__name__}, got {type(config).__name__}"
            )
        return provider.factory(config, **options)

    def open_from_env(
        self,
        prefix: str = DEFAULT_ENV_PREFIX,
        environ: Mapping[str, str] | None = None,
        **options: Any,
    ) -> FileSystem:
        """Build a file system from environment variables."""
        return self.create(self.config_from_env(prefix, environ), **options)

    def open_from_file(self, path: str, **options: Any) -> FileSystem:
        """Build a file system from a YAML configuration file."""
        return self.create(self.config_from_mapping(load_config_file(path)), **options)


def default_registry() -> FileSystemRegistry:
    """Return a registry populated with the built-in backends."""
    registry = FileSystemRegistry()
    registry.register(S3FileSystemConfig, S3FileSystem.from_config)
    return registry
