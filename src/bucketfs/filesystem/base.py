"""bucketfs file-system interface definition.

Provides the FileSystem contract consumed by backend-agnostic code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bucketfs.filesystem.models import BinaryContent


class FileSystem(ABC):
    """Abstract base class for hierarchical file systems.

    Error policy shared by all implementations:
    - Probes (``is_file_exist``, ``is_directory_exist``) never raise.
    - ``read_file`` and ``write_file`` raise typed FileSystemError subclasses.
    - ``delete_file``, ``create_directory`` and ``delete_directory`` return
      False on failure instead of raising.

    Implementations:
    - S3FileSystem: S3-compatible object storage
    """

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Return the backend identifier for observability (e.g., "s3")."""
        ...

    @abstractmethod
    def is_file_exist(self, path: str) -> bool:
        """Check whether a file exists at the exact path.

        Invalid paths and backend errors both yield False.
        """
        ...

    @abstractmethod
    def read_file(self, path: str) -> BinaryContent:
        """Read a whole file into memory.

        Args:
            path: File path.

        Returns:
            BinaryContent with the file bytes and its stored MIME type (if any).

        Raises:
            InvalidPathError: If the path fails validation.
            StreamReadFailureError: If the content cannot be read.
        """
        ...

    @abstractmethod
    def write_file(self, path: str, content: BinaryContent | bytes | str) -> None:
        """Write a whole file, creating intermediate structure implicitly.

        Args:
            path: File path. A trailing delimiter writes a directory marker.
            content: Payload; a BinaryContent's mime_type is used as-is.

        Raises:
            InvalidPathError: If the path fails validation.
            PersistenceError: If the write is vetoed or cannot be persisted.
            StreamWriteFailureError: If a multipart upload fails.
        """
        ...

    @abstractmethod
    def delete_file(self, path: str) -> bool:
        """Delete a file. Returns True only if the file is confirmed gone."""
        ...

    @abstractmethod
    def is_directory_exist(self, path: str) -> bool:
        """Check whether a directory exists. Never raises."""
        ...

    @abstractmethod
    def create_directory(self, path: str) -> bool:
        """Create a directory. Idempotent; returns False on failure."""
        ...

    @abstractmethod
    def delete_directory(self, path: str, is_empty: bool = True) -> bool:
        """Delete a directory and, depending on the backend, its contents.

        Returns False if the directory does not exist or cannot be deleted.
        """
        ...
