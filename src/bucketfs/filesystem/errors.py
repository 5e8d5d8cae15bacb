"""bucketfs file-system error types.

Provides typed exceptions for file-system operations. Probes never raise
these; mutating operations that report failures raise them, and the
boolean-returning operations swallow them after logging.
"""

from __future__ import annotations


class FileSystemError(Exception):
    """Base exception for file-system operations.

    Attributes:
        message: Human-readable error message.
        path: Caller-supplied path associated with the operation (if applicable).
        cause: Underlying transport or library exception (if any).
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.cause = cause

    def __str__(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f"path={self.path}")
        if self.cause is not None:
            parts.append(f"cause={type(self.cause).__name__}")
        return " ".join(parts)


class InvalidPathError(FileSystemError):
    """Raised when a path is malformed or unsafe.

    Detected before any network call: traversal segments, null bytes,
    control characters, backslashes, drive letters, or an empty path.
    """

    def __init__(
        self,
        message: str = "Invalid path",
        *,
        path: str | None = None,
    ) -> None:
        super().__init__(message, path=path)


class StreamReadFailureError(FileSystemError):
    """Raised when an object body cannot be read.

    Covers both a get-object response without a body and any transport
    error raised while fetching the object.
    """

    def __init__(
        self,
        message: str = "Failed to read object stream",
        *,
        path: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, path=path, cause=cause)


class StreamWriteFailureError(FileSystemError):
    """Raised when a multipart upload fails."""

    def __init__(
        self,
        message: str = "Failed to write object stream",
        *,
        path: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, path=path, cause=cause)


class PersistenceError(FileSystemError):
    """Raised when a write cannot be persisted.

    Includes writes vetoed by the mutation guard and every transport
    failure other than a multipart upload failure.
    """

    def __init__(
        self,
        message: str = "Failed to persist object",
        *,
        path: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, path=path, cause=cause)


class BatchDeleteError(FileSystemError):
    """Raised when a bulk delete reports per-key failures.

    Attributes:
        failed_keys: Object keys the backend refused to delete.
    """

    def __init__(
        self,
        message: str = "Bulk delete failed",
        *,
        path: str | None = None,
        failed_keys: list[str] | None = None,
    ) -> None:
        super().__init__(message, path=path)
        self.failed_keys = failed_keys or []


class FileSystemConfigError(FileSystemError):
    """Raised when file-system configuration is missing or invalid.

    This is a setup error, not an operation error: a missing bucket,
    an unknown endpoint style, or a required option left unset.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
