"""bucketfs OpenTelemetry tracing integration.

Provides a tracing decorator for file-system operations.

Security:
    - Never export raw paths or object keys in span attributes
    - No credentials, endpoints or bucket secrets in any span attribute

Environment Variables:
    BUCKETFS_OTEL_ENABLED: Set to "1" to emit spans (default: disabled)
"""

from __future__ import annotations

import functools
import hashlib
import logging
import os
from collections.abc import Callable
from typing import Any, TypeVar, cast

logger = logging.getLogger(__name__)

BUCKETFS_OTEL_ENABLED_ENV = "BUCKETFS_OTEL_ENABLED"
TRACER_NAME = "bucketfs.filesystem"

F = TypeVar("F", bound=Callable[..., Any])


def _get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    val = os.environ.get(key, "").strip().lower()
    if val in ("1", "true", "yes"):
        return True
    if val in ("0", "false", "no", ""):
        return default
    return default


def is_otel_enabled() -> bool:
    """Check if OpenTelemetry tracing is enabled."""
    return _get_env_bool(BUCKETFS_OTEL_ENABLED_ENV, False)


def traced_fs_operation(operation: str) -> Callable[[F], F]:
    """Decorator to trace file-system operations with OpenTelemetry.

    The wrapped method must take the caller path as its first argument
    after ``self``.

    Args:
        operation: Operation name (e.g., "read_file", "delete_directory").

    Returns:
        Decorated function that emits spans when tracing is enabled.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(self: Any, path: str, *args: Any, **kwargs: Any) -> Any:
            if not is_otel_enabled():
                return func(self, path, *args, **kwargs)

            try:
                from opentelemetry import trace
            except ImportError:
                return func(self, path, *args, **kwargs)

            tracer = trace.get_tracer(TRACER_NAME)
            with tracer.start_as_current_span(f"bucketfs.fs.{operation}") as span:
                # Paths may embed user data; correlate by hash only.
                path_sha256 = hashlib.sha256(path.encode("utf-8")).hexdigest()
                span.set_attribute("bucketfs.path_sha256", path_sha256)
                span.set_attribute("storage.backend", getattr(self, "backend_name", "unknown"))

                try:
                    result = func(self, path, *args, **kwargs)
                except Exception as e:
                    span.set_attribute("error", True)
                    span.set_attribute("error.type", type(e).__name__)
                    raise

                _add_result_attributes(span, result)
                return result

        return cast(F, wrapper)

    return decorator


def _add_result_attributes(span: Any, result: Any) -> None:
    """Add result-based attributes to span safely (never content or paths)."""
    from bucketfs.filesystem.models import BinaryContent

    if isinstance(result, bool):
        span.set_attribute("bucketfs.result", result)
    elif isinstance(result, BinaryContent):
        span.set_attribute("bucketfs.size_bytes", result.size_bytes)
        if result.mime_type:
            span.set_attribute("bucketfs.content_type", result.mime_type)
