"""Path validation and object-key normalization.

Every file-system operation runs its caller path through
``normalize_path`` before touching the network. A path that fails
validation never produces an object key.

Rejected:
- Empty paths and paths with no segments (e.g. "/", "./")
- ".." segments
- Null bytes and other control characters
- Backslashes (Windows path separators)
- Windows drive roots (e.g. "C:" or "C:/data"); "a:notes.txt" is a valid key

Canonicalized:
- Duplicate slashes collapse to one
- "." segments are dropped
- Trailing slashes are dropped
"""

from __future__ import annotations

import re

from bucketfs.filesystem.errors import InvalidPathError

DELIMITER = "/"

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_DRIVE_LETTER = re.compile(r"^[A-Za-z]:(/|$)")


def check_path(path: str) -> str | None:
    """Validate a raw path and return its canonical form.

    Args:
        path: Caller-supplied path.

    Returns:
        Canonical path (keeping a single leading slash if the input was
        absolute), or None if the path is unsafe or malformed.
    """
    if not path:
        return None

    if _CONTROL_CHARS.search(path):
        return None

    if "\\" in path:
        return None

    if _DRIVE_LETTER.match(path):
        return None

    segments = path.split(DELIMITER)
    if any(segment == ".." for segment in segments):
        return None

    kept = [segment for segment in segments if segment not in ("", ".")]
    if not kept:
        return None

    prefix = DELIMITER if path.startswith(DELIMITER) else ""
    return prefix + DELIMITER.join(kept)


def normalize_path(path: str) -> str:
    """Convert a caller path into an object key.

    Args:
        path: Caller-supplied path.

    Returns:
        Object key: canonical path without a leading slash.

    Raises:
        InvalidPathError: If the path fails validation.
    """
    canonical = check_path(path)
    if canonical is None:
        raise InvalidPathError(path=path)

    if canonical.startswith(DELIMITER):
        canonical = canonical[1:]
    return canonical


def directory_prefix(key: str) -> str:
    """Return the key with exactly one trailing delimiter."""
    return key.rstrip(DELIMITER) + DELIMITER


def is_directory_path(path: str) -> bool:
    """Return True if a caller path names a directory (ends with a delimiter)."""
    return path.endswith(DELIMITER)
