"""bucketfs file-system data models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BinaryContent:
    """Payload of a read or write.

    Attributes:
        data: Raw bytes.
        mime_type: MIME type of the content (e.g., "application/json").
            On reads this comes from stored object metadata; on writes it is
            an optional hint that takes precedence over sniffing.
    """

    data: bytes
    mime_type: str | None = None

    @classmethod
    def create(cls, data: bytes | str, mime_type: str | None = None) -> BinaryContent:
        """Create content from bytes or text (text is UTF-8 encoded)."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        return cls(data=data, mime_type=mime_type)

    @property
    def size_bytes(self) -> int:
        """Return the payload length in bytes."""
        return len(self.data)
