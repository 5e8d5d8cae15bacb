"""Content-type resolution for uploaded objects.

Sniffing order:
    1. File extension of the object key (built-in type table, so results do
       not depend on the host's /etc/mime.types)
    2. Magic bytes at the start of the payload
    3. Fallback: text/plain
"""

from __future__ import annotations

import mimetypes

DEFAULT_MIME_TYPE = "text/plain"

PDF_MAGIC = b"%PDF-"
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
JPEG_MAGIC = b"\xff\xd8\xff"
GZIP_MAGIC = b"\x1f\x8b"
ZIP_MAGIC = b"PK\x03\x04"

_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (PDF_MAGIC, "application/pdf"),
    (PNG_MAGIC, "image/png"),
    (JPEG_MAGIC, "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (GZIP_MAGIC, "application/gzip"),
    (ZIP_MAGIC, "application/zip"),
    (b"BZh", "application/x-bzip2"),
    (b"7z\xbc\xaf\x27\x1c", "application/x-7z-compressed"),
    (b"OggS", "audio/ogg"),
    (b"ID3", "audio/mpeg"),
    (b"fLaC", "audio/flac"),
    (b"\x00asm", "application/wasm"),
)

# MimeTypes() with no filenames only loads the interpreter's built-in table.
_MIME_TABLE = mimetypes.MimeTypes()


def _sniff_extension(key: str) -> str | None:
    mime_type, _ = _MIME_TABLE.guess_type(key, strict=False)
    return mime_type


def _sniff_signature(data: bytes) -> str | None:
    for magic, mime_type in _SIGNATURES:
        if data.startswith(magic):
            return mime_type

    # RIFF containers carry their format at offset 8
    if data[:4] == b"RIFF" and len(data) >= 12:
        if data[8:12] == b"WEBP":
            return "image/webp"
        if data[8:12] == b"WAVE":
            return "audio/wav"

    return None


def sniff_mime_type(key: str, data: bytes) -> str | None:
    """Guess a MIME type from an object key and its payload.

    Args:
        key: Object key (only the extension is consulted).
        data: Payload bytes.

    Returns:
        Best-guess MIME type, or None if neither extension nor content
        signature is recognized.
    """
    return _sniff_extension(key) or _sniff_signature(data)


def resolve_mime_type(key: str, data: bytes) -> str:
    """Resolve the MIME type to store for an upload without an explicit hint."""
    return sniff_mime_type(key, data) or DEFAULT_MIME_TYPE
