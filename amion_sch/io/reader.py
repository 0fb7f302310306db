"""Reading .sch files from disk."""

from __future__ import annotations

from pathlib import Path

from amion_sch.exceptions import DocumentReadError
from amion_sch.services.bytestream import document_from_bytes


def read_document(path: str | Path) -> str:
    """
    Read a .sch file as text with one character per byte.

    Any multi-byte text decoding would corrupt the embedded ROW/SPID blobs, so
    the raw bytes are always decoded as latin-1.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise DocumentReadError(f"Error reading schedule file {path}: {e}") from e
    return document_from_bytes(data)
