"""Extraction of the raw byte blobs embedded in ROW/SPID fields."""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from amion_sch.domain.entities import RawByteBlock, RowHeader
from amion_sch.exceptions import BlobDecodeError, UnterminatedBlobError

# Strict one-byte-per-code-point mapping, 0-255 in both directions
SINGLE_BYTE_CODEC = "latin-1"

BLOB_OPEN = "<"
BLOB_CLOSE = ">"

_INT = re.compile(r"-?\d+")


def document_from_bytes(data: bytes) -> str:
    """Decode raw file bytes so every byte becomes exactly one character."""
    return data.decode(SINGLE_BYTE_CODEC)


def text_to_bytes(text: str) -> bytes:
    try:
        return text.encode(SINGLE_BYTE_CODEC)
    except UnicodeEncodeError as e:
        raise BlobDecodeError(
            f"Character {text[e.start]!r} at blob offset {e.start} is outside the single-byte range"
        ) from e


def parse_row_header(text: str) -> RowHeader:
    """Read `start count direction increment bytesPerEntry`; missing numbers are 0."""
    numbers: List[int] = [int(n) for n in _INT.findall(text)[:5]]
    numbers += [0] * (5 - len(numbers))
    return RowHeader(*numbers)


def extract_blob(text: str, start: int = 0) -> Optional[Tuple[RowHeader, RawByteBlock, int]]:
    """
    Extract the header and blob of a ROW/SPID field whose value begins at `start`.

    Returns (header, block, end) where `end` is the index just past the closing '>',
    or None when the field's line has no '<'. The blob may contain line breaks, so
    the closing delimiter is searched character by character through the rest of
    `text` rather than within the line.

    Raises:
        UnterminatedBlobError: no '>' follows the opening '<'
        BlobDecodeError: the blob holds a character that is not a single byte
    """
    line_end = text.find("\n", start)
    if line_end == -1:
        line_end = len(text)

    open_idx = text.find(BLOB_OPEN, start, line_end)
    if open_idx == -1:
        return None

    header = parse_row_header(text[start:open_idx])

    close_idx = text.find(BLOB_CLOSE, open_idx + 1)
    if close_idx == -1:
        raise UnterminatedBlobError(
            f"Blob opened at offset {open_idx} has no closing '{BLOB_CLOSE}'"
        )

    block = RawByteBlock(text_to_bytes(text[open_idx + 1:close_idx]))
    return header, block, close_idx + 1
