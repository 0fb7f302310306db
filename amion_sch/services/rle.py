"""Run-length decoding of ROW/SPID byte streams."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from amion_sch.domain.codes import PATCH_MARKER_TAG, SentinelByte
from amion_sch.domain.entities import RawByteBlock

logger = logging.getLogger(__name__)

HEADER_SIZE = 2
MAX_RUN = 50


@dataclass
class RleResult:
    values: List[int] = field(default_factory=list)
    # Index of the (252, 7) pair that ended linear decoding, if any
    patch_offset: Optional[int] = None
    resyncs: int = 0


def is_patch_marker(block, index: int) -> bool:
    return (
        index + 1 < len(block)
        and block[index] == SentinelByte.PATCH_MARKER
        and block[index + 1] == PATCH_MARKER_TAG
    )


def decode_rle(block: RawByteBlock, header_size: int = HEADER_SIZE, max_run: int = MAX_RUN) -> RleResult:
    """
    Expand (count, value) pairs into one value per day.

    Format: [header1] [header2] [count1] [value1] [count2] [value2] ...

    A (252, 7) pair starts the patch area: decoding stops there and its offset is
    returned for the patch resolver. A count outside 1..max_run is treated as
    corruption; the cursor advances a single byte and decoding resumes.
    """
    result = RleResult()
    i = header_size
    n = len(block)

    while i < n - 1:
        if is_patch_marker(block, i):
            result.patch_offset = i
            break

        count = block[i]
        value = block[i + 1]

        if count < 1 or count > max_run:
            result.resyncs += 1
            i += 1
            continue

        result.values.extend([value] * count)
        i += 2

    if result.resyncs:
        logger.debug("RLE stream resynchronized %d times", result.resyncs)
    return result


def encode_rle(values: Iterable[int], max_run: int = MAX_RUN, header: bytes = b"\x00\x00") -> RawByteBlock:
    """Inverse of decode_rle for plain streams: runs longer than max_run are split."""
    out = bytearray(header)
    run_value = None
    run_length = 0

    for value in values:
        if value == run_value and run_length < max_run:
            run_length += 1
            continue
        if run_length:
            out += bytes((run_length, run_value))
        run_value, run_length = value, 1

    if run_length:
        out += bytes((run_length, run_value))
    return RawByteBlock(bytes(out))
