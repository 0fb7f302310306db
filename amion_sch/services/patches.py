"""Weekly override ("patch") blocks and their overlay onto the base rotation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from amion_sch.domain.codes import SentinelByte, ZeroOverridePolicy
from amion_sch.domain.entities import Patch, RawByteBlock

logger = logging.getLogger(__name__)

# marker, tag, week offset, separator
PATCH_HEADER_SIZE = 4
DEFAULT_CALIBRATION = 31


@dataclass
class OverlayResult:
    values: List[int] = field(default_factory=list)
    patched: List[bool] = field(default_factory=list)
    # Day was written by a zero byte, so its value depends on the zero policy
    ambiguous: List[bool] = field(default_factory=list)
    applied: int = 0
    skipped: int = 0
    # Valid patches whose days all fall outside the horizon
    out_of_range: int = 0

    @property
    def ambiguous_days(self) -> int:
        return sum(self.ambiguous)


def find_patches(block: RawByteBlock, start: int = 0, calibration: int = DEFAULT_CALIBRATION) -> List[Patch]:
    """
    Split the stream at every 252 byte at or after `start`, in file order.

    Each block is [252, tag, week, separator, payload...]; the payload runs to
    the next 252 or the end of the stream. Blocks with a non-zero separator
    (metadata, not overrides) are returned too with `is_valid` False so callers
    can report them.
    """
    markers = [i for i in range(max(start, 0), len(block)) if block[i] == SentinelByte.PATCH_MARKER]

    patches = []
    for p, offset in enumerate(markers):
        end = markers[p + 1] if p + 1 < len(markers) else len(block)
        week_byte = block[offset + 2] if offset + 2 < end else 0
        separator = block[offset + 3] if offset + 3 < end else 0
        payload = list(block[offset + PATCH_HEADER_SIZE:end]) if offset + PATCH_HEADER_SIZE < end else []
        patches.append(
            Patch(
                offset=offset,
                week_byte=week_byte,
                separator=separator,
                calibrated_week=week_byte + calibration,
                values=payload,
            )
        )
    return patches


def tile(base: Sequence[int], horizon: int) -> List[int]:
    """Repeat the base rotation until it covers `horizon` days."""
    if horizon <= 0:
        return []
    if not base:
        return [int(SentinelByte.EMPTY)] * horizon
    return [base[d % len(base)] for d in range(horizon)]


def apply_patch(
    result: OverlayResult,
    patch: Patch,
    policy: ZeroOverridePolicy = ZeroOverridePolicy.INHERIT,
) -> None:
    """Overlay one patch in place; days outside the schedule are ignored."""
    horizon = len(result.values)
    start_day = patch.start_day

    for d, value in enumerate(patch.values):
        day = start_day + d
        if day < 0 or day >= horizon:
            continue

        if value == SentinelByte.EMPTY:
            # Inherit and empty only disagree when there is something to inherit
            result.ambiguous[day] = result.values[day] != SentinelByte.EMPTY
            if policy == ZeroOverridePolicy.INHERIT:
                continue
        else:
            result.ambiguous[day] = False

        result.values[day] = value
        result.patched[day] = True


def overlay(
    base: Sequence[int],
    patches: Sequence[Patch],
    horizon: int,
    policy: ZeroOverridePolicy | str = ZeroOverridePolicy.INHERIT,
) -> OverlayResult:
    """
    Tile `base` across `horizon` days, then apply valid patches in file order.

    Later patches win on overlapping days.
    """
    policy = ZeroOverridePolicy.coerce(policy)
    values = tile(base, horizon)
    result = OverlayResult(values=values, patched=[False] * len(values), ambiguous=[False] * len(values))

    for patch in patches:
        if not patch.is_valid:
            result.skipped += 1
            logger.debug("Skipping block @%d with separator %d", patch.offset, patch.separator)
            continue
        if patch.start_day >= len(values) or patch.start_day + len(patch.values) <= 0:
            result.skipped += 1
            result.out_of_range += 1
            logger.debug(
                "Patch @%d (week %d) falls outside the %d-day schedule",
                patch.offset, patch.calibrated_week, len(values),
            )
            continue
        apply_patch(result, patch, policy)
        result.applied += 1

    return result
