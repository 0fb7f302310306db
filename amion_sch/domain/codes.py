"""Reserved type codes and sentinel byte values used by the .sch format."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Optional


class StaffType(IntEnum):
    STAFF = 1
    PROVIDER = 3
    COMPOSITE = 15


class ServiceType(IntEnum):
    SERVICE = 2
    SPECIAL = 4
    COMPOSITE = 15


# Shared by staff, service and xln records
COMPOSITE_TYPE = 15


class SentinelByte(IntEnum):
    """Byte values inside ROW/SPID blobs that never denote a staff or service id."""

    EMPTY = 0
    EMPTY_SLOT = 250
    PATCH_MARKER = 252
    DISABLED = 255

    @classmethod
    def is_empty(cls, value: int) -> bool:
        return value in (cls.EMPTY, cls.EMPTY_SLOT, cls.DISABLED)


# Second byte of the (252, 7) pair that opens a weekly override block
PATCH_MARKER_TAG = 7

# Direction flag on a ROW/SPID header: -1 means the blob lists newest days first
NEWEST_FIRST = -1


class ZeroOverridePolicy(str, Enum):
    """How a zero byte inside a patch payload is applied to the base schedule."""

    INHERIT = "inherit"  # keep the base value
    EMPTY = "empty"  # write an empty day

    @classmethod
    def coerce(cls, value: "ZeroOverridePolicy | str") -> "ZeroOverridePolicy":
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


def staff_type(code: int) -> Optional[StaffType]:
    try:
        return StaffType(code)
    except ValueError:
        return None


def service_type(code: int) -> Optional[ServiceType]:
    try:
        return ServiceType(code)
    except ValueError:
        return None
