"""Parsed entities, reserved codes, and the SQLAlchemy storage layer."""

from .codes import NEWEST_FIRST, PATCH_MARKER_TAG, SentinelByte, ServiceType, StaffType, ZeroOverridePolicy
from .entities import (
    Contact,
    DecodeWarning,
    DocumentMetadata,
    Holiday,
    ParseResult,
    Patch,
    RawByteBlock,
    RowHeader,
    ScheduleAssignment,
    ScheduleRecord,
    Service,
    StaffMember,
)
from .models import AssignmentRecord, Base, HolidayRecord, ScheduleImport, ServiceRecord, StaffRecord
from .repositories import (
    AssignmentRepository,
    HolidayRepository,
    ImportRepository,
    ServiceRepository,
    StaffRepository,
)

__all__ = [
    "NEWEST_FIRST",
    "PATCH_MARKER_TAG",
    "SentinelByte",
    "ServiceType",
    "StaffType",
    "ZeroOverridePolicy",
    "Contact",
    "DecodeWarning",
    "DocumentMetadata",
    "Holiday",
    "ParseResult",
    "Patch",
    "RawByteBlock",
    "RowHeader",
    "ScheduleAssignment",
    "ScheduleRecord",
    "Service",
    "StaffMember",
    "AssignmentRecord",
    "Base",
    "HolidayRecord",
    "ScheduleImport",
    "ServiceRecord",
    "StaffRecord",
    "AssignmentRepository",
    "HolidayRepository",
    "ImportRepository",
    "ServiceRepository",
    "StaffRepository",
]
