"""Join decoded per-day staff ids with the staff and service tables."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Mapping, Optional, Sequence

from amion_sch.domain.codes import SentinelByte
from amion_sch.domain.entities import ScheduleAssignment, ScheduleRecord, Service, StaffMember
from amion_sch.services.contacts import GENERIC_TITLE_PATTERNS, is_generic_title


@dataclass
class StaffRef:
    staff_id: Optional[int]
    name: Optional[str]
    resolved: bool
    is_empty: bool


def resolve_staff(raw: Optional[int], staff_by_id: Mapping[int, StaffMember]) -> StaffRef:
    """
    Resolve one decoded byte.

    Sentinels (0, 250, 255) are empty and never carry a staff reference. Any
    other id is kept even when the staff table has no match.
    """
    if raw is None or SentinelByte.is_empty(raw):
        return StaffRef(staff_id=None, name=None, resolved=False, is_empty=True)

    staff = staff_by_id.get(raw)
    if staff is None:
        return StaffRef(staff_id=raw, name=None, resolved=False, is_empty=False)
    return StaffRef(staff_id=raw, name=staff.name, resolved=True, is_empty=False)


def assemble_schedule(
    record: ScheduleRecord,
    primary: Sequence[int],
    dates: Sequence[date],
    staff_by_id: Mapping[int, StaffMember],
    service_by_id: Mapping[int, Service],
    secondary: Optional[Sequence[int]] = None,
    patched: Optional[Sequence[bool]] = None,
    ambiguous: Optional[Sequence[bool]] = None,
    generic_patterns: Iterable[str] = GENERIC_TITLE_PATTERNS,
) -> List[ScheduleAssignment]:
    generic_patterns = list(generic_patterns)
    service = service_by_id.get(record.service_id)
    service_generic = is_generic_title(record.service_name, generic_patterns)

    rows = []
    for i, raw in enumerate(primary[:len(dates)]):
        first = resolve_staff(raw, staff_by_id)

        secondary_raw = secondary[i] if secondary is not None and i < len(secondary) else None
        second = resolve_staff(secondary_raw, staff_by_id)

        rows.append(
            ScheduleAssignment(
                date=dates[i],
                service_id=record.service_id,
                service_name=record.service_name,
                primary_staff_id=first.staff_id,
                primary_staff_name=first.name,
                secondary_staff_id=second.staff_id,
                secondary_staff_name=second.name,
                is_empty=first.is_empty,
                primary_raw=raw,
                secondary_raw=secondary_raw,
                primary_resolved=first.resolved,
                secondary_resolved=second.resolved,
                service_resolved=service is not None,
                patched=bool(patched[i]) if patched is not None and i < len(patched) else False,
                ambiguous=bool(ambiguous[i]) if ambiguous is not None and i < len(ambiguous) else False,
                is_generic_title=service_generic
                or (first.name is not None and is_generic_title(first.name, generic_patterns)),
            )
        )
    return rows
