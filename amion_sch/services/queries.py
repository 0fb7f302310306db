"""Read-only queries over a ParseResult for downstream collaborators."""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional

from amion_sch.domain.entities import ParseResult, ScheduleAssignment, StaffMember

from .contacts import normalize_phone


def schedule_for_date_range(
    result: ParseResult,
    start: date,
    end: date,
    service_name: Optional[str] = None,
) -> List[ScheduleAssignment]:
    """Assignments with start <= date <= end, optionally for services whose name contains `service_name`."""
    return [
        a
        for a in result.schedule
        if start <= a.date <= end and (not service_name or service_name in a.service_name)
    ]


def schedule_for_staff(result: ParseResult, staff_id: int) -> List[ScheduleAssignment]:
    """Days where `staff_id` (a sequence id) is the primary or split-shift staff."""
    return [a for a in result.schedule if a.primary_staff_id == staff_id or a.secondary_staff_id == staff_id]


def find_staff_by_contact(result: ParseResult, raw: str) -> Optional[StaffMember]:
    """Look up staff by any pager/phone spelling: "(212) 555-0100" matches "212-555-0100"."""
    key = normalize_phone(raw)
    if not key:
        return None
    return result.staff_by_contact.get(key)


def assignments_by_service(result: ParseResult) -> Dict[str, List[ScheduleAssignment]]:
    grouped: Dict[str, List[ScheduleAssignment]] = defaultdict(list)
    for a in result.schedule:
        grouped[a.service_name].append(a)
    return dict(grouped)


def assignments_by_date(result: ParseResult) -> Dict[date, List[ScheduleAssignment]]:
    grouped: Dict[date, List[ScheduleAssignment]] = defaultdict(list)
    for a in result.schedule:
        grouped[a.date].append(a)
    return dict(grouped)


def schedule_dates(result: ParseResult) -> List[date]:
    return sorted({a.date for a in result.schedule})


def filter_valid_providers(staff: List[StaffMember]) -> List[StaffMember]:
    """Drop placeholder staff: very short or single-letter names, consult pages, unknown roles."""
    valid = []
    for member in staff:
        name = member.name or ""
        if len(name) < 3:
            continue
        if "consult page" in name.lower():
            continue
        if not 1 <= member.type_code <= 6:
            continue
        valid.append(member)
    return valid


def parse_stats(result: ParseResult) -> Dict[str, object]:
    valid = filter_valid_providers(result.staff)
    by_role: Dict[str, int] = defaultdict(int)
    for member in valid:
        by_role[member.role_label] += 1

    return {
        "total_staff": len(result.staff),
        "valid_providers": len(valid),
        "by_role": dict(by_role),
        "with_cell_phone": sum(1 for m in valid if m.cell_phone),
        "with_pager": sum(1 for m in valid if m.pager),
        "services": len(result.services),
        "holidays": len(result.holidays),
        "assignments": len(result.schedule),
        "empty_days": sum(1 for a in result.schedule if a.is_empty),
        "unresolved_days": sum(1 for a in result.schedule if not a.is_empty and not a.primary_resolved),
        "patched_days": sum(1 for a in result.schedule if a.patched),
        "ambiguous_days": sum(1 for a in result.schedule if a.ambiguous),
    }
