"""Store a parse result in the database."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from amion_sch.domain.entities import ParseResult
from amion_sch.domain.models import AssignmentRecord, HolidayRecord, ScheduleImport, ServiceRecord, StaffRecord
from amion_sch.domain.repositories import ImportRepository
from amion_sch.services.contacts import normalize_phone

logger = logging.getLogger(__name__)


def store_parse_result(
    session: Session,
    result: ParseResult,
    source_file: str | None = None,
    make_active: bool = True,
) -> ScheduleImport:
    """
    Persist one parse result as a new import with its staff, services, holidays and assignments.

    Args:
        session: Database session
        result: ParseResult from amion_sch.parse
        source_file: Optional original file name
        make_active: If True, every earlier import is marked inactive

    Returns:
        The stored ScheduleImport
    """
    schedule_import = ScheduleImport(
        source_file=source_file,
        site_id=result.metadata.site_id or None,
        department=result.metadata.department or None,
        start_date=result.start_date,
        end_date=result.end_date,
        reference_date=result.reference_date,
        is_active=True,
    )

    for member in result.staff:
        contact_key = normalize_phone(member.pager) or normalize_phone(member.cell_phone) or normalize_phone(member.phone)
        schedule_import.staff.append(
            StaffRecord(
                seq_id=member.id,
                unid=member.unid,
                name=member.name,
                abbreviation=member.abbreviation or None,
                type_code=member.type_code,
                role_label=member.role_label,
                pager=member.pager,
                phone=member.phone,
                cell_phone=member.cell_phone,
                email=member.email,
                contact_key=contact_key or None,
            )
        )

    for service in result.services:
        schedule_import.services.append(
            ServiceRecord(
                seq_id=service.id,
                unid=service.unid,
                name=service.name,
                type_code=service.type_code,
                parent_id=service.parent_id,
                shift_start=service.shift_start,
                shift_end=service.shift_end,
                shift_display=service.shift_display,
                description=service.description,
            )
        )

    for holiday in result.holidays:
        schedule_import.holidays.append(
            HolidayRecord(date=holiday.date, jdn=holiday.jdn, type_code=holiday.type_code, name=holiday.name)
        )

    for a in result.schedule:
        schedule_import.assignments.append(
            AssignmentRecord(
                date=a.date,
                service_seq_id=a.service_id,
                service_name=a.service_name,
                primary_staff_id=a.primary_staff_id,
                primary_staff_name=a.primary_staff_name,
                secondary_staff_id=a.secondary_staff_id,
                secondary_staff_name=a.secondary_staff_name,
                primary_raw=a.primary_raw,
                secondary_raw=a.secondary_raw,
                is_empty=a.is_empty,
                primary_resolved=a.primary_resolved,
                patched=a.patched,
                ambiguous=a.ambiguous,
            )
        )

    session.add(schedule_import)
    session.commit()
    session.refresh(schedule_import)

    if make_active:
        ImportRepository.deactivate_others(session, schedule_import.id)

    logger.info(
        "Stored import %d: %d staff, %d services, %d assignments",
        schedule_import.id, len(result.staff), len(result.services), len(result.schedule),
    )
    return schedule_import
