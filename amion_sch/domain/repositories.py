"""Repository classes for stored imports."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from .models import AssignmentRecord, HolidayRecord, ScheduleImport, ServiceRecord, StaffRecord


class ImportRepository:
    """Repository for stored parse results."""

    @staticmethod
    def get_all(session: Session) -> List[ScheduleImport]:
        return session.query(ScheduleImport).order_by(ScheduleImport.imported_at).all()

    @staticmethod
    def get_by_id(session: Session, import_id: int) -> Optional[ScheduleImport]:
        return session.query(ScheduleImport).filter(ScheduleImport.id == import_id).first()

    @staticmethod
    def get_active(session: Session) -> Optional[ScheduleImport]:
        """Most recent active import."""
        return (
            session.query(ScheduleImport)
            .filter(ScheduleImport.is_active.is_(True))
            .order_by(ScheduleImport.imported_at.desc(), ScheduleImport.id.desc())
            .first()
        )

    @staticmethod
    def deactivate_others(session: Session, keep_id: int) -> int:
        """Mark every other import inactive. Returns number of updated rows."""
        count = (
            session.query(ScheduleImport)
            .filter(ScheduleImport.id != keep_id, ScheduleImport.is_active.is_(True))
            .update({ScheduleImport.is_active: False}, synchronize_session=False)
        )
        session.commit()
        return count

    @staticmethod
    def delete(session: Session, import_id: int) -> bool:
        schedule_import = ImportRepository.get_by_id(session, import_id)
        if schedule_import is None:
            return False
        session.delete(schedule_import)
        session.commit()
        return True


class StaffRepository:
    """Repository for decoded staff."""

    @staticmethod
    def get_by_import(session: Session, import_id: int) -> List[StaffRecord]:
        return session.query(StaffRecord).filter(StaffRecord.import_id == import_id).order_by(StaffRecord.name).all()

    @staticmethod
    def get_by_seq_id(session: Session, import_id: int, seq_id: int) -> Optional[StaffRecord]:
        return (
            session.query(StaffRecord)
            .filter(StaffRecord.import_id == import_id, StaffRecord.seq_id == seq_id)
            .first()
        )

    @staticmethod
    def get_by_contact(session: Session, import_id: int, contact_key: str) -> Optional[StaffRecord]:
        return (
            session.query(StaffRecord)
            .filter(StaffRecord.import_id == import_id, StaffRecord.contact_key == contact_key)
            .first()
        )


class ServiceRepository:
    """Repository for decoded services."""

    @staticmethod
    def get_by_import(session: Session, import_id: int) -> List[ServiceRecord]:
        return session.query(ServiceRecord).filter(ServiceRecord.import_id == import_id).order_by(ServiceRecord.name).all()


class HolidayRepository:
    @staticmethod
    def get_by_import(session: Session, import_id: int) -> List[HolidayRecord]:
        return session.query(HolidayRecord).filter(HolidayRecord.import_id == import_id).order_by(HolidayRecord.date).all()


class AssignmentRepository:
    """Repository for decoded daily assignments."""

    @staticmethod
    def get_by_import(session: Session, import_id: int) -> List[AssignmentRecord]:
        return (
            session.query(AssignmentRecord)
            .filter(AssignmentRecord.import_id == import_id)
            .order_by(AssignmentRecord.date, AssignmentRecord.service_name)
            .all()
        )

    @staticmethod
    def get_by_date_range(
        session: Session,
        import_id: int,
        start: date,
        end: date,
        service_name: Optional[str] = None,
    ) -> List[AssignmentRecord]:
        """Get assignments with start <= date <= end, optionally for one service."""
        query = session.query(AssignmentRecord).filter(
            AssignmentRecord.import_id == import_id,
            AssignmentRecord.date >= start,
            AssignmentRecord.date <= end,
        )
        if service_name:
            query = query.filter(AssignmentRecord.service_name == service_name)
        return query.order_by(AssignmentRecord.date, AssignmentRecord.service_name).all()

    @staticmethod
    def get_by_staff(session: Session, import_id: int, staff_id: int) -> List[AssignmentRecord]:
        """Get all days where the staff sequence id is primary or split-shift staff."""
        return (
            session.query(AssignmentRecord)
            .filter(
                AssignmentRecord.import_id == import_id,
                (AssignmentRecord.primary_staff_id == staff_id)
                | (AssignmentRecord.secondary_staff_id == staff_id),
            )
            .order_by(AssignmentRecord.date)
            .all()
        )

