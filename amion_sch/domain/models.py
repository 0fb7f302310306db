"""SQLAlchemy models for stored .sch imports."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, relationship


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class ScheduleImport(Base):
    """One stored parse of a .sch file."""

    __tablename__ = "schedule_imports"

    id = Column(Integer, primary_key=True, autoincrement=True)
    source_file = Column(String(500), nullable=True)
    site_id = Column(String(100), nullable=True)
    department = Column(String(200), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    reference_date = Column(Date, nullable=True)
    imported_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    staff = relationship("StaffRecord", back_populates="schedule_import", cascade="all, delete-orphan")
    services = relationship("ServiceRecord", back_populates="schedule_import", cascade="all, delete-orphan")
    holidays = relationship("HolidayRecord", back_populates="schedule_import", cascade="all, delete-orphan")
    assignments = relationship("AssignmentRecord", back_populates="schedule_import", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<ScheduleImport(id={self.id}, department='{self.department}', file='{self.source_file}')>"


class StaffRecord(Base):
    """Staff member as decoded; seq_id is the id used inside ROW data, unid the external id."""

    __tablename__ = "staff"

    id = Column(Integer, primary_key=True, autoincrement=True)
    import_id = Column(Integer, ForeignKey("schedule_imports.id"), nullable=False)
    seq_id = Column(Integer, nullable=False)
    unid = Column(Integer, nullable=False, default=0)
    name = Column(String(200), nullable=False)
    abbreviation = Column(String(50), nullable=True)
    type_code = Column(Integer, nullable=False, default=0)
    role_label = Column(String(50), nullable=True)
    pager = Column(String(50), nullable=True)
    phone = Column(String(50), nullable=True)
    cell_phone = Column(String(50), nullable=True)
    email = Column(String(200), nullable=True)
    # Normalized digits of pager/phone/cell, for contact matching
    contact_key = Column(String(50), nullable=True, index=True)

    schedule_import = relationship("ScheduleImport", back_populates="staff")

    def __repr__(self) -> str:
        return f"<StaffRecord(seq_id={self.seq_id}, name='{self.name}')>"


class ServiceRecord(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, autoincrement=True)
    import_id = Column(Integer, ForeignKey("schedule_imports.id"), nullable=False)
    seq_id = Column(Integer, nullable=False)
    unid = Column(Integer, nullable=False, default=0)
    name = Column(String(200), nullable=False)
    type_code = Column(Integer, nullable=False, default=0)
    parent_id = Column(Integer, nullable=True)
    shift_start = Column(Integer, nullable=True)  # quarter-hours from midnight
    shift_end = Column(Integer, nullable=True)
    shift_display = Column(String(20), nullable=True)
    description = Column(Text, nullable=True)

    schedule_import = relationship("ScheduleImport", back_populates="services")

    def __repr__(self) -> str:
        return f"<ServiceRecord(seq_id={self.seq_id}, name='{self.name}')>"


class HolidayRecord(Base):
    __tablename__ = "holidays"

    id = Column(Integer, primary_key=True, autoincrement=True)
    import_id = Column(Integer, ForeignKey("schedule_imports.id"), nullable=False)
    date = Column(Date, nullable=False)
    jdn = Column(Integer, nullable=False)
    type_code = Column(Integer, nullable=False, default=0)
    name = Column(String(200), nullable=False)

    schedule_import = relationship("ScheduleImport", back_populates="holidays")


class AssignmentRecord(Base):
    """One decoded day of one service."""

    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    import_id = Column(Integer, ForeignKey("schedule_imports.id"), nullable=False)
    date = Column(Date, nullable=False, index=True)
    service_seq_id = Column(Integer, nullable=False)
    service_name = Column(String(200), nullable=False)
    primary_staff_id = Column(Integer, nullable=True, index=True)
    primary_staff_name = Column(String(200), nullable=True)
    secondary_staff_id = Column(Integer, nullable=True)
    secondary_staff_name = Column(String(200), nullable=True)
    primary_raw = Column(Integer, nullable=False)
    secondary_raw = Column(Integer, nullable=True)
    is_empty = Column(Boolean, nullable=False, default=False)
    primary_resolved = Column(Boolean, nullable=False, default=False)
    patched = Column(Boolean, nullable=False, default=False)
    ambiguous = Column(Boolean, nullable=False, default=False)

    schedule_import = relationship("ScheduleImport", back_populates="assignments")

    def __repr__(self) -> str:
        return f"<AssignmentRecord(date={self.date}, service='{self.service_name}', staff={self.primary_staff_id})>"
