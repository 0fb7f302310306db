"""Plain entities produced by a single parse of a .sch document."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterator, List, Optional

from amion_sch.services.contacts import format_shift_span

from .codes import service_type, staff_type


@dataclass
class Contact:
    kind: str
    value: str


@dataclass
class StaffMember:
    """A leaf staff record. `id` is the key used inside decoded byte streams; `unid` is not."""

    id: int
    unid: int
    name: str
    abbreviation: str = ""
    type_code: int = 0
    pager: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    cell_phone: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    role_label: str = "Unknown"
    contacts: List[Contact] = field(default_factory=list)

    @property
    def kind(self):
        return staff_type(self.type_code)

    def __repr__(self) -> str:
        return f"<StaffMember(id={self.id}, unid={self.unid}, name='{self.name}')>"


@dataclass
class Service:
    id: int
    unid: int
    name: str
    type_code: int = 0
    parent_id: Optional[int] = None
    shift_start: Optional[int] = None  # quarter-hours from midnight
    shift_end: Optional[int] = None
    shift_duration: Optional[int] = None
    description: Optional[str] = None

    @property
    def kind(self):
        return service_type(self.type_code)

    @property
    def shift_display(self) -> Optional[str]:
        if self.shift_start is None or self.shift_end is None:
            return None
        return format_shift_span(self.shift_start, self.shift_end)

    def __repr__(self) -> str:
        return f"<Service(id={self.id}, name='{self.name}', type={self.type_code})>"


@dataclass
class Holiday:
    date: date
    jdn: int
    type_code: int
    name: str


@dataclass(frozen=True)
class RawByteBlock:
    """Bytes of one embedded blob, exactly as they appear between '<' and '>'."""

    data: bytes = b""

    @classmethod
    def from_values(cls, values) -> "RawByteBlock":
        return cls(bytes(values))

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, index):
        return self.data[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self.data)

    def values(self) -> List[int]:
        return list(self.data)


@dataclass(frozen=True)
class RowHeader:
    """The five numbers preceding a ROW/SPID blob."""

    start: int = 0
    count: int = 0
    direction: int = 0
    increment: int = 0
    bytes_per_entry: int = 0


@dataclass
class Patch:
    offset: int  # position of the marker pair inside the block
    week_byte: int
    separator: int
    calibrated_week: int
    values: List[int] = field(default_factory=list)

    @property
    def start_day(self) -> int:
        return self.calibrated_week * 7

    @property
    def is_valid(self) -> bool:
        return self.separator == 0


@dataclass
class ScheduleRecord:
    """One xln record carrying a primary (ROW) and optional secondary (SPID) blob."""

    service_id: int
    service_name: str
    type_code: int = 0
    primary_header: Optional[RowHeader] = None
    primary_block: Optional[RawByteBlock] = None
    secondary_header: Optional[RowHeader] = None
    secondary_block: Optional[RawByteBlock] = None
    error: Optional[str] = None


@dataclass
class ScheduleAssignment:
    date: date
    service_id: int
    service_name: str
    primary_staff_id: Optional[int] = None
    primary_staff_name: Optional[str] = None
    secondary_staff_id: Optional[int] = None
    secondary_staff_name: Optional[str] = None
    is_empty: bool = False
    primary_raw: int = 0
    secondary_raw: Optional[int] = None
    primary_resolved: bool = False
    secondary_resolved: bool = False
    service_resolved: bool = False
    patched: bool = False
    ambiguous: bool = False
    is_generic_title: bool = False


@dataclass
class DocumentMetadata:
    site_id: str = ""
    department: str = ""
    last_modified: Optional[datetime] = None
    contact: str = ""
    start_year: Optional[int] = None
    end_year: Optional[int] = None
    start_jdn: Optional[int] = None

    @property
    def year_range(self) -> str:
        if self.start_year is None or self.end_year is None:
            return ""
        return f"{self.start_year} - {self.end_year}"


@dataclass
class DecodeWarning:
    code: str
    message: str
    service_id: Optional[int] = None


@dataclass
class ParseResult:
    staff: List[StaffMember] = field(default_factory=list)
    services: List[Service] = field(default_factory=list)
    holidays: List[Holiday] = field(default_factory=list)
    schedule: List[ScheduleAssignment] = field(default_factory=list)
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)
    warnings: List[DecodeWarning] = field(default_factory=list)
    reference_date: Optional[date] = None

    # Lookup tables, built per parse
    staff_by_id: Dict[int, StaffMember] = field(default_factory=dict)
    staff_by_contact: Dict[str, StaffMember] = field(default_factory=dict)
    service_by_id: Dict[int, Service] = field(default_factory=dict)

    @property
    def start_date(self) -> Optional[date]:
        return min((a.date for a in self.schedule), default=None)

    @property
    def end_date(self) -> Optional[date]:
        return max((a.date for a in self.schedule), default=None)
