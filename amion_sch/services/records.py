"""Flat KEY=value records inside a section, and the typed entities built from them."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from amion_sch.domain.codes import COMPOSITE_TYPE
from amion_sch.domain.entities import (
    Contact,
    RawByteBlock,
    RowHeader,
    ScheduleRecord,
    Service,
    StaffMember,
)
from amion_sch.exceptions import BlobDecodeError

from .bytestream import extract_blob
from .contacts import format_phone, normalize_phone, parse_name

logger = logging.getLogger(__name__)

RECORD_START = re.compile(r"^NAME=", re.MULTILINE)
FIELD = re.compile(r"[ \t]*([A-Za-z][A-Za-z0-9]*)[ \t]*=")
LEADING_INT = re.compile(r"\s*(-?\d+)")

PRIMARY_BLOB = "ROW"
SECONDARY_BLOB = "SPID"
BLOB_FIELDS = (PRIMARY_BLOB, SECONDARY_BLOB)


@dataclass
class Record:
    """One NAME= record: repeated fields keep every value in file order."""

    fields: Dict[str, List[str]] = field(default_factory=dict)
    blobs: Dict[str, Tuple[RowHeader, RawByteBlock]] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.get_str("NAME") or ""

    def has(self, key: str) -> bool:
        key = key.upper()
        return key in self.fields or key in self.blobs or key in self.errors

    def get_all(self, key: str) -> List[str]:
        return list(self.fields.get(key.upper(), []))

    def get_str(self, key: str) -> Optional[str]:
        values = self.fields.get(key.upper())
        if not values:
            return None
        return values[0] or None

    def get_int(self, key: str, default: int = 0) -> int:
        value = self.get_str(key)
        if value is None:
            return default
        match = LEADING_INT.match(value)
        return int(match.group(1)) if match else default

    def get_ints(self, key: str) -> List[int]:
        value = self.get_str(key) or ""
        return [int(n) for n in re.findall(r"-?\d+", value)]


def parse_record(text: str) -> Record:
    """
    Parse the lines of one record.

    ROW/SPID values are handed to the byte-stream extractor, which may consume
    several physical lines; parsing resumes on the line after the closing '>'.
    A blob that cannot be extracted is recorded in `errors` and the remaining
    fields still parse.
    """
    record = Record()
    pos = 0
    length = len(text)

    while pos < length:
        line_end = text.find("\n", pos)
        if line_end == -1:
            line_end = length

        match = FIELD.match(text, pos, line_end)
        if match is None:
            pos = line_end + 1
            continue

        key = match.group(1).upper()
        value_start = match.end()

        if key in BLOB_FIELDS:
            try:
                extracted = extract_blob(text, value_start)
            except BlobDecodeError as e:
                record.errors[key] = str(e)
                extracted = None
            if extracted is not None:
                header, block, end = extracted
                record.blobs[key] = (header, block)
                next_line = text.find("\n", end)
                pos = length if next_line == -1 else next_line + 1
                continue

        record.fields.setdefault(key, []).append(text[value_start:line_end].strip())
        pos = line_end + 1

    return record


def split_records(body: str) -> List[Record]:
    """Split a section body at every line starting with NAME=; text before the first is ignored."""
    starts = [m.start() for m in RECORD_START.finditer(body or "")]
    records = []
    for i, start in enumerate(starts):
        end = starts[i + 1] if i + 1 < len(starts) else len(body)
        records.append(parse_record(body[start:end]))
    return records


def _unique_by_id(items: Iterable, label: str) -> list:
    seen = {}
    for item in items:
        if item.id in seen:
            logger.warning(
                "Duplicate %s id %d ('%s'); keeping '%s'", label, item.id, item.name, seen[item.id].name
            )
            continue
        seen[item.id] = item
    return list(seen.values())


def build_staff(record: Record, role_labels: Mapping[int, str] | None = None) -> StaffMember:
    name = record.name
    first_name, last_name = parse_name(name)
    type_code = record.get_int("TYPE")

    staff = StaffMember(
        # CRITICAL: ID (not UNID) is the value stored in ROW/SPID blobs
        id=record.get_int("ID"),
        unid=record.get_int("UNID"),
        name=name,
        abbreviation=record.get_str("ABBR") or "",
        type_code=type_code,
        pager=record.get_str("PAGR"),
        phone=record.get_str("TELE"),
        email=record.get_str("EMAL"),
        first_name=first_name,
        last_name=last_name,
        role_label=(role_labels or {}).get(type_code, "Unknown"),
    )

    for pcon in record.get_all("PCON"):
        kind, _, value = pcon.partition("\t")
        kind, value = kind.strip().lower(), value.strip()
        if not value:
            continue
        if kind == "cell":
            staff.cell_phone = format_phone(value)
        elif kind == "office" and staff.phone is None:
            staff.phone = value
        elif kind == "email" and staff.email is None:
            staff.email = value
        else:
            staff.contacts.append(Contact(kind=kind, value=value))

    # Ten-digit pagers are really cell phones
    if staff.cell_phone is None and len(normalize_phone(staff.pager)) >= 10:
        staff.cell_phone = format_phone(staff.pager)

    return staff


def build_service(record: Record) -> Service:
    shtm = record.get_ints("SHTM")
    parent_id = record.get_int("CPAR")
    return Service(
        id=record.get_int("ID"),
        unid=record.get_int("UNID"),
        name=record.name,
        type_code=record.get_int("TYPE"),
        parent_id=parent_id or None,
        shift_start=shtm[0] if len(shtm) > 0 else None,
        shift_end=shtm[1] if len(shtm) > 1 else None,
        shift_duration=shtm[2] if len(shtm) > 2 else None,
        description=record.get_str("WOHD"),
    )


def parse_staff(body: str, role_labels: Mapping[int, str] | None = None) -> List[StaffMember]:
    """Leaf staff records of a staff section; composite records and id <= 0 are skipped."""
    staff = []
    for record in split_records(body):
        if not record.name or record.get_int("TYPE") == COMPOSITE_TYPE:
            continue
        member = build_staff(record, role_labels)
        if member.id <= 0:
            logger.debug("Skipping staff record '%s' without a sequence id", member.name)
            continue
        staff.append(member)
    return _unique_by_id(staff, "staff")


def parse_services(body: str) -> List[Service]:
    """Leaf service records of a service section; composite records and id <= 0 are skipped."""
    services = []
    for record in split_records(body):
        if not record.name or record.get_int("TYPE") == COMPOSITE_TYPE:
            continue
        service = build_service(record)
        if service.id <= 0:
            logger.debug("Skipping service record '%s' without a sequence id", service.name)
            continue
        services.append(service)
    return _unique_by_id(services, "service")


def parse_schedule_records(body: str) -> List[ScheduleRecord]:
    """
    Every record of a schedule (xln) section that carries a ROW field.

    Composite records are kept: they are the ones holding the blobs. A record
    whose ROW blob could not be extracted is returned with `error` set.
    """
    results = []
    for record in split_records(body):
        if not record.has(PRIMARY_BLOB):
            continue

        sched = ScheduleRecord(
            service_id=record.get_int("ID"),
            service_name=record.name,
            type_code=record.get_int("TYPE"),
        )

        if PRIMARY_BLOB in record.blobs:
            sched.primary_header, sched.primary_block = record.blobs[PRIMARY_BLOB]
        else:
            sched.error = record.errors.get(PRIMARY_BLOB, "ROW field has no embedded blob")

        if SECONDARY_BLOB in record.blobs:
            sched.secondary_header, sched.secondary_block = record.blobs[SECONDARY_BLOB]
        elif SECONDARY_BLOB in record.errors:
            logger.warning(
                "Dropping split-shift data for '%s': %s", sched.service_name, record.errors[SECONDARY_BLOB]
            )

        results.append(sched)
    return results
