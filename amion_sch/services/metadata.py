"""Document-level header fields and the HOLI= holiday table."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import List, Optional

from amion_sch.dates import jdn_to_date
from amion_sch.domain.entities import DocumentMetadata, Holiday

from .sections import DATA, HOLIDAY, extract_sections

logger = logging.getLogger(__name__)

TIME_FORMATS = ["%b %d %H:%M %Y", "%Y-%m-%d %H:%M:%S", "%Y-%m-%d"]

_HOLIDAY_LINE = re.compile(r'^\s*(\d+)\s+(\d+)\s+"(.*?)"?\s*$')
_FIELD_LINE = re.compile(r"^\s*[A-Za-z][A-Za-z0-9]*\s*=")
_YEAR = re.compile(r"^\s*YEAR\s*=\s*(\d+)(?:[^:\n]*:\s*(\d+)\s+(\d+))?", re.MULTILINE)


def header_field(document: str, *keys: str) -> Optional[str]:
    """First value of any of `keys` written as KEY=value at the start of a line."""
    for key in keys:
        match = re.search(rf"^[ \t]*{re.escape(key)}[ \t]*=[ \t]*([^\r\n]*)", document, re.MULTILINE)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return None


def parse_time(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    text = " ".join(value.split())
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    logger.debug("Unrecognized TIME value: %r", value)
    return None


def extract_metadata(document: str) -> DocumentMetadata:
    meta = DocumentMetadata(
        site_id=header_field(document, "SIID", "Sid") or "",
        contact=header_field(document, "CONT") or "",
        last_modified=parse_time(header_field(document, "TIME")),
    )

    department = header_field(document, "DEPT")
    if department is None:
        data_section = extract_sections(document).get(DATA, "")
        department = header_field(data_section, "NAME")
    meta.department = department or ""

    year = _YEAR.search(document)
    if year:
        meta.start_year = int(year.group(1))
        meta.end_year = int(year.group(3)) if year.group(3) else meta.start_year

    jday = header_field(document, "JDAY")
    if jday and re.match(r"-?\d+", jday):
        meta.start_jdn = int(re.match(r"-?\d+", jday).group(0))

    return meta


def parse_holidays(text: str) -> List[Holiday]:
    """
    Read the HOLI= block: one `<jdn> <type> "<name>` line per holiday, ending at
    the next KEY= or SECT= line.
    """
    holidays: List[Holiday] = []
    lines = text.splitlines()

    start = None
    for i, line in enumerate(lines):
        if re.match(r"^\s*HOLI\s*=", line):
            start = i + 1
            break
    if start is None:
        return holidays

    for line in lines[start:]:
        if _FIELD_LINE.match(line):
            break
        match = _HOLIDAY_LINE.match(line)
        if not match:
            continue
        jdn = int(match.group(1))
        holidays.append(
            Holiday(
                date=jdn_to_date(jdn),
                jdn=jdn,
                type_code=int(match.group(2)),
                name=match.group(3).strip(),
            )
        )
    return holidays


def find_holidays(document: str, sections: Optional[dict] = None) -> List[Holiday]:
    """Holidays from a `holiday` section when present, otherwise from anywhere in the document."""
    sections = sections if sections is not None else extract_sections(document)
    holidays = parse_holidays(sections.get(HOLIDAY, ""))
    if not holidays:
        holidays = parse_holidays(document)
    return holidays
