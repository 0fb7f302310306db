"""Name, phone and shift-time helpers shared by the record parser and queries."""

from __future__ import annotations

import re
from typing import Iterable, Tuple

# Names that describe a role or slot rather than a person
GENERIC_TITLE_PATTERNS = [
    r"fellow",
    r"consult",
    r"resident",
    r"on.?call",
    r"attending$",
    r"^md$",
    r"coverage",
    r"backup",
    r"float",
]


def normalize_phone(raw: str | None) -> str:
    """Strip everything but digits: "(212) 555-0100" -> "2125550100"."""
    if not raw:
        return ""
    return re.sub(r"\D", "", raw)


def format_phone(raw: str) -> str:
    """Format 10-digit (or 1 + 10-digit) numbers as 212-555-0100; return anything else unchanged."""
    digits = normalize_phone(raw)
    if len(digits) == 11 and digits.startswith("1"):
        digits = digits[1:]
    if len(digits) == 10:
        return f"{digits[:3]}-{digits[3:6]}-{digits[6:]}"
    return raw


def _title(word: str) -> str:
    if not word:
        return ""
    return word[0].upper() + word[1:].lower()


def parse_name(name: str) -> Tuple[str, str]:
    """
    Split a display name into (first_name, last_name).

    Handles "BANDER, J." -> ("J.", "Bander") and "Adrian Nugent" -> ("Adrian", "Nugent").
    A single word is treated as a last name.
    """
    if not name or not name.strip():
        return "", ""

    if "," in name:
        last, _, first = name.partition(",")
        return _title(first.strip()), _title(last.strip())

    parts = name.split()
    if len(parts) == 1:
        return "", _title(parts[0])
    return " ".join(_title(p) for p in parts[:-1]), _title(parts[-1])


def is_generic_title(name: str, patterns: Iterable[str] = GENERIC_TITLE_PATTERNS) -> bool:
    if not name:
        return False
    # "BANDER, J." style names belong to real people
    if "," in name:
        return False
    return any(re.search(p, name, re.IGNORECASE) for p in patterns)


def quarter_hour_to_time(qh: int) -> str:
    """28 -> "7:00 AM", 68 -> "5:00 PM"."""
    total_minutes = qh * 15
    hours = (total_minutes // 60) % 24
    minutes = total_minutes % 60
    period = "PM" if hours >= 12 else "AM"
    display = 12 if hours % 12 == 0 else hours % 12
    return f"{display}:{minutes:02d} {period}"


def _short_hour(hour: int) -> str:
    hour %= 24
    if hour == 0:
        return "12a"
    if hour < 12:
        return f"{hour}a"
    if hour == 12:
        return "12p"
    return f"{hour - 12}p"


def format_shift_span(start_qh: int, end_qh: int) -> str:
    """SHTM quarter-hours to the compact grid label, e.g. (28, 68) -> "7a-5p"."""
    return f"{_short_hour(start_qh // 4)}-{_short_hour(end_qh // 4)}"
