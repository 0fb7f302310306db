"""
Date calibration for decoded .sch data.

Holidays carry an exact Julian Day Number counted from 2000-01-01. The main
schedule has no self-describing anchor, so its dates come from a swappable
DateStrategy; the default assumes the last decoded day is "today".
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from amion_sch.domain.entities import RowHeader
from amion_sch.exceptions import ConfigError

EPOCH = date(2000, 1, 1)
EPOCH_MS = int(datetime(2000, 1, 1, tzinfo=timezone.utc).timestamp() * 1000)
MS_PER_DAY = 86_400_000


def jdn_to_date(jdn: int) -> date:
    """epoch + jdn days (the same instant as epoch_ms + jdn * 86_400_000)."""
    return EPOCH + timedelta(days=jdn)


def date_to_jdn(value: date) -> int:
    if isinstance(value, datetime):
        value = value.date()
    return (value - EPOCH).days


def jdn_to_epoch_ms(jdn: int) -> int:
    return EPOCH_MS + jdn * MS_PER_DAY


class DateStrategy(ABC):
    """Maps positions of a decoded per-day sequence to calendar dates."""

    name: str = "base"

    @abstractmethod
    def first_date(self, length: int, header: Optional[RowHeader] = None) -> date:
        """Calendar date of index 0 for a sequence of `length` days."""
        pass

    def dates_for(self, length: int, header: Optional[RowHeader] = None) -> List[date]:
        if length <= 0:
            return []
        first = self.first_date(length, header)
        return [first + timedelta(days=i) for i in range(length)]

    @property
    def reference_date(self) -> Optional[date]:
        return None


class AnchorFromEndStrategy(DateStrategy):
    """
    Heuristic: the last entry is the reference date (today unless supplied),
    and each earlier entry is one day before the next.
    """

    name = "anchor_end"

    def __init__(self, reference_date: Optional[date] = None):
        # Resolved once so every record in a parse shares the same anchor
        self._reference = reference_date or date.today()

    @property
    def reference_date(self) -> date:
        return self._reference

    def first_date(self, length: int, header: Optional[RowHeader] = None) -> date:
        return self._reference - timedelta(days=length - 1)


class AnchorFromStartStrategy(DateStrategy):
    """The first entry falls on a known start date."""

    name = "anchor_start"

    def __init__(self, start_date: date):
        self._start = start_date

    @property
    def reference_date(self) -> date:
        return self._start

    def first_date(self, length: int, header: Optional[RowHeader] = None) -> date:
        return self._start


class HeaderWeekStrategy(DateStrategy):
    """The ROW header's first number is a week count from the 2000-01-01 epoch."""

    name = "header_week"

    def first_date(self, length: int, header: Optional[RowHeader] = None) -> date:
        start_week = header.start if header is not None else 0
        return EPOCH + timedelta(days=start_week * 7)


def build_date_strategy(cfg) -> DateStrategy:
    """Create the strategy named by cfg.calendar.strategy."""
    calendar_cfg = cfg.calendar
    if calendar_cfg.strategy == AnchorFromEndStrategy.name:
        return AnchorFromEndStrategy(calendar_cfg.reference_date)
    if calendar_cfg.strategy == AnchorFromStartStrategy.name:
        if calendar_cfg.reference_date is None:
            raise ConfigError("anchor_start strategy needs calendar.reference_date")
        return AnchorFromStartStrategy(calendar_cfg.reference_date)
    if calendar_cfg.strategy == HeaderWeekStrategy.name:
        return HeaderWeekStrategy()
    raise ConfigError(f"Unknown date strategy: {calendar_cfg.strategy}")
