"""Tests for Julian Day Numbers and schedule date strategies."""

from datetime import date, datetime, timedelta, timezone

import pytest

from amion_sch.config import DecoderConfig
from amion_sch.dates import (
    EPOCH,
    EPOCH_MS,
    MS_PER_DAY,
    AnchorFromEndStrategy,
    AnchorFromStartStrategy,
    HeaderWeekStrategy,
    build_date_strategy,
    date_to_jdn,
    jdn_to_date,
    jdn_to_epoch_ms,
)
from amion_sch.domain.entities import RowHeader
from amion_sch.exceptions import ConfigError


def test_jdn_9000():
    """JDN 9000 is 9000 days after 2000-01-01, the same instant as epoch_ms + 9000 days."""
    assert jdn_to_date(9000) == EPOCH + timedelta(days=9000)
    assert jdn_to_date(9000) == date(2024, 8, 22)

    ms = jdn_to_epoch_ms(9000)
    assert ms == EPOCH_MS + 9000 * MS_PER_DAY
    assert datetime.fromtimestamp(ms / 1000, tz=timezone.utc).date() == jdn_to_date(9000)


def test_epoch_constants():
    assert EPOCH == date(2000, 1, 1)
    assert EPOCH_MS == 946_684_800_000
    assert jdn_to_date(0) == EPOCH


def test_date_to_jdn_is_inverse():
    for jdn in (0, 1, 59, 60, 366, 9000, 9005):
        assert date_to_jdn(jdn_to_date(jdn)) == jdn
    assert date_to_jdn(datetime(2024, 8, 22, 13, 45)) == 9000


def test_anchor_from_end():
    strategy = AnchorFromEndStrategy(date(2024, 3, 15))

    assert strategy.dates_for(3) == [date(2024, 3, 13), date(2024, 3, 14), date(2024, 3, 15)]
    assert strategy.dates_for(0) == []
    assert strategy.reference_date == date(2024, 3, 15)


def test_anchor_from_end_defaults_to_today():
    strategy = AnchorFromEndStrategy()
    assert strategy.dates_for(1) == [strategy.reference_date]
    assert abs((strategy.reference_date - date.today()).days) <= 1


def test_anchor_from_start():
    strategy = AnchorFromStartStrategy(date(2024, 1, 1))
    dates = strategy.dates_for(32)

    assert dates[0] == date(2024, 1, 1)
    assert dates[-1] == date(2024, 2, 1)


def test_header_week():
    strategy = HeaderWeekStrategy()
    header = RowHeader(start=1300, count=7, direction=1, increment=1, bytes_per_entry=1)

    dates = strategy.dates_for(7, header)
    assert dates[0] == EPOCH + timedelta(days=1300 * 7)
    assert dates[-1] - dates[0] == timedelta(days=6)
    assert strategy.dates_for(1)[0] == EPOCH
    assert strategy.reference_date is None


def test_build_date_strategy():
    cfg = DecoderConfig()
    assert isinstance(build_date_strategy(cfg), AnchorFromEndStrategy)

    cfg.calendar.strategy = "header_week"
    assert isinstance(build_date_strategy(cfg), HeaderWeekStrategy)

    cfg.calendar.strategy = "anchor_start"
    cfg.calendar.reference_date = date(2024, 1, 1)
    strategy = build_date_strategy(cfg)
    assert isinstance(strategy, AnchorFromStartStrategy)
    assert strategy.reference_date == date(2024, 1, 1)


def test_build_date_strategy_errors():
    cfg = DecoderConfig()
    cfg.calendar.strategy = "anchor_start"
    with pytest.raises(ConfigError):
        build_date_strategy(cfg)

    cfg.calendar.strategy = "lunar"
    with pytest.raises(ConfigError):
        build_date_strategy(cfg)
