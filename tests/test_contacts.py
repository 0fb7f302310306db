"""Tests for phone, name and shift-time helpers."""

from amion_sch.services.contacts import (
    format_phone,
    format_shift_span,
    is_generic_title,
    normalize_phone,
    parse_name,
    quarter_hour_to_time,
)


def test_normalize_phone():
    assert normalize_phone("(212) 555-0100") == "2125550100"
    assert normalize_phone("212.555.0100 x12") == "212555010012"
    assert normalize_phone(None) == ""
    assert normalize_phone("") == ""


def test_format_phone():
    assert format_phone("2125550100") == "212-555-0100"
    assert format_phone("1 (212) 555-0100") == "212-555-0100"
    # Anything that is not a ten-digit number is left alone
    assert format_phone("x4410") == "x4410"


def test_parse_name():
    assert parse_name("BANDER, J.") == ("J.", "Bander")
    assert parse_name("Adrian Nugent") == ("Adrian", "Nugent")
    assert parse_name("mary ann SMITH") == ("Mary Ann", "Smith")
    assert parse_name("Smith") == ("", "Smith")
    assert parse_name("") == ("", "")


def test_is_generic_title():
    assert is_generic_title("Cardiology Fellow")
    assert is_generic_title("On-Call MD")
    assert is_generic_title("Night Coverage")
    assert not is_generic_title("Adrian Nugent")
    # "LAST, FIRST" is a person even when a word matches
    assert not is_generic_title("Fellow, Jane")
    assert not is_generic_title("")


def test_is_generic_title_custom_patterns():
    assert is_generic_title("Moonlighter", [r"moonlight"])
    assert not is_generic_title("Cardiology Fellow", [r"moonlight"])


def test_quarter_hour_to_time():
    assert quarter_hour_to_time(28) == "7:00 AM"
    assert quarter_hour_to_time(68) == "5:00 PM"
    assert quarter_hour_to_time(0) == "12:00 AM"
    assert quarter_hour_to_time(50) == "12:30 PM"


def test_format_shift_span():
    assert format_shift_span(28, 68) == "7a-5p"
    assert format_shift_span(0, 96) == "12a-12a"
    assert format_shift_span(48, 96) == "12p-12a"
