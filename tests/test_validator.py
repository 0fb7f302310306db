"""Tests for post-parse invariant checks and summaries."""

import pytest

from amion_sch.domain.entities import ParseResult, StaffMember
from amion_sch.validator import summarize_result, validate_parse_result


def test_sample_result_is_valid(sample_result):
    validate_parse_result(sample_result)


def test_resolved_sentinel_fails(sample_result):
    row = next(a for a in sample_result.schedule if a.primary_raw == 250)
    row.primary_staff_name = "Somebody"

    with pytest.raises(ValueError) as e:
        validate_parse_result(sample_result)
    assert "sentinel" in str(e.value).lower()


def test_unresolved_row_with_name_fails(sample_result):
    row = next(a for a in sample_result.schedule if a.primary_raw == 9)
    row.primary_staff_name = "Guess"

    with pytest.raises(ValueError):
        validate_parse_result(sample_result)


def test_duplicate_staff_ids_fail(sample_result):
    sample_result.staff.append(StaffMember(id=1, unid=0, name="Copy"))

    with pytest.raises(ValueError) as e:
        validate_parse_result(sample_result)
    assert "duplicate staff" in str(e.value).lower()


def test_duplicate_day_fails(sample_result):
    sample_result.schedule.append(sample_result.schedule[0])

    with pytest.raises(ValueError) as e:
        validate_parse_result(sample_result)
    assert "more than one row" in str(e.value)


def test_summarize_result(sample_result):
    text = summarize_result(sample_result)

    assert "Department: Cardiology" in text
    assert "Cardiology Call" in text
    assert "BANDER, J." in text
    assert "#9" in text
    assert "[unresolved-staff]" in text


def test_summarize_empty_result():
    assert summarize_result(ParseResult()) == "No assignments."
