"""Tests for read-only queries over a parse result."""

from datetime import date

from amion_sch.domain.entities import StaffMember
from amion_sch.services.queries import (
    assignments_by_date,
    assignments_by_service,
    filter_valid_providers,
    find_staff_by_contact,
    parse_stats,
    schedule_dates,
    schedule_for_date_range,
    schedule_for_staff,
)


def test_schedule_for_date_range(sample_result):
    rows = schedule_for_date_range(sample_result, date(2024, 3, 14), date(2024, 3, 15))
    assert len(rows) == 4

    rows = schedule_for_date_range(sample_result, date(2024, 3, 14), date(2024, 3, 15), service_name="EP")
    assert {a.service_name for a in rows} == {"EP Lab"}
    assert len(rows) == 2

    assert schedule_for_date_range(sample_result, date(2023, 1, 1), date(2023, 12, 31)) == []


def test_schedule_for_staff(sample_result):
    assert len(schedule_for_staff(sample_result, 1)) == 3
    assert len(schedule_for_staff(sample_result, 2)) == 4
    # Split-shift days count too
    assert len(schedule_for_staff(sample_result, 3)) == 7
    assert len(schedule_for_staff(sample_result, 9)) == 1


def test_find_staff_by_contact(sample_result):
    assert find_staff_by_contact(sample_result, "212.555.0100").name == "BANDER, J."
    assert find_staff_by_contact(sample_result, "(917) 555-0101").name == "BANDER, J."
    assert find_staff_by_contact(sample_result, "(212) 555-0200").name == "Adrian Nugent"
    assert find_staff_by_contact(sample_result, "555-9999") is None
    assert find_staff_by_contact(sample_result, "") is None


def test_grouping(sample_result):
    by_service = assignments_by_service(sample_result)
    assert {name: len(rows) for name, rows in by_service.items()} == {"Cardiology Call": 7, "EP Lab": 4}

    by_date = assignments_by_date(sample_result)
    assert len(by_date[date(2024, 3, 15)]) == 2
    assert len(by_date[date(2024, 3, 9)]) == 1

    dates = schedule_dates(sample_result)
    assert dates[0] == date(2024, 3, 9)
    assert dates[-1] == date(2024, 3, 15)
    assert len(dates) == 7


def test_filter_valid_providers():
    staff = [
        StaffMember(id=1, unid=0, name="Adrian Nugent", type_code=1),
        StaffMember(id=2, unid=0, name="X", type_code=1),
        StaffMember(id=3, unid=0, name="Consult Page EP", type_code=3),
        StaffMember(id=4, unid=0, name="Visiting Doctor", type_code=9),
        StaffMember(id=5, unid=0, name="Jane Roe", type_code=6),
    ]
    assert [s.id for s in filter_valid_providers(staff)] == [1, 5]


def test_parse_stats(sample_result):
    stats = parse_stats(sample_result)

    assert stats == {
        "total_staff": 3,
        "valid_providers": 3,
        "by_role": {"Attending": 1, "EP MD": 1, "Fellow": 1},
        "with_cell_phone": 1,
        "with_pager": 1,
        "services": 2,
        "holidays": 2,
        "assignments": 11,
        "empty_days": 3,
        "unresolved_days": 1,
        "patched_days": 0,
        "ambiguous_days": 0,
    }
