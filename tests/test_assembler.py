"""Tests for joining decoded ids with the staff and service tables."""

from datetime import date, timedelta

from amion_sch.domain.entities import ScheduleRecord, Service, StaffMember
from amion_sch.engine.assembler import assemble_schedule, resolve_staff

STAFF = {
    1: StaffMember(id=1, unid=501, name="BANDER, J."),
    2: StaffMember(id=2, unid=502, name="Night Fellow"),
}
SERVICES = {7: Service(id=7, unid=700, name="EP Lab")}


def _dates(n):
    return [date(2024, 3, 1) + timedelta(days=i) for i in range(n)]


def test_resolve_staff():
    for sentinel in (0, 250, 255, None):
        ref = resolve_staff(sentinel, STAFF)
        assert ref.is_empty
        assert ref.staff_id is None
        assert ref.name is None

    known = resolve_staff(1, STAFF)
    assert (known.staff_id, known.name, known.resolved) == (1, "BANDER, J.", True)

    unknown = resolve_staff(9, STAFF)
    assert (unknown.staff_id, unknown.name, unknown.resolved, unknown.is_empty) == (9, None, False, False)


def test_assemble_schedule():
    record = ScheduleRecord(service_id=7, service_name="EP Lab")
    rows = assemble_schedule(record, [1, 0, 250, 255, 9], _dates(5), STAFF, SERVICES)

    assert [r.date for r in rows] == _dates(5)
    assert all(r.service_resolved for r in rows)

    assert rows[0].primary_staff_name == "BANDER, J."
    assert rows[0].primary_resolved

    # Sentinels keep the raw byte but never a staff reference
    for row, raw in zip(rows[1:4], (0, 250, 255)):
        assert row.is_empty
        assert row.primary_raw == raw
        assert row.primary_staff_id is None
        assert row.primary_staff_name is None

    assert rows[4].primary_staff_id == 9
    assert rows[4].primary_staff_name is None
    assert not rows[4].primary_resolved
    assert not rows[4].is_empty


def test_secondary_resolves_independently():
    record = ScheduleRecord(service_id=7, service_name="EP Lab")
    rows = assemble_schedule(record, [1, 1, 1], _dates(3), STAFF, SERVICES, secondary=[2, 0])

    assert rows[0].secondary_staff_name == "Night Fellow"
    assert rows[0].secondary_resolved
    assert rows[1].secondary_raw == 0
    assert rows[1].secondary_staff_id is None
    assert rows[2].secondary_raw is None


def test_unknown_service_and_flags():
    record = ScheduleRecord(service_id=99, service_name="Cardiology Fellow")
    rows = assemble_schedule(
        record, [1, 2], _dates(2), STAFF, SERVICES, patched=[True, False], ambiguous=[False, True]
    )

    assert not any(r.service_resolved for r in rows)
    assert [r.patched for r in rows] == [True, False]
    assert [r.ambiguous for r in rows] == [False, True]
    assert all(r.is_generic_title for r in rows)


def test_generic_staff_name_is_flagged():
    record = ScheduleRecord(service_id=7, service_name="EP Lab")
    rows = assemble_schedule(record, [1, 2], _dates(2), STAFF, SERVICES)
    assert [r.is_generic_title for r in rows] == [False, True]


def test_rows_stop_at_last_date():
    record = ScheduleRecord(service_id=7, service_name="EP Lab")
    rows = assemble_schedule(record, [1, 1, 1], _dates(2), STAFF, SERVICES)
    assert len(rows) == 2
