from __future__ import annotations

from collections import Counter

from amion_sch.domain.codes import SentinelByte
from amion_sch.domain.entities import ParseResult
from amion_sch.io.export_csv import schedule_to_dataframe


def validate_parse_result(result: ParseResult) -> None:
    """Check the invariants every ParseResult must satisfy; raises ValueError on the first violation."""
    # Sequence ids are unique per table
    for label, items in (("staff", result.staff), ("service", result.services)):
        dupes = [i for i, n in Counter(item.id for item in items).items() if n > 1]
        if dupes:
            raise ValueError(f"Duplicate {label} sequence ids: {sorted(dupes)}")

    # Lookup tables agree with the lists they index
    if set(result.staff_by_id) != {s.id for s in result.staff}:
        raise ValueError("staff_by_id does not match the staff list")
    if set(result.service_by_id) != {s.id for s in result.services}:
        raise ValueError("service_by_id does not match the service list")

    for a in result.schedule:
        # Sentinels never surface as a staff reference
        if SentinelByte.is_empty(a.primary_raw):
            if not a.is_empty or a.primary_staff_id is not None or a.primary_staff_name is not None:
                raise ValueError(f"Sentinel {a.primary_raw} resolved on {a.date} for '{a.service_name}'")
        elif a.primary_staff_id != a.primary_raw:
            raise ValueError(f"Primary id {a.primary_staff_id} differs from raw byte {a.primary_raw} on {a.date}")

        if a.primary_resolved and a.primary_staff_id not in result.staff_by_id:
            raise ValueError(f"Resolved staff id {a.primary_staff_id} missing from staff table")
        if not a.primary_resolved and a.primary_staff_name is not None:
            raise ValueError(f"Unresolved staff id {a.primary_staff_id} carries a name")

        if a.secondary_raw is not None and SentinelByte.is_empty(a.secondary_raw):
            if a.secondary_staff_id is not None or a.secondary_staff_name is not None:
                raise ValueError(f"Split-shift sentinel {a.secondary_raw} resolved on {a.date}")

    # One row per service per day
    seen = Counter((a.service_id, a.service_name, a.date) for a in result.schedule)
    repeated = [k for k, n in seen.items() if n > 1]
    if repeated:
        service_id, name, day = repeated[0]
        raise ValueError(f"Service '{name}' ({service_id}) has more than one row on {day}")


def summarize_result(result: ParseResult) -> str:
    if not result.schedule:
        return "No assignments."
    df = schedule_to_dataframe(result)

    coverage = df.groupby("service_name").agg(
        first_day=("date", "min"),
        last_day=("date", "max"),
        days=("date", "size"),
        empty=("is_empty", "sum"),
        patched=("patched", "sum"),
        ambiguous=("ambiguous", "sum"),
    )
    staffed = df[~df["is_empty"]].copy()
    staffed["staff"] = staffed["primary_staff_name"].fillna(
        "#" + staffed["primary_staff_id"].astype("string")
    )
    days_per_staff = staffed.groupby("staff").size().sort_values(ascending=False)

    lines = []
    if result.metadata.department:
        lines.append(f"Department: {result.metadata.department}")
    lines.append(f"Staff: {len(result.staff)}  Services: {len(result.services)}  Holidays: {len(result.holidays)}")
    lines.append("")
    lines.append("Days per service:")
    lines.append(coverage.to_string())
    lines.append("")
    lines.append("Days per staff (primary):")
    lines.append(days_per_staff.to_string() if not days_per_staff.empty else "(none)")
    if result.warnings:
        lines.append("")
        lines.append("Warnings:")
        lines.extend(f"  [{w.code}] {w.message}" for w in result.warnings)
    return "\n".join(lines)

