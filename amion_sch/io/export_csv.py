"""CSV export of parse results."""

from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path

import pandas as pd

from amion_sch.domain.entities import ParseResult

logger = logging.getLogger(__name__)

SCHEDULE_COLUMNS = [
    "date",
    "service_id",
    "service_name",
    "primary_staff_id",
    "primary_staff_name",
    "secondary_staff_id",
    "secondary_staff_name",
    "is_empty",
    "primary_raw",
    "secondary_raw",
    "primary_resolved",
    "secondary_resolved",
    "service_resolved",
    "patched",
    "ambiguous",
    "is_generic_title",
]

STAFF_COLUMNS = [
    "id",
    "unid",
    "name",
    "first_name",
    "last_name",
    "abbreviation",
    "type_code",
    "role_label",
    "pager",
    "phone",
    "cell_phone",
    "email",
]


def schedule_to_dataframe(result: ParseResult) -> pd.DataFrame:
    """One row per decoded day and service, sorted by date then service."""
    if not result.schedule:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS)

    df = pd.DataFrame([asdict(a) for a in result.schedule], columns=SCHEDULE_COLUMNS)
    df["date"] = pd.to_datetime(df["date"]).dt.date
    # Keep ids integral even when some rows have none
    for col in ["primary_staff_id", "secondary_staff_id", "secondary_raw"]:
        df[col] = df[col].astype("Int64")
    df.sort_values(["date", "service_name"], inplace=True, kind="stable")
    df.reset_index(drop=True, inplace=True)
    return df


def staff_to_dataframe(result: ParseResult) -> pd.DataFrame:
    if not result.staff:
        return pd.DataFrame(columns=STAFF_COLUMNS)
    rows = [{col: getattr(member, col) for col in STAFF_COLUMNS} for member in result.staff]
    return pd.DataFrame(rows, columns=STAFF_COLUMNS)


def export_schedule_csv(result: ParseResult, csv_path: str | Path) -> int:
    """
    Export decoded assignments to CSV.

    Args:
        result: ParseResult from amion_sch.parse
        csv_path: Output path

    Returns:
        Number of rows written
    """
    df = schedule_to_dataframe(result)
    df.to_csv(csv_path, index=False)
    logger.info("Exported %d assignments to %s", len(df), csv_path)
    return len(df)


def export_staff_csv(result: ParseResult, csv_path: str | Path) -> int:
    """
    Export the staff table to CSV.

    Returns:
        Number of rows written
    """
    df = staff_to_dataframe(result)
    df.to_csv(csv_path, index=False)
    logger.info("Exported %d staff to %s", len(df), csv_path)
    return len(df)
