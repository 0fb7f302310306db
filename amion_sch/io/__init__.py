"""I/O utilities: reading .sch files, CSV export, and database import."""

from .export_csv import export_schedule_csv, export_staff_csv, schedule_to_dataframe, staff_to_dataframe
from .import_db import store_parse_result
from .reader import read_document

__all__ = [
    "read_document",
    "export_schedule_csv",
    "export_staff_csv",
    "schedule_to_dataframe",
    "staff_to_dataframe",
    "store_parse_result",
]
