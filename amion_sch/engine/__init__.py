"""Decoding pipeline: per-record stream decoding and schedule assembly."""

from .assembler import assemble_schedule, resolve_staff
from .orchestrator import AmionParser, build_contact_index, parse

__all__ = [
    "AmionParser",
    "parse",
    "assemble_schedule",
    "resolve_staff",
    "build_contact_index",
]
