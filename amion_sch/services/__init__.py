"""Decoding services for .sch documents.

Modules:
- sections: split a document at SECT= markers
- records: NAME= records and the staff/service/schedule entities built from them
- bytestream: ROW/SPID header and blob extraction
- rle: run-length decoding of the base rotation
- patches: weekly override blocks and their overlay
- metadata: document header fields and holidays
- contacts: name, phone and shift-time helpers
- queries: read-only lookups over a ParseResult
"""

__all__ = [
    "sections",
    "records",
    "bytestream",
    "rle",
    "patches",
    "metadata",
    "contacts",
    "queries",
]
