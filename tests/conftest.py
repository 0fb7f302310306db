"""Pytest configuration and shared fixtures."""

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from amion_sch.config import DecoderConfig
from amion_sch.domain.entities import RawByteBlock
from amion_sch.domain.models import Base
from amion_sch.engine.orchestrator import parse
from amion_sch.services.rle import encode_rle

REFERENCE_DATE = date(2024, 3, 15)


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


def blob_field(key, block, header=(0, 0, 1, 1, 1)):
    """A `ROW =` / `SPID =` line holding `block` (RawByteBlock or byte values) as latin-1 text."""
    if not isinstance(block, RawByteBlock):
        block = RawByteBlock.from_values(block)
    numbers = " ".join(str(n) for n in header)
    return f"{key} ={numbers} <{block.data.decode('latin-1')}>"


def build_sample_document():
    """
    Two staffed services over one week.

    Cardiology Call: [1, 1, 1, 2, 2, 2, 0] with split shift 3 every day.
    EP Lab: [2, 250, 255, 9] where 9 is not in the staff table.
    """
    lines = [
        "SIID=demo-site",
        "DEPT=Cardiology",
        "CONT=Scheduling Office",
        "TIME=Mar 15 10:30 2024",
        "YEAR=2024 7 :2024 2025",
        "JDAY=8801",
        "HOLI=2 0",
        '9000 1 "New Year',
        '9005 1 "Labor Day"',
        "SECT=staff",
        "NAME=BANDER, J.",
        "ID=1",
        "UNID=501",
        "TYPE=3",
        "ABBR=JB",
        "PAGR=(212) 555-0100",
        "PCON=cell\t917 555 0101",
        "NAME=Adrian Nugent",
        "ID=2",
        "UNID=502",
        "TYPE=1",
        "TELE=212-555-0200",
        "EMAL=an@example.org",
        "NAME=Cardiology Fellow",
        "ID=3",
        "UNID=503",
        "TYPE=2",
        "NAME=All Staff",
        "ID=90",
        "TYPE=15",
        "SECT=service",
        "NAME=Cardiology Call",
        "ID=1",
        "UNID=701",
        "TYPE=2",
        "SHTM=28 68 40",
        "NAME=EP Lab",
        "ID=2",
        "UNID=702",
        "TYPE=4",
        "CPAR=1",
        "SECT=xln",
        "NAME=Cardiology Call",
        "ID=1",
        "TYPE=15",
        blob_field("ROW", encode_rle([1, 1, 1, 2, 2, 2, 0]), (0, 7, 1, 1, 1)),
        blob_field("SPID", encode_rle([3] * 7), (0, 7, 1, 1, 1)),
        "NAME=EP Lab",
        "ID=2",
        "TYPE=15",
        blob_field("ROW", encode_rle([2, 250, 255, 9]), (0, 4, 1, 1, 1)),
    ]
    return "\n".join(lines) + "\n"


def build_schedule_document(*records, staff=True):
    """A small staff table plus one xln section made of `records` (lists of lines)."""
    lines = []
    if staff:
        lines += [
            "SECT=staff",
            "NAME=Alpha One",
            "ID=3",
            "TYPE=1",
            "NAME=Beta Five",
            "ID=5",
            "TYPE=3",
            "NAME=Gamma Six",
            "ID=6",
            "TYPE=3",
        ]
    lines.append("SECT=xln")
    for record in records:
        lines += record
    return "\n".join(lines) + "\n"


@pytest.fixture
def reference_date():
    return REFERENCE_DATE


@pytest.fixture
def sample_config():
    """Default decoder config anchored at a fixed date."""
    cfg = DecoderConfig()
    cfg.calendar.reference_date = REFERENCE_DATE
    return cfg


@pytest.fixture
def sample_document():
    return build_sample_document()


@pytest.fixture
def sample_result(sample_document, sample_config):
    return parse(sample_document, sample_config)


@pytest.fixture
def sample_file(tmp_path, sample_document):
    """The sample document written byte-for-byte to disk."""
    path = tmp_path / "demo.sch"
    path.write_bytes(sample_document.encode("latin-1"))
    return path


@pytest.fixture
def db_session():
    """Create in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
