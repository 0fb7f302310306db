"""Decoder for Amion .sch on-call schedule files.

Modules:
- config: decoder configuration (dataclass defaults, JSON or YAML overrides)
- dates: Julian Day Numbers and the swappable schedule date strategies
- domain: parsed entities, reserved codes, SQLAlchemy models and repositories
- services: section/record parsing, blob extraction, RLE and patch decoding
- engine: the AmionParser pipeline and schedule assembly
- io: reading .sch files, CSV export, database import
- validator: post-parse invariant checks and text summaries
- cli: command-line interface entrypoints
"""

from .config import DecoderConfig, load_config
from .domain.entities import ParseResult
from .engine.orchestrator import AmionParser, parse
from .exceptions import BlobDecodeError, ConfigError, DocumentReadError, EmptyDocumentError

__all__ = [
    "AmionParser",
    "parse",
    "DecoderConfig",
    "load_config",
    "ParseResult",
    "EmptyDocumentError",
    "BlobDecodeError",
    "DocumentReadError",
    "ConfigError",
]
