"""Decoder configuration: dataclass defaults, optionally overridden from JSON or YAML."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from amion_sch.domain.codes import ZeroOverridePolicy
from amion_sch.exceptions import ConfigError
from amion_sch.services.contacts import GENERIC_TITLE_PATTERNS

DATE_STRATEGIES = ("anchor_end", "anchor_start", "header_week")

# Staff TYPE codes to role labels
DEFAULT_ROLE_LABELS: Dict[int, str] = {
    1: "EP MD",
    2: "Fellow",
    3: "Attending",
    4: "Service",
    5: "NP",
    6: "PA",
}


@dataclass
class RleConfig:
    header_size: int = 2
    max_run: int = 50


@dataclass
class PatchConfig:
    # Added to a patch's raw week byte; found empirically, check against a known schedule
    calibration_constant: int = 31
    zero_policy: ZeroOverridePolicy = ZeroOverridePolicy.INHERIT
    # None: derive from the ROW header (count * |increment|) or the base length
    horizon_days: Optional[int] = None


@dataclass
class CalendarConfig:
    strategy: str = "anchor_end"
    reference_date: Optional[date] = None


@dataclass
class DecoderConfig:
    rle: RleConfig = field(default_factory=RleConfig)
    patches: PatchConfig = field(default_factory=PatchConfig)
    calendar: CalendarConfig = field(default_factory=CalendarConfig)
    role_labels: Dict[int, str] = field(default_factory=lambda: dict(DEFAULT_ROLE_LABELS))
    generic_title_patterns: List[str] = field(default_factory=lambda: list(GENERIC_TITLE_PATTERNS))


def _parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as e:
        raise ConfigError(f"Invalid calendar.reference_date: {value!r}") from e


def _as_int(section: str, key: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{section}.{key} must be an integer, got {value!r}") from e


def config_from_dict(raw: Dict[str, Any] | None) -> DecoderConfig:
    raw = raw or {}
    cfg = DecoderConfig()

    rle = raw.get("rle", {}) or {}
    if "header_size" in rle:
        cfg.rle.header_size = _as_int("rle", "header_size", rle["header_size"])
    if "max_run" in rle:
        cfg.rle.max_run = _as_int("rle", "max_run", rle["max_run"])
    if cfg.rle.header_size < 0 or not 1 <= cfg.rle.max_run <= 255:
        raise ConfigError("rle.header_size must be >= 0 and rle.max_run within 1..255")

    patches = raw.get("patches", {}) or {}
    if "calibration_constant" in patches:
        cfg.patches.calibration_constant = _as_int(
            "patches", "calibration_constant", patches["calibration_constant"]
        )
    if "zero_policy" in patches:
        try:
            cfg.patches.zero_policy = ZeroOverridePolicy.coerce(patches["zero_policy"])
        except ValueError as e:
            raise ConfigError(f"Unknown patches.zero_policy: {patches['zero_policy']!r}") from e
    if patches.get("horizon_days") is not None:
        cfg.patches.horizon_days = _as_int("patches", "horizon_days", patches["horizon_days"])
        if cfg.patches.horizon_days <= 0:
            raise ConfigError("patches.horizon_days must be positive")

    calendar = raw.get("calendar", {}) or {}
    if "strategy" in calendar:
        cfg.calendar.strategy = str(calendar["strategy"]).strip().lower()
    if cfg.calendar.strategy not in DATE_STRATEGIES:
        raise ConfigError(f"calendar.strategy must be one of {', '.join(DATE_STRATEGIES)}")
    cfg.calendar.reference_date = _parse_date(calendar.get("reference_date"))
    if cfg.calendar.strategy == "anchor_start" and cfg.calendar.reference_date is None:
        raise ConfigError("calendar.strategy 'anchor_start' requires calendar.reference_date")

    if "role_labels" in raw:
        cfg.role_labels = {
            _as_int("role_labels", str(k), k): str(v) for k, v in (raw["role_labels"] or {}).items()
        }
    if "generic_title_patterns" in raw:
        cfg.generic_title_patterns = [str(p) for p in raw["generic_title_patterns"] or []]

    return cfg


def load_config(path: str | Path | None = None) -> DecoderConfig:
    """Load a JSON (.json) or YAML (anything else) config file; None gives the defaults."""
    if path is None:
        return DecoderConfig()

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    try:
        if path.suffix.lower() == ".json":
            raw = json.loads(text)
        else:
            raw = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot parse config file {path}: {e}") from e

    if raw is not None and not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return config_from_dict(raw)
