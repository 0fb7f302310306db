"""Orchestrator - runs the full decoding pipeline over one .sch document."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from amion_sch.config import DecoderConfig
from amion_sch.dates import DateStrategy, build_date_strategy
from amion_sch.domain.codes import NEWEST_FIRST
from amion_sch.domain.entities import (
    DecodeWarning,
    ParseResult,
    RawByteBlock,
    RowHeader,
    ScheduleAssignment,
    ScheduleRecord,
    StaffMember,
)
from amion_sch.exceptions import EmptyDocumentError
from amion_sch.services.bytestream import document_from_bytes
from amion_sch.services.contacts import normalize_phone
from amion_sch.services.metadata import extract_metadata, find_holidays
from amion_sch.services.patches import OverlayResult, find_patches, overlay
from amion_sch.services.records import parse_schedule_records, parse_services, parse_staff
from amion_sch.services.rle import decode_rle
from amion_sch.services.sections import SCHEDULE, SERVICE, STAFF, extract_sections

from .assembler import assemble_schedule

logger = logging.getLogger(__name__)


def build_contact_index(staff: List[StaffMember]) -> Dict[str, StaffMember]:
    """Normalized pager/phone/cell digits -> staff member; the first owner of a number wins."""
    index: Dict[str, StaffMember] = {}
    for member in staff:
        for raw in (member.pager, member.phone, member.cell_phone):
            key = normalize_phone(raw)
            if key and key not in index:
                index[key] = member
    return index


class AmionParser:
    """
    Decodes a .sch document into staff, services, holidays and daily assignments.

    The parser holds configuration only; every call to `parse` builds its
    result and lookup tables from scratch.
    """

    def __init__(self, cfg: DecoderConfig | None = None, date_strategy: DateStrategy | None = None):
        """
        Args:
            cfg: DecoderConfig (defaults when None)
            date_strategy: overrides the strategy named in cfg.calendar
        """
        self.cfg = cfg or DecoderConfig()
        self.date_strategy = date_strategy

    def parse(self, document: str | bytes | None) -> ParseResult:
        """
        Decode a whole document.

        Raises:
            EmptyDocumentError: document is None or empty; every other defect is
                handled per record and reported in `result.warnings`
        """
        if document is None or len(document) == 0:
            raise EmptyDocumentError("Schedule document is empty")
        if isinstance(document, (bytes, bytearray)):
            document = document_from_bytes(bytes(document))

        cfg = self.cfg
        strategy = self.date_strategy or build_date_strategy(cfg)
        sections = extract_sections(document)

        staff = parse_staff(sections.get(STAFF, ""), cfg.role_labels)
        services = parse_services(sections.get(SERVICE, ""))

        result = ParseResult(
            staff=staff,
            services=services,
            holidays=find_holidays(document, sections),
            metadata=extract_metadata(document),
            reference_date=strategy.reference_date,
            staff_by_id={s.id: s for s in staff},
            staff_by_contact=build_contact_index(staff),
            service_by_id={s.id: s for s in services},
        )

        for record in parse_schedule_records(sections.get(SCHEDULE, "")):
            result.schedule.extend(self.decode_record(record, result, strategy))

        logger.info(
            "Parsed %d staff, %d services, %d holidays, %d schedule days (%d warnings)",
            len(result.staff),
            len(result.services),
            len(result.holidays),
            len(result.schedule),
            len(result.warnings),
        )
        return result

    def horizon_for(self, header: RowHeader, base_length: int, has_patches: bool) -> int:
        """Number of days to tile the base rotation across before patches apply."""
        if self.cfg.patches.horizon_days is not None:
            return self.cfg.patches.horizon_days
        if not has_patches:
            return base_length
        return max(base_length, header.count * max(1, abs(header.increment)))

    def decode_stream(
        self,
        header: RowHeader,
        block: RawByteBlock,
        horizon: Optional[int] = None,
    ) -> OverlayResult:
        """RLE base -> direction fix -> tiling -> patch overlay for one ROW/SPID blob."""
        cfg = self.cfg
        rle = decode_rle(block, cfg.rle.header_size, cfg.rle.max_run)

        base = rle.values
        if header.direction == NEWEST_FIRST:
            base = base[::-1]

        patches = []
        if rle.patch_offset is not None:
            patches = find_patches(block, rle.patch_offset, cfg.patches.calibration_constant)

        if horizon is None:
            horizon = self.horizon_for(header, len(base), bool(patches))
        return overlay(base, patches, horizon, cfg.patches.zero_policy)

    def decode_record(
        self,
        record: ScheduleRecord,
        result: ParseResult,
        strategy: DateStrategy,
    ) -> List[ScheduleAssignment]:
        if record.error or record.primary_block is None:
            message = f"Skipping schedule '{record.service_name}': {record.error}"
            logger.warning(message)
            result.warnings.append(DecodeWarning("blob", message, record.service_id))
            return []

        primary = self.decode_stream(record.primary_header, record.primary_block)

        secondary = None
        if record.secondary_block is not None:
            # Both streams cover the same day range
            secondary = self.decode_stream(
                record.secondary_header, record.secondary_block, horizon=len(primary.values)
            )

        ambiguous = list(primary.ambiguous)
        if secondary is not None:
            for i, flag in enumerate(secondary.ambiguous[:len(ambiguous)]):
                ambiguous[i] = ambiguous[i] or flag

        dates = strategy.dates_for(len(primary.values), record.primary_header)
        rows = assemble_schedule(
            record,
            primary.values,
            dates,
            result.staff_by_id,
            result.service_by_id,
            secondary=secondary.values if secondary is not None else None,
            patched=primary.patched,
            ambiguous=ambiguous,
            generic_patterns=self.cfg.generic_title_patterns,
        )

        ambiguous_days = primary.ambiguous_days + (secondary.ambiguous_days if secondary is not None else 0)
        if ambiguous_days:
            result.warnings.append(
                DecodeWarning(
                    "zero-override",
                    f"{ambiguous_days} day(s) of '{record.service_name}' depend on the "
                    f"'{self.cfg.patches.zero_policy.value}' zero-override policy",
                    record.service_id,
                )
            )

        out_of_range = primary.out_of_range + (secondary.out_of_range if secondary is not None else 0)
        if out_of_range:
            message = (
                f"{out_of_range} patch(es) of '{record.service_name}' fall outside its "
                f"{len(primary.values)}-day schedule"
            )
            logger.warning(message)
            result.warnings.append(DecodeWarning("patch-out-of-range", message, record.service_id))

        unresolved = {r.primary_staff_id for r in rows if not r.is_empty and not r.primary_resolved}
        if unresolved:
            result.warnings.append(
                DecodeWarning(
                    "unresolved-staff",
                    f"'{record.service_name}' references unknown staff ids: "
                    + ", ".join(str(i) for i in sorted(unresolved)),
                    record.service_id,
                )
            )

        logger.debug(
            "Decoded '%s': %d days, %d patches applied, %d skipped",
            record.service_name, len(rows), primary.applied, primary.skipped,
        )
        return rows


def parse(
    document: str | bytes | None,
    cfg: DecoderConfig | None = None,
    date_strategy: DateStrategy | None = None,
) -> ParseResult:
    """Convenience function: decode one document with a fresh parser."""
    return AmionParser(cfg, date_strategy).parse(document)
