"""Split a .sch document into its named SECT= sections."""

from __future__ import annotations

import logging
import re
from typing import Dict

logger = logging.getLogger(__name__)

SECTION_MARKER = re.compile(r"^[ \t]*SECT=([^\r\n]*?)[ \t]*\r?$", re.MULTILINE)

STAFF = "staff"
SERVICE = "service"
SCHEDULE = "xln"
HOLIDAY = "holiday"
DATA = "data"


def extract_sections(document: str) -> Dict[str, str]:
    """
    Return {section name: body} for every SECT= marker in the document.

    A body runs from the line after its marker up to the next marker or the end
    of the document. Repeated section names are concatenated in document order.
    """
    sections: Dict[str, str] = {}
    if not document:
        return sections

    markers = list(SECTION_MARKER.finditer(document))
    for i, match in enumerate(markers):
        name = match.group(1).strip()
        body_start = match.end()
        if document.startswith("\r\n", body_start):
            body_start += 2
        elif document.startswith("\n", body_start):
            body_start += 1
        body_end = markers[i + 1].start() if i + 1 < len(markers) else len(document)
        body = document[body_start:body_end]

        if name in sections:
            sections[name] = sections[name] + body
        else:
            sections[name] = body

    logger.debug("Found %d sections: %s", len(sections), ", ".join(sections))
    return sections


def get_section(document: str, name: str) -> str:
    """Body of one named section, or "" when the document has none."""
    return extract_sections(document).get(name, "")
