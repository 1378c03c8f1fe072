"""
Section boundary detection.

Scans the document line by line and matches each trimmed line against the configured
header phrases. A section's content runs from the line after its header up to the line
before the next recognized header (of any type) or the end of the document, so sections
are ordered and never overlap.
"""

import logging
import re
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from resume_structurer.core.config import DEFAULT_CONFIG, ParserConfig
from resume_structurer.core.schemas import Section, SectionType

logger = logging.getLogger(__name__)


SECTION_NAMES: Dict[SectionType, str] = {
    "experience": "Experience",
    "projects": "Projects",
    "education": "Education",
    "skills": "Skills",
    "certifications": "Certifications",
    "other": "Other",
}


@lru_cache(maxsize=32)
def _compile_header(phrases: Tuple[str, ...]) -> Optional[re.Pattern]:
    """
    Build a full-line matcher for a tuple of header phrases.

    "work experience" -> ^(?:work\\s+experience)\\s*:?$ (case-insensitive), so
    "WORK   EXPERIENCE" and "Work Experience:" match but a bullet mentioning experience does not.
    """
    alternatives = []
    for phrase in sorted(phrases, key=len, reverse=True):
        words = phrase.split()
        if words:
            alternatives.append(r"\s+".join(re.escape(w) for w in words))
    if not alternatives:
        return None
    return re.compile(rf"^(?:{'|'.join(alternatives)})\s*:?$", re.IGNORECASE)


def match_section_header(line: str, config: ParserConfig = DEFAULT_CONFIG) -> Optional[SectionType]:
    """Return the section type whose header matches the trimmed full line, or None."""
    t = (line or "").strip()
    if not t or len(t) > 60:
        return None
    for section_type, phrases in config.section_headers.items():
        pattern = _compile_header(tuple(phrases))
        if pattern and pattern.match(t):
            return section_type
    return None


def _line_offsets(text: str) -> List[Tuple[int, int, int, int, str]]:
    """
    (start, end, byte_start, byte_end, line_text) for every line of text.

    end/byte_end include the newline; byte offsets count UTF-8 bytes.
    """
    out = []
    pos = byte_pos = 0
    for raw in text.splitlines(keepends=True):
        size = len(raw.encode("utf-8"))
        out.append((pos, pos + len(raw), byte_pos, byte_pos + size, raw.rstrip("\r\n")))
        pos += len(raw)
        byte_pos += size
    return out


def identify_sections(text: str, config: ParserConfig = DEFAULT_CONFIG) -> List[Section]:
    """
    Split a resume into sections by header lines.

    Returns sections in document order. Spans are UTF-8 byte offsets into text, so
    content == text.encode("utf-8")[start:end].decode("utf-8"); an empty span is legal (header
    immediately followed by another header). A document with no recognized headers yields [].
    """
    if not text:
        return []

    lines = _line_offsets(text)
    headers: List[Tuple[int, SectionType]] = []
    for idx, line in enumerate(lines):
        section_type = match_section_header(line[4], config)
        if section_type is not None:
            headers.append((idx, section_type))

    sections: List[Section] = []
    for pos, (line_idx, section_type) in enumerate(headers):
        start, byte_start = lines[line_idx][1], lines[line_idx][3]
        if pos + 1 < len(headers):
            next_header = lines[headers[pos + 1][0]]
            end, byte_end = next_header[0], next_header[2]
        else:
            end, byte_end = len(text), lines[-1][3]
        sections.append(
            Section(
                name=SECTION_NAMES[section_type],
                type=section_type,
                content=text[start:end],
                span=(byte_start, byte_end),
            )
        )
        logger.debug(f"Found section: {SECTION_NAMES[section_type]} (line {line_idx + 1}, {end - start} chars)")

    logger.debug(f"Identified {len(sections)} sections: {[s.name for s in sections]}")
    return sections
