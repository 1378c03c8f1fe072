"""
Certifications section extraction.

One certification per line. Recognized shapes:
  AWS Certified Solutions Architect | Amazon Web Services | 2022
  AWS Certified Solutions Architect - Amazon - 2022
  AWS Certified Solutions Architect | 2022
  AWS Certified Solutions Architect | Amazon Web Services
  AWS Certified Solutions Architect (Amazon Web Services, 2022)
  AWS Certified Solutions Architect
"""

import logging
import re
from typing import List, Optional

from resume_structurer.core.config import DEFAULT_CONFIG, ParserConfig
from resume_structurer.core.patterns import DATE_LINE_RE, SINGLE_DATE_LINE_RE
from resume_structurer.core.schemas import CertificationEntry
from resume_structurer.core.text_normalization import content_lines, is_bullet, strip_bullet, trim_separators

logger = logging.getLogger(__name__)

# Tried in order; the first separator producing more than one part wins
CERT_SEPARATORS = (
    re.compile(r"\s*\|\s*"),
    re.compile(r"\s*•\s*"),
    re.compile(r"\s+[-–—]\s+"),
)
# "Name (Issuer, 2022)" / "Name (2022)" / "Name (Issuer)"
PAREN_RE = re.compile(r"^(?P<name>[^()]+?)\s*\((?P<inner>[^()]+)\)\s*$")


def _is_year(text: str) -> bool:
    return bool(SINGLE_DATE_LINE_RE.match(text) or DATE_LINE_RE.match(text))


def _split_parts(text: str) -> List[str]:
    for separator in CERT_SEPARATORS:
        parts = [trim_separators(p) for p in separator.split(text)]
        parts = [p for p in parts if p]
        if len(parts) > 1:
            return parts
    return [text]


def parse_certification_line(text: str) -> Optional[CertificationEntry]:
    """Parse one line into a CertificationEntry, or None for noise (dates, fragments)."""
    line = strip_bullet(text) if is_bullet(text) else text.strip()
    if len(line) < 3 or _is_year(line):
        return None

    parts = _split_parts(line)
    if len(parts) >= 3:
        year_idx = next((i for i in range(len(parts) - 1, 0, -1) if _is_year(parts[i])), None)
        if year_idx is not None:
            issuer = " ".join(p for i, p in enumerate(parts[1:], start=1) if i != year_idx)
            return CertificationEntry(name=parts[0], issuer=issuer, year=parts[year_idx])
        return CertificationEntry(name=parts[0], issuer=parts[1])
    if len(parts) == 2:
        if _is_year(parts[1]):
            return CertificationEntry(name=parts[0], year=parts[1])
        return CertificationEntry(name=parts[0], issuer=parts[1])

    m = PAREN_RE.match(line)
    if m:
        name = m.group("name").strip()
        inner = [p.strip() for p in m.group("inner").split(",") if p.strip()]
        year = next((p for p in inner if _is_year(p)), "")
        issuer = ", ".join(p for p in inner if p != year)
        return CertificationEntry(name=name, issuer=issuer, year=year)

    return CertificationEntry(name=line)


def extract_certifications(content: str, config: ParserConfig = DEFAULT_CONFIG) -> List[CertificationEntry]:
    """Extract certification entries from one Certifications section's content."""
    entries = []
    for line in content_lines(content):
        entry = parse_certification_line(line)
        if entry is not None and entry.name:
            entries.append(entry)
    logger.debug(f"Extracted {len(entries)} certifications")
    return entries
