"""
Education parsing module for extracting education entries from an Education section.

Deterministic and rule-based: a degree line opens an entry, and the lines that follow fill
in the institution, year and coursework until the next degree line.
"""

import logging
import re
from typing import List, Optional, Tuple

from resume_structurer.core.config import DEFAULT_CONFIG, ParserConfig
from resume_structurer.core.patterns import (
    COURSEWORK_RE,
    DATE_LINE_RE,
    DATE_RANGE_RE,
    DATE_RE,
    DEGREE_PREFIX_RE,
    SINGLE_DATE_LINE_RE,
    YEAR_RE,
)
from resume_structurer.core.schemas import EducationEntry
from resume_structurer.core.text_normalization import (
    content_lines,
    is_bullet,
    split_list_tokens,
    starts_capitalized,
    strip_bullet,
    trim_separators,
)

logger = logging.getLogger(__name__)


# ===== INSTITUTION KEYWORDS =====
# Used to recognize an institution line written before its degree line

INSTITUTION_KEYWORDS = {
    "university",
    "college",
    "institute",
    "school",
    "academy",
    "polytechnic",
    "conservatory",
}

# "Stanford University, 2018 - 2022" / "MIT | May 2020"
INSTITUTION_DATE_RE = re.compile(
    rf"^(?P<institution>.+?)\s*[,|–—-]?\s*\(?(?P<date>{DATE_RANGE_RE.pattern}|{DATE_RE.pattern})\)?\s*$",
    re.IGNORECASE,
)


def is_degree_line(text: str) -> bool:
    """
    Check whether a line opens an education entry.

    Examples:
      'Bachelor of Science in Computer Science' -> True
      'B.S. Computer Science, 2020' -> True
      'MS in Data Science' -> True
      'MS Excel, Word' -> False
    """
    return bool(DEGREE_PREFIX_RE.match(strip_bullet(text) if is_bullet(text) else text))


def is_institution_line(text: str) -> bool:
    lowered = text.lower()
    return starts_capitalized(text) and any(re.search(rf"\b{kw}\b", lowered) for kw in INSTITUTION_KEYWORDS)


def split_trailing_year(text: str) -> Tuple[str, str]:
    """
    Move a trailing year (or date range) off a degree line.

    Examples:
      'B.S. Computer Science, 2020' -> ('B.S. Computer Science', '2020')
      'Master of Science (2019 - 2021)' -> ('Master of Science', '2019 - 2021')
      'Bachelor of Arts' -> ('Bachelor of Arts', '')
    """
    m = re.search(rf"\(?\s*(?:{DATE_RANGE_RE.pattern}|{DATE_RE.pattern})\s*\)?\s*$", text, re.IGNORECASE)
    if not m or m.start() == 0:
        return text.strip(), ""
    year = m.group(0).strip().strip("()").strip()
    return trim_separators(text[:m.start()]), year


def split_institution_date(text: str) -> Optional[Tuple[str, str]]:
    """'Stanford University, 2018 - 2022' -> ('Stanford University', '2018 - 2022')"""
    m = INSTITUTION_DATE_RE.match(text)
    if not m:
        return None
    institution = trim_separators(m.group("institution"))
    if not institution or not YEAR_RE.search(m.group("date")):
        return None
    return institution, m.group("date").strip()


class _EducationDraft:
    def __init__(self, degree: str, year: str = "", institution: str = ""):
        self.degree = degree
        self.institution = institution
        self.year = year
        self.coursework: List[str] = []

    def to_entry(self) -> EducationEntry:
        return EducationEntry(
            degree=self.degree,
            institution=self.institution,
            year=self.year,
            coursework=self.coursework,
        )


def _apply_detail_line(draft: _EducationDraft, text: str) -> None:
    """Fill the first empty field a non-degree line can provide."""
    coursework = COURSEWORK_RE.match(text)
    if coursework:
        draft.coursework.extend(split_list_tokens(coursework.group(1)))
        return

    if SINGLE_DATE_LINE_RE.match(text) or DATE_LINE_RE.match(text):
        if not draft.year:
            m = DATE_RANGE_RE.search(text) or DATE_RE.search(text)
            draft.year = m.group(0).strip() if m else text.strip()
        return

    inst_date = split_institution_date(text)
    if inst_date and not draft.institution:
        draft.institution, year = inst_date
        if not draft.year:
            draft.year = year
        return

    if not draft.institution and len(text) > 5:
        draft.institution = trim_separators(text)


def extract_education(content: str, config: ParserConfig = DEFAULT_CONFIG) -> List[EducationEntry]:
    """
    Extract education entries from one Education section's content.

    Layouts handled:
      Degree / Institution / Year
      Degree, Year / Institution, Year range
      Institution / Degree (institution-first)
      'Relevant Coursework: A, B, C' lines anywhere inside an entry
    """
    entries: List[EducationEntry] = []
    current: Optional[_EducationDraft] = None
    pending_institution = ""

    for raw in content_lines(content):
        text = strip_bullet(raw) if is_bullet(raw) else raw

        if is_degree_line(text):
            if current is not None:
                entries.append(current.to_entry())
            degree, year = split_trailing_year(text)
            current = _EducationDraft(degree=degree, year=year)
            if pending_institution:
                inst_date = split_institution_date(pending_institution)
                if inst_date:
                    current.institution = inst_date[0]
                    current.year = current.year or inst_date[1]
                else:
                    current.institution = pending_institution
                pending_institution = ""
            continue

        if current is None:
            # Institution-first layout: remember the line for the degree that follows
            if is_institution_line(text):
                pending_institution = text
            continue

        # A second institution line after a complete entry starts the next (institution-first) entry
        if current.institution and is_institution_line(text) and not COURSEWORK_RE.match(text):
            entries.append(current.to_entry())
            current = None
            pending_institution = text
            continue

        _apply_detail_line(current, text)

    if current is not None:
        entries.append(current.to_entry())

    logger.debug(f"Extracted {len(entries)} education entries")
    return entries
