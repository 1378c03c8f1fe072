"""
Shared regular expressions and vocabulary matchers.

Date and bullet patterns are module constants; vocabulary matchers are compiled on demand
from the ParserConfig tuples and cached, so a custom configuration costs one compile per list.
"""

import re
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple

from resume_structurer.core.config import ParserConfig


# ===== DATE PATTERNS =====

MONTH = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|Aug(?:ust)?"
    r"|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)\.?"
)
# One point in time: "Jan 2020", "January, 2020", "01/2020", "2020"
DATE_TOKEN = rf"(?:{MONTH},?\s+\d{{4}}|\d{{1,2}}/\d{{4}}|(?:19|20)\d{{2}})"
RANGE_SEP = r"\s*(?:-|–|—|to|until)\s*"
RANGE_END = rf"(?:{DATE_TOKEN}|Present|Current|Now|Today)"

# Examples: "Jan 2020 - Dec 2022", "2019-2021", "March 2021 – Present", "06/2018 to 08/2019"
DATE_RANGE_RE = re.compile(rf"(?<![\w/]){DATE_TOKEN}{RANGE_SEP}{RANGE_END}(?![\w/])", re.IGNORECASE)
DATE_RE = re.compile(rf"(?<![\w/]){DATE_TOKEN}(?![\w/])", re.IGNORECASE)
# A line that is nothing but a date range (optionally parenthesized)
DATE_LINE_RE = re.compile(rf"^\(?\s*{DATE_TOKEN}{RANGE_SEP}{RANGE_END}\s*\)?$", re.IGNORECASE)
# A line that is nothing but one date ("2016", "May 2020", "Expected May 2025")
SINGLE_DATE_LINE_RE = re.compile(rf"^(?:Expected\s+|Graduated\s+)?\(?\s*{DATE_TOKEN}\s*\)?$", re.IGNORECASE)
YEAR_RE = re.compile(r"(?<!\d)(?:19|20)\d{2}(?!\d)")

# Reclassifier evidence: month/year, year range, or an open-ended role
EMPLOYMENT_DATES_RE = re.compile(
    rf"{MONTH}\s+\d{{4}}|\d{{4}}\s*[-–—]\s*\d{{4}}|\bpresent\b|\bcurrent\b",
    re.IGNORECASE,
)


# ===== LINE SHAPE =====

BULLET_RE = re.compile(r"^\s*(?:[•●○◦▪▫■□‣⁃∙·*>+]|-(?!\d)|–(?!\d))\s*")
TECH_LINE_RE = re.compile(
    r"^(?:[•●\-*]\s*)?(?:technolog(?:y|ies)|tech(?:nical)?\s+stack|stack|built\s+with|tools)\s*:\s*(.*)$",
    re.IGNORECASE,
)
# "Technologies:" / "Tech Stack:" anywhere in a line (experience exclusion marker)
TECH_MARKER_RE = re.compile(r"\b(?:technolog(?:y|ies)|tech\s+stack)\s*:", re.IGNORECASE)
COURSEWORK_RE = re.compile(r"^(?:relevant\s+)?course\s*work?\s*:\s*(.*)$", re.IGNORECASE)

# Degree prefixes. Undotted two-letter forms (BS, MA, ...) need "in"/"of" or a comma after them
# so "MS Excel" or "MA" in an address is not read as a degree.
DEGREE_PREFIX_RE = re.compile(
    r"^(?:"
    r"Bachelor(?:'?s)?|Master(?:'?s)?|Ph\.?\s?D\.?|Doctorate|Doctor\s+of|Associate(?:'s)?\s+(?:of|in|degree)"
    r"|M\.?B\.?A\.?|B\.?\s?Tech|M\.?\s?Tech|B\.?Sc\.?|M\.?Sc\.?"
    r"|[BM]\.[SAE]\.?"
    r"|(?-i:[BM][SAE])(?=\s+(?:in|of)\b|\s*,)"
    r")(?![a-z])",
    re.IGNORECASE,
)


# ===== VOCABULARY MATCHING =====

@lru_cache(maxsize=256)
def compile_terms(terms: Tuple[str, ...], plural: bool = False) -> Optional[re.Pattern]:
    """
    Compile a vocabulary into one case-insensitive matcher with token boundaries.

    Boundaries are alphanumeric lookarounds rather than \\b so terms ending in punctuation
    ("C++", "Node.js", "technologies:") still match.
    """
    cleaned = sorted({t.strip() for t in terms if t and t.strip()}, key=len, reverse=True)
    if not cleaned:
        return None
    body = "|".join(re.escape(t) for t in cleaned)
    suffix = "s?" if plural else ""
    return re.compile(rf"(?<![A-Za-z0-9])(?:{body}){suffix}(?![A-Za-z0-9])", re.IGNORECASE)


def contains_term(text: str, terms: Iterable[str], plural: bool = False) -> bool:
    pattern = compile_terms(tuple(terms), plural)
    return bool(text and pattern and pattern.search(text))


def find_terms(text: str, terms: Iterable[str]) -> List[str]:
    """Vocabulary entries present in text, in vocabulary order, using the vocabulary's spelling."""
    found = []
    for term in terms:
        pattern = compile_terms((term,))
        if pattern and pattern.search(text):
            found.append(term)
    return found


def has_job_title(text: str, config: ParserConfig) -> bool:
    return contains_term(text, config.job_title_keywords, plural=True)


def starts_with_action_verb(text: str, config: ParserConfig) -> bool:
    words = text.split()
    if not words:
        return False
    first = words[0].strip(",.;:").lower()
    return first in {v.lower() for v in config.action_verbs}


def has_date(text: str) -> bool:
    return bool(DATE_RE.search(text))


def find_date_range(text: str) -> Optional[re.Match]:
    return DATE_RANGE_RE.search(text)
