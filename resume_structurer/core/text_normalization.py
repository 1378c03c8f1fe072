"""
Text normalization utilities shared by the section extractors.

All helpers are pure and conservative: they trim markers and whitespace but never
rewrite the words themselves, so extracted fields stay faithful to the resume.
"""

import re
from typing import Iterable, List

from resume_structurer.core.patterns import BULLET_RE


# ============================================================================
# Line helpers
# ============================================================================

WHITESPACE_RE = re.compile(r"[ \t ]+")
LIST_SPLIT_RE = re.compile(r"\s*[,;|•·]\s*")
# "Languages: Python, Go" -> label "Languages"
LABEL_PREFIX_RE = re.compile(r"^([A-Za-z][A-Za-z &/+-]{0,40}):\s*(.*)$")
EDGE_SEPARATORS = " \t,;:|–—-•·"


def clean_line(text: str) -> str:
    """Collapse internal runs of spaces/tabs and trim."""
    return WHITESPACE_RE.sub(" ", text or "").strip()


def content_lines(text: str) -> List[str]:
    """Non-empty, whitespace-collapsed lines of a block of text, in order."""
    return [line for line in (clean_line(raw) for raw in (text or "").splitlines()) if line]


def is_bullet(text: str) -> bool:
    return bool(BULLET_RE.match(text or ""))


def strip_bullet(text: str) -> str:
    """
    Remove a leading bullet marker.

    Examples:
      '• Built a billing pipeline' -> 'Built a billing pipeline'
      '- Reduced latency by 30%' -> 'Reduced latency by 30%'
    """
    return BULLET_RE.sub("", text or "", count=1).strip()


def trim_separators(text: str) -> str:
    """Strip separator punctuation left over after splitting a line ("Acme Corp |" -> "Acme Corp")."""
    return (text or "").strip(EDGE_SEPARATORS).strip()


def strip_label(text: str) -> str:
    """Drop a short "Label:" prefix, keeping the value ("Languages: Python, Go" -> "Python, Go")."""
    m = LABEL_PREFIX_RE.match(text or "")
    if m and len(m.group(1).split()) <= 4:
        return m.group(2).strip()
    return (text or "").strip()


def split_list_tokens(text: str) -> List[str]:
    """Split a comma/semicolon/pipe separated list into trimmed tokens."""
    tokens = []
    for part in LIST_SPLIT_RE.split(text or ""):
        token = part.strip().rstrip(".").strip()
        if token:
            tokens.append(token)
    return tokens


def dedupe_casefold(items: Iterable[str]) -> List[str]:
    """Case-insensitive de-duplication preserving the first spelling and insertion order."""
    seen = set()
    out = []
    for item in items:
        key = item.casefold()
        if key and key not in seen:
            seen.add(key)
            out.append(item)
    return out


# ============================================================================
# Casing heuristics
# ============================================================================

MINOR_WORDS = {"a", "an", "and", "the", "of", "for", "in", "on", "at", "to", "with", "by", "or", "&"}


def starts_capitalized(text: str) -> bool:
    t = (text or "").lstrip()
    return bool(t) and (t[0].isupper() or t[0].isdigit())


def title_case_ratio(text: str) -> float:
    """
    Share of significant words that start with an uppercase letter or digit.

    Minor words ("of", "and", ...) are ignored so "Bank of America" scores 1.0.
    """
    words = [w for w in (text or "").split() if w.lower() not in MINOR_WORDS]
    if not words:
        return 0.0
    upper = sum(1 for w in words if w[0].isupper() or w[0].isdigit())
    return upper / len(words)
