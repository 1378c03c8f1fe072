"""
Skills section extraction.

Skills come from three places, merged in this order and de-duplicated case-insensitively:
  1. separator lists ("Python, Go, SQL", "Languages: Python | Go")
  2. short single-skill bullet lines ("- Kubernetes")
  3. the configured skill vocabulary matched anywhere in the section
"""

import logging
from typing import List

from resume_structurer.core.config import DEFAULT_CONFIG, ParserConfig
from resume_structurer.core.patterns import find_terms
from resume_structurer.core.text_normalization import (
    LIST_SPLIT_RE,
    content_lines,
    dedupe_casefold,
    is_bullet,
    split_list_tokens,
    strip_bullet,
    strip_label,
)

logger = logging.getLogger(__name__)

MAX_SKILL_LENGTH = 50
MAX_BULLET_SKILL_WORDS = 4


def _valid_token(token: str) -> bool:
    return 2 <= len(token) < MAX_SKILL_LENGTH


def skills_from_line(text: str) -> List[str]:
    """
    Skill tokens on one line of a Skills block.

    Examples:
      'Languages: Python, Go, SQL' -> ['Python', 'Go', 'SQL']
      '- Kubernetes' -> ['Kubernetes']
      'Comfortable presenting to executive audiences every week' -> []
    """
    body = strip_bullet(text) if is_bullet(text) else text
    value = strip_label(body)
    if LIST_SPLIT_RE.search(value):
        return [t for t in split_list_tokens(value) if _valid_token(t)]
    if is_bullet(text) or value != body:
        # One skill per bullet, or "Label: Skill"
        if value and len(value.split()) <= MAX_BULLET_SKILL_WORDS and _valid_token(value):
            return [value.rstrip(".")]
    return []


def extract_skills(content: str, config: ParserConfig = DEFAULT_CONFIG) -> List[str]:
    """Extract a flat, de-duplicated skill list from one Skills section's content."""
    tokens: List[str] = []
    for line in content_lines(content):
        tokens.extend(skills_from_line(line))
    tokens.extend(find_terms(content or "", config.skill_keywords))
    skills = dedupe_casefold(tokens)
    logger.debug(f"Extracted {len(skills)} skills")
    return skills
