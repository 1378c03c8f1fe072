"""
Projects section extraction.

A small two-state machine (EXPECTING_NAME -> COLLECTING): a short title-cased line opens a
project, technology lines fill its stack, bullet lines its bullets, and everything else its
description. Only ever applied to the content of a Projects section.
"""

import logging
import re
from enum import Enum
from typing import List, Optional

from resume_structurer.core.config import DEFAULT_CONFIG, ParserConfig
from resume_structurer.core.experience_parser import split_dates
from resume_structurer.core.fallback_parser import split_role_company
from resume_structurer.core.patterns import (
    TECH_LINE_RE,
    TECH_MARKER_RE,
    contains_term,
    find_date_range,
    find_terms,
    has_job_title,
    starts_with_action_verb,
)
from resume_structurer.core.schemas import EntryCandidate, ProjectEntry
from resume_structurer.core.text_normalization import (
    content_lines,
    dedupe_casefold,
    is_bullet,
    split_list_tokens,
    starts_capitalized,
    strip_bullet,
    title_case_ratio,
    trim_separators,
)

logger = logging.getLogger(__name__)


class ProjectState(Enum):
    EXPECTING_NAME = "expecting_name"
    COLLECTING = "collecting"


def is_technology_line(text: str) -> bool:
    return bool(TECH_LINE_RE.match(text) or TECH_MARKER_RE.search(text))


def parse_technologies(text: str, config: ParserConfig = DEFAULT_CONFIG) -> List[str]:
    """
    Technologies named on a "Technologies:" style line.

    Union of the comma-separated tokens and the known technology vocabulary,
    de-duplicated case-insensitively.

    Examples:
      'Technologies: React, Node.js' -> ['React', 'Node.js']
      'Built with: React and Node.js' -> ['React', 'Node.js']
    """
    m = TECH_LINE_RE.match(text)
    if m:
        tail = m.group(1)
    else:
        tail = text.split(":", 1)[-1]
    tokens = split_list_tokens(re.sub(r"\s+(?:and|&)\s+", ", ", tail))
    return dedupe_casefold(tokens + find_terms(tail, config.technology_keywords))


def is_project_name(text: str, config: ParserConfig = DEFAULT_CONFIG) -> bool:
    """
    A project heading: short, capitalized, mostly title-case, not a sentence.

    Examples:
      'Weather App' -> True
      'E-commerce Platform | github.com/jane/shop' -> True (the part before " | " is judged)
      'Built using React and Node.js' -> False (action verb)
      'Technologies: React' -> False
    """
    if not text or is_bullet(text) or is_technology_line(text):
        return False
    if not starts_capitalized(text) or starts_with_action_verb(text, config):
        return False
    if text.endswith("."):
        return False
    head = text.split(" | ")[0].strip()
    if len(head) > config.project_name_max_length or len(head.split()) > 8:
        return False
    if has_job_title(text, config) and find_date_range(text):
        return False
    return title_case_ratio(head) >= 0.5


def extract_project_drafts(content: str, config: ParserConfig = DEFAULT_CONFIG) -> List[EntryCandidate]:
    """
    Run the project state machine and return mutable drafts.

    Drafts keep job-like evidence (role title, duration) found inside a project block so the
    Reclassifier can move mis-filed jobs to experience.
    """
    drafts: List[EntryCandidate] = []
    current: Optional[EntryCandidate] = None
    state = ProjectState.EXPECTING_NAME

    for line in content_lines(content):
        if is_technology_line(line):
            if current is not None:
                current.technologies = dedupe_casefold(current.technologies + parse_technologies(line, config))
            continue

        if is_bullet(line):
            if current is not None:
                bullet = strip_bullet(line)
                if len(bullet) >= config.min_bullet_length:
                    current.bullets.append(bullet)
            continue

        # Role line inside a project block: "Software Engineer  Jan 2020 - Present".
        # The block heading stands in for the employer only when it carries a company suffix.
        if current is not None and has_job_title(line, config) and find_date_range(line):
            head, duration = split_dates(line)
            if not current.title:
                title, company = split_role_company(head, config)
                if not company and contains_term(current.name, config.company_suffixes):
                    company = current.name
                current.title = title
                current.duration = duration
                current.company = company
                continue

        if is_project_name(line, config) and (state == ProjectState.EXPECTING_NAME or current.has_content() or current.title):
            name, _, rest = line.partition(" | ")
            current = EntryCandidate(kind="project", origin="section", name=trim_separators(name))
            if rest.strip():
                current.description.append(rest.strip())
            drafts.append(current)
            state = ProjectState.COLLECTING
            continue

        if current is not None:
            current.description.append(line)
        else:
            logger.debug(f"Ignoring line before first project name: '{line[:60]}'")

    logger.debug(f"Extracted {len(drafts)} project drafts")
    return drafts


def build_project(draft: EntryCandidate) -> ProjectEntry:
    return ProjectEntry(
        name=draft.display_name(),
        description=" ".join(draft.description).strip(),
        technologies=dedupe_casefold(draft.technologies),
        bullets=list(draft.bullets),
    )


def extract_projects(content: str, config: ParserConfig = DEFAULT_CONFIG) -> List[ProjectEntry]:
    """Extract project entries from one Projects section's content."""
    return [build_project(d) for d in extract_project_drafts(content, config)]
