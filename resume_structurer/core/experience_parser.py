"""
Experience section extraction.

Lines of an Experience section are fed through an explicit finite-state machine:

    EXPECTING_COMPANY -> EXPECTING_POSITION -> EXPECTING_DATES -> COLLECTING_BULLETS

Each line is first given a role (company, position, bare dates, bullet, excluded, plain text)
by layered heuristics; the (state, role) pair then selects a handler from TRANSITIONS. A new
company line always flushes the entry being built, even in the middle of its bullets.

Supported layouts:
  Company / Title + dates / bullets        Acme Corp
                                           Software Engineer    Jan 2020 - Dec 2022
                                           - Built a billing pipeline
  Company / Title / dates / bullets
  Company + dates / Title / bullets        Acme Corp    2019 - 2021
  Title / Company / dates / bullets        (title-first)
  Several roles under one company          a second "Title + dates" line inside the bullets

Only complete entries (company, title, duration, at least one bullet) are emitted. Incomplete
drafts are returned separately so the Reclassifier can decide whether they are projects.
"""

import logging
import re
from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

from resume_structurer.core.config import DEFAULT_CONFIG, ParserConfig
from resume_structurer.core.fallback_parser import split_role_company
from resume_structurer.core.patterns import (
    DATE_LINE_RE,
    TECH_LINE_RE,
    TECH_MARKER_RE,
    contains_term,
    find_date_range,
    has_date,
    has_job_title,
    starts_with_action_verb,
)
from resume_structurer.core.schemas import EntryCandidate, EntryOrigin, ExperienceEntry
from resume_structurer.core.section_identifier import match_section_header
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


class State(Enum):
    EXPECTING_COMPANY = "expecting_company"
    EXPECTING_POSITION = "expecting_position"
    EXPECTING_DATES = "expecting_dates"
    COLLECTING_BULLETS = "collecting_bullets"


class Role(Enum):
    COMPANY = "company"
    POSITION = "position"
    DATES = "dates"
    BULLET = "bullet"
    TEXT = "text"
    EXCLUDED = "excluded"


class LineClassification(NamedTuple):
    role: Role
    text: str
    title: str = ""
    company: str = ""
    duration: str = ""


class ExperienceExtraction(NamedTuple):
    entries: List[ExperienceEntry]
    rejected: List[EntryCandidate]  # Incomplete drafts, for the Reclassifier only
    complete: List[EntryCandidate]  # Drafts behind `entries`, same order, with technologies kept for scoring


# ===== LINE HEURISTICS =====

def split_dates(text: str) -> Tuple[str, str]:
    """
    Split a line at its date range.

    Examples:
      'Software Engineer Jan 2020 - Dec 2022' -> ('Software Engineer', 'Jan 2020 - Dec 2022')
      'Software Engineer (2019-2021)' -> ('Software Engineer', '2019-2021')
      'Software Engineer' -> ('Software Engineer', '')
    """
    m = find_date_range(text)
    if not m:
        return text.strip(), ""
    before = trim_separators(text[:m.start()].rstrip().rstrip("("))
    after = trim_separators(text[m.end():].lstrip().lstrip(")"))
    return (before or after), m.group(0).strip()


def is_excluded_line(text: str, config: ParserConfig) -> bool:
    """
    Lines that end the current entry: headers of other sections, technology-list markers,
    and (non-bullet) lines carrying academic markers such as University/Degree/Certificate.
    """
    if match_section_header(text, config) is not None:
        return True
    if TECH_MARKER_RE.search(text) or TECH_LINE_RE.match(text):
        return True
    if not is_bullet(text) and contains_term(text, config.academic_markers):
        return True
    return False


def looks_like_bullet_text(text: str, config: ParserConfig) -> bool:
    """An unmarked line that reads like an accomplishment (inside a confirmed entry only)."""
    if len(text) < config.min_unmarked_bullet_length:
        return False
    return starts_with_action_verb(text, config) or contains_term(text, config.work_content_nouns)


def looks_like_name_line(text: str, config: ParserConfig, max_length: int) -> bool:
    """Short, capitalized, title-cased, not a sentence and not an accomplishment."""
    if not text or len(text) >= max_length:
        return False
    if not starts_capitalized(text) or starts_with_action_verb(text, config):
        return False
    if text.endswith(".") and len(text.split()) > 4:
        return False
    return title_case_ratio(text) >= 0.5


def company_candidate(text: str, next_text: str, config: ParserConfig) -> Optional[Tuple[str, str]]:
    """
    Decide whether a line names a company. Returns (company, duration) or None.

    The decisive signal is the lookahead: the next line must hold a job title or a date range.
    That is what separates "Acme Corp" from "Developed scalable systems".
    """
    if is_bullet(text) or not looks_like_name_line(text, config, config.company_max_length):
        return None
    if not next_text or is_bullet(next_text) or starts_with_action_verb(next_text, config):
        return None

    next_has_title = has_job_title(next_text, config)
    next_has_dates = find_date_range(next_text) is not None
    has_suffix = contains_term(text, config.company_suffixes)

    m = find_date_range(text)
    if m:
        # "Acme Corp    2019 - 2021" followed by a title line
        head, duration = split_dates(text)
        if not head or not next_has_title:
            return None
        if has_job_title(head, config) and not has_suffix:
            return None
        return trim_separators(head.split(" | ")[0]), duration

    if has_date(text):
        return None
    if has_job_title(text, config) and not has_suffix:
        return None
    if not (next_has_title or next_has_dates):
        return None
    return trim_separators(text.split(" | ")[0]), ""


def classify_line(lines: List[str], idx: int, state: State, config: ParserConfig) -> LineClassification:
    """Assign a role to lines[idx] given the machine state. Exclusion is always checked first."""
    text = lines[idx]
    next_text = lines[idx + 1] if idx + 1 < len(lines) else ""

    if is_excluded_line(text, config):
        return LineClassification(Role.EXCLUDED, text)
    if is_bullet(text):
        return LineClassification(Role.BULLET, strip_bullet(text))
    if DATE_LINE_RE.match(text):
        return LineClassification(Role.DATES, text, duration=find_date_range(text).group(0).strip())

    # Right after a company line a job title is the position, even if the lookahead
    # would also accept it as a company.
    if state == State.EXPECTING_POSITION and has_job_title(text, config) and not starts_with_action_verb(text, config):
        title, duration = split_dates(text)
        return LineClassification(Role.POSITION, text, title=title, duration=duration)

    candidate = company_candidate(text, next_text, config)
    if candidate:
        company, duration = candidate
        return LineClassification(Role.COMPANY, text, company=company, duration=duration)

    if has_job_title(text, config) and not starts_with_action_verb(text, config) and len(text) < 120:
        title, duration = split_dates(text)
        if state == State.EXPECTING_COMPANY and title:
            return LineClassification(Role.POSITION, text, title=title, duration=duration)
        # A further role under the same employer, dates inline or on the next line
        if state == State.COLLECTING_BULLETS and title and (duration or DATE_LINE_RE.match(next_text)):
            return LineClassification(Role.POSITION, text, title=title, duration=duration)

    if state != State.EXPECTING_COMPANY and looks_like_bullet_text(text, config):
        return LineClassification(Role.BULLET, text)
    return LineClassification(Role.TEXT, text)


# ===== STATE MACHINE =====

class ExperienceStateMachine:
    """
    Runs one pass over the lines of an experience block.

    TRANSITIONS maps (state, role) to a handler; each handler returns the next state.
    Pairs missing from the table leave the state unchanged. EXCLUDED lines always terminate.
    """

    TRANSITIONS: Dict[Tuple[State, Role], str] = {
        (State.EXPECTING_COMPANY, Role.COMPANY): "_start_company",
        (State.EXPECTING_COMPANY, Role.POSITION): "_start_titled",
        (State.EXPECTING_COMPANY, Role.TEXT): "_start_unanchored",

        (State.EXPECTING_POSITION, Role.COMPANY): "_start_company",
        (State.EXPECTING_POSITION, Role.POSITION): "_set_position",
        (State.EXPECTING_POSITION, Role.DATES): "_set_dates",
        (State.EXPECTING_POSITION, Role.BULLET): "_add_bullet",

        (State.EXPECTING_DATES, Role.COMPANY): "_start_company",
        (State.EXPECTING_DATES, Role.DATES): "_set_dates",
        (State.EXPECTING_DATES, Role.BULLET): "_add_bullet",

        (State.COLLECTING_BULLETS, Role.COMPANY): "_start_company",
        (State.COLLECTING_BULLETS, Role.POSITION): "_start_role",
        (State.COLLECTING_BULLETS, Role.DATES): "_set_dates",
        (State.COLLECTING_BULLETS, Role.BULLET): "_add_bullet",
        (State.COLLECTING_BULLETS, Role.TEXT): "_add_description",
    }

    def __init__(self, config: ParserConfig = DEFAULT_CONFIG, origin: EntryOrigin = "section"):
        self.config = config
        self.origin = origin
        self.state = State.EXPECTING_COMPANY
        self.draft: Optional[EntryCandidate] = None
        self.entries: List[ExperienceEntry] = []
        self.rejected: List[EntryCandidate] = []
        self.complete: List[EntryCandidate] = []

    def run(self, lines: List[str]) -> ExperienceExtraction:
        for idx in range(len(lines)):
            line = classify_line(lines, idx, self.state, self.config)
            self.feed(line)
        self.flush()
        return ExperienceExtraction(self.entries, self.rejected, self.complete)

    def feed(self, line: LineClassification) -> State:
        if line.role == Role.EXCLUDED:
            handler_name = "_terminate"
        else:
            handler_name = self.TRANSITIONS.get((self.state, line.role))
        if handler_name is None:
            return self.state
        handler: Callable[[LineClassification], State] = getattr(self, handler_name)
        self.state = handler(line)
        return self.state

    def flush(self) -> None:
        """Emit the current draft if it satisfies company + title + duration + >=1 bullet."""
        draft, self.draft = self.draft, None
        if draft is None:
            return
        if draft.is_complete_experience():
            self.entries.append(
                ExperienceEntry(
                    title=draft.title,
                    company=draft.company,
                    duration=draft.duration,
                    bullets=list(draft.bullets),
                )
            )
            self.complete.append(draft)
        elif draft.has_content():
            logger.debug(f"Incomplete experience draft held for reclassification: '{draft.display_name()}'")
            self.rejected.append(draft)
        else:
            logger.debug(f"Discarding experience fragment: title='{draft.title}', company='{draft.company}'")

    def _new_draft(self, **fields) -> EntryCandidate:
        self.flush()
        self.draft = EntryCandidate(kind="experience", origin=self.origin, **fields)
        return self.draft

    def _after_header(self) -> State:
        if not self.draft.title:
            return State.EXPECTING_POSITION
        return State.COLLECTING_BULLETS if self.draft.duration else State.EXPECTING_DATES

    # --- handlers ---

    def _start_company(self, line: LineClassification) -> State:
        draft = self.draft
        # Title-first layout: "Software Engineer" then "Acme Corp"
        if draft and draft.title and not draft.company and not draft.bullets and not draft.description:
            draft.company = line.company
            if line.duration and not draft.duration:
                draft.duration = line.duration
            return self._after_header()
        self._new_draft(company=line.company, duration=line.duration)
        return State.EXPECTING_POSITION

    def _start_titled(self, line: LineClassification) -> State:
        title, company = split_role_company(line.title, self.config)
        self._new_draft(title=title, company=company, duration=line.duration)
        return self._after_header()

    def _start_role(self, line: LineClassification) -> State:
        # "Data Analyst | Globex Inc" names its own employer; a bare title stays with the current one
        title, company = split_role_company(line.title, self.config)
        if not company and self.draft:
            company = self.draft.company
        self._new_draft(company=company, title=title, duration=line.duration)
        return self._after_header()

    def _start_unanchored(self, line: LineClassification) -> State:
        if not looks_like_name_line(line.text, self.config, self.config.project_name_max_length):
            return self.state
        self._new_draft(title=line.text)
        return State.COLLECTING_BULLETS

    def _set_position(self, line: LineClassification) -> State:
        self.draft.title = line.title
        if line.duration:
            self.draft.duration = line.duration
        return self._after_header()

    def _set_dates(self, line: LineClassification) -> State:
        if self.draft is None:
            return self.state
        if not self.draft.duration:
            self.draft.duration = line.duration
        return self._after_header()

    def _add_bullet(self, line: LineClassification) -> State:
        if self.draft is None:
            return self.state
        if len(line.text) >= self.config.min_bullet_length:
            self.draft.bullets.append(line.text)
        return State.COLLECTING_BULLETS

    def _add_description(self, line: LineClassification) -> State:
        draft = self.draft
        if draft is None:
            return self.state
        # "Software Engineer Jan 2020 - Present" then a bare "Acme Corp" line
        if (
            draft.title
            and not draft.company
            and not draft.bullets
            and not draft.description
            and looks_like_name_line(line.text, self.config, self.config.company_max_length)
        ):
            draft.company = trim_separators(line.text)
            return self.state
        draft.description.append(line.text)
        return self.state

    def _terminate(self, line: LineClassification) -> State:
        m = TECH_LINE_RE.match(line.text)
        if self.draft is not None and m:
            self.draft.technologies = dedupe_casefold(self.draft.technologies + split_list_tokens(m.group(1)))
        elif self.draft is not None and TECH_MARKER_RE.search(line.text):
            tail = re.split(r":", line.text, maxsplit=1)[-1]
            self.draft.technologies = dedupe_casefold(self.draft.technologies + split_list_tokens(tail))
        self.flush()
        return State.EXPECTING_COMPANY


def extract_experience(content: str, config: ParserConfig = DEFAULT_CONFIG) -> ExperienceExtraction:
    """
    Extract experience entries from one Experience section's content.

    Returns complete entries plus incomplete drafts (never emitted as experience).
    """
    lines = content_lines(content)
    result = ExperienceStateMachine(config).run(lines)
    logger.debug(
        f"Extracted {len(result.entries)} experience entries ({len(result.rejected)} incomplete drafts) "
        f"from {len(lines)} lines"
    )
    return result
