"""
Whole-document fallback extraction.

Used only when section-scoped extraction produced nothing (no header, or a header whose block
yielded no entries). Patterns here are line-local and more permissive than the section
extractors, so every result is capped and de-duplicated, and fallback experience entries are
never allowed to become projects.
"""

import logging
import re
from typing import List, Optional, Tuple

from resume_structurer.core.certification_parser import parse_certification_line
from resume_structurer.core.config import DEFAULT_CONFIG, ParserConfig
from resume_structurer.core.education_parser import (
    is_degree_line,
    split_institution_date,
    split_trailing_year,
)
from resume_structurer.core.patterns import (
    DATE_RANGE_RE,
    DATE_RE,
    compile_terms,
    contains_term,
    find_date_range,
    find_terms,
    has_job_title,
    starts_with_action_verb,
)
from resume_structurer.core.schemas import CertificationEntry, EducationEntry, ExperienceEntry
from resume_structurer.core.section_identifier import match_section_header
from resume_structurer.core.text_normalization import (
    content_lines,
    dedupe_casefold,
    is_bullet,
    split_list_tokens,
    strip_bullet,
    trim_separators,
)

logger = logging.getLogger(__name__)


# ===== EXPERIENCE =====

# "Software Engineer at Acme Corp" / "Software Engineer @ Acme"
AT_COMPANY_RE = re.compile(r"^(?P<title>.+?)\s+(?:at|@)\s+(?P<company>.+)$", re.IGNORECASE)
# "Software Engineer | Acme Corp", "Acme Corp – Software Engineer", "Software Engineer, Acme Corp"
HEAD_SPLIT_RE = re.compile(r"\s*\|\s*|\s*•\s*|\s+[-–—]\s+|\s*–\s*|\s*,\s*")
ROLE_SEPARATOR_RE = re.compile(r"\s\|\s|\s•\s|\s(?:at|@)\s", re.IGNORECASE)
INLINE_SKILLS_RE = re.compile(r"^(?:technical\s+|core\s+|key\s+)?skills?\s*:\s*(.+)$", re.IGNORECASE)


def _split_head(line: str) -> Optional[Tuple[str, str]]:
    """
    Separate the text before a date range from the range itself.

    The range must end the line (optionally closing a parenthesis):
      'Freelance Developer at Acme (2019-2021)' -> ('Freelance Developer at Acme', '2019-2021')
    """
    m = find_date_range(line)
    if not m or line[m.end():].strip(" )]"):
        return None
    head = trim_separators(line[:m.start()].rstrip().rstrip("(["))
    if not head:
        return None
    return head, m.group(0).strip()


def split_title_company(head: str, config: ParserConfig = DEFAULT_CONFIG) -> Optional[Tuple[str, str]]:
    """
    Find the job title and the company in the text before the dates.

    Examples:
      'Software Engineer at Acme Corp' -> ('Software Engineer', 'Acme Corp')
      'Jane Doe Consulting – Freelance Developer' -> ('Freelance Developer', 'Jane Doe Consulting')
      'Data Analyst | Globex | Remote' -> ('Data Analyst', 'Globex')
      'Software Engineer Acme Corp' -> ('Software Engineer', 'Acme Corp')
    """
    if not has_job_title(head, config):
        return None

    m = AT_COMPANY_RE.match(head)
    if m and has_job_title(m.group("title"), config):
        title, company = trim_separators(m.group("title")), trim_separators(m.group("company"))
        if title and company:
            return title, company

    parts = [trim_separators(p) for p in HEAD_SPLIT_RE.split(head)]
    parts = [p for p in parts if p]
    if len(parts) >= 2:
        title_idx = next((i for i, p in enumerate(parts) if has_job_title(p, config)), None)
        if title_idx is not None:
            company = next((p for i, p in enumerate(parts) if i != title_idx), "")
            if company:
                return parts[title_idx], company

    # Bare "Title Company": split after the last job-title keyword
    pattern = compile_terms(tuple(config.job_title_keywords), True)
    matches = list(pattern.finditer(head))
    if matches:
        cut = matches[-1].end()
        title, company = head[:cut].strip(), trim_separators(head[cut:])
        if title and company:
            return title, company
    return None


def split_role_company(text: str, config: ParserConfig = DEFAULT_CONFIG) -> Tuple[str, str]:
    """
    Split an explicitly separated role line into (title, company); company is "" otherwise.

    Only "|", "•" and at/@ count. Dashes usually qualify a title ("Senior Engineer - Payments"),
    and a bare "Senior Engineer Platform Team" keeps its whole text as the title.

    Examples:
      'Data Analyst | Globex Inc' -> ('Data Analyst', 'Globex Inc')
      'Software Engineer at Acme Corp' -> ('Software Engineer', 'Acme Corp')
      'Senior Software Engineer' -> ('Senior Software Engineer', '')
    """
    if not ROLE_SEPARATOR_RE.search(text):
        return text, ""
    parsed = split_title_company(text, config)
    if parsed is None:
        return text, ""
    return parsed


def fallback_experience(text: str, config: ParserConfig = DEFAULT_CONFIG) -> List[ExperienceEntry]:
    """
    Scan the whole document for inline job lines ("Title at Company (2019 - 2021)" and friends).

    Marked bullet lines directly below a job line are attached to it.
    """
    lines = content_lines(text)
    entries: List[ExperienceEntry] = []
    seen = set()

    for idx, line in enumerate(lines):
        if len(entries) >= config.max_fallback_experience:
            break
        if is_bullet(line) or starts_with_action_verb(line, config):
            continue
        head = _split_head(line)
        if head is None:
            continue
        parsed = split_title_company(head[0], config)
        if parsed is None:
            continue
        title, company = parsed
        key = f"{title}|{company}".lower()
        if key in seen:
            continue
        seen.add(key)

        bullets = []
        for following in lines[idx + 1:]:
            if not is_bullet(following):
                break
            bullet = strip_bullet(following)
            if len(bullet) >= config.min_bullet_length:
                bullets.append(bullet)

        entries.append(ExperienceEntry(title=title, company=company, duration=head[1], bullets=bullets))

    if entries:
        logger.warning(f"Fallback extracted {len(entries)} experience entries from the whole document")
    return entries


# ===== EDUCATION =====

EDU_SPLIT_RE = re.compile(r"\s*\|\s*|\s*•\s*|\s+[-–—]\s+")


def fallback_education(text: str, config: ParserConfig = DEFAULT_CONFIG) -> List[EducationEntry]:
    """
    Degree lines anywhere in the document.

    'B.S. Computer Science – Stanford University – 2020' is split inline; a bare degree line
    takes its institution (and year) from the next line.
    """
    lines = content_lines(text)
    entries: List[EducationEntry] = []
    seen = set()

    for idx, raw in enumerate(lines):
        if len(entries) >= config.max_fallback_education:
            break
        line = strip_bullet(raw) if is_bullet(raw) else raw
        if not is_degree_line(line):
            continue

        parts = [trim_separators(p) for p in EDU_SPLIT_RE.split(line)]
        parts = [p for p in parts if p]
        degree, institution, year = parts[0], "", ""
        for part in parts[1:]:
            value = part.strip("() ")
            if not year and (DATE_RE.fullmatch(value) or DATE_RANGE_RE.fullmatch(value)):
                year = value
            elif not institution:
                institution = part
        if len(parts) == 1:
            degree, year = split_trailing_year(line)
            if idx + 1 < len(lines):
                nxt = lines[idx + 1]
                if not is_degree_line(nxt) and match_section_header(nxt, config) is None and len(nxt) > 5:
                    inst_date = split_institution_date(nxt)
                    if inst_date:
                        institution, year = inst_date[0], year or inst_date[1]
                    elif not DATE_RE.fullmatch(nxt.strip("() ")):
                        institution = trim_separators(nxt)

        key = f"{degree}|{institution}".lower()
        if key in seen:
            continue
        seen.add(key)
        entries.append(EducationEntry(degree=degree, institution=institution, year=year))

    if entries:
        logger.warning(f"Fallback extracted {len(entries)} education entries from the whole document")
    return entries


# ===== CERTIFICATIONS =====

def fallback_certifications(text: str, config: ParserConfig = DEFAULT_CONFIG) -> List[CertificationEntry]:
    """Lines carrying a certification marker and an issuer or year ("Name | Issuer | Year", "Name (Issuer, Year)")."""
    entries: List[CertificationEntry] = []
    seen = set()
    for line in content_lines(text):
        if len(entries) >= config.max_fallback_certifications:
            break
        if not contains_term(line, config.certification_markers):
            continue
        entry = parse_certification_line(line)
        if entry is None or not (entry.issuer or entry.year):
            continue
        key = f"{entry.name}|{entry.issuer}".lower()
        if key in seen:
            continue
        seen.add(key)
        entries.append(entry)

    if entries:
        logger.warning(f"Fallback extracted {len(entries)} certifications from the whole document")
    return entries


# ===== SKILLS =====

def fallback_skills(text: str, config: ParserConfig = DEFAULT_CONFIG) -> List[str]:
    """Inline "Skills: a, b, c" lines plus the skill vocabulary matched over the whole text."""
    tokens: List[str] = []
    for line in content_lines(text):
        m = INLINE_SKILLS_RE.match(line)
        if m:
            tokens.extend(t for t in split_list_tokens(m.group(1)) if 2 <= len(t) < 50)
    tokens.extend(find_terms(text, config.skill_keywords))
    skills = dedupe_casefold(tokens)
    if skills:
        logger.warning(f"Fallback extracted {len(skills)} skills from the whole document")
    return skills
