"""
Derived views of a StructuredProfile: completeness score, knowledge-base prefill, a suggested
display name, and conversion of an externally produced (LLM-shaped) structured hint.
"""

import re
from datetime import date
from typing import Any, Dict, List, Optional

from resume_structurer.core.schemas import (
    CertificationEntry,
    EducationEntry,
    ExperienceEntry,
    PartialStructuredProfile,
    ProjectEntry,
    StructuredProfile,
)
from resume_structurer.core.text_normalization import dedupe_casefold


# ===== COMPLETENESS SCORE =====

# section -> (points per entry, section cap)
SCORE_WEIGHTS = {
    "experience": (10, 40),
    "skills": (2, 20),
    "education": (10, 20),
    "projects": (5, 10),
    "certifications": (5, 10),
}
MAX_SCORE = 100


def completeness_score(profile: StructuredProfile) -> int:
    """
    0-100 score of how much of a CV the profile covers.

    Example: 2 jobs, 12 skills, 1 degree -> 20 + 20 + 10 = 50
    """
    score = 0
    for section, (per_entry, cap) in SCORE_WEIGHTS.items():
        score += min(cap, len(getattr(profile, section)) * per_entry)
    return min(MAX_SCORE, score)


def prefill_knowledge_base(profile: StructuredProfile) -> Dict[str, Any]:
    """Knowledge-base fields derived from the profile. Keys are present only for non-empty sections."""
    kb: Dict[str, Any] = {}
    if profile.skills:
        kb["skills"] = list(profile.skills)
    if profile.experience:
        kb["work_experience"] = [
            {"role": exp.title, "company": exp.company, "period": exp.duration}
            for exp in profile.experience
        ]
    if profile.education:
        kb["education"] = [
            {"degree": edu.degree, "institution": edu.institution, "year": edu.year}
            for edu in profile.education
        ]
    return kb


# ===== RESUME NAME =====

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
PERSON_NAME_RE = re.compile(r"^([A-Z][a-z]+(?:\s+[A-Z][a-z]+){1,2})\s*$")
HEADLINE_RE = re.compile(r"^[A-Z].{9,49}$")


def suggest_resume_name(profile: StructuredProfile, raw_text: str = "", today: Optional[date] = None) -> str:
    """
    Suggest a display name for a parsed resume.

    Order of preference:
      'Software Engineer - Acme Corp'   most recent job title and company
      'Software Engineer'               title only
      'Acme Corp Resume'                company only
      'Jane Doe - Senior Data Analyst'  person name and headline from the top of the text
      'Jane Doe Resume'
      'Resume - Oct 2026'               today's month
    """
    if profile.experience:
        latest = profile.experience[0]
        if latest.title and latest.company:
            return f"{latest.title} - {latest.company}"
        if latest.title:
            return latest.title
        if latest.company:
            return f"{latest.company} Resume"

    lines = [line.strip() for line in (raw_text or "").splitlines() if line.strip()][:5]
    if lines:
        m = PERSON_NAME_RE.match(lines[0])
        if m:
            name = m.group(1)
            if len(lines) > 1 and HEADLINE_RE.match(lines[1]):
                return f"{name} - {lines[1]}"
            return f"{name} Resume"

    today = today or date.today()
    return f"Resume - {MONTH_ABBR[today.month - 1]} {today.year}"


# ===== STRUCTURED HINT =====

def _text(value: Optional[str]) -> str:
    return (value or "").strip()


def _items(values: Optional[List[str]]) -> List[str]:
    return [v.strip() for v in (values or []) if v and v.strip()]


def profile_from_hint(hint: PartialStructuredProfile) -> StructuredProfile:
    """
    Convert an externally produced structured extraction into a StructuredProfile.

    LLM output uses 'achievements' for bullets and 'relevant_coursework' for coursework; both
    spellings are accepted.
    """
    experience = []
    for exp in hint.experience or []:
        bullets = _items(exp.achievements) or _items(exp.bullets)
        if not bullets and _text(exp.description):
            bullets = [_text(exp.description)]
        experience.append(
            ExperienceEntry(
                title=_text(exp.title),
                company=_text(exp.company),
                duration=_text(exp.duration),
                bullets=bullets,
            )
        )

    projects = [
        ProjectEntry(
            name=_text(proj.name),
            description=_text(proj.description),
            technologies=dedupe_casefold(_items(proj.technologies)),
            bullets=_items(proj.achievements) or _items(proj.bullets),
        )
        for proj in hint.projects or []
    ]

    education = [
        EducationEntry(
            degree=_text(edu.degree),
            institution=_text(edu.institution),
            year=_text(edu.year),
            coursework=_items(edu.relevant_coursework) or _items(edu.coursework),
        )
        for edu in hint.education or []
    ]

    certifications = [
        CertificationEntry(name=_text(cert.name), issuer=_text(cert.issuer), year=_text(cert.year))
        for cert in hint.certifications or []
        if _text(cert.name)
    ]

    return StructuredProfile(
        experience=experience,
        projects=projects,
        education=education,
        skills=dedupe_casefold(_items(hint.skills)),
        certifications=certifications,
    )
