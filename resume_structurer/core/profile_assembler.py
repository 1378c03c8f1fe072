"""
Profile assembly: the single entry point of the structuring engine.

    raw text -> sections -> per-section extraction (+ fallbacks) -> reclassification -> profile

The pipeline is pure: no I/O, no module-level mutable state. Every call builds its own state
machines, so parse() is safe to call concurrently and returns equal output for equal input.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from resume_structurer.core.certification_parser import extract_certifications
from resume_structurer.core.config import DEFAULT_CONFIG, ParserConfig
from resume_structurer.core.education_parser import extract_education
from resume_structurer.core.errors import InvalidArgumentError
from resume_structurer.core.experience_parser import extract_experience
from resume_structurer.core.fallback_parser import (
    fallback_certifications,
    fallback_education,
    fallback_experience,
    fallback_skills,
)
from resume_structurer.core.profile_insights import profile_from_hint
from resume_structurer.core.project_parser import extract_project_drafts
from resume_structurer.core.reclassifier import Reclassifier
from resume_structurer.core.schemas import (
    CertificationEntry,
    EducationEntry,
    EntryCandidate,
    PartialStructuredProfile,
    Section,
    StructuredProfile,
)
from resume_structurer.core.section_identifier import identify_sections
from resume_structurer.core.skills_parser import extract_skills
from resume_structurer.core.text_normalization import dedupe_casefold

logger = logging.getLogger(__name__)

StructuredHint = Union[PartialStructuredProfile, Dict[str, Any]]


def _validate_text(raw_text: Any) -> str:
    if raw_text is None:
        raise InvalidArgumentError("raw_text is required")
    if not isinstance(raw_text, str):
        raise InvalidArgumentError(f"raw_text must be a string, got {type(raw_text).__name__}")
    if not raw_text.strip():
        raise InvalidArgumentError("raw_text is empty")
    return raw_text


def _sections_of(sections: List[Section], section_type: str) -> List[Section]:
    return [s for s in sections if s.type == section_type]


def parse(
    raw_text: str,
    structured_hint: Optional[StructuredHint] = None,
    config: Optional[ParserConfig] = None,
) -> StructuredProfile:
    """
    Turn resume text into a StructuredProfile.

    Args:
        raw_text: Full plain text of one resume
        structured_hint: Optional pre-computed extraction. Accepted for API compatibility but not
            consumed here; use resolve_profile() to prefer it.
        config: Vocabularies and weights (DEFAULT_CONFIG when omitted)

    Returns:
        StructuredProfile with every list present (possibly empty)

    Raises:
        InvalidArgumentError: raw_text is missing, not a string, or blank
    """
    text = _validate_text(raw_text)
    config = config or DEFAULT_CONFIG
    if structured_hint is not None:
        logger.debug("Structured hint supplied to parse(); ignored by the deterministic pipeline")

    # Step 1: Section boundaries
    sections = identify_sections(text, config)
    logger.debug(f"Found {len(sections)} sections")

    # Step 2: Per-section extraction. Repeated sections of one type are concatenated.
    experience_candidates: List[EntryCandidate] = []
    for section in _sections_of(sections, "experience"):
        result = extract_experience(section.content, config)
        experience_candidates.extend(result.complete)
        experience_candidates.extend(result.rejected)
    found_experience = any(c.is_complete_experience() for c in experience_candidates)

    project_candidates: List[EntryCandidate] = []
    for section in _sections_of(sections, "projects"):
        project_candidates.extend(extract_project_drafts(section.content, config))

    education: List[EducationEntry] = []
    for section in _sections_of(sections, "education"):
        education.extend(extract_education(section.content, config))

    skills: List[str] = []
    for section in _sections_of(sections, "skills"):
        skills.extend(extract_skills(section.content, config))

    certifications: List[CertificationEntry] = []
    for section in _sections_of(sections, "certifications"):
        certifications.extend(extract_certifications(section.content, config))

    # Step 3: Whole-document fallbacks (never for projects)
    if not found_experience:
        logger.warning("No experience entries from sections, trying fallback parsing")
        experience_candidates.extend(
            EntryCandidate.from_experience(e, origin="fallback") for e in fallback_experience(text, config)
        )
    if not education:
        logger.warning("No education entries from sections, trying fallback parsing")
        education = fallback_education(text, config)
    if not certifications:
        logger.warning("No certifications from sections, trying fallback parsing")
        certifications = fallback_certifications(text, config)
    if not skills:
        logger.warning("No skills from sections, trying fallback parsing")
        skills = fallback_skills(text, config)

    # Step 4: One reclassification pass over section, draft and fallback candidates
    result = Reclassifier(config).reclassify(experience_candidates, project_candidates)

    profile = StructuredProfile(
        experience=result.experience,
        projects=result.projects,
        education=education,
        skills=dedupe_casefold(skills),
        certifications=certifications,
    )
    logger.debug(
        f"Assembled profile: {len(profile.experience)} experience, {len(profile.projects)} projects, "
        f"{len(profile.education)} education, {len(profile.skills)} skills, "
        f"{len(profile.certifications)} certifications"
    )
    return profile


def resolve_profile(
    raw_text: str,
    structured_hint: Optional[StructuredHint] = None,
    config: Optional[ParserConfig] = None,
) -> StructuredProfile:
    """
    Prefer the structured hint when it carries experience, otherwise parse the text.

    raw_text is validated either way.
    """
    text = _validate_text(raw_text)
    if structured_hint is not None:
        hint = (
            structured_hint
            if isinstance(structured_hint, PartialStructuredProfile)
            else PartialStructuredProfile.model_validate(structured_hint)
        )
        if hint.experience:
            logger.debug(f"Using structured hint with {len(hint.experience)} experience entries")
            return profile_from_hint(hint)
    return parse(text, config=config)
