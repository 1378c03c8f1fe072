"""
Experience vs. project reclassification.

Every candidate entry is scored by an ordered list of ScoringRule objects. Each rule that fires
adds its weight to the experience or the project side; confidence is the absolute difference.

Routing:
  experience candidate -> kept as experience only if complete AND experience wins by >= threshold
                       -> moved to projects if projects win by >= threshold, it came from a
                          section (never the whole-document fallback) and it carries explicit
                          project evidence (technology list, academic context, project indicator)
                       -> otherwise dropped
  project candidate    -> moved to experience only if experience wins by >= threshold and the
                          rebuilt entry is complete; otherwise it stays a project

Weights live in ScoringConfig; see DEFAULT_CONFIG.scoring.
"""

import logging
from typing import Callable, List, Literal, NamedTuple, Optional, Sequence, Union

from resume_structurer.core.config import DEFAULT_CONFIG, ParserConfig
from resume_structurer.core.patterns import EMPLOYMENT_DATES_RE, contains_term
from resume_structurer.core.schemas import EntryCandidate, ExperienceEntry, ProjectEntry
from resume_structurer.core.text_normalization import dedupe_casefold

logger = logging.getLogger(__name__)

Category = Literal["experience", "project"]

# Rules that count as explicit project evidence for an experience -> project move
PROJECT_EVIDENCE_RULES = {"technology_list", "academic_context", "project_indicator"}


class ScoringRule(NamedTuple):
    name: str
    category: Category
    weight: int
    predicate: Callable[[EntryCandidate, ParserConfig], bool]


class EntryScore(NamedTuple):
    experience: int
    project: int
    fired: List[str]

    @property
    def confidence(self) -> int:
        return abs(self.experience - self.project)

    @property
    def winner(self) -> Optional[Category]:
        if self.experience > self.project:
            return "experience"
        if self.project > self.experience:
            return "project"
        return None

    @property
    def has_project_evidence(self) -> bool:
        return any(name in PROJECT_EVIDENCE_RULES for name in self.fired)


class ReclassificationResult(NamedTuple):
    experience: List[ExperienceEntry]
    projects: List[ProjectEntry]


# ===== PREDICATES =====

def _all_text(c: EntryCandidate) -> str:
    return " ".join([c.name, c.title, c.company, c.duration] + c.bullets + c.description + c.technologies)


def _bullet_text(c: EntryCandidate) -> str:
    return " ".join(c.bullets)


def company_present(c: EntryCandidate, config: ParserConfig) -> bool:
    return len(c.company.strip()) > 1


def legal_entity_suffix(c: EntryCandidate, config: ParserConfig) -> bool:
    return bool(c.company) and contains_term(c.company, config.company_suffixes)


def job_title(c: EntryCandidate, config: ParserConfig) -> bool:
    return contains_term(c.title, config.job_title_keywords, plural=True)


def employment_dates(c: EntryCandidate, config: ParserConfig) -> bool:
    return bool(EMPLOYMENT_DATES_RE.search(c.duration))


def impact_language(c: EntryCandidate, config: ParserConfig) -> bool:
    return contains_term(_bullet_text(c), config.impact_terms)


def untitled_work(c: EntryCandidate, config: ParserConfig) -> bool:
    heading = c.name or c.title
    return not company_present(c, config) and len(heading) > 3 and not job_title(c, config)


def technology_list(c: EntryCandidate, config: ParserConfig) -> bool:
    return bool(c.technologies) or contains_term(_all_text(c), config.stack_phrases)


def academic_context(c: EntryCandidate, config: ParserConfig) -> bool:
    return contains_term(_all_text(c), config.academic_context)


def project_indicator(c: EntryCandidate, config: ParserConfig) -> bool:
    return contains_term(_all_text(c), config.project_indicators)


def implementation_only(c: EntryCandidate, config: ParserConfig) -> bool:
    bullets = _bullet_text(c)
    return contains_term(bullets, config.implementation_terms) and not contains_term(bullets, config.impact_terms)


def build_rules(config: ParserConfig = DEFAULT_CONFIG) -> List[ScoringRule]:
    """The ordered rule table, weighted from config.scoring."""
    w = config.scoring
    return [
        ScoringRule("company_present", "experience", w.company_present, company_present),
        ScoringRule("legal_entity_suffix", "experience", w.legal_entity_suffix, legal_entity_suffix),
        ScoringRule("job_title", "experience", w.job_title, job_title),
        ScoringRule("employment_dates", "experience", w.employment_dates, employment_dates),
        ScoringRule("impact_language", "experience", w.impact_language, impact_language),
        ScoringRule("untitled_work", "project", w.untitled_work, untitled_work),
        ScoringRule("technology_list", "project", w.technology_list, technology_list),
        ScoringRule("academic_context", "project", w.academic_context, academic_context),
        ScoringRule("project_indicator", "project", w.project_indicator, project_indicator),
        ScoringRule("implementation_only", "project", w.implementation_only, implementation_only),
    ]


# ===== CONVERSIONS =====

def to_experience(c: EntryCandidate) -> ExperienceEntry:
    """Rebuild a candidate as an ExperienceEntry; description lines stand in for missing bullets."""
    return ExperienceEntry(
        title=c.title or c.name,
        company=c.company,
        duration=c.duration,
        bullets=list(c.bullets) if c.bullets else list(c.description),
    )


def to_project(c: EntryCandidate) -> ProjectEntry:
    return ProjectEntry(
        name=c.display_name(),
        description=" ".join(c.description).strip(),
        technologies=dedupe_casefold(c.technologies),
        bullets=list(c.bullets),
    )


def is_complete(entry: ExperienceEntry) -> bool:
    return bool(entry.company and entry.title and entry.duration and entry.bullets)


class Reclassifier:
    """Scores candidates and routes them between experience and projects."""

    def __init__(self, config: ParserConfig = DEFAULT_CONFIG):
        self.config = config
        self.rules = build_rules(config)

    def score(self, candidate: EntryCandidate) -> EntryScore:
        experience = project = 0
        fired = []
        for rule in self.rules:
            if rule.weight and rule.predicate(candidate, self.config):
                fired.append(rule.name)
                if rule.category == "experience":
                    experience += rule.weight
                else:
                    project += rule.weight
        return EntryScore(experience, project, fired)

    def reclassify(
        self,
        experience: Sequence[Union[ExperienceEntry, EntryCandidate]] = (),
        projects: Sequence[Union[ProjectEntry, EntryCandidate]] = (),
    ) -> ReclassificationResult:
        """
        Route experience and project candidates.

        experience may mix complete entries, incomplete drafts and fallback candidates
        (origin="fallback"); plain ExperienceEntry objects are treated as section entries.
        """
        threshold = self.config.scoring.confidence_threshold
        kept_experience: List[ExperienceEntry] = []
        kept_projects: List[ProjectEntry] = []
        to_projects: List[ProjectEntry] = []
        to_experience_list: List[ExperienceEntry] = []

        for item in experience:
            c = item if isinstance(item, EntryCandidate) else EntryCandidate.from_experience(item)
            s = self.score(c)
            label = c.display_name()
            if c.is_complete_experience() and s.winner == "experience" and s.confidence >= threshold:
                kept_experience.append(to_experience(c))
            elif s.winner == "project" and s.confidence >= threshold and c.origin == "section" and s.has_project_evidence:
                logger.debug(f"Reclassified experience entry as project: '{label}' (confidence: {s.confidence}, rules: {s.fired})")
                to_projects.append(to_project(c))
            else:
                logger.debug(
                    f"Dropped experience entry: '{label}' (experience={s.experience}, project={s.project}, "
                    f"complete={c.is_complete_experience()}, origin={c.origin})"
                )

        for item in projects:
            c = item if isinstance(item, EntryCandidate) else EntryCandidate.from_project(item)
            s = self.score(c)
            if s.winner == "experience" and s.confidence >= threshold:
                rebuilt = to_experience(c)
                if is_complete(rebuilt):
                    logger.debug(f"Reclassified project entry as experience: '{c.display_name()}' (confidence: {s.confidence})")
                    to_experience_list.append(rebuilt)
                    continue
            kept_projects.append(to_project(c))

        return ReclassificationResult(
            experience=kept_experience + to_experience_list,
            projects=kept_projects + to_projects,
        )
