"""
Parser configuration: keyword vocabularies, section header phrases and scoring weights.

Everything the heuristics key off lives here instead of in module constants so a deployment
can tune the parser for a domain (different job titles, a different tech stack) without code
changes. The default instance reproduces the built-in behaviour; a JSON file with any subset
of the fields can override it via load_parser_config().
"""

from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from resume_structurer.core.errors import ConfigurationError
from resume_structurer.core.schemas import SectionType


class ScoringConfig(BaseModel):
    """Weights for the experience-vs-project rule engine. Empirically chosen; tune against labeled resumes."""
    model_config = ConfigDict(frozen=True)

    # Experience evidence
    company_present: int = 3
    legal_entity_suffix: int = 2
    job_title: int = 4
    employment_dates: int = 3
    impact_language: int = 2

    # Project evidence
    untitled_work: int = 3
    technology_list: int = 4
    academic_context: int = 3
    project_indicator: int = 3
    implementation_only: int = 2

    confidence_threshold: int = Field(default=2, ge=0)


DEFAULT_SECTION_HEADERS: Dict[SectionType, Tuple[str, ...]] = {
    "experience": (
        "professional experience", "work experience", "employment history", "employment",
        "experience", "career history", "work history", "relevant experience",
    ),
    "projects": (
        "projects", "project", "portfolio", "side projects", "personal projects", "academic projects",
    ),
    "education": (
        "education", "academic background", "qualifications", "academic qualifications",
    ),
    "skills": (
        "skills", "technical skills", "competencies", "technical competencies", "core skills",
    ),
    "certifications": (
        "certifications", "certification", "certificates", "licenses",
        "professional certifications", "licenses & certifications", "licenses and certifications",
    ),
    # Recognized only so they close the previous section; never parsed
    "other": (
        "summary", "professional summary", "objective", "profile", "awards", "honors",
        "awards & honors", "publications", "interests", "hobbies", "references",
        "volunteer", "volunteering", "volunteer experience", "languages", "additional information",
    ),
}


class ParserConfig(BaseModel):
    """Vocabularies threaded through every extractor and the Reclassifier."""
    model_config = ConfigDict(frozen=True)

    section_headers: Dict[SectionType, Tuple[str, ...]] = Field(default_factory=lambda: dict(DEFAULT_SECTION_HEADERS))

    job_title_keywords: Tuple[str, ...] = (
        "engineer", "developer", "manager", "analyst", "architect", "specialist",
        "consultant", "lead", "director", "coordinator", "associate", "senior",
        "junior", "intern", "internship", "trainee", "executive", "officer", "supervisor",
        "administrator", "technician", "designer", "scientist", "researcher",
        "programmer", "assistant", "president", "founder", "co-founder", "cto", "ceo",
    )
    company_suffixes: Tuple[str, ...] = (
        "inc", "llc", "corp", "corporation", "ltd", "limited", "gmbh", "plc", "company",
        "technologies", "solutions", "systems", "services", "group", "enterprises",
        "consulting", "partners", "labs",
    )
    action_verbs: Tuple[str, ...] = (
        "built", "developed", "designed", "implemented", "created", "led", "managed",
        "reduced", "increased", "improved", "delivered", "launched", "architected",
        "automated", "optimized", "maintained", "collaborated", "wrote", "migrated",
        "deployed", "established", "coordinated", "analyzed", "conducted", "supported",
        "spearheaded", "drove", "oversaw", "mentored", "streamlined", "achieved", "owned",
        "shipped", "integrated", "refactored", "researched", "trained", "negotiated",
        "resolved", "authored", "grew", "won", "partnered", "directed", "organized",
        "presented", "contributed", "worked", "helped", "assisted", "served", "handled",
    )
    work_content_nouns: Tuple[str, ...] = (
        "team", "teams", "client", "clients", "customer", "customers", "system", "systems",
        "stakeholder", "stakeholders", "product", "products", "service", "services",
        "platform", "pipeline", "pipelines", "process", "processes", "users", "revenue",
        "sales", "operations",
    )
    skill_keywords: Tuple[str, ...] = (
        "JavaScript", "TypeScript", "Python", "Java", "C++", "React", "Vue", "Angular",
        "Node.js", "Express", "Django", "Flask", "FastAPI", "PostgreSQL", "MongoDB", "MySQL",
        "Redis", "AWS", "Azure", "GCP", "Docker", "Kubernetes", "Terraform", "Git", "Linux",
        "Agile", "Scrum", "Machine Learning", "AI", "Data Science", "SQL", "NoSQL",
        "REST API", "GraphQL", "CI/CD", "HTML", "CSS",
    )
    technology_keywords: Tuple[str, ...] = (
        "React", "Vue", "Angular", "Node.js", "Python", "JavaScript", "TypeScript", "Java",
        "C++", "AWS", "Docker", "Kubernetes", "MongoDB", "PostgreSQL", "MySQL", "Git",
        "Linux", "Express", "Django", "Flask", "Spring", "FastAPI", "HTML5", "HTML", "CSS",
        "Microservices", "OOP", "REST API", "CI/CD", "DevOps",
    )
    # Lines carrying these end an experience entry (education leaking into experience)
    academic_markers: Tuple[str, ...] = ("university", "college", "degree", "certificate", "gpa")
    academic_context: Tuple[str, ...] = (
        "university", "college", "school", "course", "coursework", "thesis", "dissertation",
        "research project", "capstone", "final project", "assignment", "semester",
    )
    project_indicators: Tuple[str, ...] = (
        "github", "gitlab", "portfolio", "personal project", "academic project",
        "course project", "side project", "hackathon", "demo", "prototype", "open source",
        "open-source",
    )
    stack_phrases: Tuple[str, ...] = (
        "technologies:", "technology:", "tech stack", "stack:", "built with", "built using",
        "used:", "tools:",
    )
    impact_terms: Tuple[str, ...] = (
        "team", "teams", "collaborated", "led", "managed", "improved", "increased", "reduced",
        "delivered", "client", "clients", "customer", "customers", "business", "revenue",
        "cost", "costs", "stakeholder", "stakeholders",
    )
    implementation_terms: Tuple[str, ...] = (
        "implemented", "built", "developed", "created", "designed", "architected",
        "algorithm", "api", "database", "framework",
    )
    certification_markers: Tuple[str, ...] = (
        "certified", "certification", "certificate", "license", "licensed", "credential",
    )

    company_max_length: int = 60
    project_name_max_length: int = 80
    min_bullet_length: int = 5
    min_unmarked_bullet_length: int = 15
    max_fallback_experience: int = 15
    max_fallback_education: int = 5
    max_fallback_certifications: int = 10

    scoring: ScoringConfig = Field(default_factory=ScoringConfig)


DEFAULT_CONFIG = ParserConfig()


def load_parser_config(path: Optional[Union[str, Path]] = None) -> ParserConfig:
    """
    Load a ParserConfig from a JSON file. Missing fields keep their defaults.

    Returns DEFAULT_CONFIG when no path is given.
    """
    if not path:
        return DEFAULT_CONFIG
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read parser config {path}: {exc}") from exc
    try:
        return ParserConfig.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid parser config {path}: {exc}") from exc
