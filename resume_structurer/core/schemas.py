from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal, Optional, Tuple


SectionType = Literal["experience", "projects", "education", "skills", "certifications", "other"]
EntryOrigin = Literal["section", "fallback"]


class Section(BaseModel):
    """A contiguous span of the document attributed to one resume category by header matching."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Canonical section name (Experience, Projects, ...)")
    type: SectionType
    content: str = Field(..., description="Text between the header line and the next recognized header")
    span: Tuple[int, int] = Field(..., description="(start, end) UTF-8 byte offsets of content in the raw text")


class ExperienceEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    company: str = ""
    duration: str = ""  # Kept as written, e.g. "Jan 2020 - Dec 2022"
    bullets: List[str] = Field(default_factory=list)


class ProjectEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    description: str = ""
    technologies: List[str] = Field(default_factory=list)  # Case-insensitively unique, first spelling wins
    bullets: List[str] = Field(default_factory=list)


class EducationEntry(BaseModel):
    """Education entry in the structured profile."""
    model_config = ConfigDict(frozen=True)

    degree: str = ""  # Bachelor of Science, M.S., etc.
    institution: str = ""  # University, College, Institute name
    year: str = ""  # "2020", "May 2020" or a range as written
    coursework: List[str] = Field(default_factory=list)


class CertificationEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    issuer: str = ""
    year: str = ""


class StructuredProfile(BaseModel):
    """
    Aggregate root returned by the engine.

    Every list is always present (empty rather than omitted) so renderers can rely on key presence.
    """
    model_config = ConfigDict(frozen=True)

    experience: List[ExperienceEntry] = Field(default_factory=list)
    projects: List[ProjectEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    certifications: List[CertificationEntry] = Field(default_factory=list)


# ===== STRUCTURED HINT (pre-computed external extraction, e.g. LLM output) =====

class HintExperience(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    company: Optional[str] = None
    duration: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    achievements: Optional[List[str]] = None
    bullets: Optional[List[str]] = None


class HintProject(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    description: Optional[str] = None
    technologies: Optional[List[str]] = None
    link: Optional[str] = None
    achievements: Optional[List[str]] = None
    bullets: Optional[List[str]] = None


class HintEducation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    degree: Optional[str] = None
    institution: Optional[str] = None
    year: Optional[str] = None
    relevant_coursework: Optional[List[str]] = None
    coursework: Optional[List[str]] = None


class HintCertification(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    issuer: Optional[str] = None
    year: Optional[str] = None


class PartialStructuredProfile(BaseModel):
    """Optional, already-structured extraction supplied by the caller. Every field may be missing."""
    model_config = ConfigDict(extra="ignore")

    experience: Optional[List[HintExperience]] = None
    projects: Optional[List[HintProject]] = None
    education: Optional[List[HintEducation]] = None
    skills: Optional[List[str]] = None
    certifications: Optional[List[HintCertification]] = None
    contact: Optional[Dict[str, Any]] = None
    summary: Optional[str] = None


# ===== INTERNAL DRAFTS =====

class EntryCandidate(BaseModel):
    """
    Mutable draft of an experience or project entry.

    Built by the line state machines and consumed by the Reclassifier, which turns
    candidates into fresh ExperienceEntry / ProjectEntry objects.
    """
    kind: Literal["experience", "project"]
    origin: EntryOrigin = "section"
    name: str = ""  # Project name
    title: str = ""  # Job title, or the block's heading line for unanchored experience drafts
    company: str = ""
    duration: str = ""
    bullets: List[str] = Field(default_factory=list)
    description: List[str] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)

    def is_complete_experience(self) -> bool:
        return bool(self.company and self.title and self.duration and self.bullets)

    def has_content(self) -> bool:
        return bool(self.bullets or self.description or self.technologies)

    def display_name(self) -> str:
        return self.name or self.title or self.company

    @classmethod
    def from_experience(cls, entry: ExperienceEntry, origin: EntryOrigin = "section") -> "EntryCandidate":
        return cls(
            kind="experience",
            origin=origin,
            title=entry.title,
            company=entry.company,
            duration=entry.duration,
            bullets=list(entry.bullets),
        )

    @classmethod
    def from_project(cls, entry: ProjectEntry) -> "EntryCandidate":
        return cls(
            kind="project",
            name=entry.name,
            bullets=list(entry.bullets),
            description=[entry.description] if entry.description else [],
            technologies=list(entry.technologies),
        )


class ParseRequest(BaseModel):
    raw_text: str = Field(..., description="Full plain text of one resume")
    structured_hint: Optional[PartialStructuredProfile] = Field(
        default=None,
        description="Optional pre-computed structured extraction; preferred when its experience list is non-empty",
    )


class ParseResponse(BaseModel):
    structured: StructuredProfile
    completeness_score: int = Field(..., ge=0, le=100, description="0-100 CV completeness score")
    knowledge_base: Dict[str, Any] = Field(default_factory=dict)
    suggested_name: str = ""
