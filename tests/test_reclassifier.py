"""
Tests for experience/project reclassification.

Scores are checked rule by rule so a weight change shows up as one failing assertion.
"""

from resume_structurer.core.config import DEFAULT_CONFIG, ParserConfig, ScoringConfig
from resume_structurer.core.experience_parser import extract_experience
from resume_structurer.core.reclassifier import Reclassifier, build_rules
from resume_structurer.core.schemas import EntryCandidate, ExperienceEntry, ProjectEntry


ACME = ExperienceEntry(
    title="Software Engineer",
    company="Acme Corp",
    duration="Jan 2020 - Dec 2022",
    bullets=["Built a billing pipeline", "Reduced latency by 30%"],
)

PORTFOLIO = dict(
    kind="experience",
    title="Personal Portfolio Website",
    bullets=["Built with GitHub Pages"],
    technologies=["HTML", "CSS"],
)


def test_rule_table_order():
    assert [r.name for r in build_rules()] == [
        "company_present",
        "legal_entity_suffix",
        "job_title",
        "employment_dates",
        "impact_language",
        "untitled_work",
        "technology_list",
        "academic_context",
        "project_indicator",
        "implementation_only",
    ]


def test_complete_job_scores_as_experience():
    score = Reclassifier().score(EntryCandidate.from_experience(ACME))
    assert score.experience == 14, f"Rules fired: {score.fired}"
    assert score.project == 0
    assert score.winner == "experience"
    assert score.confidence == 14


def test_complete_job_is_kept():
    result = Reclassifier().reclassify([ACME], [])
    assert result.experience == [ACME]
    assert result.projects == []


def test_portfolio_draft_moves_to_projects():
    score = Reclassifier().score(EntryCandidate(**PORTFOLIO))
    assert score.experience == 0
    assert score.project == 12, f"Rules fired: {score.fired}"

    result = Reclassifier().reclassify([EntryCandidate(**PORTFOLIO)], [])
    assert result.experience == []
    assert len(result.projects) == 1
    assert result.projects[0].name == "Personal Portfolio Website"
    assert result.projects[0].technologies == ["HTML", "CSS"]


def test_fallback_entries_never_become_projects():
    result = Reclassifier().reclassify([EntryCandidate(origin="fallback", **PORTFOLIO)], [])
    assert result.experience == []
    assert result.projects == []


def test_incomplete_job_is_dropped_not_moved():
    draft = EntryCandidate(
        kind="experience",
        title="Software Engineer",
        company="Acme Corp",
        bullets=["Led a team of five engineers"],
    )
    result = Reclassifier().reclassify([draft], [])
    assert result.experience == []
    assert result.projects == []


def test_project_with_job_evidence_moves_to_experience():
    draft = EntryCandidate(
        kind="project",
        name="Acme Corp",
        company="Acme Corp",
        title="Software Engineer",
        duration="Jan 2020 - Present",
        bullets=["Reduced costs for enterprise clients"],
    )
    result = Reclassifier().reclassify([], [draft])
    assert result.projects == []
    assert result.experience == [
        ExperienceEntry(
            title="Software Engineer",
            company="Acme Corp",
            duration="Jan 2020 - Present",
            bullets=["Reduced costs for enterprise clients"],
        )
    ]


def test_incomplete_job_like_project_stays_a_project():
    draft = EntryCandidate(
        kind="project",
        name="Acme Corp",
        company="Acme Corp",
        title="Lead Engineer",
        bullets=["Managed client deliveries"],
    )
    result = Reclassifier().reclassify([], [draft])
    assert result.experience == []
    assert [p.name for p in result.projects] == ["Acme Corp"]


def test_plain_project_entries_are_kept():
    project = ProjectEntry(name="Weather App", technologies=["React"])
    result = Reclassifier().reclassify([], [project])
    assert result.projects == [project]


def test_threshold_comes_from_config():
    config = ParserConfig(scoring=ScoringConfig(confidence_threshold=100))
    result = Reclassifier(config).reclassify([ACME], [])
    assert result.experience == []


def test_zero_weight_disables_rule():
    config = ParserConfig(scoring=ScoringConfig(job_title=0))
    score = Reclassifier(config).score(EntryCandidate.from_experience(ACME))
    assert "job_title" not in score.fired
    assert score.experience == 10


def test_complete_entry_below_default_threshold_is_dropped():
    draft = EntryCandidate(
        kind="experience",
        title="Engineer",
        company="Acme",
        duration="Jan 2020 - Dec 2021",
        bullets=["Built a course scheduler"],
        technologies=["React"],
    )
    score = Reclassifier().score(draft)
    assert (score.experience, score.project) == (10, 9), f"Rules fired: {score.fired}"
    assert score.confidence < DEFAULT_CONFIG.scoring.confidence_threshold

    result = Reclassifier().reclassify([draft], [])
    assert result.experience == []
    assert result.projects == []


def test_technologies_on_complete_drafts_reach_scoring():
    result = extract_experience(
        "Acme Corp\nSoftware Engineer Jan 2020 - Dec 2022\n- Built a billing pipeline\nTechnologies: Go"
    )
    score = Reclassifier().score(result.complete[0])
    assert "technology_list" in score.fired
    assert score.winner == "experience"
