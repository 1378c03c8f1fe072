"""Tests for whole-document fallback extraction."""

from resume_structurer.core.fallback_parser import (
    fallback_certifications,
    fallback_education,
    fallback_experience,
    fallback_skills,
    split_role_company,
    split_title_company,
)


def test_company_dash_title_with_dates():
    text = "Jane Doe\nJane Doe Consulting – Freelance Developer (2019-2021)\n- Built client websites for local businesses"
    entries = fallback_experience(text)
    assert len(entries) == 1
    entry = entries[0]
    assert entry.title == "Freelance Developer"
    assert entry.company == "Jane Doe Consulting"
    assert entry.duration == "2019-2021"
    assert entry.bullets == ["Built client websites for local businesses"]


def test_title_at_company():
    entries = fallback_experience("Senior Data Analyst at Globex Corp (Jan 2019 - Present)")
    assert entries[0].title == "Senior Data Analyst"
    assert entries[0].company == "Globex Corp"
    assert entries[0].duration == "Jan 2019 - Present"
    assert entries[0].bullets == []


def test_pipe_separated_job_line():
    entries = fallback_experience("Backend Engineer | Initech | Mar 2018 - Feb 2020")
    assert entries[0].title == "Backend Engineer"
    assert entries[0].company == "Initech"


def test_split_title_company_bare_form():
    assert split_title_company("Software Engineer Acme Corp") == ("Software Engineer", "Acme Corp")
    assert split_title_company("Weather Dashboard") is None


def test_duplicates_and_prose_are_skipped():
    text = (
        "Data Analyst at Globex (2019 - 2021)\n"
        "Data Analyst at Globex (2019 - 2021)\n"
        "Worked as analyst at Globex from 2019 - 2021 on reporting\n"
    )
    entries = fallback_experience(text)
    assert len(entries) == 1


def test_fallback_education_inline_and_next_line():
    text = "B.S. Computer Science – Stanford University – 2020\nMaster of Science in Statistics\nUniversity of Washington, 2022"
    entries = fallback_education(text)
    assert len(entries) == 2
    assert (entries[0].degree, entries[0].institution, entries[0].year) == ("B.S. Computer Science", "Stanford University", "2020")
    assert (entries[1].degree, entries[1].institution, entries[1].year) == (
        "Master of Science in Statistics",
        "University of Washington",
        "2022",
    )


def test_fallback_certifications_need_marker_and_detail():
    text = "Certified Kubernetes Administrator (CNCF, 2021)\nI am certified in first aid\nAcme Corp | Engineer | 2020"
    entries = fallback_certifications(text)
    assert len(entries) == 1
    assert entries[0].name == "Certified Kubernetes Administrator"
    assert entries[0].issuer == "CNCF"
    assert entries[0].year == "2021"


def test_fallback_skills():
    text = "Jane Doe\nSkills: Python, Docker\nWorked with AWS daily"
    assert fallback_skills(text) == ["Python", "Docker", "AWS"]


def test_split_role_company_needs_explicit_separator():
    assert split_role_company("Data Analyst | Globex Inc") == ("Data Analyst", "Globex Inc")
    assert split_role_company("Software Engineer at Acme Corp") == ("Software Engineer", "Acme Corp")
    assert split_role_company("Senior Engineer - Payments") == ("Senior Engineer - Payments", "")
    assert split_role_company("Software Engineer Acme Corp") == ("Software Engineer Acme Corp", "")
