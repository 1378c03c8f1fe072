"""Tests for section boundary detection."""

from resume_structurer.core.config import ParserConfig
from resume_structurer.core.section_identifier import identify_sections, match_section_header


RESUME = """Jane Doe
jane@example.com

EXPERIENCE
Acme Corp
Software Engineer    Jan 2020 - Dec 2022
- Built a billing pipeline

Education:
B.S. Computer Science, 2019
Stanford University

Technical Skills
Python, Go
"""


def test_sections_are_ordered_and_typed():
    sections = identify_sections(RESUME)
    assert [s.type for s in sections] == ["experience", "education", "skills"]
    assert [s.name for s in sections] == ["Experience", "Education", "Skills"]


def test_section_content_matches_span():
    raw = RESUME.encode("utf-8")
    for section in identify_sections(RESUME):
        start, end = section.span
        assert raw[start:end].decode("utf-8") == section.content, f"{section.name} content must equal its span slice"


def test_spans_count_utf8_bytes():
    text = "Résumé\nEXPERIENCE\nNaïve Café Ltd\n"
    section = identify_sections(text)[0]
    assert section.content == "Naïve Café Ltd\n"
    assert section.span == (20, 37)
    assert text.encode("utf-8")[20:37].decode("utf-8") == section.content


def test_sections_never_overlap():
    sections = identify_sections(RESUME)
    for prev, nxt in zip(sections, sections[1:]):
        assert prev.span[1] <= nxt.span[0], f"{prev.name} overlaps {nxt.name}"


def test_experience_content_stops_at_next_header():
    experience = identify_sections(RESUME)[0]
    assert "Acme Corp" in experience.content
    assert "Stanford" not in experience.content
    assert "Education" not in experience.content


def test_no_headers_yields_no_sections():
    assert identify_sections("Jane Doe\nSoftware Engineer at Acme Corp (2019 - 2021)") == []
    assert identify_sections("") == []


def test_adjacent_headers_give_empty_content():
    sections = identify_sections("PROJECTS\nSKILLS\nPython")
    assert sections[0].type == "projects"
    assert sections[0].content == ""
    assert sections[0].span == (9, 9)
    assert sections[1].content == "Python"


def test_header_matching_is_full_line_and_flexible():
    assert match_section_header("Work   Experience:") == "experience"
    assert match_section_header("  LICENSES & CERTIFICATIONS  ") == "certifications"
    assert match_section_header("Side Projects") == "projects"
    assert match_section_header("- 5 years of experience in payments") is None
    assert match_section_header("Languages: Python, Go") is None


def test_other_headers_terminate_previous_section():
    text = "SKILLS\nPython\nSUMMARY\nEngineer with a decade of experience"
    sections = identify_sections(text)
    assert [s.type for s in sections] == ["skills", "other"]
    assert sections[0].content == "Python\n"


def test_custom_header_vocabulary():
    config = ParserConfig(section_headers={"experience": ("career",)})
    sections = identify_sections("CAREER\nAcme Corp", config)
    assert len(sections) == 1
    assert sections[0].type == "experience"
    assert sections[0].content == "Acme Corp"
