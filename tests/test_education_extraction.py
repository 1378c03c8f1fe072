"""
Tests for education entry extraction.

Covers degree-first and institution-first layouts, trailing years and coursework lines.
"""

from resume_structurer.core.education_parser import (
    extract_education,
    is_degree_line,
    split_institution_date,
    split_trailing_year,
)


# ===== LINE HELPERS =====

def test_degree_line_detection():
    assert is_degree_line("Bachelor of Science in Computer Science")
    assert is_degree_line("• M.S. in Data Science")
    assert not is_degree_line("MS Excel, Word")
    assert not is_degree_line("Stanford University")


def test_trailing_year_moves_off_degree():
    assert split_trailing_year("B.S. Computer Science, 2020") == ("B.S. Computer Science", "2020")
    assert split_trailing_year("Master of Science (2019 - 2021)") == ("Master of Science", "2019 - 2021")
    assert split_trailing_year("Bachelor of Arts") == ("Bachelor of Arts", "")


def test_institution_with_date():
    assert split_institution_date("Stanford University, 2016 - 2020") == ("Stanford University", "2016 - 2020")
    assert split_institution_date("Stanford University") is None


# ===== ENTRY EXTRACTION =====

def test_degree_institution_year_coursework():
    content = (
        "Bachelor of Science in Computer Science\n"
        "Stanford University\n"
        "2016 - 2020\n"
        "Relevant Coursework: Algorithms, Databases\n"
    )
    entries = extract_education(content)
    assert len(entries) == 1
    entry = entries[0]
    assert entry.degree == "Bachelor of Science in Computer Science"
    assert entry.institution == "Stanford University"
    assert entry.year == "2016 - 2020"
    assert entry.coursework == ["Algorithms", "Databases"]


def test_degree_with_trailing_year():
    entries = extract_education("B.S. Computer Science, 2020\nUniversity of Washington")
    assert entries[0].degree == "B.S. Computer Science"
    assert entries[0].year == "2020"
    assert entries[0].institution == "University of Washington"


def test_institution_first_layout():
    entries = extract_education("Stanford University\nMaster of Science in Data Science\nMay 2022")
    assert len(entries) == 1
    assert entries[0].institution == "Stanford University"
    assert entries[0].degree == "Master of Science in Data Science"
    assert entries[0].year == "May 2022"


def test_multiple_degrees():
    content = (
        "M.S. Computer Science\n"
        "Georgia Institute of Technology, 2022\n"
        "B.S. Mathematics\n"
        "Ohio State University, 2018\n"
    )
    entries = extract_education(content)
    assert [e.degree for e in entries] == ["M.S. Computer Science", "B.S. Mathematics"]
    assert [e.institution for e in entries] == ["Georgia Institute of Technology", "Ohio State University"]
    assert [e.year for e in entries] == ["2022", "2018"]


def test_no_degree_lines_yield_nothing():
    assert extract_education("Dean's List\nVolunteer tutor") == []
