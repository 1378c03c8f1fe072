"""Tests for Projects section extraction."""

from resume_structurer.core.project_parser import (
    extract_project_drafts,
    extract_projects,
    is_project_name,
    parse_technologies,
)


def test_weather_app_project():
    content = "Weather App\nBuilt using React and Node.js\nTechnologies: React, Node.js"
    projects = extract_projects(content)
    assert len(projects) == 1
    assert projects[0].name == "Weather App"
    assert projects[0].technologies == ["React", "Node.js"]
    assert projects[0].description == "Built using React and Node.js"


def test_multiple_projects_with_bullets():
    content = (
        "Weather App\n"
        "- Forecast dashboard with hourly alerts\n"
        "Tech Stack: Vue, Flask\n"
        "Inventory Tracker | github.com/jane/inventory\n"
        "- Barcode scanning for small shops\n"
    )
    projects = extract_projects(content)
    assert [p.name for p in projects] == ["Weather App", "Inventory Tracker"]
    assert projects[0].bullets == ["Forecast dashboard with hourly alerts"]
    assert projects[0].technologies == ["Vue", "Flask"]
    assert projects[1].description == "github.com/jane/inventory"


def test_technology_dedup_is_case_insensitive():
    assert parse_technologies("Technologies: react, React, NODE.JS, Node.js") == ["react", "NODE.JS"]
    assert parse_technologies("Built with: React and Node.js") == ["React", "Node.js"]


def test_project_name_rules():
    assert is_project_name("Weather App")
    assert not is_project_name("Built using React and Node.js")
    assert not is_project_name("Technologies: React")
    assert not is_project_name("- Weather App")
    assert not is_project_name("A responsive site for booking appointments at local clinics.")


def test_job_line_inside_project_is_recorded_on_draft():
    content = "Acme Corp\nSoftware Engineer Jan 2020 - Present\n- Reduced costs for enterprise clients"
    drafts = extract_project_drafts(content)
    assert len(drafts) == 1
    draft = drafts[0]
    assert draft.name == "Acme Corp"
    assert draft.company == "Acme Corp"
    assert draft.title == "Software Engineer"
    assert draft.duration == "Jan 2020 - Present"


def test_role_line_does_not_turn_project_name_into_company():
    content = "Weather App\nLead Developer  Jan 2021 - Mar 2021\n- Built the UI for forecasts\nTechnologies: React"
    draft = extract_project_drafts(content)[0]
    assert draft.name == "Weather App"
    assert draft.title == "Lead Developer"
    assert draft.duration == "Jan 2021 - Mar 2021"
    assert draft.company == ""


def test_role_line_with_named_employer():
    content = "Billing Engine\nBackend Engineer | Initech | Jan 2020 - Present\n- Reduced costs for enterprise clients"
    draft = extract_project_drafts(content)[0]
    assert draft.title == "Backend Engineer"
    assert draft.company == "Initech"
