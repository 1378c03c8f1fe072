from fastapi.testclient import TestClient
from resume_structurer.main import app

client = TestClient(app)

RESUME = """Jane Doe
Senior Software Engineer

EXPERIENCE
Acme Corp
Senior Software Engineer    Jan 2021 - Present
- Led a team of 5 engineers building the billing platform
Globex Inc
Software Engineer    Jun 2017 - Dec 2020
- Built internal APIs used by 40 client teams

PROJECTS
Weather App
Technologies: React, Node.js

EDUCATION
Bachelor of Science in Computer Science
Stanford University
2013 - 2017

SKILLS
Python, Go, SQL, Docker, Kubernetes

CERTIFICATIONS
AWS Certified Solutions Architect | Amazon Web Services | 2022
"""


def test_parse_text_returns_structured_profile():
    r = client.post("/parse", json={"raw_text": RESUME})
    assert r.status_code == 200
    data = r.json()

    structured = data["structured"]
    assert set(structured) == {"experience", "projects", "education", "skills", "certifications"}
    assert [e["company"] for e in structured["experience"]] == ["Acme Corp", "Globex Inc"]
    assert structured["projects"][0]["name"] == "Weather App"
    assert structured["education"][0]["institution"] == "Stanford University"
    assert structured["skills"] == ["Python", "Go", "SQL", "Docker", "Kubernetes"]
    assert structured["certifications"][0]["year"] == "2022"

    # 2 jobs (20) + 5 skills (10) + 1 degree (10) + 1 project (5) + 1 certification (5)
    assert data["completeness_score"] == 50
    assert data["knowledge_base"]["work_experience"][0]["period"] == "Jan 2021 - Present"
    assert data["suggested_name"] == "Senior Software Engineer - Acme Corp"


def test_blank_text_is_rejected():
    r = client.post("/parse", json={"raw_text": "   \n  "})
    assert r.status_code == 400


def test_missing_text_is_unprocessable():
    r = client.post("/parse", json={})
    assert r.status_code == 422


def test_structured_hint_with_experience_is_preferred():
    hint = {
        "experience": [{"title": "CTO", "company": "Initech", "duration": "2018 - 2020", "achievements": ["Grew the team"]}],
        "skills": ["Leadership"],
    }
    r = client.post("/parse", json={"raw_text": RESUME, "structured_hint": hint})
    assert r.status_code == 200
    data = r.json()
    assert data["structured"]["experience"][0]["company"] == "Initech"
    assert data["structured"]["skills"] == ["Leadership"]
    assert data["suggested_name"] == "CTO - Initech"


def test_health():
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").json() == {"service": "resume-structurer", "status": "running"}
