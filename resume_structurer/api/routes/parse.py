from fastapi import APIRouter, HTTPException, Request

from resume_structurer.core.config import DEFAULT_CONFIG
from resume_structurer.core.errors import InvalidArgumentError
from resume_structurer.core.profile_assembler import resolve_profile
from resume_structurer.core.profile_insights import (
    completeness_score,
    prefill_knowledge_base,
    suggest_resume_name,
)
from resume_structurer.core.schemas import ParseRequest, ParseResponse

router = APIRouter(tags=["parse"])


@router.post(
    "/parse",
    response_model=ParseResponse,
    summary="Structure Resume Text",
    description="Turn extracted resume text into a structured profile (experience, projects, education, skills, certifications). A pre-computed structured hint is preferred when it carries experience.",
    responses={
        200: {
            "description": "Successfully structured resume",
            "content": {
                "application/json": {
                    "example": {
                        "structured": {
                            "experience": [
                                {
                                    "title": "Software Engineer",
                                    "company": "Acme Corp",
                                    "duration": "Jan 2020 - Dec 2022",
                                    "bullets": ["Built a billing pipeline", "Reduced latency by 30%"]
                                }
                            ],
                            "projects": [],
                            "education": [],
                            "skills": ["Python", "PostgreSQL"],
                            "certifications": []
                        },
                        "completeness_score": 14,
                        "knowledge_base": {
                            "skills": ["Python", "PostgreSQL"],
                            "work_experience": [
                                {"role": "Software Engineer", "company": "Acme Corp", "period": "Jan 2020 - Dec 2022"}
                            ]
                        },
                        "suggested_name": "Software Engineer - Acme Corp"
                    }
                }
            }
        },
        400: {"description": "Empty or blank resume text"},
        422: {"description": "Malformed request body"}
    }
)
async def parse_resume(payload: ParseRequest, request: Request):
    """
    Structure the plain text of one resume.

    **Returns:**
    - **structured**: experience, projects, education, skills, certifications (lists always present)
    - **completeness_score**: 0-100 CV completeness
    - **knowledge_base**: skills / work_experience / education summaries for prefill
    - **suggested_name**: display name for the resume
    """
    config = getattr(request.app.state, "parser_config", DEFAULT_CONFIG)
    try:
        profile = resolve_profile(payload.raw_text, payload.structured_hint, config=config)
    except InvalidArgumentError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return ParseResponse(
        structured=profile,
        completeness_score=completeness_score(profile),
        knowledge_base=prefill_knowledge_base(profile),
        suggested_name=suggest_resume_name(profile, payload.raw_text),
    )
