import logging
import os

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from resume_structurer.api.routes.parse import router as parse_router
from resume_structurer.core.config import load_parser_config

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Resume Structurer",
    description="Deterministic engine that turns extracted resume text into a structured profile of experience, projects, education, skills and certifications",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# Optional JSON file overriding vocabularies and scoring weights
app.state.parser_config = load_parser_config(os.getenv("RESUME_PARSER_CONFIG"))
if os.getenv("RESUME_PARSER_CONFIG"):
    logger.info(f"Loaded parser config from {os.getenv('RESUME_PARSER_CONFIG')}")

app.include_router(parse_router)

@app.get("/", tags=["health"])
def root():
    return {"service": "resume-structurer", "status": "running"}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}

def custom_openapi():
    """Generate OpenAPI schema with custom settings."""
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Resume Structurer API",
        version="0.1.0",
        description="Resume text structuring API with experience/project reclassification",
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi
