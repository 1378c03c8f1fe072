"""Tests for loading parser configuration overrides from JSON."""

import json

import pytest
from resume_structurer.core.config import DEFAULT_CONFIG, load_parser_config
from resume_structurer.core.errors import ConfigurationError


def test_no_path_returns_default():
    assert load_parser_config(None) is DEFAULT_CONFIG
    assert load_parser_config("") is DEFAULT_CONFIG


def test_partial_override_keeps_defaults(tmp_path):
    path = tmp_path / "parser.json"
    path.write_text(json.dumps({"skill_keywords": ["Terraform"], "scoring": {"confidence_threshold": 5}}))

    config = load_parser_config(path)

    assert config.skill_keywords == ("Terraform",)
    assert config.scoring.confidence_threshold == 5
    assert config.scoring.job_title == DEFAULT_CONFIG.scoring.job_title
    assert config.job_title_keywords == DEFAULT_CONFIG.job_title_keywords


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_parser_config(tmp_path / "missing.json")


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps({"company_max_length": "long"}),
        json.dumps({"scoring": {"confidence_threshold": -1}}),
    ],
)
def test_invalid_config(tmp_path, content):
    path = tmp_path / "parser.json"
    path.write_text(content)
    with pytest.raises(ConfigurationError):
        load_parser_config(str(path))
