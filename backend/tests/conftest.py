import json
from unittest.mock import MagicMock

import pytest


JOB_DESCRIPTION = (
    "We are hiring a backend engineer to design, build and operate Python services "
    "on AWS. You will own FastAPI APIs, PostgreSQL schemas and CI/CD pipelines."
)


def llm_returning(*payloads):
    """MagicMock LLM service whose generate_response yields each payload in turn."""
    llm = MagicMock()
    llm.generate_response.side_effect = [
        {
            "content": p if isinstance(p, str) else json.dumps(p),
            "usage": {"input_tokens": 100, "output_tokens": 20, "total_tokens": 120},
            "model": "gpt-4o",
            "provider": "openai",
        }
        for p in payloads
    ]
    return llm


@pytest.fixture
def valid_form():
    """Raw form values that pass every field constraint."""
    return {
        "jobRole": "Software Engineer",
        "experience": "senior-level",
        "location": "San Francisco, CA",
        "skills": "Python, FastAPI, SQL, AWS",
        "jobDescription": JOB_DESCRIPTION,
    }


@pytest.fixture
def salary_payload():
    return {"minSalary": 90000, "maxSalary": 120000, "currencyCode": "USD"}


@pytest.fixture
def make_llm():
    return llm_returning


@pytest.fixture
def mock_llm_service():
    """Bare MagicMock LLM service, configured by the test."""
    return MagicMock()
