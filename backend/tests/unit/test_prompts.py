import pytest

from salary_insights.core.prompts import PromptVersion, Prompts
from salary_insights.models.schemas import (
    GenerateCoverLetterInput,
    PredictSalaryInput,
    SuggestSkillsInput,
)


@pytest.fixture
def salary_input(valid_form):
    return PredictSalaryInput.model_validate(valid_form)


def test_salary_prompt_interpolates_fields_verbatim(salary_input):
    system, user = Prompts.predict_salary(PromptVersion.V1, salary_input)
    assert user.splitlines() == [
        "Job Role: Software Engineer",
        "Experience: senior-level",
        "Location: San Francisco, CA",
        "Skills: Python, FastAPI, SQL, AWS",
    ]
    assert "ISO 4217" in system


def test_salary_prompt_embeds_camel_case_schema(salary_input):
    system, _ = Prompts.predict_salary(PromptVersion.V1, salary_input)
    for key in ("minSalary", "maxSalary", "currencyCode"):
        assert key in system
    assert "STRICT JSON" in system


def test_cover_letter_prompt_ends_with_cue(valid_form):
    data = GenerateCoverLetterInput.model_validate({**valid_form, "predictedSalary": "$90,000 - $120,000"})
    system, user = Prompts.generate_cover_letter(PromptVersion.V1, data)
    assert "Predicted Salary: $90,000 - $120,000" in user
    assert f"Job Description: {valid_form['jobDescription']}" in user
    assert user.endswith("Cover Letter:")
    assert "coverLetter" in system


def test_skills_prompt(valid_form):
    system, user = Prompts.suggest_skills(
        PromptVersion.V1, SuggestSkillsInput(job_description=valid_form["jobDescription"])
    )
    assert user == f"Job Description: {valid_form['jobDescription']}"
    assert "suggestedSkills" in system


def test_unsupported_version(salary_input):
    with pytest.raises(ValueError, match="Unsupported prompt version"):
        Prompts.predict_salary("v0", salary_input)
