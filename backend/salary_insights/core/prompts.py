import json
from enum import Enum
from typing import Tuple, Type

from pydantic import BaseModel

from salary_insights.models.schemas import (
    CoverLetter,
    GenerateCoverLetterInput,
    PredictSalaryInput,
    SalaryEstimate,
    SkillSuggestions,
    SuggestSkillsInput,
)


class PromptVersion(Enum):
    V1 = "v1"


def _schema_json(model: Type[BaseModel]) -> str:
    return json.dumps(model.model_json_schema(by_alias=True), indent=2)


def _strict_json_footer(model: Type[BaseModel]) -> str:
    return f"""
Return STRICT JSON only (no markdown, no extra text) matching the following schema:
{_schema_json(model)}
"""


class Prompts:
    """Centralized prompt repository. Versioned prompts for LLM calls.

    Every getter returns a (system_prompt, user_prompt) pair. Input fields are
    interpolated verbatim into the user prompt.
    """

    @staticmethod
    def predict_salary(version: PromptVersion, data: PredictSalaryInput) -> Tuple[str, str]:
        if version == PromptVersion.V1:
            system = (
                "You are a salary prediction expert. Based on the job details provided, "
                "predict a realistic salary range.\n"
                "Provide the estimated minimum and maximum salary in the local currency for the "
                "specified location, along with the appropriate ISO 4217 currency code. "
                "Do not add any commentary.\n"
                + _strict_json_footer(SalaryEstimate)
            )
            user = (
                f"Job Role: {data.job_role}\n"
                f"Experience: {data.experience.value}\n"
                f"Location: {data.location}\n"
                f"Skills: {data.skills}"
            )
            return system, user
        else:
            raise ValueError(f"Unsupported prompt version: {version}")

    @staticmethod
    def generate_cover_letter(version: PromptVersion, data: GenerateCoverLetterInput) -> Tuple[str, str]:
        if version == PromptVersion.V1:
            system = (
                "You are an expert cover letter writer, specializing in tailoring cover letters "
                "to predicted salaries and job descriptions.\n"
                "Based on the job role, experience, location, skills, predicted salary, and job "
                "description, generate a cover letter that highlights the applicant's strengths "
                "and justifies the desired salary.\n"
                "Put the full letter text in the coverLetter field.\n"
                + _strict_json_footer(CoverLetter)
            )
            user = (
                f"Job Role: {data.job_role}\n"
                f"Experience: {data.experience.value}\n"
                f"Location: {data.location}\n"
                f"Skills: {data.skills}\n"
                f"Predicted Salary: {data.predicted_salary}\n"
                f"Job Description: {data.job_description}\n\n"
                "Cover Letter:"
            )
            return system, user
        else:
            raise ValueError(f"Unsupported prompt version: {version}")

    @staticmethod
    def suggest_skills(version: PromptVersion, data: SuggestSkillsInput) -> Tuple[str, str]:
        if version == PromptVersion.V1:
            system = (
                "You are a career advisor. Based on the job description, suggest skills that "
                "would increase the applicant's earning potential for this role.\n"
                "Rules:\n"
                "- Order the skills from most to least relevant.\n"
                "- Each skill must be a short term (e.g., \"Kubernetes\", \"System Design\").\n"
                "- Return between 3 and 10 skills.\n"
                + _strict_json_footer(SkillSuggestions)
            )
            user = f"Job Description: {data.job_description}"
            return system, user
        else:
            raise ValueError(f"Unsupported prompt version: {version}")
