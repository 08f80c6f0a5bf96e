"""Typed contracts for the three flows and the job profile form."""
from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class ExperienceLevel(str, Enum):
    ENTRY = "entry-level"
    MID = "mid-level"
    SENIOR = "senior-level"
    LEAD = "lead"
    MANAGER = "manager"


class CamelModel(BaseModel):
    """Field names are snake_case in Python and camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -----------------------
# Form
# -----------------------
class JobProfile(CamelModel):
    """Validated form submission. Immutable once captured."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    job_role: str = Field(..., min_length=2, description="The job role.")
    experience: ExperienceLevel = Field(..., description="The experience level of the applicant.")
    location: str = Field(..., min_length=2, description="The job location, e.g. 'London, UK'.")
    skills: str = Field(..., min_length=10, description="Free-text list of the applicant's skills.")
    job_description: str = Field(..., min_length=50, description="The full job description.")


# -----------------------
# Salary prediction
# -----------------------
class PredictSalaryInput(CamelModel):
    job_role: str = Field(..., description="The job role.")
    experience: ExperienceLevel = Field(
        ..., description="The experience level of the applicant (e.g., entry-level, mid-level, senior-level)."
    )
    location: str = Field(..., description='The job location (e.g., "San Francisco, CA", "London, UK").')
    skills: str = Field(..., description="A comma-separated list of relevant skills.")

    @classmethod
    def from_profile(cls, profile: JobProfile) -> "PredictSalaryInput":
        return cls(
            job_role=profile.job_role,
            experience=profile.experience,
            location=profile.location,
            skills=profile.skills,
        )


class SalaryEstimate(CamelModel):
    min_salary: float = Field(..., ge=0, description="The minimum predicted salary in the local currency.")
    max_salary: float = Field(..., ge=0, description="The maximum predicted salary in the local currency.")
    currency_code: str = Field(
        ..., pattern=r"^[A-Za-z]{3}$", description="The ISO 4217 currency code (e.g., USD, EUR, GBP)."
    )

    @field_validator("currency_code")
    @classmethod
    def _upper_currency(cls, v: str) -> str:
        return v.upper()

    @model_validator(mode="after")
    def _ordered_range(self) -> "SalaryEstimate":
        if self.min_salary > self.max_salary:
            raise ValueError("minSalary must not exceed maxSalary")
        return self


# -----------------------
# Cover letter
# -----------------------
class GenerateCoverLetterInput(CamelModel):
    job_role: str = Field(..., description="The job role for which the cover letter is being generated.")
    experience: ExperienceLevel = Field(..., description="The experience level of the applicant.")
    location: str = Field(..., description="The location of the job.")
    skills: str = Field(..., description="The skills relevant to the job.")
    predicted_salary: str = Field(..., description="The predicted salary range for the job.")
    job_description: str = Field(..., description="The detailed job description.")

    @classmethod
    def from_profile(cls, profile: JobProfile, predicted_salary: str) -> "GenerateCoverLetterInput":
        return cls(
            job_role=profile.job_role,
            experience=profile.experience,
            location=profile.location,
            skills=profile.skills,
            predicted_salary=predicted_salary,
            job_description=profile.job_description,
        )


class CoverLetter(CamelModel):
    cover_letter: str = Field(..., min_length=1, description="The generated cover letter.")


# -----------------------
# Skill suggestions
# -----------------------
class SuggestSkillsInput(CamelModel):
    job_description: str = Field(..., min_length=1, description="The job description to analyse.")


class SkillSuggestions(CamelModel):
    suggested_skills: List[str] = Field(
        default_factory=list,
        description="Skills that would raise the applicant's earning potential, most relevant first.",
    )

    @field_validator("suggested_skills")
    @classmethod
    def _dedupe(cls, skills: List[str]) -> List[str]:
        seen = set()
        out: List[str] = []
        for s in skills:
            s = s.strip()
            key = s.casefold()
            if not s or key in seen:
                continue
            seen.add(key)
            out.append(s)
        return out
