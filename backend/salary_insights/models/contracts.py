from __future__ import annotations

from typing import Dict, List, Union

from pydantic import BaseModel, Field

from salary_insights.models.schemas import CamelModel, JobProfile, SalaryEstimate


class HealthResponse(BaseModel):
    status: str = "ok"


class FieldErrors(BaseModel):
    errors: Dict[str, str]


class ErrorResponse(BaseModel):
    """Body of a 422 (form rejected, per-field messages) or 502 (provider failed) reply."""
    detail: Union[str, FieldErrors]


class ChartBar(CamelModel):
    name: str
    label: str
    value: float
    tick: str


class SalaryPredictionResponse(CamelModel):
    profile: JobProfile
    predicted_salary: str = Field(..., description='Formatted range, e.g. "$90,000 - $120,000".')
    salary: SalaryEstimate
    chart: List[ChartBar] = Field(default_factory=list)
