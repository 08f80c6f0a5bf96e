from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException
from starlette import status

from salary_insights.config import get_settings
from salary_insights.core.cover_letter_gen import generate_cover_letter
from salary_insights.core.flow import ProviderError
from salary_insights.core.form import FormValidationError, validate_form
from salary_insights.core.formatting import format_salary_range, salary_chart
from salary_insights.core.salary_predictor import predict_salary
from salary_insights.core.session import COVER_LETTER_FAILED, SALARY_FAILED, SKILLS_FAILED
from salary_insights.core.skill_suggester import suggest_skills
from salary_insights.models.contracts import ErrorResponse, SalaryPredictionResponse
from salary_insights.models.schemas import (
    CoverLetter,
    GenerateCoverLetterInput,
    PredictSalaryInput,
    SkillSuggestions,
    SuggestSkillsInput,
)
from salary_insights.services.llm_service import get_llm_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/insights", tags=["insights"])

PROVIDER_ERRORS = {502: {"model": ErrorResponse}}


def _provider_failed(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=message)


@router.post(
    "/predict-salary",
    response_model=SalaryPredictionResponse,
    responses={422: {"model": ErrorResponse}, **PROVIDER_ERRORS},
)
async def predict_salary_route(
    form: Dict[str, Any] = Body(...),
    llm=Depends(get_llm_service),
):
    # Validate before touching the provider: a rejected form costs nothing.
    try:
        profile = validate_form(form)
    except FormValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={"errors": e.errors},
        )

    try:
        estimate = await predict_salary(llm, PredictSalaryInput.from_profile(profile))
    except ProviderError as e:
        logger.error(f"Error predicting salary: {e}")
        raise _provider_failed(SALARY_FAILED)

    locale = get_settings().display_locale
    return SalaryPredictionResponse(
        profile=profile,
        predicted_salary=format_salary_range(estimate, locale),
        salary=estimate,
        chart=salary_chart(estimate, locale),
    )


@router.post("/cover-letter", response_model=CoverLetter, responses=PROVIDER_ERRORS)
async def cover_letter_route(req: GenerateCoverLetterInput, llm=Depends(get_llm_service)):
    try:
        return await generate_cover_letter(llm, req)
    except ProviderError as e:
        logger.error(f"Error generating cover letter: {e}")
        raise _provider_failed(COVER_LETTER_FAILED)


@router.post("/suggest-skills", response_model=SkillSuggestions, responses=PROVIDER_ERRORS)
async def suggest_skills_route(req: SuggestSkillsInput, llm=Depends(get_llm_service)):
    try:
        return await suggest_skills(llm, req)
    except ProviderError as e:
        logger.error(f"Error suggesting skills: {e}")
        raise _provider_failed(SKILLS_FAILED)
