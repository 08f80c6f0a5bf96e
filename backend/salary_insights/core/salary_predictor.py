"""Job details → salary range (LLM)."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Union

from salary_insights.core.flow import run_flow
from salary_insights.core.prompts import PromptVersion, Prompts
from salary_insights.models.schemas import PredictSalaryInput, SalaryEstimate
from salary_insights.utils.prometheus_metrics import track_flow_metrics

logger = logging.getLogger(__name__)


@track_flow_metrics("predict_salary")
async def predict_salary(
    llm_service,
    data: Union[PredictSalaryInput, Mapping[str, Any]],
    version: PromptVersion = PromptVersion.V1,
) -> SalaryEstimate:
    """
    Predict a salary range for the given role, experience, location and skills.

    No numeric work happens here; the figures come from the model and may differ
    between calls with identical input.

    Raises:
        pydantic.ValidationError: If ``data`` is not a valid PredictSalaryInput
        ProviderError: If the provider fails or returns a malformed estimate
    """
    req = PredictSalaryInput.model_validate(data)
    system, user = Prompts.predict_salary(version, req)

    logger.info(f"Predicting salary for {req.job_role!r} ({req.experience.value}) in {req.location!r}")
    return await run_flow(
        llm_service,
        name="predict_salary",
        system_prompt=system,
        user_prompt=user,
        output_model=SalaryEstimate,
        temperature=0.2,
        max_tokens=300,
    )
