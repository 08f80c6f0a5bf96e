from __future__ import annotations

from typing import Any, Mapping, Union

from salary_insights.core.flow import run_flow
from salary_insights.core.prompts import PromptVersion, Prompts
from salary_insights.models.schemas import CoverLetter, GenerateCoverLetterInput
from salary_insights.utils.prometheus_metrics import track_flow_metrics


@track_flow_metrics("generate_cover_letter")
async def generate_cover_letter(
    llm_service,
    data: Union[GenerateCoverLetterInput, Mapping[str, Any]],
    version: PromptVersion = PromptVersion.V1,
) -> CoverLetter:
    req = GenerateCoverLetterInput.model_validate(data)
    system, user = Prompts.generate_cover_letter(version, req)

    return await run_flow(
        llm_service,
        name="generate_cover_letter",
        system_prompt=system,
        user_prompt=user,
        output_model=CoverLetter,
        temperature=0.4,
        max_tokens=1200,
    )
