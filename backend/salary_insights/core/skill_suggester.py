"""Job description → ranked skill suggestions (LLM)."""
from __future__ import annotations

from typing import Any, Mapping, Union

from salary_insights.core.flow import run_flow
from salary_insights.core.prompts import PromptVersion, Prompts
from salary_insights.models.schemas import SkillSuggestions, SuggestSkillsInput
from salary_insights.utils.prometheus_metrics import track_flow_metrics


@track_flow_metrics("suggest_skills")
async def suggest_skills(
    llm_service,
    data: Union[SuggestSkillsInput, Mapping[str, Any]],
    version: PromptVersion = PromptVersion.V1,
) -> SkillSuggestions:
    """
    Suggest skills worth learning for the role described.

    Suggestions are not checked against the applicant's declared skills.
    """
    req = SuggestSkillsInput.model_validate(data)
    system, user = Prompts.suggest_skills(version, req)

    return await run_flow(
        llm_service,
        name="suggest_skills",
        system_prompt=system,
        user_prompt=user,
        output_model=SkillSuggestions,
        temperature=0.3,
        max_tokens=400,
    )
