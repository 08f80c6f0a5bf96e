"""Prompt → provider → schema-validated record.

Shared by the three flows. Every failure on the way (provider error, empty or
non-JSON content, schema mismatch) surfaces as a single ProviderError.
"""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ValidationError

from salary_insights.utils.prometheus_metrics import record_validation_failure

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ProviderError(Exception):
    """Raised when the language-model provider cannot produce a valid record."""


def _strip_code_fences(raw: str) -> str:
    # Gemini often wraps JSON in ```json ... ```
    text = raw.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.strip().endswith("```"):
            text = text.rsplit("```", 1)[0]
    return text.strip()


def _coerce_json(raw: Any) -> Dict[str, Any]:
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, str):
        return json.loads(_strip_code_fences(raw))
    raise TypeError("Unexpected LLM output type")


async def run_flow(
    llm_service,
    *,
    name: str,
    system_prompt: str,
    user_prompt: str,
    output_model: Type[ModelT],
    temperature: float,
    max_tokens: int,
) -> ModelT:
    """
    Send one prompt and validate the answer against ``output_model``.

    Args:
        llm_service: Anything with LLMService.generate_response's signature
        name: Flow name, used for logging and tracking
        output_model: Pydantic model the JSON answer must satisfy

    Returns:
        The validated output record

    Raises:
        ProviderError: If the call fails or the answer does not match the schema
    """
    try:
        # generate_response blocks; keep the event loop free
        resp = await asyncio.to_thread(
            llm_service.generate_response,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            temperature=temperature,
            max_tokens=max_tokens,
            response_format={"type": "json_object"},
            operation=name,
        )
    except Exception as e:
        logger.error(f"{name}: provider call failed: {e}")
        raise ProviderError(f"{name} failed: {e}") from e

    raw = resp.get("content") if isinstance(resp, dict) else None
    if not raw:
        logger.error(f"{name}: empty response from provider")
        raise ProviderError(f"{name} failed: empty response")

    try:
        data = _coerce_json(raw)
    except (json.JSONDecodeError, TypeError) as e:
        logger.error(f"{name}: provider returned invalid JSON: {e}")
        raise ProviderError(f"{name} failed: invalid JSON") from e

    try:
        parsed = output_model.model_validate(data)
    except ValidationError as e:
        logger.error(f"{name}: response doesn't match schema: {e}")
        record_validation_failure(f"{name}_output")
        raise ProviderError(f"{name} failed: response doesn't match schema") from e

    logger.info(f"{name}: succeeded")
    return parsed
