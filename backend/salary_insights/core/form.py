"""Form-side validation of the five job fields."""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from pydantic import ValidationError

from salary_insights.models.schemas import JobProfile
from salary_insights.utils.prometheus_metrics import record_validation_failure

logger = logging.getLogger(__name__)

# Form order; keys are the wire (camelCase) names.
FIELD_MESSAGES: Dict[str, str] = {
    "jobRole": "Job role must be at least 2 characters.",
    "experience": "Please select an experience level.",
    "location": "Location must be at least 2 characters.",
    "skills": "Please list some key skills (at least 10 characters).",
    "jobDescription": "Job description must be at least 50 characters.",
}


class FormValidationError(ValueError):
    """Raised when a form submission breaks one or more field constraints."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))


def validate_form(raw: Mapping[str, Any]) -> JobProfile:
    """
    Validate raw form values and capture them as a JobProfile.

    Values are passed through unmodified. Accepts camelCase or snake_case keys.

    Raises:
        FormValidationError: With one message per failing field, in form order
    """
    try:
        return JobProfile.model_validate(dict(raw))
    except ValidationError as e:
        failed = set()
        for err in e.errors():
            field = err["loc"][0] if err["loc"] else None
            if field in FIELD_MESSAGES:
                failed.add(field)
            else:
                # snake_case input keys report their alias-less name
                alias = JobProfile.model_fields.get(field)
                if alias is not None and alias.alias in FIELD_MESSAGES:
                    failed.add(alias.alias)

        errors = {k: v for k, v in FIELD_MESSAGES.items() if k in failed}
        for field in errors:
            record_validation_failure(field)
        logger.info(f"Form rejected: {sorted(errors)}")
        raise FormValidationError(errors) from e
