"""
Orchestration state for one browser session.

The page moves through idle → loading → {result, error}. Transitions are a pure
function of (state, event); InsightsPage drives them around the flow calls.

Every submission bumps a generation counter. A flow that completes after the
page has moved on (resubmitted, reset) carries an old generation and its
outcome is dropped, so at most one salary prediction can ever land.
ResultsPanel applies the same rule to its two on-demand calls.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, List, Mapping, Optional, Union

from salary_insights.core.cover_letter_gen import generate_cover_letter
from salary_insights.core.flow import ProviderError
from salary_insights.core.form import validate_form
from salary_insights.core.formatting import DEFAULT_LOCALE, format_salary_range, salary_chart
from salary_insights.core.salary_predictor import predict_salary
from salary_insights.core.skill_suggester import suggest_skills
from salary_insights.models.contracts import ChartBar
from salary_insights.models.schemas import (
    GenerateCoverLetterInput,
    JobProfile,
    PredictSalaryInput,
    SalaryEstimate,
    SuggestSkillsInput,
)

logger = logging.getLogger(__name__)

SALARY_FAILED = "Failed to predict salary. Please try again later."
SKILLS_FAILED = "Failed to suggest skills. Please try again."
COVER_LETTER_FAILED = "Failed to generate cover letter. Please try again."


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    RESULT = "result"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str = "default"  # "destructive" for failures


def failure(description: str) -> Notification:
    return Notification(title="Error", description=description, variant="destructive")


@dataclass(frozen=True)
class SalaryResult:
    profile: JobProfile
    predicted_salary: str
    estimate: SalaryEstimate


@dataclass(frozen=True)
class PageState:
    phase: Phase = Phase.IDLE
    generation: int = 0
    result: Optional[SalaryResult] = None
    notification: Optional[Notification] = None

    @property
    def can_submit(self) -> bool:
        return self.phase is not Phase.LOADING


# -----------------------
# Events
# -----------------------
@dataclass(frozen=True)
class Submitted:
    pass


@dataclass(frozen=True)
class Resolved:
    generation: int
    result: SalaryResult


@dataclass(frozen=True)
class Rejected:
    generation: int
    notification: Notification


@dataclass(frozen=True)
class Dismissed:
    pass


@dataclass(frozen=True)
class Reset:
    pass


Event = Union[Submitted, Resolved, Rejected, Dismissed, Reset]


def transition(state: PageState, event: Event) -> PageState:
    """Next page state. Never mutates ``state``."""
    if isinstance(event, Submitted):
        # a submission while loading supersedes the pending call
        return PageState(phase=Phase.LOADING, generation=state.generation + 1)

    if isinstance(event, Resolved):
        if event.generation != state.generation or state.phase is not Phase.LOADING:
            return state
        return replace(state, phase=Phase.RESULT, result=event.result, notification=None)

    if isinstance(event, Rejected):
        if event.generation != state.generation or state.phase is not Phase.LOADING:
            return state
        return replace(state, phase=Phase.ERROR, result=None, notification=event.notification)

    if isinstance(event, Dismissed):
        if state.phase is Phase.ERROR:
            return replace(state, phase=Phase.IDLE, notification=None)
        return replace(state, notification=None)

    if isinstance(event, Reset):
        return PageState(phase=Phase.IDLE, generation=state.generation + 1)

    raise TypeError(f"Unknown event: {event!r}")


# -----------------------
# Results view
# -----------------------
@dataclass
class SkillBadge:
    skill: str
    already_listed: bool


@dataclass
class _Slot:
    loading: bool = False
    generation: int = 0


def declared_skills(skills: str) -> List[str]:
    return [s.strip() for s in re.split(r"[,\n;]", skills) if s.strip()]


@dataclass
class ResultsPanel:
    """
    On-demand skill suggestions and cover letter for one salary result.

    Each of the two calls has its own loading flag and generation, so they
    can be in flight at the same time without touching each other's state.
    """

    llm_service: Any
    result: SalaryResult
    locale: str = DEFAULT_LOCALE
    suggested_skills: List[str] = field(default_factory=list)
    cover_letter: str = ""
    notification: Optional[Notification] = None
    _skills: _Slot = field(default_factory=_Slot, repr=False)
    _letter: _Slot = field(default_factory=_Slot, repr=False)

    @property
    def is_suggesting_skills(self) -> bool:
        return self._skills.loading

    @property
    def is_generating_letter(self) -> bool:
        return self._letter.loading

    def chart(self) -> List[ChartBar]:
        return salary_chart(self.result.estimate, self.locale)

    def skill_badges(self) -> List[SkillBadge]:
        have = {s.casefold() for s in declared_skills(self.result.profile.skills)}
        return [SkillBadge(skill=s, already_listed=s.casefold() in have) for s in self.suggested_skills]

    @staticmethod
    def badge_message(skill: str) -> Notification:
        return Notification(title="Salary Boost!", description=f"Learning {skill} could increase your salary!")

    async def suggest_skills(self) -> List[str]:
        self._skills.generation += 1
        generation = self._skills.generation
        self._skills.loading = True
        try:
            response = await suggest_skills(
                self.llm_service,
                SuggestSkillsInput(job_description=self.result.profile.job_description),
            )
        except ProviderError as e:
            logger.error(f"Error suggesting skills: {e}")
            if generation == self._skills.generation:
                self.notification = failure(SKILLS_FAILED)
            return self.suggested_skills
        finally:
            if generation == self._skills.generation:
                self._skills.loading = False

        if generation == self._skills.generation:
            # replace, never merge with an earlier call
            self.suggested_skills = list(response.suggested_skills)
        return self.suggested_skills

    async def generate_cover_letter(self) -> str:
        self._letter.generation += 1
        generation = self._letter.generation
        self._letter.loading = True
        self.cover_letter = ""
        try:
            response = await generate_cover_letter(
                self.llm_service,
                GenerateCoverLetterInput.from_profile(self.result.profile, self.result.predicted_salary),
            )
        except ProviderError as e:
            logger.error(f"Error generating cover letter: {e}")
            if generation == self._letter.generation:
                self.notification = failure(COVER_LETTER_FAILED)
            return self.cover_letter
        finally:
            if generation == self._letter.generation:
                self._letter.loading = False

        if generation == self._letter.generation:
            self.cover_letter = response.cover_letter
        return self.cover_letter

    def dismiss(self) -> None:
        self.notification = None


# -----------------------
# Page controller
# -----------------------
class InsightsPage:
    """Owns the page state and the active results panel."""

    def __init__(self, llm_service, locale: str = DEFAULT_LOCALE):
        self.llm = llm_service
        self.locale = locale
        self.state = PageState()
        self.results: Optional[ResultsPanel] = None

    @property
    def can_submit(self) -> bool:
        return self.state.can_submit

    def _dispatch(self, event: Event) -> PageState:
        before = self.state
        self.state = transition(before, event)
        if self.state is before:
            logger.debug(f"Ignored {type(event).__name__} in phase {before.phase.value}")
        else:
            logger.debug(f"{before.phase.value} -> {self.state.phase.value} ({type(event).__name__})")
        return self.state

    async def submit(self, raw: Mapping[str, Any]) -> PageState:
        """
        Validate the form, then predict a salary for it.

        Raises:
            FormValidationError: Submission blocked; no provider call is made
                and the page state is left as it was
        """
        profile = validate_form(raw)

        self._dispatch(Submitted())
        self.results = None
        generation = self.state.generation

        try:
            estimate = await predict_salary(self.llm, PredictSalaryInput.from_profile(profile))
            predicted = format_salary_range(estimate, self.locale)
        except ProviderError as e:
            logger.error(f"Error predicting salary: {e}")
            return self._dispatch(Rejected(generation, failure(SALARY_FAILED)))

        result = SalaryResult(profile=profile, predicted_salary=predicted, estimate=estimate)
        state = self._dispatch(Resolved(generation, result))
        if state.result is result:
            self.results = ResultsPanel(self.llm, result, locale=self.locale)
        return state

    def dismiss(self) -> PageState:
        return self._dispatch(Dismissed())

    def reset(self) -> PageState:
        self.results = None
        return self._dispatch(Reset())
