"""Routing criteria and result models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .barrister import Barrister, BarristerWorkload
from .enums import Complexity, RoutingCondition, RoutingPriority, Urgency


class RoutingCriteria(BaseModel):
    """Normalised routing input extracted from an enquiry."""

    model_config = ConfigDict(frozen=True)

    practice_area: str = ""
    complexity: Complexity = Complexity.MEDIUM
    value: float = 0.0
    urgency: Urgency = Urgency.FLEXIBLE


class EligibilityFlags(BaseModel):
    """Per-predicate eligibility of one barrister for one enquiry."""

    model_config = ConfigDict(frozen=True)

    practice_area_match: bool
    seniority_match: bool
    capacity_match: bool
    value_match: bool
    is_active: bool = True

    @computed_field
    @property
    def eligible(self) -> bool:
        return (
            self.is_active
            and self.practice_area_match
            and self.seniority_match
            and self.capacity_match
            and self.value_match
        )


class ScoreBreakdown(BaseModel):
    """Normalised sub-scores (0-1) behind a suitability score."""

    model_config = ConfigDict(frozen=True)

    practice_area: float = 0.0
    workload: float = 0.0
    engagement: float = 0.0
    seniority: float = 0.0


class CandidateEvaluation(BaseModel):
    """Outcome of evaluating a single barrister against an enquiry."""

    model_config = ConfigDict(frozen=True)

    barrister: Barrister
    workload: BarristerWorkload
    eligibility: EligibilityFlags
    suitability_score: float = Field(ge=0.0, le=100.0)
    breakdown: ScoreBreakdown
    warnings: list[str] = Field(default_factory=list)
    recommendation_reason: str = ""

    @property
    def barrister_id(self) -> str:
        return self.barrister.id

    @property
    def is_eligible(self) -> bool:
        return self.eligibility.eligible


class RoutingStatistics(BaseModel):
    """Aggregate numbers over every evaluated candidate."""

    model_config = ConfigDict(frozen=True)

    total: int = 0
    eligible: int = 0
    eligibility_rate: int = 0  # percent
    average_score: float = 0.0
    top_score: float = 0.0
    practice_area_matches: int = 0
    seniority_mismatches: int = 0
    capacity_issues: int = 0
    value_mismatches: int = 0


class RoutingInsights(BaseModel):
    """Human-readable review material for a routing decision."""

    model_config = ConfigDict(frozen=True)

    summary: str
    recommendations: list[str] = Field(default_factory=list)
    concerns: list[str] = Field(default_factory=list)
    statistics: RoutingStatistics = Field(default_factory=RoutingStatistics)


class RoutingResult(BaseModel):
    """Complete routing outcome for one enquiry."""

    model_config = ConfigDict(frozen=True)

    enquiry_id: Optional[str] = None
    criteria: RoutingCriteria
    recommended: Optional[CandidateEvaluation] = None
    alternatives: list[CandidateEvaluation] = Field(default_factory=list)
    eligible: list[CandidateEvaluation] = Field(default_factory=list)
    ineligible: list[CandidateEvaluation] = Field(default_factory=list)

    # Inactive barristers skipped when unavailable candidates are excluded
    excluded: list[str] = Field(default_factory=list)

    total_candidates: int = 0
    insights: RoutingInsights
    warnings: list[str] = Field(default_factory=list)
    conditions: list[RoutingCondition] = Field(default_factory=list)
    algorithm_version: str = "1.0.0"

    @property
    def ranked(self) -> list[CandidateEvaluation]:
        """Eligible candidates first, then ineligible, each in rank order."""
        return [*self.eligible, *self.ineligible]


class RoutingRecommendation(BaseModel):
    """Short recommendation shown to a clerk reviewing the assignment."""

    primary_recommendation: str
    alternative_options: list[str] = Field(default_factory=list)
    action_required: bool = False
    priority: RoutingPriority = RoutingPriority.MEDIUM
