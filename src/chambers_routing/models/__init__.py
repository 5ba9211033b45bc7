"""Data models for the chambers routing service."""

from .enums import (
    Seniority,
    Urgency,
    Complexity,
    AvailabilityStatus,
    RoutingPriority,
    RoutingCondition,
)
from .enquiry import Enquiry
from .barrister import Barrister, BarristerWorkload
from .routing import (
    RoutingCriteria,
    EligibilityFlags,
    ScoreBreakdown,
    CandidateEvaluation,
    RoutingStatistics,
    RoutingInsights,
    RoutingResult,
    RoutingRecommendation,
)

__all__ = [
    # Enums
    "Seniority",
    "Urgency",
    "Complexity",
    "AvailabilityStatus",
    "RoutingPriority",
    "RoutingCondition",
    # Inputs
    "Enquiry",
    "Barrister",
    "BarristerWorkload",
    # Routing
    "RoutingCriteria",
    "EligibilityFlags",
    "ScoreBreakdown",
    "CandidateEvaluation",
    "RoutingStatistics",
    "RoutingInsights",
    "RoutingResult",
    "RoutingRecommendation",
]
