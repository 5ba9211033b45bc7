"""Enquiry routing algorithms."""

from .policy import RoutingPolicy, SuitabilityWeights, DEFAULT_POLICY
from .workload import (
    WorkloadEntry,
    WorkloadBottleneck,
    WorkloadSummary,
    calculate_workload,
    build_workload_map,
    workload_for,
    summarize_workload,
)
from .eligibility import EligibilityFilter
from .scorer import SuitabilityScorer, rank_candidates, ranking_key
from .router import (
    EnquiryRouter,
    route_enquiry,
    evaluate_candidate,
    extract_routing_criteria,
    determine_complexity,
)
from .availability import (
    URGENT_UNAVAILABLE_ESTIMATE,
    BarristerAvailability,
    AvailabilitySummary,
    assess_availability,
    find_available_barristers,
    summarize_availability,
)

__all__ = [
    "RoutingPolicy",
    "SuitabilityWeights",
    "DEFAULT_POLICY",
    "calculate_workload",
    "build_workload_map",
    "workload_for",
    "WorkloadEntry",
    "WorkloadBottleneck",
    "WorkloadSummary",
    "summarize_workload",
    "EligibilityFilter",
    "SuitabilityScorer",
    "rank_candidates",
    "ranking_key",
    "EnquiryRouter",
    "route_enquiry",
    "evaluate_candidate",
    "extract_routing_criteria",
    "determine_complexity",
    "URGENT_UNAVAILABLE_ESTIMATE",
    "BarristerAvailability",
    "AvailabilitySummary",
    "assess_availability",
    "find_available_barristers",
    "summarize_availability",
]
