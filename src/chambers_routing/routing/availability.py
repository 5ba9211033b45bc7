"""Barrister availability for clerks planning assignments."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Optional

from ..models.barrister import Barrister, BarristerWorkload
from ..models.enums import AvailabilityStatus, Seniority, Urgency
from .policy import RoutingPolicy, DEFAULT_POLICY
from .workload import WorkloadEntry, workload_for

URGENT_UNAVAILABLE_ESTIMATE = "Not available for Immediate matters"


@dataclass
class BarristerAvailability:
    """Availability of one barrister."""

    barrister: Barrister
    workload: BarristerWorkload
    status: AvailabilityStatus
    next_available_estimate: Optional[str]
    can_take_urgent: bool

    # Filter matches
    practice_area_match: bool = True
    seniority_match: bool = True
    engagement_match: bool = True
    has_capacity: bool = True

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.barrister.id,
            "name": self.barrister.name,
            "seniority": self.barrister.seniority.value,
            "practice_areas": list(self.barrister.practice_areas),
            "engagement_score": self.barrister.engagement_score,
            "is_active": self.barrister.is_active,
            "availability": {
                "status": self.status.value,
                "utilization_percent": self.workload.utilization_percent,
                "current_workload": self.workload.current_workload,
                "available_capacity": self.workload.available_capacity,
                "next_available_estimate": self.next_available_estimate,
                "can_take_urgent": self.can_take_urgent,
            },
            "suitability_for_filters": {
                "practice_area_match": self.practice_area_match,
                "seniority_match": self.seniority_match,
                "engagement_match": self.engagement_match,
                "has_capacity": self.has_capacity,
            },
        }


@dataclass
class AvailabilitySummary:
    """Chambers-wide availability overview."""

    overview: str
    by_status: dict[str, int] = field(default_factory=dict)
    recommendations: list[str] = field(default_factory=list)
    insights: list[str] = field(default_factory=list)


def assess_availability(
    barrister: Barrister,
    workload: BarristerWorkload,
    urgency: Optional[Urgency] = None,
    policy: Optional[RoutingPolicy] = None,
) -> BarristerAvailability:
    """
    Place a barrister in an availability band.

    <=50% Available, <=75% Limited, <=90% Busy, otherwise Unavailable.
    Inactive barristers are always Unavailable, and Immediate enquiries
    treat anyone above the urgent ceiling as Unavailable.
    """
    policy = policy or DEFAULT_POLICY
    percent = workload.utilization_percent
    estimate = None

    if not barrister.is_active:
        status = AvailabilityStatus.UNAVAILABLE
    elif percent <= 50:
        status = AvailabilityStatus.AVAILABLE
    elif percent <= 75:
        status = AvailabilityStatus.LIMITED
        estimate = "Within 1-2 weeks"
    elif percent <= 90:
        status = AvailabilityStatus.BUSY
        estimate = "Within 2-4 weeks"
    else:
        status = AvailabilityStatus.UNAVAILABLE
        estimate = "More than 4 weeks"

    can_take_urgent = barrister.is_active and percent <= policy.urgent_capacity_percent
    if (
        urgency == Urgency.IMMEDIATE
        and not can_take_urgent
        and status != AvailabilityStatus.UNAVAILABLE
    ):
        status = AvailabilityStatus.UNAVAILABLE
        estimate = URGENT_UNAVAILABLE_ESTIMATE

    return BarristerAvailability(
        barrister=barrister,
        workload=workload,
        status=status,
        next_available_estimate=estimate,
        can_take_urgent=can_take_urgent,
    )


def find_available_barristers(
    barristers: Sequence[Barrister],
    workloads: Optional[Mapping[str, WorkloadEntry]] = None,
    practice_area: Optional[str] = None,
    seniority: Optional[Seniority] = None,
    min_engagement: Optional[float] = None,
    max_workload_percent: Optional[float] = None,
    urgency: Optional[Urgency] = None,
    include_inactive: bool = False,
    limit: int = 20,
    policy: Optional[RoutingPolicy] = None,
) -> list[BarristerAvailability]:
    """
    Filter barristers by availability criteria.

    Args:
        barristers: Barristers to consider
        workloads: Workload metrics or raw counters per barrister id
        practice_area: Required practice area (substring match)
        seniority: Exact seniority wanted
        min_engagement: Minimum engagement score
        max_workload_percent: Utilisation ceiling (policy default when None)
        urgency: Urgency of the matter being planned
        include_inactive: Keep inactive barristers
        limit: Maximum results, clamped to 1-50

    Returns:
        Matching barristers, most engaged first
    """
    policy = policy or DEFAULT_POLICY
    ceiling = max_workload_percent if max_workload_percent is not None else policy.max_capacity_percent
    limit = min(50, max(1, limit))
    required_area = (practice_area or "").strip().lower()

    results = []
    for barrister in barristers:
        if not barrister.is_active and not include_inactive:
            continue

        workload, _ = workload_for(barrister, workloads, policy.max_workload)
        availability = assess_availability(barrister, workload, urgency, policy)

        availability.practice_area_match = not required_area or any(
            required_area in area.lower() for area in barrister.practice_areas
        )
        availability.seniority_match = seniority is None or barrister.seniority == seniority
        availability.engagement_match = (
            min_engagement is None or barrister.engagement_score >= min_engagement
        )
        availability.has_capacity = workload.utilization_percent <= ceiling

        if (
            availability.practice_area_match
            and availability.seniority_match
            and availability.engagement_match
            and availability.has_capacity
        ):
            results.append(availability)

    results.sort(key=lambda a: (-a.barrister.engagement_score, a.barrister.id))
    return results[:limit]


def summarize_availability(
    availabilities: Sequence[BarristerAvailability],
    practice_area: Optional[str] = None,
    seniority: Optional[Seniority] = None,
    urgency: Optional[Urgency] = None,
) -> AvailabilitySummary:
    """Overview, counts by status and advice for a set of barristers."""
    total = len(availabilities)
    by_status = {status.value: 0 for status in AvailabilityStatus}
    for availability in availabilities:
        by_status[availability.status.value] += 1

    available = by_status[AvailabilityStatus.AVAILABLE.value]
    limited = by_status[AvailabilityStatus.LIMITED.value]
    busy = by_status[AvailabilityStatus.BUSY.value]
    unavailable = by_status[AvailabilityStatus.UNAVAILABLE.value]

    if available >= 3:
        overview = f"Good availability: {available} barristers immediately available"
    elif available + limited >= 3:
        overview = f"Moderate availability: {available + limited} barristers available with some constraints"
    else:
        overview = f"Limited availability: Only {available + limited} barristers currently available"

    recommendations = []
    if urgency == Urgency.IMMEDIATE and available < 2:
        recommendations.append("Consider expanding search criteria for urgent matters")
    if available == 0 and limited > 0:
        recommendations.append("Consider barristers with limited availability")
    if total and busy + unavailable > total * 0.7:
        recommendations.append("High utilization across chambers - consider workload redistribution")

    insights = []
    if practice_area and total:
        matches = sum(1 for a in availabilities if a.practice_area_match)
        if matches < total * 0.5:
            insights.append(f"Limited expertise in {practice_area} among available barristers")
    if seniority is not None:
        matches = sum(1 for a in availabilities if a.seniority_match)
        insights.append(f"{matches} of {total} barristers match {seniority.value} seniority requirement")

    high_engagement = sum(1 for a in availabilities if a.barrister.engagement_score >= 70)
    if high_engagement:
        insights.append(f"{high_engagement} barristers have high engagement scores (70+)")

    return AvailabilitySummary(
        overview=overview,
        by_status=by_status,
        recommendations=recommendations,
        insights=insights,
    )
