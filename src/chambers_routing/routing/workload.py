"""
Workload Metrics

Derives utilisation from raw workload counters and summarises how work is
spread across chambers:

- Bottlenecks: barristers above the capacity ceiling, graded by severity
- Distribution: barristers well above or below the chambers average
- Rebalancing: chambers-wide advice when average utilisation runs high
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Optional, Union

from ..models.barrister import Barrister, BarristerWorkload, DEFAULT_MAX_WORKLOAD
from .policy import RoutingPolicy, DEFAULT_POLICY

# A workload map may hold derived metrics or raw counters
WorkloadEntry = Union[BarristerWorkload, int, None]

HIGH_UTILIZATION_RATE = 0.85
LOW_UTILIZATION_RATE = 0.5
DISTRIBUTION_BAND = 0.15


def calculate_workload(
    barrister_id: str,
    current_workload: Optional[int] = None,
    max_workload: int = DEFAULT_MAX_WORKLOAD,
) -> BarristerWorkload:
    """
    Derive workload metrics from a raw load counter.

    A missing or negative counter counts as no load.
    """
    current = max(0, int(current_workload or 0))
    return BarristerWorkload(
        barrister_id=barrister_id,
        current_workload=current,
        max_workload=max_workload,
    )


def build_workload_map(
    counters: Mapping[str, Optional[int]],
    max_workload: int = DEFAULT_MAX_WORKLOAD,
) -> dict[str, BarristerWorkload]:
    """Build the per-request workload map from stored counters."""
    return {
        barrister_id: calculate_workload(barrister_id, current, max_workload)
        for barrister_id, current in counters.items()
    }


def workload_for(
    barrister: Barrister,
    workloads: Optional[Mapping[str, WorkloadEntry]],
    max_workload: int = DEFAULT_MAX_WORKLOAD,
) -> tuple[BarristerWorkload, bool]:
    """
    Look up a barrister's workload.

    Map entries may be BarristerWorkload metrics or raw counters. A None
    entry counts as absent: the counter on the barrister record is used,
    then zero load.

    Returns:
        Tuple of (workload, was_missing)
    """
    entry = workloads.get(barrister.id) if workloads else None

    if isinstance(entry, BarristerWorkload):
        return (entry, False)
    if entry is not None:
        return (calculate_workload(barrister.id, entry, max_workload), False)
    if barrister.current_workload is not None:
        return (calculate_workload(barrister.id, barrister.current_workload, max_workload), False)
    return (calculate_workload(barrister.id, 0, max_workload), True)


# =============================================================================
# Distribution Summary
# =============================================================================

@dataclass
class WorkloadBottleneck:
    """A barrister working above the capacity ceiling."""

    barrister_id: str
    utilization_percent: int
    severity: str  # Low, Medium, High, Critical
    recommendation: str

    def to_dict(self) -> dict:
        return {
            "barrister_id": self.barrister_id,
            "utilization_percent": self.utilization_percent,
            "severity": self.severity,
            "recommendation": self.recommendation,
        }


@dataclass
class WorkloadSummary:
    """How work is spread across a set of barristers."""

    total: int = 0
    average_utilization: float = 0.0  # 0-1
    high_utilization: int = 0
    low_utilization: int = 0
    over_capacity: int = 0
    bottlenecks: list[WorkloadBottleneck] = field(default_factory=list)
    overloaded: list[str] = field(default_factory=list)
    underused: list[str] = field(default_factory=list)
    rebalance_recommendations: list[str] = field(default_factory=list)
    insights: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "total": self.total,
            "average_utilization": self.average_utilization,
            "high_utilization": self.high_utilization,
            "low_utilization": self.low_utilization,
            "over_capacity": self.over_capacity,
            "bottlenecks": [b.to_dict() for b in self.bottlenecks],
            "overloaded": self.overloaded,
            "underused": self.underused,
            "rebalance_recommendations": self.rebalance_recommendations,
            "insights": self.insights,
        }


def _bottleneck_severity(rate: float) -> str:
    if rate >= 0.98:
        return "Critical"
    if rate >= 0.92:
        return "High"
    if rate >= 0.87:
        return "Medium"
    return "Low"


def summarize_workload(
    workloads: Sequence[BarristerWorkload],
    policy: Optional[RoutingPolicy] = None,
) -> WorkloadSummary:
    """
    Summarise workload distribution across barristers.

    Args:
        workloads: Current workload per barrister
        policy: Supplies the capacity ceiling (default policy when None)

    Returns:
        WorkloadSummary with counts, bottlenecks, distribution and advice
    """
    policy = policy or DEFAULT_POLICY
    total = len(workloads)
    if total == 0:
        return WorkloadSummary()

    ceiling = policy.max_capacity_percent
    average = sum(w.utilization_rate for w in workloads) / total
    ordered = sorted(workloads, key=lambda w: (-w.utilization_rate, w.barrister_id))

    bottlenecks = []
    for workload in ordered:
        # Same cross-multiplication as the eligibility capacity check
        if workload.current_workload * 100 <= ceiling * workload.max_workload:
            continue
        severity = _bottleneck_severity(workload.utilization_rate)
        bottlenecks.append(WorkloadBottleneck(
            barrister_id=workload.barrister_id,
            utilization_percent=workload.utilization_percent,
            severity=severity,
            recommendation=(
                "Immediate workload redistribution required"
                if severity == "Critical"
                else "Monitor closely and prepare for overflow"
            ),
        ))

    overloaded = [w.barrister_id for w in ordered if w.utilization_rate > average + DISTRIBUTION_BAND]
    underused = [w.barrister_id for w in reversed(ordered) if w.utilization_rate < average - DISTRIBUTION_BAND]
    high = sum(1 for w in workloads if w.utilization_rate > HIGH_UTILIZATION_RATE)
    low = sum(1 for w in workloads if w.utilization_rate < LOW_UTILIZATION_RATE)

    rebalance = []
    if average > 0.95:
        rebalance.append("Consider adding capacity to handle current demand")
    elif average > HIGH_UTILIZATION_RATE:
        rebalance.append("Redistribute workload to optimize utilization")
    if bottlenecks and underused:
        rebalance.append(
            f"Move work from {', '.join(b.barrister_id for b in bottlenecks)} "
            f"to {', '.join(underused)}"
        )

    insights = []
    average_percent = round(average * 100)
    if average_percent > 85:
        insights.append("High overall utilization - consider capacity planning")
    elif average_percent < 60:
        insights.append("Low utilization - barristers available for additional work")
    if bottlenecks:
        insights.append(f"{len(bottlenecks)} barristers over capacity - immediate attention required")
    if high > total * 0.5:
        insights.append("More than half of barristers at high utilization")

    return WorkloadSummary(
        total=total,
        average_utilization=round(average, 3),
        high_utilization=high,
        low_utilization=low,
        over_capacity=len(bottlenecks),
        bottlenecks=bottlenecks,
        overloaded=overloaded,
        underused=underused,
        rebalance_recommendations=rebalance,
        insights=insights,
    )
