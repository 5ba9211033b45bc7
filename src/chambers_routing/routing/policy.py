"""
Routing Policy

Tunable thresholds and weights for enquiry routing. The numbers are policy,
not contract: chambers can vary them per deployment through Settings or by
constructing a RoutingPolicy directly.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional

from ..config import Settings, settings as default_settings
from ..models.enums import Complexity, Seniority, Urgency


@dataclass(frozen=True)
class SuitabilityWeights:
    """
    Weights for the suitability score components.

    All weights should sum to 1.0 for normalized scoring.
    """

    practice_area: float = 0.35   # Specialism fit
    workload: float = 0.25        # Prefer less busy barristers
    engagement: float = 0.25      # Historical engagement score
    seniority: float = 0.15       # Right level for the matter

    def __post_init__(self):
        """Validate weights sum to 1.0 and are non-negative."""
        weights = (self.practice_area, self.workload, self.engagement, self.seniority)
        if any(w < 0 for w in weights):
            raise ValueError(f"Suitability weights must be non-negative, got {weights}")
        total = sum(weights)
        if abs(total - 1.0) > 0.01:
            raise ValueError(f"Suitability weights must sum to 1.0, got {total}")


def _default_minimum_seniority() -> dict[Complexity, Seniority]:
    return {
        Complexity.SIMPLE: Seniority.PUPIL,
        Complexity.MEDIUM: Seniority.JUNIOR,
        Complexity.COMPLEX: Seniority.MIDDLE,
    }


def _default_value_ceilings() -> dict[Seniority, Optional[float]]:
    # None means no ceiling
    return {
        Seniority.PUPIL: 25_000,
        Seniority.JUNIOR: 100_000,
        Seniority.MIDDLE: 250_000,
        Seniority.SENIOR: 1_000_000,
        Seniority.KC: None,
    }


@dataclass(frozen=True)
class RoutingPolicy:
    """Thresholds, ceilings and weights used by every routing component."""

    max_workload: int = 100

    # Capacity ceilings (utilisation percent)
    max_capacity_percent: float = 90.0
    urgent_capacity_percent: float = 80.0

    # Value thresholds
    high_value_threshold: float = 100_000
    very_high_value_threshold: float = 500_000
    simple_value_ceiling: float = 10_000
    min_engagement_for_high_value: float = 70.0

    # Read-only once constructed
    minimum_seniority: Mapping[Complexity, Seniority] = field(default_factory=_default_minimum_seniority)
    value_ceilings: Mapping[Seniority, Optional[float]] = field(default_factory=_default_value_ceilings)
    weights: SuitabilityWeights = field(default_factory=SuitabilityWeights)

    alternative_count: int = 4
    algorithm_version: str = "1.0.0"

    def __post_init__(self):
        if self.max_workload <= 0:
            raise ValueError(f"max_workload must be positive, got {self.max_workload}")
        if self.urgent_capacity_percent > self.max_capacity_percent:
            raise ValueError("Urgent capacity ceiling cannot exceed the standard ceiling")
        missing = set(Complexity) - set(self.minimum_seniority)
        if missing:
            raise ValueError(f"No minimum seniority for: {sorted(m.value for m in missing)}")
        missing = set(Seniority) - set(self.value_ceilings)
        if missing:
            raise ValueError(f"No value ceiling for: {sorted(m.value for m in missing)}")

        object.__setattr__(self, "minimum_seniority", MappingProxyType(dict(self.minimum_seniority)))
        object.__setattr__(self, "value_ceilings", MappingProxyType(dict(self.value_ceilings)))

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "RoutingPolicy":
        """Build a policy from application settings."""
        s = settings or default_settings
        return cls(
            max_workload=s.MAX_WORKLOAD,
            max_capacity_percent=s.MAX_CAPACITY_PERCENT,
            urgent_capacity_percent=s.URGENT_CAPACITY_PERCENT,
            high_value_threshold=s.HIGH_VALUE_THRESHOLD,
            very_high_value_threshold=s.VERY_HIGH_VALUE_THRESHOLD,
            simple_value_ceiling=s.SIMPLE_VALUE_CEILING,
            min_engagement_for_high_value=s.MIN_ENGAGEMENT_FOR_HIGH_VALUE,
            alternative_count=s.ALTERNATIVE_CANDIDATES,
            algorithm_version=s.ALGORITHM_VERSION,
        )

    def capacity_ceiling(self, urgency: Optional[Urgency]) -> float:
        """Utilisation percent ceiling for the given urgency."""
        if urgency == Urgency.IMMEDIATE:
            return self.urgent_capacity_percent
        return self.max_capacity_percent

    def required_seniority(self, complexity: Complexity) -> Seniority:
        return self.minimum_seniority[complexity]

    def value_ceiling(self, seniority: Seniority) -> Optional[float]:
        return self.value_ceilings[seniority]


DEFAULT_POLICY = RoutingPolicy.from_settings()
