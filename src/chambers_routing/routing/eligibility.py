"""
Eligibility Filter

Decides whether a barrister may take an enquiry. Four independent checks:

- Practice area: the barrister practises in the enquiry's area
- Seniority: the barrister meets the minimum tier for the matter's complexity
- Capacity: utilisation is within the ceiling (tighter for Immediate matters)
- Value: the barrister's tier is authorised for the matter value, and
  high-value matters go to engaged barristers only

Ineligible barristers keep their per-check flags so a clerk can see why.
"""

from typing import Optional

from ..models.barrister import Barrister, BarristerWorkload
from ..models.routing import EligibilityFlags, RoutingCriteria
from .policy import RoutingPolicy, DEFAULT_POLICY


class EligibilityFilter:
    """Evaluates the eligibility checks for a barrister."""

    def __init__(self, policy: Optional[RoutingPolicy] = None):
        self.policy = policy or DEFAULT_POLICY

    def matches_practice_area(self, barrister: Barrister, practice_area: str) -> bool:
        """Case-insensitive substring match against any of the barrister's areas."""
        required = practice_area.strip().lower()
        if not required:
            return True  # No requirement
        return any(required in area.lower() for area in barrister.practice_areas)

    def meets_seniority(self, barrister: Barrister, criteria: RoutingCriteria) -> bool:
        required = self.policy.required_seniority(criteria.complexity)
        return barrister.seniority.level >= required.level

    def has_capacity(self, workload: BarristerWorkload, criteria: RoutingCriteria) -> bool:
        """Utilisation percent must not exceed the urgency's ceiling."""
        ceiling = self.policy.capacity_ceiling(criteria.urgency)
        # Integer cross-multiplication keeps exact ceilings exact
        return workload.current_workload * 100 <= ceiling * workload.max_workload

    def meets_value(self, barrister: Barrister, criteria: RoutingCriteria) -> bool:
        ceiling = self.policy.value_ceiling(barrister.seniority)
        if ceiling is not None and criteria.value > ceiling:
            return False

        if criteria.value > self.policy.high_value_threshold:
            return barrister.engagement_score >= self.policy.min_engagement_for_high_value

        return True

    def evaluate(
        self,
        barrister: Barrister,
        criteria: RoutingCriteria,
        workload: BarristerWorkload,
    ) -> EligibilityFlags:
        """
        Run every eligibility check.

        Args:
            barrister: Candidate barrister
            criteria: Normalised enquiry criteria
            workload: Candidate's current workload

        Returns:
            EligibilityFlags with one flag per check
        """
        return EligibilityFlags(
            practice_area_match=self.matches_practice_area(barrister, criteria.practice_area),
            seniority_match=self.meets_seniority(barrister, criteria),
            capacity_match=self.has_capacity(workload, criteria),
            value_match=self.meets_value(barrister, criteria),
            is_active=barrister.is_active,
        )
