"""
Enquiry Routing

Assigns incoming enquiries to the most suitable barristers.

Pipeline:
1. Extract routing criteria from the enquiry (complexity derived from value
   and description keywords unless pre-tagged)
2. Evaluate every barrister: eligibility checks plus suitability score
3. Partition into eligible / ineligible, each in rank order
4. Recommend the top eligible barrister with alternatives, insights and
   warnings for the clerk reviewing the assignment

Routing never fails on incomplete data. Missing enquiry fields and workload
counters are defaulted and recorded as RoutingCondition values so a clerk
always receives a ranking to review.
"""

from collections.abc import Mapping, Sequence
import logging
from typing import Optional

from ..config import COMPLEX_KEYWORDS, SIMPLE_KEYWORDS
from ..models.barrister import Barrister, BarristerWorkload
from ..models.enquiry import Enquiry
from ..models.enums import Complexity, RoutingCondition, RoutingPriority, Seniority, Urgency
from ..models.routing import (
    CandidateEvaluation,
    EligibilityFlags,
    RoutingCriteria,
    RoutingInsights,
    RoutingRecommendation,
    RoutingResult,
    RoutingStatistics,
)
from .eligibility import EligibilityFilter
from .policy import RoutingPolicy, DEFAULT_POLICY
from .scorer import SuitabilityScorer, rank_candidates
from .workload import WorkloadEntry, calculate_workload, workload_for

logger = logging.getLogger(__name__)

HIGH_CAPACITY_RATE = 0.8
LOW_ENGAGEMENT = 50
HIGH_ENGAGEMENT = 70


class EnquiryRouter:
    """
    Routes enquiries to barristers.

    Stateless across calls: identical inputs always give an identical result.
    """

    def __init__(self, policy: Optional[RoutingPolicy] = None):
        self.policy = policy or DEFAULT_POLICY
        self.eligibility = EligibilityFilter(self.policy)
        self.scorer = SuitabilityScorer(self.policy)

    # =========================================================================
    # Criteria
    # =========================================================================

    def determine_complexity(self, enquiry: Enquiry) -> Complexity:
        """Derive matter complexity from value and description."""
        if enquiry.complexity is not None:
            return enquiry.complexity

        value = enquiry.estimated_value or 0
        description = (enquiry.description or "").lower()

        if value > self.policy.high_value_threshold:
            return Complexity.COMPLEX

        if any(keyword in description for keyword in COMPLEX_KEYWORDS):
            return Complexity.COMPLEX

        if any(keyword in description for keyword in SIMPLE_KEYWORDS) and value < self.policy.simple_value_ceiling:
            return Complexity.SIMPLE

        return Complexity.MEDIUM

    def extract_routing_criteria(self, enquiry: Enquiry) -> RoutingCriteria:
        """Normalise an enquiry into routing criteria, defaulting missing fields."""
        return RoutingCriteria(
            practice_area=enquiry.practice_area or "",
            complexity=self.determine_complexity(enquiry),
            value=enquiry.estimated_value or 0.0,
            urgency=enquiry.urgency or Urgency.FLEXIBLE,
        )

    @staticmethod
    def missing_criteria_fields(enquiry: Enquiry) -> list[str]:
        """Names of routing fields that had to be defaulted."""
        missing = []
        if not enquiry.practice_area:
            missing.append("practice_area")
        if enquiry.urgency is None:
            missing.append("urgency")
        return missing

    # =========================================================================
    # Candidates
    # =========================================================================

    def evaluate_candidate(
        self,
        barrister: Barrister,
        criteria: RoutingCriteria,
        workload: Optional[BarristerWorkload] = None,
        include_unavailable: bool = False,
    ) -> Optional[CandidateEvaluation]:
        """
        Evaluate one barrister against routing criteria.

        Args:
            barrister: Candidate barrister
            criteria: Normalised enquiry criteria
            workload: Current workload (zero load when not supplied)
            include_unavailable: Evaluate inactive barristers too

        Returns:
            CandidateEvaluation, or None for an inactive barrister when
            unavailable candidates are excluded
        """
        if not barrister.is_active and not include_unavailable:
            return None

        if workload is None:
            workload = calculate_workload(barrister.id, 0, self.policy.max_workload)

        eligibility = self.eligibility.evaluate(barrister, criteria, workload)
        score, breakdown = self.scorer.score_candidate(barrister, criteria, workload)

        candidate = CandidateEvaluation(
            barrister=barrister,
            workload=workload,
            eligibility=eligibility,
            suitability_score=score,
            breakdown=breakdown,
            warnings=self._candidate_warnings(barrister, workload, eligibility),
            recommendation_reason=self._recommendation_reason(barrister, eligibility, score),
        )

        logger.debug(
            "Evaluated %s: score=%s eligible=%s",
            barrister.id, score, eligibility.eligible,
        )
        return candidate

    def _candidate_warnings(
        self,
        barrister: Barrister,
        workload: BarristerWorkload,
        eligibility: EligibilityFlags,
    ) -> list[str]:
        warnings = []

        if not eligibility.is_active:
            warnings.append("Barrister is not currently active")
        if not eligibility.practice_area_match:
            warnings.append("Limited expertise in required practice area")
        if not eligibility.seniority_match:
            warnings.append("May lack sufficient seniority for matter complexity")
        if not eligibility.value_match:
            warnings.append("Not authorised for the matter value")
        if workload.utilization_rate > HIGH_CAPACITY_RATE:
            warnings.append("Currently operating at high capacity")
        if barrister.engagement_score < LOW_ENGAGEMENT:
            warnings.append("Below-average engagement score")

        return warnings

    def _recommendation_reason(
        self,
        barrister: Barrister,
        eligibility: EligibilityFlags,
        score: float,
    ) -> str:
        reasons = []

        if eligibility.practice_area_match:
            reasons.append("strong practice area match")
        if eligibility.seniority_match and barrister.seniority.level >= Seniority.SENIOR.level:
            reasons.append("appropriate seniority level")
        if eligibility.capacity_match:
            reasons.append("good availability")
        if barrister.engagement_score >= HIGH_ENGAGEMENT:
            reasons.append("high engagement score")

        base = f"Recommended due to {', '.join(reasons)}" if reasons else "Best available option"
        return f"{base} (suitability score: {score:g}/100)"

    # =========================================================================
    # Routing
    # =========================================================================

    def route_enquiry(
        self,
        enquiry: Enquiry,
        barristers: Sequence[Barrister],
        workloads: Optional[Mapping[str, WorkloadEntry]] = None,
        include_unavailable: bool = True,
    ) -> RoutingResult:
        """
        Route an enquiry across the supplied barristers.

        Args:
            enquiry: The enquiry to assign
            barristers: Candidate barristers
            workloads: Workload metrics or raw counters per barrister id;
                absent entries count as zero load
            include_unavailable: Keep inactive barristers in the ranking (as
                ineligible) rather than listing them under excluded

        Returns:
            RoutingResult with recommendation, partitions and insights
        """
        if barristers is None:
            raise TypeError("barristers must be a sequence of Barrister, got None")

        conditions: list[RoutingCondition] = []
        criteria = self.extract_routing_criteria(enquiry)

        missing_fields = self.missing_criteria_fields(enquiry)
        if missing_fields:
            conditions.append(RoutingCondition.INVALID_CRITERIA)
            logger.info("Enquiry %s missing %s; using defaults", enquiry.id, ", ".join(missing_fields))

        if not barristers:
            conditions.append(RoutingCondition.NO_CANDIDATES)

        evaluated: list[CandidateEvaluation] = []
        excluded: list[str] = []
        missing_workload = False

        for barrister in barristers:
            workload, was_missing = workload_for(barrister, workloads, self.policy.max_workload)
            candidate = self.evaluate_candidate(barrister, criteria, workload, include_unavailable)
            if candidate is None:
                excluded.append(barrister.id)
                continue
            missing_workload = missing_workload or was_missing
            evaluated.append(candidate)

        if missing_workload:
            conditions.append(RoutingCondition.MISSING_WORKLOAD)

        eligible = rank_candidates([c for c in evaluated if c.is_eligible])
        ineligible = rank_candidates([c for c in evaluated if not c.is_eligible])

        recommended = eligible[0] if eligible else None
        alternatives = eligible[1:1 + self.policy.alternative_count]

        result = RoutingResult(
            enquiry_id=enquiry.id,
            criteria=criteria,
            recommended=recommended,
            alternatives=alternatives,
            eligible=eligible,
            ineligible=ineligible,
            excluded=sorted(excluded),
            total_candidates=len(barristers),
            insights=self.build_insights(criteria, evaluated, eligible),
            warnings=self._routing_warnings(enquiry, criteria, evaluated, eligible),
            conditions=conditions,
            algorithm_version=self.policy.algorithm_version,
        )

        logger.info(
            "Routed enquiry %s: %d/%d eligible, recommended=%s",
            enquiry.id,
            len(eligible),
            len(barristers),
            recommended.barrister_id if recommended else None,
        )
        return result

    def _routing_warnings(
        self,
        enquiry: Enquiry,
        criteria: RoutingCriteria,
        evaluated: list[CandidateEvaluation],
        eligible: list[CandidateEvaluation],
    ) -> list[str]:
        warnings = []

        if not eligible:
            warnings.append("No fully eligible barristers found - manual assignment may be required")
        elif len(eligible) == 1:
            warnings.append("Only one eligible barrister found - limited options for assignment")

        if (
            criteria.urgency == Urgency.IMMEDIATE
            and evaluated
            and all(c.workload.utilization_rate > HIGH_CAPACITY_RATE for c in evaluated)
        ):
            warnings.append("All barristers are at high capacity for urgent matter")

        if criteria.value > self.policy.very_high_value_threshold:
            warnings.append("Very high-value matter may require additional approval")

        if self.missing_criteria_fields(enquiry):
            warnings.append("Enquiry is missing routing details - defaults were applied")

        return warnings

    # =========================================================================
    # Insights
    # =========================================================================

    def build_insights(
        self,
        criteria: RoutingCriteria,
        evaluated: list[CandidateEvaluation],
        eligible: list[CandidateEvaluation],
    ) -> RoutingInsights:
        """Summarise an evaluation for human review."""
        total = len(evaluated)
        eligible_count = len(eligible)
        scores = [c.suitability_score for c in evaluated]

        statistics = RoutingStatistics(
            total=total,
            eligible=eligible_count,
            eligibility_rate=round(eligible_count / total * 100) if total else 0,
            average_score=round(sum(scores) / total, 1) if total else 0.0,
            top_score=max(scores) if scores else 0.0,
            practice_area_matches=sum(1 for c in evaluated if c.eligibility.practice_area_match),
            seniority_mismatches=sum(1 for c in evaluated if not c.eligibility.seniority_match),
            capacity_issues=sum(1 for c in evaluated if not c.eligibility.capacity_match),
            value_mismatches=sum(1 for c in evaluated if not c.eligibility.value_match),
        )

        if total == 0:
            summary = "No barristers were evaluated for this enquiry"
        elif eligible_count == 0:
            summary = f"None of the {total} evaluated barristers are fully eligible for this enquiry"
        elif eligible_count == 1:
            summary = f"Only 1 of {total} evaluated barristers is fully eligible for this enquiry"
        else:
            summary = f"{eligible_count} of {total} evaluated barristers are fully eligible for this enquiry"

        recommendations = []
        if eligible:
            best = eligible[0].suitability_score
            if best >= 80:
                recommendations.append("Strong candidates available - proceed with assignment")
            elif best >= 60:
                recommendations.append("Suitable candidates available with minor considerations")
            else:
                recommendations.append("Limited suitable candidates - consider manual review")
        elif total:
            recommendations.append("Assign manually or widen the candidate pool")

        concerns = []
        if total:
            if statistics.practice_area_matches < total * 0.5:
                concerns.append("Limited practice area expertise among evaluated barristers")
            if statistics.seniority_mismatches:
                concerns.append(f"{statistics.seniority_mismatches} barristers may lack required seniority level")
            if statistics.value_mismatches:
                concerns.append(f"{statistics.value_mismatches} barristers are not authorised for the matter value")
            if statistics.capacity_issues > total * 0.7:
                concerns.append("High capacity utilization across evaluated barristers")
            if criteria.urgency == Urgency.IMMEDIATE and statistics.capacity_issues:
                concerns.append("Urgent enquiry with capacity constraints")

        return RoutingInsights(
            summary=summary,
            recommendations=recommendations,
            concerns=concerns,
            statistics=statistics,
        )

    def summarize_for_review(self, enquiry: Enquiry, result: RoutingResult) -> RoutingRecommendation:
        """Condense a routing result into a clerk-facing recommendation."""
        action_required = False

        if result.recommended:
            candidate = result.recommended
            name = candidate.barrister.name or candidate.barrister.id
            primary = f"Assign to {name} - {candidate.recommendation_reason}"
            priority = RoutingPriority.MEDIUM
        else:
            primary = "No suitable barrister found - manual review required"
            action_required = True
            priority = RoutingPriority.HIGH

        if result.criteria.urgency == Urgency.IMMEDIATE:
            priority = RoutingPriority.HIGH

        if result.warnings:
            action_required = True
        elif priority == RoutingPriority.MEDIUM and result.criteria.urgency == Urgency.FLEXIBLE:
            priority = RoutingPriority.LOW

        alternatives = [
            f"{c.barrister.name or c.barrister.id} (score: {c.suitability_score:g})"
            for c in result.alternatives[:3]
        ]

        return RoutingRecommendation(
            primary_recommendation=primary,
            alternative_options=alternatives,
            action_required=action_required,
            priority=priority,
        )


# =============================================================================
# Convenience Functions
# =============================================================================

# Global router instance
_router = EnquiryRouter()


def route_enquiry(
    enquiry: Enquiry,
    barristers: Sequence[Barrister],
    workloads: Optional[Mapping[str, WorkloadEntry]] = None,
    include_unavailable: bool = True,
) -> RoutingResult:
    """Route an enquiry with the default policy."""
    return _router.route_enquiry(enquiry, barristers, workloads, include_unavailable)


def evaluate_candidate(
    barrister: Barrister,
    criteria: RoutingCriteria,
    workload: Optional[BarristerWorkload] = None,
    include_unavailable: bool = False,
) -> Optional[CandidateEvaluation]:
    """Evaluate one barrister with the default policy."""
    return _router.evaluate_candidate(barrister, criteria, workload, include_unavailable)


def extract_routing_criteria(enquiry: Enquiry) -> RoutingCriteria:
    """Extract routing criteria with the default policy."""
    return _router.extract_routing_criteria(enquiry)


def determine_complexity(enquiry: Enquiry) -> Complexity:
    """Derive complexity with the default policy."""
    return _router.determine_complexity(enquiry)
