"""
Suitability Scorer

Ranks candidate barristers for an enquiry on a 0-100 scale.

Score components (see SuitabilityWeights):
- Practice area specificity: exact specialism beats a broader or partial one
- Workload: inverse utilisation, so less busy barristers rank higher
- Engagement: the barrister's engagement score
- Seniority: right tier for the matter, penalising over- and under-qualification

Every component is monotonic, so a higher engagement score, lower
utilisation or closer practice area never lowers the composite score.
"""

from typing import Optional

from ..models.barrister import Barrister, BarristerWorkload
from ..models.routing import CandidateEvaluation, RoutingCriteria, ScoreBreakdown
from .policy import RoutingPolicy, DEFAULT_POLICY

EXACT_AREA_SCORE = 1.0
CONTAINED_AREA_SCORE = 0.85
PARTIAL_AREA_SCALE = 0.7


class SuitabilityScorer:
    """Scores how well a barrister suits an enquiry."""

    def __init__(self, policy: Optional[RoutingPolicy] = None):
        self.policy = policy or DEFAULT_POLICY
        self.weights = self.policy.weights

    def score_practice_area(self, barrister: Barrister, practice_area: str) -> float:
        """
        Score practice area specificity.

        An exact specialism scores 1.0, an area containing the required one
        (e.g. "Commercial Litigation" for "Commercial") 0.85, and keyword
        overlap scales up to 0.7.
        """
        required = practice_area.strip().lower()
        if not required:
            return EXACT_AREA_SCORE

        areas = [area.strip().lower() for area in barrister.practice_areas]
        if required in areas:
            return EXACT_AREA_SCORE
        if any(required in area for area in areas):
            return CONTAINED_AREA_SCORE

        required_keywords = required.split()
        best = 0.0
        for area in areas:
            area_keywords = area.split()
            common = [
                keyword for keyword in required_keywords
                if any(keyword in ak or ak in keyword for ak in area_keywords)
            ]
            best = max(best, len(common) / len(required_keywords))

        return min(1.0, best) * PARTIAL_AREA_SCALE

    def score_workload(self, workload: BarristerWorkload) -> float:
        """Inverse utilisation."""
        return 1.0 - workload.utilization_rate

    def score_engagement(self, barrister: Barrister) -> float:
        return barrister.engagement_score / 100

    def score_seniority(self, barrister: Barrister, criteria: RoutingCriteria) -> float:
        """
        Score seniority appropriateness.

        The required tier scores 1.0. Each tier above costs 0.1 (floor 0.6);
        falling short starts at 0.5 and costs 0.15 per tier (floor 0).
        """
        required = self.policy.required_seniority(criteria.complexity)
        gap = barrister.seniority.level - required.level

        if gap >= 0:
            return max(0.6, 1.0 - gap * 0.1)
        return max(0.0, 0.5 - (-gap) * 0.15)

    def score_candidate(
        self,
        barrister: Barrister,
        criteria: RoutingCriteria,
        workload: BarristerWorkload,
    ) -> tuple[float, ScoreBreakdown]:
        """
        Calculate the suitability score and its breakdown.

        Args:
            barrister: Candidate barrister
            criteria: Normalised enquiry criteria
            workload: Candidate's current workload

        Returns:
            Tuple of (score 0-100, breakdown)
        """
        breakdown = ScoreBreakdown(
            practice_area=self.score_practice_area(barrister, criteria.practice_area),
            workload=self.score_workload(workload),
            engagement=self.score_engagement(barrister),
            seniority=self.score_seniority(barrister, criteria),
        )

        total = (
            breakdown.practice_area * self.weights.practice_area
            + breakdown.workload * self.weights.workload
            + breakdown.engagement * self.weights.engagement
            + breakdown.seniority * self.weights.seniority
        )

        score = min(100.0, max(0.0, round(total * 100, 1)))
        return (score, breakdown)


def ranking_key(candidate: CandidateEvaluation) -> tuple:
    """
    Sort key for candidates.

    Higher score first, then higher engagement, then lower current workload,
    then barrister id.
    """
    return (
        -candidate.suitability_score,
        -candidate.barrister.engagement_score,
        candidate.workload.current_workload,
        candidate.barrister.id,
    )


def rank_candidates(candidates: list[CandidateEvaluation]) -> list[CandidateEvaluation]:
    """Return candidates in rank order."""
    return sorted(candidates, key=ranking_key)
