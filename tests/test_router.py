"""Tests for enquiry routing."""

import random

import pytest

from chambers_routing.models import (
    Complexity,
    Enquiry,
    RoutingCondition,
    RoutingPriority,
    Urgency,
)
from chambers_routing.routing import (
    EnquiryRouter,
    RoutingPolicy,
    build_workload_map,
    calculate_workload,
)


class TestDetermineComplexity:

    def test_high_value_is_complex(self, router):
        enquiry = Enquiry(practice_area="Commercial", estimated_value=150_000)

        assert router.determine_complexity(enquiry) == Complexity.COMPLEX

    def test_complex_keyword(self, router):
        enquiry = Enquiry(description="Judicial review of a planning decision", estimated_value=5_000)

        assert router.determine_complexity(enquiry) == Complexity.COMPLEX

    def test_simple_keyword_needs_low_value(self, router):
        low = Enquiry(description="Advice on a lease renewal", estimated_value=5_000)
        higher = Enquiry(description="Advice on a lease renewal", estimated_value=20_000)

        assert router.determine_complexity(low) == Complexity.SIMPLE
        assert router.determine_complexity(higher) == Complexity.MEDIUM

    def test_default_is_medium(self, router):
        assert router.determine_complexity(Enquiry()) == Complexity.MEDIUM

    def test_pre_tagged_complexity_passes_through(self, router):
        enquiry = Enquiry(estimated_value=500_000, complexity="Simple")

        assert router.determine_complexity(enquiry) == Complexity.SIMPLE


class TestExtractCriteria:

    def test_full_enquiry(self, router, commercial_enquiry):
        criteria = router.extract_routing_criteria(commercial_enquiry)

        assert criteria.practice_area == "Commercial"
        assert criteria.urgency == Urgency.IMMEDIATE
        assert criteria.value == 50_000
        assert criteria.complexity == Complexity.MEDIUM

    def test_missing_fields_are_defaulted(self, router):
        enquiry = Enquiry(practice_area="  ", urgency="sometime", estimated_value=-10)
        criteria = router.extract_routing_criteria(enquiry)

        assert criteria.practice_area == ""
        assert criteria.urgency == Urgency.FLEXIBLE
        assert criteria.value == 0.0
        assert router.missing_criteria_fields(enquiry) == ["practice_area", "urgency"]


class TestEvaluateCandidate:

    def test_inactive_excluded_by_default(self, router, commercial_enquiry, make_barrister):
        criteria = router.extract_routing_criteria(commercial_enquiry)

        assert router.evaluate_candidate(make_barrister("a", is_active=False), criteria) is None

    def test_inactive_included_on_request(self, router, commercial_enquiry, make_barrister):
        criteria = router.extract_routing_criteria(commercial_enquiry)
        candidate = router.evaluate_candidate(
            make_barrister("a", is_active=False), criteria, include_unavailable=True
        )

        assert candidate is not None
        assert candidate.is_eligible is False
        assert "Barrister is not currently active" in candidate.warnings

    def test_missing_workload_is_zero_load(self, router, commercial_enquiry, make_barrister):
        criteria = router.extract_routing_criteria(commercial_enquiry)
        candidate = router.evaluate_candidate(make_barrister("a"), criteria)

        assert candidate.workload.utilization_rate == 0.0
        assert candidate.workload.available_capacity == 100

    def test_high_capacity_fails_urgent_matter(self, router, commercial_enquiry, make_barrister):
        """95% utilisation cannot take an Immediate enquiry"""
        criteria = router.extract_routing_criteria(commercial_enquiry)
        candidate = router.evaluate_candidate(make_barrister("a"), criteria, calculate_workload("a", 95))

        assert candidate.eligibility.capacity_match is False
        assert candidate.is_eligible is False
        assert "Currently operating at high capacity" in candidate.warnings

    def test_recommendation_reason(self, router, commercial_enquiry, make_barrister):
        criteria = router.extract_routing_criteria(commercial_enquiry)
        candidate = router.evaluate_candidate(
            make_barrister("a", seniority="Senior", engagement_score=90),
            criteria,
            calculate_workload("a", 30),
        )

        assert candidate.recommendation_reason.startswith("Recommended due to strong practice area match")
        assert candidate.recommendation_reason.endswith("(suitability score: 87/100)")


class TestRouteEnquiry:
    """
    Full routing runs: partitions, conditions and warnings.

    Routing never fails on incomplete data; it always returns a ranking.
    """

    @pytest.fixture
    def scenario(self, make_barrister):
        barristers = [
            make_barrister("B", practice_areas=["Family"], seniority="Junior", engagement_score=70),
            make_barrister("A", practice_areas=["Commercial"], seniority="Senior", engagement_score=90),
        ]
        return barristers, build_workload_map({"A": 30, "B": 10})

    def test_commercial_immediate_scenario(self, router, commercial_enquiry, scenario):
        """Senior commercial barrister is recommended over a family junior"""
        barristers, workloads = scenario
        result = router.route_enquiry(commercial_enquiry, barristers, workloads)

        assert result.recommended is not None
        assert result.recommended.barrister_id == "A"
        assert [c.barrister_id for c in result.eligible] == ["A"]
        assert [c.barrister_id for c in result.ineligible] == ["B"]
        assert [c.barrister_id for c in result.ranked] == ["A", "B"]
        assert result.ineligible[0].eligibility.practice_area_match is False
        assert result.recommended.suitability_score > result.ineligible[0].suitability_score
        assert result.alternatives == []
        assert result.conditions == []

    def test_raw_counter_map(self, router, commercial_enquiry, scenario):
        """Plain integer counters route the same as workload metrics"""
        barristers, _ = scenario
        result = router.route_enquiry(commercial_enquiry, barristers, {"A": 30, "B": 10})

        assert result.recommended is not None
        assert result.recommended.barrister_id == "A"
        assert [c.barrister_id for c in result.eligible] == ["A"]
        assert [c.barrister_id for c in result.ineligible] == ["B"]
        assert result.recommended.workload.current_workload == 30
        assert result.conditions == [], "Counters in the map are not missing workload"

    def test_ranking_covers_every_candidate(self, router, commercial_enquiry, scenario, make_barrister):
        barristers, workloads = scenario
        barristers = barristers + [make_barrister("C", is_active=False)]
        result = router.route_enquiry(commercial_enquiry, barristers, workloads)

        assert len(result.ranked) == len(barristers)
        assert result.total_candidates == 3
        assert result.excluded == []

    def test_partitions_account_for_every_candidate(self, router, commercial_enquiry, scenario, make_barrister):
        barristers, workloads = scenario
        barristers = barristers + [make_barrister("C", is_active=False)]
        result = router.route_enquiry(commercial_enquiry, barristers, workloads, include_unavailable=False)

        assert result.excluded == ["C"]
        assert len(result.eligible) + len(result.ineligible) + len(result.excluded) == result.total_candidates

    def test_all_inactive(self, router, commercial_enquiry, make_barrister):
        barristers = [make_barrister(str(i), is_active=False) for i in range(3)]

        for barrister in barristers:
            criteria = router.extract_routing_criteria(commercial_enquiry)
            assert router.evaluate_candidate(barrister, criteria, include_unavailable=False) is None

        result = router.route_enquiry(commercial_enquiry, barristers, include_unavailable=False)

        assert result.eligible == []
        assert result.recommended is None
        assert result.excluded == ["0", "1", "2"]
        assert "No fully eligible barristers found - manual assignment may be required" in result.warnings

    def test_inactive_kept_as_ineligible_by_default(self, router, commercial_enquiry, make_barrister):
        result = router.route_enquiry(commercial_enquiry, [make_barrister("a", is_active=False)])

        assert result.eligible == []
        assert len(result.ineligible) == 1
        assert result.ineligible[0].eligibility.is_active is False

    def test_empty_candidate_list(self, router, commercial_enquiry):
        result = router.route_enquiry(commercial_enquiry, [])

        assert result.recommended is None
        assert result.ranked == []
        assert RoutingCondition.NO_CANDIDATES in result.conditions
        assert result.insights.summary == "No barristers were evaluated for this enquiry"

    def test_none_candidate_list_is_an_error(self, router, commercial_enquiry):
        with pytest.raises(TypeError):
            router.route_enquiry(commercial_enquiry, None)

    def test_missing_workload_condition(self, router, commercial_enquiry, make_barrister):
        result = router.route_enquiry(commercial_enquiry, [make_barrister("a")])

        assert RoutingCondition.MISSING_WORKLOAD in result.conditions
        assert result.recommended.workload.current_workload == 0

    def test_record_counter_is_not_missing(self, router, commercial_enquiry, make_barrister):
        result = router.route_enquiry(commercial_enquiry, [make_barrister("a", current_workload=20)])

        assert RoutingCondition.MISSING_WORKLOAD not in result.conditions
        assert result.recommended.workload.current_workload == 20

    def test_incomplete_enquiry_still_ranks(self, router, make_barrister):
        enquiry = Enquiry(id="bare", estimated_value=5_000)
        result = router.route_enquiry(enquiry, [make_barrister("a"), make_barrister("b")])

        assert result.conditions[0] == RoutingCondition.INVALID_CRITERIA
        assert result.criteria.urgency == Urgency.FLEXIBLE
        assert len(result.eligible) == 2
        assert "Enquiry is missing routing details - defaults were applied" in result.warnings

    def test_alternatives_are_capped(self, router, commercial_enquiry, make_barrister):
        barristers = [make_barrister(f"b{i}", engagement_score=60 + i) for i in range(7)]
        result = router.route_enquiry(commercial_enquiry, barristers)

        assert result.recommended.barrister_id == "b6"
        assert [c.barrister_id for c in result.alternatives] == ["b5", "b4", "b3", "b2"]

    def test_very_high_value_warning(self, router, make_barrister):
        enquiry = Enquiry(practice_area="Commercial", urgency="This Month", estimated_value=750_000)
        result = router.route_enquiry(enquiry, [make_barrister("kc", seniority="KC", engagement_score=85)])

        assert result.criteria.complexity == Complexity.COMPLEX
        assert result.recommended.barrister_id == "kc"
        assert "Very high-value matter may require additional approval" in result.warnings

    def test_urgent_matter_with_everyone_busy(self, router, commercial_enquiry, make_barrister):
        barristers = [make_barrister("a"), make_barrister("b")]
        result = router.route_enquiry(commercial_enquiry, barristers, build_workload_map({"a": 85, "b": 95}))

        assert result.eligible == []
        assert "All barristers are at high capacity for urgent matter" in result.warnings
        assert "Urgent enquiry with capacity constraints" in result.insights.concerns

    def test_custom_policy(self, commercial_enquiry, make_barrister):
        router = EnquiryRouter(RoutingPolicy(urgent_capacity_percent=50.0))
        result = router.route_enquiry(
            commercial_enquiry, [make_barrister("a")], build_workload_map({"a": 60})
        )

        assert result.eligible == []
        assert result.ineligible[0].eligibility.capacity_match is False


class TestDeterminism:
    """Identical inputs must always give an identical result"""

    def _barristers(self, make_barrister):
        return [
            make_barrister(
                f"b{i}",
                practice_areas=["Commercial"] if i % 2 else ["Commercial Litigation"],
                seniority=["Junior", "Middle", "Senior"][i % 3],
                engagement_score=70,
            )
            for i in range(8)
        ]

    def test_identical_inputs_identical_output(self, router, commercial_enquiry, make_barrister):
        barristers = self._barristers(make_barrister)
        workloads = build_workload_map({b.id: 20 for b in barristers})

        first = router.route_enquiry(commercial_enquiry, barristers, workloads)
        second = router.route_enquiry(commercial_enquiry, barristers, workloads)

        assert first.model_dump_json() == second.model_dump_json()

    def test_input_order_does_not_matter(self, router, commercial_enquiry, make_barrister):
        barristers = self._barristers(make_barrister)
        shuffled = list(barristers)
        random.Random(7).shuffle(shuffled)

        first = router.route_enquiry(commercial_enquiry, barristers)
        second = router.route_enquiry(commercial_enquiry, shuffled)

        assert [c.barrister_id for c in first.ranked] == [c.barrister_id for c in second.ranked]


class TestInsights:

    def test_statistics(self, router, commercial_enquiry, make_barrister):
        barristers = [
            make_barrister("a", seniority="Senior", engagement_score=90),
            make_barrister("b", practice_areas=["Family"]),
        ]
        result = router.route_enquiry(commercial_enquiry, barristers, build_workload_map({"a": 0, "b": 0}))
        stats = result.insights.statistics

        assert stats.total == 2
        assert stats.eligible == 1
        assert stats.eligibility_rate == 50
        assert stats.practice_area_matches == 1
        assert stats.top_score == result.recommended.suitability_score
        assert result.insights.summary == "Only 1 of 2 evaluated barristers is fully eligible for this enquiry"

    def test_no_eligible_recommends_manual_assignment(self, router, commercial_enquiry, make_barrister):
        result = router.route_enquiry(commercial_enquiry, [make_barrister("a", practice_areas=["Family"])])

        assert result.insights.recommendations == ["Assign manually or widen the candidate pool"]
        assert "Limited practice area expertise among evaluated barristers" in result.insights.concerns


class TestSummarizeForReview:

    def test_no_candidates_needs_action(self, router, commercial_enquiry):
        result = router.route_enquiry(commercial_enquiry, [])
        review = router.summarize_for_review(commercial_enquiry, result)

        assert review.primary_recommendation == "No suitable barrister found - manual review required"
        assert review.action_required is True
        assert review.priority == RoutingPriority.HIGH

    def test_immediate_is_high_priority(self, router, commercial_enquiry, make_barrister):
        barristers = [make_barrister("a", name="Alice Grey"), make_barrister("b")]
        result = router.route_enquiry(commercial_enquiry, barristers, build_workload_map({"a": 0, "b": 20}))
        review = router.summarize_for_review(commercial_enquiry, result)

        assert review.primary_recommendation.startswith("Assign to Alice Grey - ")
        assert review.priority == RoutingPriority.HIGH

    def test_flexible_without_warnings_is_low_priority(self, router, make_barrister):
        enquiry = Enquiry(practice_area="Commercial", urgency="Flexible", estimated_value=40_000)
        barristers = [make_barrister("a"), make_barrister("b")]
        result = router.route_enquiry(enquiry, barristers, build_workload_map({"a": 10, "b": 40}))
        review = router.summarize_for_review(enquiry, result)

        assert review.priority == RoutingPriority.LOW
        assert review.action_required is False
        assert review.alternative_options == [
            f"Barrister b (score: {result.alternatives[0].suitability_score:g})"
        ]
