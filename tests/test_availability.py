"""Tests for barrister availability."""

import pytest

from chambers_routing.models import AvailabilityStatus, Seniority, Urgency
from chambers_routing.routing import (
    RoutingPolicy,
    URGENT_UNAVAILABLE_ESTIMATE,
    assess_availability,
    build_workload_map,
    calculate_workload,
    find_available_barristers,
    summarize_availability,
)


class TestAssessAvailability:

    @pytest.mark.parametrize("current, status, estimate", [
        (0, AvailabilityStatus.AVAILABLE, None),
        (50, AvailabilityStatus.AVAILABLE, None),
        (60, AvailabilityStatus.LIMITED, "Within 1-2 weeks"),
        (85, AvailabilityStatus.BUSY, "Within 2-4 weeks"),
        (95, AvailabilityStatus.UNAVAILABLE, "More than 4 weeks"),
    ])
    def test_bands(self, make_barrister, current, status, estimate):
        availability = assess_availability(make_barrister("a"), calculate_workload("a", current))

        assert availability.status == status
        assert availability.next_available_estimate == estimate

    def test_inactive_is_unavailable(self, make_barrister):
        availability = assess_availability(make_barrister("a", is_active=False), calculate_workload("a", 0))

        assert availability.status == AvailabilityStatus.UNAVAILABLE
        assert availability.can_take_urgent is False

    def test_urgent_ceiling(self, make_barrister):
        """Immediate matters treat barristers above the urgent ceiling as unavailable"""
        barrister = make_barrister("a")

        assert assess_availability(barrister, calculate_workload("a", 80)).can_take_urgent is True
        busy = assess_availability(barrister, calculate_workload("a", 85), Urgency.IMMEDIATE)
        assert busy.can_take_urgent is False
        assert busy.status == AvailabilityStatus.UNAVAILABLE

    def test_urgent_override_resets_estimate(self, make_barrister):
        """A barrister forced unavailable for Immediate work does not report a Busy estimate"""
        barrister = make_barrister("a")
        busy = assess_availability(barrister, calculate_workload("a", 85), Urgency.IMMEDIATE)

        assert busy.status == AvailabilityStatus.UNAVAILABLE
        assert busy.next_available_estimate == URGENT_UNAVAILABLE_ESTIMATE, "Estimate must match the forced status"

        overloaded = assess_availability(barrister, calculate_workload("a", 95), Urgency.IMMEDIATE)
        assert overloaded.next_available_estimate == "More than 4 weeks"

        inactive = assess_availability(make_barrister("b", is_active=False), calculate_workload("b", 0), Urgency.IMMEDIATE)
        assert inactive.next_available_estimate is None

    def test_to_dict(self, make_barrister):
        data = assess_availability(make_barrister("a"), calculate_workload("a", 30)).to_dict()

        assert data["id"] == "a"
        assert data["seniority"] == "Middle"
        assert data["availability"]["status"] == "Available"
        assert data["availability"]["utilization_percent"] == 30
        assert data["suitability_for_filters"]["has_capacity"] is True


class TestFindAvailable:

    @pytest.fixture
    def barristers(self, make_barrister):
        return [
            make_barrister("a", practice_areas=["Commercial"], seniority="Senior", engagement_score=90),
            make_barrister("b", practice_areas=["Family"], seniority="Junior", engagement_score=80),
            make_barrister("c", practice_areas=["Commercial Litigation"], seniority="Junior", engagement_score=60),
            make_barrister("d", practice_areas=["Commercial"], seniority="Middle", engagement_score=95),
            make_barrister("e", practice_areas=["Commercial"], is_active=False, engagement_score=99),
        ]

    @pytest.fixture
    def workloads(self):
        return build_workload_map({"a": 20, "b": 40, "c": 60, "d": 95, "e": 0})

    def test_default_ceiling_and_active_only(self, barristers, workloads):
        results = find_available_barristers(barristers, workloads)

        assert [r.barrister.id for r in results] == ["a", "b", "c"]

    def test_filters(self, barristers, workloads):
        by_area = find_available_barristers(barristers, workloads, practice_area="commercial")
        by_seniority = find_available_barristers(barristers, workloads, seniority=Seniority.JUNIOR)
        by_engagement = find_available_barristers(barristers, workloads, min_engagement=85)

        assert [r.barrister.id for r in by_area] == ["a", "c"]
        assert [r.barrister.id for r in by_seniority] == ["b", "c"]
        assert [r.barrister.id for r in by_engagement] == ["a"]

    def test_include_inactive(self, barristers, workloads):
        results = find_available_barristers(barristers, workloads, include_inactive=True)

        assert results[0].barrister.id == "e"
        assert results[0].status == AvailabilityStatus.UNAVAILABLE

    def test_custom_workload_ceiling(self, barristers, workloads):
        results = find_available_barristers(barristers, workloads, max_workload_percent=100)

        assert [r.barrister.id for r in results] == ["d", "a", "b", "c"]

    def test_limit_is_clamped(self, barristers, workloads):
        assert len(find_available_barristers(barristers, workloads, limit=0)) == 1
        assert len(find_available_barristers(barristers, workloads, limit=2)) == 2

    def test_policy_ceiling(self, barristers, workloads):
        policy = RoutingPolicy(max_capacity_percent=50.0, urgent_capacity_percent=40.0)
        results = find_available_barristers(barristers, workloads, policy=policy)

        assert [r.barrister.id for r in results] == ["a", "b"]


class TestSummarizeAvailability:

    def test_counts_every_status(self, make_barrister):
        availabilities = [
            assess_availability(make_barrister("a"), calculate_workload("a", 10)),
            assess_availability(make_barrister("b"), calculate_workload("b", 60)),
        ]
        summary = summarize_availability(availabilities)

        assert summary.by_status == {"Available": 1, "Limited": 1, "Busy": 0, "Unavailable": 0}
        assert summary.overview == "Limited availability: Only 2 barristers currently available"

    def test_good_availability(self, make_barrister):
        availabilities = [
            assess_availability(make_barrister(i, engagement_score=80), calculate_workload(i, 10))
            for i in ("a", "b", "c")
        ]
        summary = summarize_availability(availabilities, seniority=Seniority.MIDDLE)

        assert summary.overview == "Good availability: 3 barristers immediately available"
        assert "3 of 3 barristers match Middle seniority requirement" in summary.insights
        assert "3 barristers have high engagement scores (70+)" in summary.insights

    def test_urgent_with_few_available(self, make_barrister):
        availabilities = [
            assess_availability(make_barrister("a"), calculate_workload("a", 60)),
            assess_availability(make_barrister("b"), calculate_workload("b", 85)),
            assess_availability(make_barrister("c"), calculate_workload("c", 95)),
        ]
        summary = summarize_availability(availabilities, urgency=Urgency.IMMEDIATE)

        assert "Consider expanding search criteria for urgent matters" in summary.recommendations
        assert "Consider barristers with limited availability" in summary.recommendations
