"""Shared fixtures for the chambers routing tests."""

import pytest

from chambers_routing.db import Repository
from chambers_routing.models import Barrister, Enquiry, Urgency
from chambers_routing.routing import EnquiryRouter, RoutingPolicy


@pytest.fixture
def make_barrister():
    """Factory for barristers with sensible defaults."""
    def _make(barrister_id: str, **overrides) -> Barrister:
        data = {
            "id": barrister_id,
            "name": f"Barrister {barrister_id}",
            "practice_areas": ["Commercial"],
            "seniority": "Middle",
            "engagement_score": 75,
            "is_active": True,
        }
        data.update(overrides)
        return Barrister(**data)
    return _make


@pytest.fixture
def commercial_enquiry() -> Enquiry:
    """Immediate commercial matter worth £50k."""
    return Enquiry(
        id="enq-commercial",
        practice_area="Commercial",
        urgency=Urgency.IMMEDIATE,
        estimated_value=50_000,
    )


@pytest.fixture
def router() -> EnquiryRouter:
    return EnquiryRouter(RoutingPolicy())


@pytest.fixture
def repo(tmp_path) -> Repository:
    """Repository backed by a throwaway SQLite file."""
    repository = Repository(f"sqlite:///{tmp_path / 'chambers.db'}")
    repository.init_db()
    return repository
