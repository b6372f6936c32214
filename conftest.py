"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest

from advisor_match.models import AdvisorProfile, ClientNeed, Domain, Subtopic

FIXED_NOW = datetime(2026, 9, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def fixed_clock():
    """Clock pinned to FIXED_NOW so confidence scores are reproducible."""
    return lambda: FIXED_NOW


@pytest.fixture
def make_advisor():
    """Factory: make_advisor(skills={"sub-a": 8}, capacity=0, years=0, ...)."""
    def _make(
        advisor_id: str = "adv-1",
        skills: Optional[Dict[str, int]] = None,
        capacity: float = 0.0,
        years: int = 0,
        certifications: Optional[List[str]] = None,
        segment: Optional[str] = None,
        assessed_at: Optional[datetime] = None,
    ) -> AdvisorProfile:
        return AdvisorProfile(
            id=advisor_id,
            name=advisor_id.upper(),
            years_experience=years,
            certifications=certifications or [],
            capacity_percentage=capacity,
            target_segment=segment,
            skills=[
                {"subtopic_id": sid, "skill_level": level, "last_assessed_at": assessed_at}
                for sid, level in (skills or {}).items()
            ],
        )
    return _make


@pytest.fixture
def make_need():
    """Factory: make_need("sub-a", importance=8, urgency=6, name="Estate")."""
    def _make(
        subtopic_id: str = "sub-a",
        importance: int = 5,
        urgency: int = 5,
        name: Optional[str] = None,
    ) -> ClientNeed:
        subtopic = None
        if name is not None:
            subtopic = Subtopic(
                id=subtopic_id,
                domain_id="dom-test",
                name=name,
                domain=Domain(id="dom-test", name="Test Domain"),
            )
        return ClientNeed(subtopic_id=subtopic_id, importance=importance, urgency=urgency, subtopic=subtopic)
    return _make
