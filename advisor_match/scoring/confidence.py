"""
Confidence Calculator
How much to trust a match score. Informational only: it never changes the
score and is used solely as a ranking tie-break.

Four factors, each clamped to [0, 100], averaged without weights:
- coverage:     share of needs matched within the perfect band
- data quality: 80 with a skill assessed in the last 180 days, else 50
- experience:   years of experience, saturating at 15
- capacity:     100 below 90% utilization, then a steep falloff to 0 at 110%
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

import numpy as np

from advisor_match.models.advisor import AdvisorProfile
from advisor_match.models.client import ClientNeed
from advisor_match.models.match_result import MatchQuality, SkillMatch
from advisor_match.scoring.rounding import round_half_up

Clock = Callable[[], datetime]

ASSESSMENT_FRESHNESS = timedelta(days=180)
RECENT_DATA_CONFIDENCE = 80.0
STALE_DATA_CONFIDENCE = 50.0
EXPERIENCE_SATURATION_YEARS = 15
CAPACITY_CONFIDENCE_KNEE = 0.9


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def coverage_confidence(skill_matches: List[SkillMatch]) -> float:
    if not skill_matches:
        return 0.0
    perfect = sum(1 for m in skill_matches if m.match_quality == MatchQuality.PERFECT)
    return perfect / len(skill_matches) * 100


def data_quality_confidence(advisor: AdvisorProfile, now: datetime) -> float:
    cutoff = _as_utc(now) - ASSESSMENT_FRESHNESS
    has_recent = any(
        record.last_assessed_at is not None and _as_utc(record.last_assessed_at) > cutoff
        for record in advisor.skills.values()
    )
    return RECENT_DATA_CONFIDENCE if has_recent else STALE_DATA_CONFIDENCE


def experience_confidence(advisor: AdvisorProfile) -> float:
    return min(100.0, advisor.years_experience / EXPERIENCE_SATURATION_YEARS * 100)


def capacity_confidence(advisor: AdvisorProfile) -> float:
    utilization = advisor.capacity_percentage / 100
    if utilization < CAPACITY_CONFIDENCE_KNEE:
        return 100.0
    return max(0.0, 100 - (utilization - CAPACITY_CONFIDENCE_KNEE) * 500)


def confidence_score(
    skill_matches: List[SkillMatch],
    advisor: AdvisorProfile,
    needs: List[ClientNeed],
    clock: Optional[Clock] = None,
) -> int:
    now = (clock or utc_now)()
    factors = np.clip(
        [
            coverage_confidence(skill_matches),
            data_quality_confidence(advisor, now),
            experience_confidence(advisor),
            capacity_confidence(advisor),
        ],
        0.0,
        100.0,
    )
    return round_half_up(float(np.mean(factors)))
