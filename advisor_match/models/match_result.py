from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel

from advisor_match.models.advisor import AdvisorProfile


class AssignmentRole(str, Enum):
    LEAD = "lead"
    BACKUP = "backup"
    SUPPORT = "support"


class MatchQuality(str, Enum):
    PERFECT = "perfect"
    GOOD = "good"
    ACCEPTABLE = "acceptable"
    POOR = "poor"


class ExperienceLevel(str, Enum):
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"
    EXPERT = "expert"


class ReasonCode(str, Enum):
    # top drivers
    PERFECT_MATCH_AREAS = "perfect_match_areas"
    SKILL_EXCELLENT = "skill_excellent"
    SKILL_STRENGTH = "skill_strength"
    GOOD_AVAILABILITY = "good_availability"
    EXPERIENCE = "experience"
    CERTIFIED = "certified"
    SEGMENT_ALIGNMENT = "segment_alignment"
    # gaps
    SKILL_GAP = "skill_gap"
    # why not
    HIGH_CAPACITY = "high_capacity"
    # confidence factors
    HIGH_CONFIDENCE = "high_confidence"
    MODERATE_CONFIDENCE = "moderate_confidence"
    LOW_CONFIDENCE = "low_confidence"
    STRONG_COVERAGE = "strong_coverage"


class SkillMatch(BaseModel):
    subtopic_id: str
    subtopic_name: str = "Unknown"
    domain_name: str = "Unknown"
    required: int
    actual: int
    contribution: float                         # >= 0
    is_gap: bool = False
    is_overskill: bool = False
    match_quality: Optional[MatchQuality] = None  # only graded by the enhanced policy


class Reason(BaseModel):
    """One explanation entry: a code plus the numbers a template needs."""
    code: ReasonCode
    subtopic_id: Optional[str] = None
    subtopic_name: Optional[str] = None
    values: Dict[str, Union[int, float, str]] = {}


class MatchExplanation(BaseModel):
    top_drivers: List[Reason] = []
    gaps: List[Reason] = []
    why_not: List[Reason] = []
    confidence_factors: List[Reason] = []


class MatchMetrics(BaseModel):
    skill_coverage: float           # % of needs matched perfect or good
    average_skill_gap: float
    capacity_utilization: float
    experience_level: ExperienceLevel
    segment_alignment: bool
    total_weighted_score: float


class MatchScore(BaseModel):
    advisor_id: str
    advisor: AdvisorProfile
    policy: str
    lead_score: float
    backup_score: float
    support_score: float
    confidence_score: Optional[float] = None
    explanation: MatchExplanation
    skill_matches: List[SkillMatch] = []
    metrics: Optional[MatchMetrics] = None
