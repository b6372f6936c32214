# models package
"""Data models for the advisor matching engine."""

from advisor_match.models.taxonomy import Domain, Subtopic
from advisor_match.models.advisor import AdvisorProfile, Segment, SkillRecord
from advisor_match.models.client import ClientNeed, ComplexityTier, Horizon
from advisor_match.models.match_config import MatchConfig
from advisor_match.models.match_result import (
    AssignmentRole,
    ExperienceLevel,
    MatchExplanation,
    MatchMetrics,
    MatchQuality,
    MatchScore,
    Reason,
    ReasonCode,
    SkillMatch,
)

__all__ = [
    "Domain",
    "Subtopic",
    "AdvisorProfile",
    "Segment",
    "SkillRecord",
    "ClientNeed",
    "ComplexityTier",
    "Horizon",
    "MatchConfig",
    "AssignmentRole",
    "ExperienceLevel",
    "MatchExplanation",
    "MatchMetrics",
    "MatchQuality",
    "MatchScore",
    "Reason",
    "ReasonCode",
    "SkillMatch",
]
