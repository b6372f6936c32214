"""
Explanation Generator
Derives the reasons shown on a match card from values the scorer already
computed. Pure: it never alters a score.

Reasons are structured (ReasonCode + numeric payload); turning them into
text is left to services.display so the engine output stays
locale-independent.
"""

from typing import List, Optional

from advisor_match.models.advisor import AdvisorProfile
from advisor_match.models.match_result import (
    MatchExplanation,
    MatchQuality,
    Reason,
    ReasonCode,
    SkillMatch,
)
from advisor_match.scoring.policies import ScoringPolicy
from advisor_match.scoring.rounding import round_half_up

TOP_DRIVER_CANDIDATES = 3
HIGH_CAPACITY_MODIFIER = 0.7
EXPERIENCE_CALLOUT_YEARS = 10
CERTIFICATIONS_SHOWN = 2
HIGH_CONFIDENCE = 80
MODERATE_CONFIDENCE = 60
STRONG_COVERAGE_PCT = 70


def explain(
    advisor: AdvisorProfile,
    skill_matches: List[SkillMatch],
    capacity_modifier: float,
    experience_bonus: float,
    alignment_bonus: float,
    policy: ScoringPolicy,
    confidence_score: Optional[float] = None,
) -> MatchExplanation:
    graded = policy.perfect_band is not None
    top_drivers: List[Reason] = []
    gaps: List[Reason] = []
    why_not: List[Reason] = []
    confidence_factors: List[Reason] = []

    perfect_matches = [m for m in skill_matches if m.match_quality == MatchQuality.PERFECT]
    if graded and perfect_matches:
        top_drivers.append(Reason(
            code=ReasonCode.PERFECT_MATCH_AREAS,
            values={"count": len(perfect_matches)},
        ))

    # Strongest contributions first; ties keep the needs' order
    ranked = sorted(skill_matches, key=lambda m: m.contribution, reverse=True)
    for m in ranked[:TOP_DRIVER_CANDIDATES]:
        if m.actual < m.required:
            continue
        code = ReasonCode.SKILL_EXCELLENT if m.match_quality == MatchQuality.PERFECT else ReasonCode.SKILL_STRENGTH
        top_drivers.append(_skill_reason(code, m))

    flagged = [m for m in skill_matches if m.is_gap or (graded and m.match_quality == MatchQuality.POOR)]
    for m in flagged[:policy.max_gaps]:
        gaps.append(_skill_reason(ReasonCode.SKILL_GAP, m))

    if capacity_modifier < HIGH_CAPACITY_MODIFIER:
        why_not.append(Reason(
            code=ReasonCode.HIGH_CAPACITY,
            values={"capacity_percentage": advisor.capacity_percentage},
        ))
    elif graded and capacity_modifier > 1:
        top_drivers.append(Reason(
            code=ReasonCode.GOOD_AVAILABILITY,
            values={"remaining_percentage": 100 - advisor.capacity_percentage},
        ))

    if advisor.years_experience >= EXPERIENCE_CALLOUT_YEARS:
        top_drivers.append(Reason(
            code=ReasonCode.EXPERIENCE,
            values={"years": advisor.years_experience},
        ))

    if advisor.certifications:
        top_drivers.append(Reason(
            code=ReasonCode.CERTIFIED,
            values={"certifications": ", ".join(advisor.certifications[:CERTIFICATIONS_SHOWN])},
        ))

    if alignment_bonus > 0:
        top_drivers.append(Reason(code=ReasonCode.SEGMENT_ALIGNMENT, values={"bonus": alignment_bonus}))

    if confidence_score is not None:
        confidence_factors.append(Reason(
            code=confidence_band(confidence_score),
            values={"confidence": confidence_score},
        ))
        coverage = len(perfect_matches) / len(skill_matches) * 100 if skill_matches else 0.0
        if coverage >= STRONG_COVERAGE_PCT:
            confidence_factors.append(Reason(
                code=ReasonCode.STRONG_COVERAGE,
                values={"coverage": round_half_up(coverage)},
            ))

    return MatchExplanation(
        top_drivers=top_drivers[:policy.max_top_drivers],
        gaps=gaps,
        why_not=why_not,
        confidence_factors=confidence_factors,
    )


def confidence_band(confidence_score: float) -> ReasonCode:
    if confidence_score >= HIGH_CONFIDENCE:
        return ReasonCode.HIGH_CONFIDENCE
    if confidence_score >= MODERATE_CONFIDENCE:
        return ReasonCode.MODERATE_CONFIDENCE
    return ReasonCode.LOW_CONFIDENCE


def _skill_reason(code: ReasonCode, match: SkillMatch) -> Reason:
    return Reason(
        code=code,
        subtopic_id=match.subtopic_id,
        subtopic_name=match.subtopic_name,
        values={
            "actual": match.actual,
            "required": match.required,
            "gap": match.required - match.actual,
        },
    )
