"""
Aggregate Scorer
Reduces per-need contributions to role scores for one advisor.

Pipeline:
1. Evaluate every need -> SkillMatch list
2. Base score 0-100 from the contribution ratio (50 when there are no needs)
3. Capacity modifier (multiplicative, non-increasing in utilization)
4. Experience/certification bonus (additive, enhanced policy)
5. Segment alignment bonus (additive, enhanced policy)
6. Lead score clamped to [0, 100]; backup/support derived from it
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from advisor_match.models.advisor import AdvisorProfile
from advisor_match.models.client import ClientNeed
from advisor_match.models.match_config import MatchConfig
from advisor_match.models.match_result import SkillMatch
from advisor_match.scoring.policies import ScoringPolicy
from advisor_match.scoring.rounding import round_half_up
from advisor_match.scoring.skill_evaluator import evaluate_all

NEUTRAL_BASE_SCORE = 50
MAX_CONTRIBUTION_PER_NEED = 10

BACKUP_RATIO = 0.85
SUPPORT_RATIO = 0.70

# (minimum years, bonus points), checked in order
EXPERIENCE_TIERS = ((15, 10.0), (10, 7.0), (5, 4.0))


@dataclass
class ScoreBreakdown:
    """Intermediate values of one advisor's score, reused by explanations and metrics."""
    skill_matches: List[SkillMatch]
    base_score: int
    capacity_modifier: float
    experience_bonus: float
    alignment_bonus: float
    total_score: float
    lead_score: float
    backup_score: float
    support_score: float


def base_score(skill_matches: List[SkillMatch]) -> int:
    if not skill_matches:
        return NEUTRAL_BASE_SCORE

    total_contribution = sum(m.contribution for m in skill_matches)
    max_contribution = MAX_CONTRIBUTION_PER_NEED * len(skill_matches)
    return round_half_up(total_contribution / max_contribution * 100)


def capacity_modifier(advisor: AdvisorProfile, config: MatchConfig, policy: ScoringPolicy) -> float:
    utilization = advisor.capacity_percentage / 100

    # At or over capacity should rarely be recommended
    if utilization >= 1:
        return policy.severe_capacity_multiplier

    if utilization >= config.capacity_penalty_threshold:
        over_threshold = utilization - config.capacity_penalty_threshold
        modifier = 1 - over_threshold * config.capacity_penalty_factor * 5
        if policy.capacity_modifier_floor is not None:
            modifier = max(policy.capacity_modifier_floor, modifier)
        return modifier

    if policy.availability_threshold is not None and utilization < policy.availability_threshold:
        return policy.availability_bonus

    return 1.0


def experience_bonus(advisor: AdvisorProfile, config: MatchConfig, policy: ScoringPolicy) -> float:
    if not policy.apply_experience_bonus:
        return 0.0

    bonus = 0.0
    for min_years, points in EXPERIENCE_TIERS:
        if advisor.years_experience >= min_years:
            bonus += points
            break

    bonus += min(config.certification_bonus_cap, len(advisor.certifications) * config.certification_bonus_per_cert)
    return min(config.experience_bonus_cap, bonus)


def alignment_bonus(
    advisor: AdvisorProfile,
    client_segment: Optional[str],
    client_complexity: Optional[str],
    config: MatchConfig,
    policy: ScoringPolicy,
) -> float:
    # client_complexity is accepted for interface parity; advisors carry no complexity tier yet
    if not policy.apply_alignment_bonus:
        return 0.0
    if client_segment and advisor.target_segment == client_segment:
        return config.segment_match_bonus
    return 0.0


def role_scores(lead_score: float) -> Tuple[int, int]:
    """Backup and support scores are always derived from the lead score."""
    return round_half_up(lead_score * BACKUP_RATIO), round_half_up(lead_score * SUPPORT_RATIO)


def score(
    advisor: AdvisorProfile,
    needs: List[ClientNeed],
    config: MatchConfig,
    policy: ScoringPolicy,
    client_segment: Optional[str] = None,
    client_complexity: Optional[str] = None,
) -> ScoreBreakdown:
    skill_matches = evaluate_all(advisor, needs, config, policy)
    base = base_score(skill_matches)
    modifier = capacity_modifier(advisor, config, policy)
    exp_bonus = experience_bonus(advisor, config, policy)
    align_bonus = alignment_bonus(advisor, client_segment, client_complexity, config, policy)

    total = base * modifier + exp_bonus + align_bonus
    lead = round_half_up(max(0.0, min(100.0, total)), 2)
    backup, support = role_scores(lead)

    return ScoreBreakdown(
        skill_matches=skill_matches,
        base_score=base,
        capacity_modifier=modifier,
        experience_bonus=exp_bonus,
        alignment_bonus=align_bonus,
        total_score=total,
        lead_score=lead,
        backup_score=backup,
        support_score=support,
    )
