"""
Skill-Match Evaluator
Scores a single (advisor, client need) pair.

The need's importance doubles as the required skill level; importance and
urgency are blended into the weight the pair can contribute at most. The
distance between the advisor's level and the required level then shrinks
that weight according to the active policy.
"""

from typing import List

from advisor_match.models.advisor import AdvisorProfile
from advisor_match.models.client import ClientNeed
from advisor_match.models.match_config import MatchConfig
from advisor_match.models.match_result import MatchQuality, SkillMatch
from advisor_match.scoring.policies import ScoringPolicy

# Distance (in levels) beyond which a match is flagged as gap / overskill
FLAG_DISTANCE = 2
# Distance beyond which the enhanced policy downgrades the match quality
QUALITY_DISTANCE = 3


def need_weight(need: ClientNeed, config: MatchConfig) -> float:
    return need.importance * config.importance_weight + need.urgency * config.urgency_weight


def evaluate(
    advisor: AdvisorProfile,
    need: ClientNeed,
    config: MatchConfig,
    policy: ScoringPolicy,
) -> SkillMatch:
    """Evaluate one need; a skill the advisor was never assessed on counts as level 0."""
    actual = advisor.skill_level(need.subtopic_id)
    required = need.importance
    weight = need_weight(need, config)

    if policy.perfect_band is None:
        contribution, is_gap, is_overskill, quality = _evaluate_classic(actual, required, weight, config)
    else:
        contribution, is_gap, is_overskill, quality = _evaluate_banded(
            actual, required, weight, config, policy.perfect_band
        )

    return SkillMatch(
        subtopic_id=need.subtopic_id,
        subtopic_name=need.subtopic_name,
        domain_name=need.domain_name,
        required=required,
        actual=actual,
        contribution=max(0.0, contribution),
        is_gap=is_gap,
        is_overskill=is_overskill,
        match_quality=quality,
    )


def evaluate_all(
    advisor: AdvisorProfile,
    needs: List[ClientNeed],
    config: MatchConfig,
    policy: ScoringPolicy,
) -> List[SkillMatch]:
    return [evaluate(advisor, need, config, policy) for need in needs]


def _evaluate_classic(actual: int, required: int, weight: float, config: MatchConfig):
    if actual >= required:
        over_skill = actual - required
        contribution = weight * (1 - over_skill * config.over_skill_penalty_factor * 0.1)
        return contribution, False, over_skill > FLAG_DISTANCE, None

    under_skill = required - actual
    contribution = weight * (1 - under_skill * config.under_skill_penalty_factor * 0.1)
    return contribution, under_skill > FLAG_DISTANCE, False, None


def _evaluate_banded(actual: int, required: int, weight: float, config: MatchConfig, band: int):
    difference = actual - required

    # Near-exact matches are rewarded, not penalised
    if abs(difference) <= band:
        return weight * config.skill_match_bonus_factor, False, False, MatchQuality.PERFECT

    if difference > band:
        over_skill = difference
        contribution = weight * (1 - over_skill * config.over_skill_penalty_factor * 0.1)
        quality = MatchQuality.ACCEPTABLE if over_skill > QUALITY_DISTANCE else MatchQuality.GOOD
        return contribution, False, over_skill > FLAG_DISTANCE, quality

    under_skill = -difference
    contribution = weight * max(0.0, 1 - under_skill * config.under_skill_penalty_factor * 0.1)
    quality = MatchQuality.POOR if under_skill > QUALITY_DISTANCE else MatchQuality.ACCEPTABLE
    return contribution, under_skill > FLAG_DISTANCE, False, quality
