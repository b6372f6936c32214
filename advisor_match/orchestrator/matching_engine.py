"""
Matching Engine
Coordinates the scoring pipeline for a client against an advisor roster.

Responsibilities:
- Resolves the scoring policy and the effective MatchConfig
- Runs evaluator -> aggregate scorer -> confidence -> explanation per advisor
- Ranks the resulting MatchScore list

The engine holds no state between calls: the same inputs (and the same
clock reading) always produce the same output.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from advisor_match.models.advisor import AdvisorProfile
from advisor_match.models.client import ClientNeed
from advisor_match.models.match_config import MatchConfig
from advisor_match.models.match_result import MatchScore
from advisor_match.scoring.aggregate_scorer import score
from advisor_match.scoring.confidence import Clock, confidence_score, utc_now
from advisor_match.scoring.explanation import explain
from advisor_match.scoring.metrics import calculate_metrics
from advisor_match.scoring.policies import ScoringPolicy, get_policy
from advisor_match.scoring.ranking import rank_scores
from advisor_match.services.logging_utils import log_section, print_with_prefix

# Fixed placeholder until real match outcomes are recorded
HISTORICAL_SUCCESS_PLACEHOLDER = 0.75


class MatchingEngine:
    """
    Scores and ranks advisors for one client's needs.

    FLOW (per advisor):
    1. Evaluate each need against the advisor's skills
    2. Base score, capacity modifier, bonuses -> lead/backup/support
    3. Confidence score (enhanced policy only)
    4. Structured explanation + metrics
    Then rank the whole roster.
    """

    def __init__(
        self,
        policy: Union[str, ScoringPolicy, None] = None,
        config: Optional[Union[MatchConfig, Mapping[str, Any]]] = None,
        clock: Optional[Clock] = None,
        verbose: bool = False
    ):
        self.policy = get_policy(policy)
        self.verbose = verbose
        self.clock = clock or utc_now

        if isinstance(config, MatchConfig):
            self.config = config
        else:
            self.config = MatchConfig.for_policy(self.policy, config)

    def score_advisor(
        self,
        advisor: AdvisorProfile,
        needs: List[ClientNeed],
        client_segment: Optional[str] = None,
        client_complexity: Optional[str] = None
    ) -> MatchScore:
        breakdown = score(
            advisor,
            needs,
            self.config,
            self.policy,
            client_segment=client_segment,
            client_complexity=client_complexity,
        )

        confidence = None
        metrics = None
        if self.policy.compute_confidence:
            confidence = confidence_score(breakdown.skill_matches, advisor, needs, clock=self.clock)
            metrics = calculate_metrics(
                advisor, breakdown.skill_matches, client_segment, breakdown.total_score
            )

        explanation = explain(
            advisor,
            breakdown.skill_matches,
            breakdown.capacity_modifier,
            breakdown.experience_bonus,
            breakdown.alignment_bonus,
            self.policy,
            confidence_score=confidence,
        )

        self._log(
            f"   {advisor.id}: base={breakdown.base_score} "
            f"cap={breakdown.capacity_modifier:.2f} "
            f"exp=+{breakdown.experience_bonus:g} align=+{breakdown.alignment_bonus:g} "
            f"-> lead={breakdown.lead_score:g}"
            + (f" conf={confidence}" if confidence is not None else "")
        )

        return MatchScore(
            advisor_id=advisor.id,
            advisor=advisor,
            policy=self.policy.name,
            lead_score=breakdown.lead_score,
            backup_score=breakdown.backup_score,
            support_score=breakdown.support_score,
            confidence_score=confidence,
            explanation=explanation,
            skill_matches=breakdown.skill_matches,
            metrics=metrics,
        )

    def rank(
        self,
        advisors: List[AdvisorProfile],
        needs: List[ClientNeed],
        client_segment: Optional[str] = None,
        client_complexity: Optional[str] = None
    ) -> List[MatchScore]:
        """
        Scores every advisor and returns them best match first.

        Args:
            advisors: Advisor roster (an empty roster yields an empty list)
            needs: Client needs (no needs -> neutral base score of 50)
            client_segment: Client segment, enables the alignment bonus
            client_complexity: Client complexity tier (currently informational)

        Returns:
            Ranked list of MatchScore
        """
        log_section(
            self._log,
            f"MATCHING: {len(advisors)} advisors x {len(needs)} needs (policy={self.policy.name})",
            width=70,
            char="-",
        )
        scores = [
            self.score_advisor(advisor, needs, client_segment, client_complexity)
            for advisor in advisors
        ]
        ranked = rank_scores(scores, self.policy)
        if ranked:
            self._log(f"   -> Best: {ranked[0].advisor_id} ({ranked[0].lead_score:g})")
        return ranked

    def _log(self, message: str) -> None:
        """Conditional logging."""
        print_with_prefix("[MatchingEngine]", message, enabled=self.verbose)


# ═══════════════════════════════════════════════════════════════════════════
# SIMPLE API
# ═══════════════════════════════════════════════════════════════════════════

def calculate_match_scores(
    advisors: List[AdvisorProfile],
    needs: List[ClientNeed],
    client_segment: Optional[str] = None,
    client_complexity: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
    policy: Union[str, ScoringPolicy, None] = None,
    clock: Optional[Clock] = None,
    verbose: bool = False
) -> List[MatchScore]:
    """
    Simple API for scoring a roster against one client's needs.

    Args:
        advisors: Advisor roster
        needs: Client needs
        client_segment: Optional client segment
        client_complexity: Optional client complexity tier
        config: Partial MatchConfig override (snake_case or camelCase keys)
        policy: "enhanced" (default) or "classic"
        clock: Callable returning the current time (confidence freshness check)
        verbose: If True, print the score breakdown

    Returns:
        Ranked list of MatchScore
    """
    engine = MatchingEngine(policy=policy, config=config, clock=clock, verbose=verbose)
    return engine.rank(advisors, needs, client_segment, client_complexity)


def get_historical_match_success(advisor_id: str, client_segment: Optional[str] = None) -> float:
    """Historical success rate for an advisor/segment pair (heuristic placeholder)."""
    return HISTORICAL_SUCCESS_PLACEHOLDER
