from functools import cmp_to_key
from typing import List

from advisor_match.models.match_result import MatchScore
from advisor_match.scoring.policies import ScoringPolicy


def _compare(a: MatchScore, b: MatchScore, band: float) -> float:
    # Within the band lead scores are treated as equivalent: higher confidence wins
    if abs(a.lead_score - b.lead_score) < band:
        return (b.confidence_score or 0) - (a.confidence_score or 0)
    return b.lead_score - a.lead_score


def rank_scores(scores: List[MatchScore], policy: ScoringPolicy) -> List[MatchScore]:
    """Best match first. The sort is stable: equal entries keep the roster order."""
    if policy.tie_break_band is None:
        return sorted(scores, key=lambda s: s.lead_score, reverse=True)

    band = policy.tie_break_band
    return sorted(scores, key=cmp_to_key(lambda a, b: _compare(a, b, band)))
