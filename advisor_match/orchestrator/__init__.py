# orchestrator package
"""Engine coordinating the scoring pipeline over an advisor roster."""

from advisor_match.orchestrator.matching_engine import (
    MatchingEngine,
    calculate_match_scores,
    get_historical_match_success,
)

__all__ = [
    "MatchingEngine",
    "calculate_match_scores",
    "get_historical_match_success",
]
