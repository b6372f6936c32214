"""Advisor-client match scoring engine."""

from advisor_match.orchestrator import MatchingEngine, calculate_match_scores

__version__ = "0.1.0"

__all__ = [
    "MatchingEngine",
    "calculate_match_scores",
]
