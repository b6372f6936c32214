# scoring package
"""Scoring pipeline: evaluator, aggregate scorer, confidence, explanations, ranking."""

from advisor_match.scoring.policies import (
    CLASSIC,
    DEFAULT_POLICY,
    ENHANCED,
    ScoringPolicy,
    UnknownPolicyError,
    get_policy,
)
from advisor_match.scoring.skill_evaluator import evaluate, evaluate_all
from advisor_match.scoring.aggregate_scorer import ScoreBreakdown, score
from advisor_match.scoring.confidence import confidence_score
from advisor_match.scoring.explanation import explain
from advisor_match.scoring.metrics import calculate_metrics
from advisor_match.scoring.ranking import rank_scores

__all__ = [
    "CLASSIC",
    "DEFAULT_POLICY",
    "ENHANCED",
    "ScoringPolicy",
    "UnknownPolicyError",
    "get_policy",
    "evaluate",
    "evaluate_all",
    "ScoreBreakdown",
    "score",
    "confidence_score",
    "explain",
    "calculate_metrics",
    "rank_scores",
]
