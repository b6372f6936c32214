"""
Display helpers for the dashboards: score bands, labels and the English
templates for explanation reasons. Nothing here feeds back into scoring.
"""

from typing import Dict, List, Union

from advisor_match.models.match_result import (
    AssignmentRole,
    MatchExplanation,
    MatchScore,
    Reason,
    ReasonCode,
)
from advisor_match.scoring.policies import ScoringPolicy, get_policy

PolicyArg = Union[str, ScoringPolicy, None]

SCORE_COLORS = ("excellent", "good", "moderate", "poor")
SCORE_LABELS = ("Excellent Match", "Good Match", "Moderate Match", "Poor Match")

REASON_TEMPLATES: Dict[ReasonCode, str] = {
    ReasonCode.PERFECT_MATCH_AREAS: "Perfect match in {count} key areas",
    ReasonCode.SKILL_EXCELLENT: "Excellent in {subtopic_name} ({actual}/10)",
    ReasonCode.SKILL_STRENGTH: "Strong in {subtopic_name} ({actual}/10)",
    ReasonCode.GOOD_AVAILABILITY: "Good availability ({remaining_percentage:.0f}% capacity remaining)",
    ReasonCode.EXPERIENCE: "Experienced professional ({years} years)",
    ReasonCode.CERTIFIED: "Professional certifications: {certifications}",
    ReasonCode.SEGMENT_ALIGNMENT: "Target segment alignment",
    ReasonCode.SKILL_GAP: "{subtopic_name}: Level {actual}/10 (needs {required}, gap of {gap})",
    ReasonCode.HIGH_CAPACITY: "High capacity utilization ({capacity_percentage:.0f}%)",
    ReasonCode.HIGH_CONFIDENCE: "High confidence - comprehensive skill data",
    ReasonCode.MODERATE_CONFIDENCE: "Moderate confidence - good data coverage",
    ReasonCode.LOW_CONFIDENCE: "Lower confidence - limited recent assessments",
    ReasonCode.STRONG_COVERAGE: "Strong skill coverage ({coverage}%)",
}

# Classic wording where it differs from the enhanced cards
CLASSIC_REASON_TEMPLATES: Dict[ReasonCode, str] = {
    **REASON_TEMPLATES,
    ReasonCode.SKILL_STRENGTH: "Strong in {subtopic_name} ({actual}/10 vs {required} required)",
    ReasonCode.SKILL_GAP: "Gap in {subtopic_name}: {actual}/10 (needs {required})",
    ReasonCode.EXPERIENCE: "{years} years of experience",
    ReasonCode.CERTIFIED: "Certified: {certifications}",
}

TEMPLATES_BY_POLICY: Dict[str, Dict[ReasonCode, str]] = {
    "classic": CLASSIC_REASON_TEMPLATES,
    "enhanced": REASON_TEMPLATES,
}


def _band(score: float, policy: PolicyArg) -> int:
    excellent, good, moderate = get_policy(policy).score_thresholds
    if score >= excellent:
        return 0
    if score >= good:
        return 1
    if score >= moderate:
        return 2
    return 3


def get_score_color(score: float, policy: PolicyArg = None) -> str:
    return SCORE_COLORS[_band(score, policy)]


def get_score_label(score: float, policy: PolicyArg = None) -> str:
    return SCORE_LABELS[_band(score, policy)]


def get_confidence_label(confidence: float) -> str:
    if confidence >= 80:
        return "High Confidence"
    if confidence >= 60:
        return "Moderate Confidence"
    return "Low Confidence"


def score_for_role(match: MatchScore, role: Union[str, AssignmentRole]) -> float:
    role = AssignmentRole(role)
    if role == AssignmentRole.BACKUP:
        return match.backup_score
    if role == AssignmentRole.SUPPORT:
        return match.support_score
    return match.lead_score


def render_reason(reason: Reason, policy: PolicyArg = None) -> str:
    templates = TEMPLATES_BY_POLICY[get_policy(policy).name]
    return templates[reason.code].format(subtopic_name=reason.subtopic_name or "Unknown", **reason.values)


def render_explanation(explanation: MatchExplanation, policy: PolicyArg = None) -> Dict[str, List[str]]:
    """Explanation as the string lists the match cards display, worded for the policy."""
    return {
        "top_drivers": [render_reason(r, policy) for r in explanation.top_drivers],
        "gaps": [render_reason(r, policy) for r in explanation.gaps],
        "why_not": [render_reason(r, policy) for r in explanation.why_not],
        "confidence_factors": [render_reason(r, policy) for r in explanation.confidence_factors],
    }
