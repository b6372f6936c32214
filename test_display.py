"""
Test display helpers (score bands, labels, reason templates)
"""

import pytest

from advisor_match.models import AssignmentRole, Reason, ReasonCode
from advisor_match.orchestrator import MatchingEngine
from advisor_match.services.display import (
    REASON_TEMPLATES,
    get_confidence_label,
    get_score_color,
    get_score_label,
    render_explanation,
    render_reason,
    score_for_role,
)


# ═══════════════════════════════════════════════════════════════════════════
# SCORE BANDS
# ═══════════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("score,policy,label", [
    (85, "enhanced", "Excellent Match"),
    (82, "enhanced", "Good Match"),
    (82, "classic", "Excellent Match"),
    (65, "enhanced", "Moderate Match"),
    (65, "classic", "Good Match"),
    (50, "enhanced", "Poor Match"),
    (50, "classic", "Moderate Match"),
    (39.99, "classic", "Poor Match"),
])
def test_score_labels_follow_policy_thresholds(score, policy, label):
    assert get_score_label(score, policy) == label


def test_score_colors_default_to_enhanced():
    assert get_score_color(90) == "excellent"
    assert get_score_color(70) == "good"
    assert get_score_color(55) == "moderate"
    assert get_score_color(10) == "poor"


def test_confidence_labels():
    assert get_confidence_label(80) == "High Confidence"
    assert get_confidence_label(60) == "Moderate Confidence"
    assert get_confidence_label(59) == "Low Confidence"


# ═══════════════════════════════════════════════════════════════════════════
# REASONS
# ═══════════════════════════════════════════════════════════════════════════

def test_every_reason_code_has_a_template():
    assert set(REASON_TEMPLATES) == set(ReasonCode)


def test_render_reason():
    gap = Reason(
        code=ReasonCode.SKILL_GAP,
        subtopic_id="sub-income-tax",
        subtopic_name="Income Tax Planning",
        values={"actual": 3, "required": 8, "gap": 5},
    )
    assert render_reason(gap) == "Income Tax Planning: Level 3/10 (needs 8, gap of 5)"

    capacity = Reason(code=ReasonCode.HIGH_CAPACITY, values={"capacity_percentage": 96.0})
    assert render_reason(capacity) == "High capacity utilization (96%)"

    assert render_reason(Reason(code=ReasonCode.PERFECT_MATCH_AREAS, values={"count": 2})) == (
        "Perfect match in 2 key areas"
    )


def test_render_explanation_from_engine(make_advisor, make_need, fixed_clock):
    advisor = make_advisor(skills={"sub-a": 8}, years=11, capacity=20)
    match = MatchingEngine(clock=fixed_clock).score_advisor(advisor, [make_need("sub-a", importance=8, name="Wealth Transfer")])

    rendered = render_explanation(match.explanation)

    assert rendered["top_drivers"] == [
        "Perfect match in 1 key areas",
        "Excellent in Wealth Transfer (8/10)",
        "Good availability (80% capacity remaining)",
        "Experienced professional (11 years)",
    ]
    assert rendered["gaps"] == []
    assert rendered["why_not"] == []
    assert len(rendered["confidence_factors"]) == 2


# ═══════════════════════════════════════════════════════════════════════════
# ROLES
# ═══════════════════════════════════════════════════════════════════════════

def test_score_for_role(make_advisor, make_need):
    match = MatchingEngine(policy="classic").score_advisor(
        make_advisor(skills={"sub-a": 8}), [make_need(importance=8, urgency=7)]
    )

    assert score_for_role(match, AssignmentRole.LEAD) == 76
    assert score_for_role(match, "backup") == 65
    assert score_for_role(match, "support") == 53
    with pytest.raises(ValueError):
        score_for_role(match, "observer")


def test_classic_and_enhanced_wording(make_advisor, make_need):
    advisor = make_advisor(skills={"sub-a": 8, "sub-b": 3}, years=12, certifications=["CFP", "CPA", "CFA"])
    needs = [
        make_need("sub-a", importance=8, name="Basic Estate Planning"),
        make_need("sub-b", importance=8, name="Income Tax Planning"),
    ]

    classic = MatchingEngine(policy="classic").score_advisor(advisor, needs)
    rendered = render_explanation(classic.explanation, "classic")
    assert rendered["top_drivers"] == [
        "Strong in Basic Estate Planning (8/10 vs 8 required)",
        "12 years of experience",
        "Certified: CFP, CPA",
    ]
    assert rendered["gaps"] == ["Gap in Income Tax Planning: 3/10 (needs 8)"]

    strength = Reason(code=ReasonCode.SKILL_STRENGTH, subtopic_name="Wealth Transfer", values={"actual": 9, "required": 7, "gap": -2})
    assert render_reason(strength) == "Strong in Wealth Transfer (9/10)"
    assert render_reason(strength, "v1") == "Strong in Wealth Transfer (9/10 vs 7 required)"
    assert render_reason(Reason(code=ReasonCode.EXPERIENCE, values={"years": 12}), "enhanced") == (
        "Experienced professional (12 years)"
    )
