from typing import List, Optional

from advisor_match.models.advisor import AdvisorProfile
from advisor_match.models.match_result import ExperienceLevel, MatchMetrics, MatchQuality, SkillMatch
from advisor_match.scoring.rounding import round_half_up

ADEQUATE_QUALITIES = (MatchQuality.PERFECT, MatchQuality.GOOD)


def experience_level(years_experience: int) -> ExperienceLevel:
    if years_experience >= 15:
        return ExperienceLevel.EXPERT
    if years_experience >= 10:
        return ExperienceLevel.SENIOR
    if years_experience >= 5:
        return ExperienceLevel.MID
    return ExperienceLevel.JUNIOR


def calculate_metrics(
    advisor: AdvisorProfile,
    skill_matches: List[SkillMatch],
    client_segment: Optional[str],
    total_weighted_score: float,
) -> MatchMetrics:
    """Detailed per-advisor metrics for the match results table."""
    if skill_matches:
        adequate = sum(1 for m in skill_matches if m.match_quality in ADEQUATE_QUALITIES)
        skill_coverage = adequate / len(skill_matches) * 100
        total_gap = sum(max(0, m.required - m.actual) for m in skill_matches)
        average_skill_gap = total_gap / len(skill_matches)
    else:
        skill_coverage = 0.0
        average_skill_gap = 0.0

    return MatchMetrics(
        skill_coverage=round_half_up(skill_coverage, 1),
        average_skill_gap=round_half_up(average_skill_gap, 1),
        capacity_utilization=advisor.capacity_percentage,
        experience_level=experience_level(advisor.years_experience),
        segment_alignment=bool(client_segment) and advisor.target_segment == client_segment,
        total_weighted_score=round_half_up(total_weighted_score, 2),
    )
