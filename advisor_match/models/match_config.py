from typing import TYPE_CHECKING, Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from advisor_match.scoring.policies import ScoringPolicy


class MatchConfig(BaseModel):
    """
    Tunable coefficients of the scoring engine.

    Field defaults are the enhanced-policy values; each ScoringPolicy carries
    the defaults it overrides (see MatchConfig.for_policy). Overrides may use
    snake_case or the camelCase names the dashboards send. Unknown keys are
    rejected.
    """
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    # Skill matching
    over_skill_penalty_factor: float = 0.3
    under_skill_penalty_factor: float = 2.0
    skill_match_bonus_factor: float = 1.2

    # Capacity
    capacity_penalty_threshold: float = 0.8
    capacity_penalty_factor: float = 0.4

    # Importance & urgency (conventionally sum to 1.0, not enforced)
    importance_weight: float = 0.6
    urgency_weight: float = 0.4

    # Experience & certifications
    certification_bonus_per_cert: float = 1.5
    certification_bonus_cap: float = 5.0
    experience_bonus_cap: float = 15.0

    # Segment alignment
    segment_match_bonus: float = 5.0

    # Accepted in overrides, not read by any scoring step
    complexity_match_bonus: float = 3.0
    experience_bonus_factor: float = 0.05
    certification_bonus_factor: float = 0.02
    historical_success_weight: float = 0.15

    @classmethod
    def for_policy(
        cls,
        policy: "ScoringPolicy",
        overrides: Optional[Mapping[str, Any]] = None
    ) -> "MatchConfig":
        """Policy defaults merged with a partial override mapping."""
        alias_to_name = {field.alias: name for name, field in cls.model_fields.items()}
        merged = dict(policy.config_defaults)
        for key, value in (overrides or {}).items():
            merged[alias_to_name.get(key, key)] = value
        return cls.model_validate(merged)
