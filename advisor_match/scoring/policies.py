"""
Scoring policies.

The engine ships two behaviour profiles behind one implementation:

- classic:  the first-generation formulas (linear overskill penalty,
            0.3 multiplier at full capacity, no bonuses, no confidence)
- enhanced: perfect band of +/-1, availability bonus, experience and
            segment bonuses, confidence score used as ranking tie-break

A policy only holds switches and fixed constants; tunable coefficients live
in MatchConfig, whose defaults each policy may override.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union


class UnknownPolicyError(ValueError):
    """Raised when a policy name does not match any registered policy."""
    pass


@dataclass(frozen=True)
class ScoringPolicy:
    name: str

    # Skill matching: None = no perfect band, match quality not graded
    perfect_band: Optional[int] = None

    # Capacity curve
    severe_capacity_multiplier: float = 0.3
    capacity_modifier_floor: Optional[float] = None
    availability_threshold: Optional[float] = None
    availability_bonus: float = 1.0

    # Additive bonuses
    apply_experience_bonus: bool = False
    apply_alignment_bonus: bool = False

    # Confidence & ranking
    compute_confidence: bool = False
    tie_break_band: Optional[float] = None

    # Display
    score_thresholds: Tuple[float, float, float] = (80, 60, 40)
    max_top_drivers: int = 5
    max_gaps: int = 3

    config_defaults: Dict[str, float] = field(default_factory=dict, hash=False)


CLASSIC = ScoringPolicy(
    name="classic",
    severe_capacity_multiplier=0.3,
    score_thresholds=(80, 60, 40),
    max_top_drivers=5,
    config_defaults={
        "over_skill_penalty_factor": 0.5,
        "capacity_penalty_factor": 0.3,
    },
)

ENHANCED = ScoringPolicy(
    name="enhanced",
    perfect_band=1,
    severe_capacity_multiplier=0.2,
    capacity_modifier_floor=0.5,
    availability_threshold=0.6,
    availability_bonus=1.05,
    apply_experience_bonus=True,
    apply_alignment_bonus=True,
    compute_confidence=True,
    tie_break_band=2.0,
    score_thresholds=(85, 70, 55),
    max_top_drivers=6,
)

POLICIES = {policy.name: policy for policy in (CLASSIC, ENHANCED)}

# Aliases used by older callers of the two engine versions
POLICIES["v1"] = CLASSIC
POLICIES["v2"] = ENHANCED

DEFAULT_POLICY = ENHANCED


def get_policy(policy: Union[str, ScoringPolicy, None] = None) -> ScoringPolicy:
    if policy is None:
        return DEFAULT_POLICY
    if isinstance(policy, ScoringPolicy):
        return policy
    try:
        return POLICIES[policy.strip().lower()]
    except KeyError:
        raise UnknownPolicyError(
            f"Unknown scoring policy '{policy}'. Available: {', '.join(sorted(POLICIES))}"
        ) from None
