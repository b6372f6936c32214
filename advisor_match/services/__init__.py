# services package
"""Services around the scoring core (taxonomy lookup, display helpers, logging)."""

from advisor_match.services.taxonomy_service import TaxonomyService
from advisor_match.services.display import (
    get_confidence_label,
    get_score_color,
    get_score_label,
    render_explanation,
    render_reason,
    score_for_role,
)

__all__ = [
    "TaxonomyService",
    "get_confidence_label",
    "get_score_color",
    "get_score_label",
    "render_explanation",
    "render_reason",
    "score_for_role",
]
