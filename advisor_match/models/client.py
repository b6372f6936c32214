from enum import Enum
from typing import Optional

from pydantic import BaseModel

from advisor_match.models.taxonomy import Subtopic


class Horizon(str, Enum):
    NOW = "now"
    ONE_YEAR = "1yr"
    THREE_YEARS = "3yr"
    FIVE_YEARS = "5yr"


class ComplexityTier(str, Enum):
    STANDARD = "standard"
    COMPLEX = "complex"
    HIGHLY_COMPLEX = "highly_complex"


class ClientNeed(BaseModel):
    """A client's need on one subtopic, as captured by the intake wizard."""
    subtopic_id: str
    importance: int = 5                    # 0-10, doubles as the required skill level
    urgency: int = 5                       # 0-10
    horizon: Horizon = Horizon.NOW         # descriptive only, never scored
    notes: Optional[str] = None
    subtopic: Optional[Subtopic] = None    # resolved by TaxonomyService.attach

    @property
    def subtopic_name(self) -> str:
        return self.subtopic.name if self.subtopic else "Unknown"

    @property
    def domain_name(self) -> str:
        if self.subtopic and self.subtopic.domain:
            return self.subtopic.domain.name
        return "Unknown"
