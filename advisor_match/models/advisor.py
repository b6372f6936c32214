from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, field_validator, model_validator


class Segment(str, Enum):
    ESSENTIALS = "essentials"
    TRADITIONAL = "traditional"
    PRIVATE_CLIENT = "private_client"
    ULTRA_HNW = "ultra_hnw"


class SkillRecord(BaseModel):
    """Assessed level of an advisor on one taxonomy subtopic."""
    subtopic_id: str
    skill_level: int = 0                         # 0-10, not validated
    last_assessed_at: Optional[datetime] = None
    evidence: Optional[str] = None
    case_count: int = 0


class AdvisorProfile(BaseModel):
    id: str
    name: Optional[str] = None
    years_experience: int = 0
    certifications: List[str] = []
    capacity_percentage: float = 0.0             # current / max * 100, may exceed 100
    max_families: Optional[int] = None
    current_families: Optional[int] = None
    target_segment: Optional[Segment] = None
    skills: Dict[str, SkillRecord] = {}

    @field_validator("skills", mode="before")
    @classmethod
    def _key_skills_by_subtopic(cls, value: Any) -> Any:
        # Rosters usually arrive as a list of records (one row per skill)
        if isinstance(value, list):
            keyed = {}
            for record in value:
                if isinstance(record, SkillRecord):
                    subtopic_id = record.subtopic_id
                elif isinstance(record, dict):
                    subtopic_id = record.get("subtopic_id")
                else:
                    raise ValueError(f"skill record must be an object, got {type(record).__name__}")
                if not subtopic_id:
                    raise ValueError("skill record is missing subtopic_id")
                keyed[subtopic_id] = record
            return keyed
        return value

    @model_validator(mode="before")
    @classmethod
    def _derive_capacity(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("capacity_percentage") is not None:
            return data
        max_families = data.get("max_families")
        current_families = data.get("current_families")
        if max_families and current_families is not None:
            data = {**data, "capacity_percentage": current_families / max_families * 100}
        return data

    def skill_level(self, subtopic_id: str) -> int:
        """Level for the subtopic; 0 when the advisor has no assessed skill."""
        record = self.skills.get(subtopic_id)
        return record.skill_level if record is not None else 0
