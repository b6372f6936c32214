from pydantic import BaseModel
from typing import Optional


class Domain(BaseModel):
    """Top-level area of the skill taxonomy (e.g. "Estate", "Tax")."""
    id: str
    name: str
    description: Optional[str] = None
    display_order: int = 0
    is_active: bool = True


class Subtopic(BaseModel):
    id: str
    domain_id: str
    name: str
    description: Optional[str] = None
    default_weight: float = 1.0
    display_order: int = 0
    is_active: bool = True
    domain: Optional[Domain] = None
