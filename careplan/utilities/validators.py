"""
Input validation schemas using Pydantic for request bodies of the plan API.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional

from careplan.utilities.constants import WEEKDAYS, MONTHLY_SLOT

SLOT_NAMES = WEEKDAYS + (MONTHLY_SLOT,)


class AssignInput(BaseModel):
    """Schema for adding a service to a slot."""
    slot: str
    definition_id: str = Field(..., min_length=1, max_length=100)

    @field_validator('slot', 'definition_id')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('slot')
    @classmethod
    def validate_slot(cls, v):
        if v not in SLOT_NAMES:
            raise ValueError(f"slot must be one of {', '.join(SLOT_NAMES)}")
        return v


class CareLevelInput(BaseModel):
    """Schema for selecting the care level."""
    level: int = Field(..., ge=1)


class AssignmentInput(BaseModel):
    definition_id: str = Field(..., min_length=1)
    instance_id: str = Field(..., min_length=1)


class PlanSnapshotInput(BaseModel):
    """Schema for a plan snapshot supplied by a client (import)."""
    care_level: Optional[int] = None
    weekday_slots: Dict[str, List[AssignmentInput]] = Field(default_factory=dict)
    monthly_bucket: List[AssignmentInput] = Field(default_factory=list)

    @field_validator('weekday_slots')
    @classmethod
    def validate_days(cls, v):
        """Ensure only known weekday keys are used."""
        unknown = [d for d in v if d not in WEEKDAYS]
        if unknown:
            raise ValueError(f"Unknown weekday slot(s): {', '.join(unknown)}")
        return v
