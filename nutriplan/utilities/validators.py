"""
Input validation schemas using Pydantic for the HTTP surface.
"""
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from nutriplan.domain.Meal import SlotCategory
from nutriplan.domain.Profile import NutritionProfile


class PlanRequest(BaseModel):
    """Schema for plan generation requests."""
    profile: NutritionProfile
    days: int = Field(7, ge=1)
    seed: Optional[int] = None
    rebalance_remaining: bool = False
    include_shopping_list: bool = False


class AssignmentInput(BaseModel):
    """One (day, slot, meal) entry of an already generated plan."""
    day: int = Field(..., ge=1)
    slot: SlotCategory
    meal_name: str = Field(..., min_length=1)

    @field_validator('meal_name')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        return v.strip()


class ShoppingListRequest(BaseModel):
    """Schema for shopping list requests built from plan assignments."""
    assignments: List[AssignmentInput]
    week: Optional[int] = Field(None, ge=1)
    days: Optional[List[int]] = None

    @field_validator('assignments')
    @classmethod
    def validate_assignments(cls, v):
        """Ensure the list has something to aggregate."""
        if not v:
            raise ValueError('At least one assignment is required')
        return v

    @field_validator('days')
    @classmethod
    def validate_days(cls, v):
        if v is not None and any(d < 1 for d in v):
            raise ValueError('Days must be positive')
        return v

