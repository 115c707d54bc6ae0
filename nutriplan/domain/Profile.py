"""NutritionProfile: validated body metrics, activity, goal and cost tier preference."""
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nutriplan.domain.errors import InvalidProfile
from nutriplan.domain.Meal import CostTier


class ActivityLevel(str, Enum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    VERY = "very"
    EXTREME = "extreme"


class Goal(str, Enum):
    CUT = "cut"
    MAINTAIN = "maintain"
    BULK = "bulk"


class NutritionProfile(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    weight_kg: float = Field(..., gt=0, le=500)
    height_cm: float = Field(..., gt=0, le=300)
    age: int = Field(..., gt=0, le=120)
    activity: ActivityLevel
    goal: Goal
    cost_tier: CostTier = CostTier.STANDARD

    @classmethod
    def parse(cls, data: Any) -> "NutritionProfile":
        """Validate raw input, converting pydantic errors into InvalidProfile."""
        if isinstance(data, cls):
            return data
        if not isinstance(data, Mapping):
            raise InvalidProfile("profile", f"expected a mapping, got {type(data).__name__}")
        try:
            return cls(**data)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(p) for p in first.get("loc", ())) or "profile"
            raise InvalidProfile(field, first.get("msg", "invalid value")) from e

    def __str__(self) -> str:
        return (f"{self.weight_kg:g}kg / {self.height_cm:g}cm / {self.age}y - "
                f"{self.activity.value}, {self.goal.value}, {self.cost_tier.value}")


__all__ = ["ActivityLevel", "Goal", "NutritionProfile"]
