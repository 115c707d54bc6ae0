"""Macro target calculation.

Provides calculate_macro_target(profile, config=None) plus the BMR/TDEE helpers
it is built from. Energy uses the Mifflin-St Jeor equation; macros use fixed
ratios (protein per kg body weight, fat as a share of calories, carbs take the
remaining calories).
"""
import logging
from typing import Any, Optional, Union

from nutriplan.domain.Macros import KCAL_PER_G_CARBS, KCAL_PER_G_FAT, KCAL_PER_G_PROTEIN, MacroTarget, Macros
from nutriplan.domain.Profile import ActivityLevel, Goal, NutritionProfile
from nutriplan.domain.errors import InvalidProfile
from nutriplan.utilities.config import PlannerConfig
from nutriplan.utilities.constants import (
    ACTIVITY_MULTIPLIERS,
    FAT_CALORIE_SHARE,
    GOAL_CALORIE_FACTORS,
    PROTEIN_G_PER_KG,
    SLOT_ORDER,
)

logger = logging.getLogger(__name__)


def calculate_bmr(weight_kg: float, height_cm: float, age: int) -> float:
    """Basal metabolic rate in kcal/day (Mifflin-St Jeor, male constant)."""
    for field, value in (("weight_kg", weight_kg), ("height_cm", height_cm), ("age", age)):
        if value is None or value <= 0:
            raise InvalidProfile(field, "must be greater than 0")
    return 10 * weight_kg + 6.25 * height_cm - 5 * age + 5


def activity_multiplier(activity: Union[ActivityLevel, str]) -> float:
    try:
        return ACTIVITY_MULTIPLIERS[ActivityLevel(activity)]
    except ValueError:
        raise InvalidProfile("activity", f"unknown activity level {activity!r}") from None


def calculate_tdee(bmr: float, activity: Union[ActivityLevel, str]) -> float:
    return bmr * activity_multiplier(activity)


def _goal_factor(goal: Union[Goal, str]) -> float:
    try:
        return GOAL_CALORIE_FACTORS[Goal(goal)]
    except ValueError:
        raise InvalidProfile("goal", f"unknown goal {goal!r}") from None


def calculate_macro_target(profile: Any, config: Optional[PlannerConfig] = None) -> MacroTarget:
    """Daily and per-slot macro target for a profile.

    Args:
        profile: NutritionProfile or a mapping with its fields.
        config: planner configuration; only the slot proportion table is used.

    Returns:
        MacroTarget with whole-number daily values and a Macros entry per slot.

    Raises:
        InvalidProfile: a metric is non-positive or activity/goal is unknown.
    """
    profile = NutritionProfile.parse(profile)
    config = config or PlannerConfig()

    bmr = calculate_bmr(profile.weight_kg, profile.height_cm, profile.age)
    calories = calculate_tdee(bmr, profile.activity) * _goal_factor(profile.goal)

    protein_g = round(profile.weight_kg * PROTEIN_G_PER_KG)
    fat_kcal = calories * FAT_CALORIE_SHARE
    fat_g = round(fat_kcal / KCAL_PER_G_FAT)
    carbs_kcal = calories - protein_g * KCAL_PER_G_PROTEIN - fat_kcal
    carbs_g = max(0, round(carbs_kcal / KCAL_PER_G_CARBS))

    daily = Macros(protein_g, carbs_g, fat_g)
    slot_targets = {slot: daily.scaled(config.slot_proportions[slot]) for slot in SLOT_ORDER}
    target = MacroTarget(round(calories), protein_g, carbs_g, fat_g, slot_targets)
    logger.debug("Target for %s: %s", profile, target)
    return target


__all__ = ["calculate_bmr", "activity_multiplier", "calculate_tdee", "calculate_macro_target"]
