"""Random plan baseline: one uniform pick per slot inside the requested tier.

No macro matching and no variety control. Used to measure how much the
greedy assembler gains over picking blindly from the same catalog.
"""
import logging
import random
from typing import Any, List, Optional

from nutriplan.domain.Plan import MealPlan, PlanSlotAssignment
from nutriplan.domain.Profile import NutritionProfile
from nutriplan.domain.errors import CatalogExhausted
from nutriplan.infra.Meal_Catalog import MealCatalog, get_catalog
from nutriplan.logic.planning.assembler import score_meal
from nutriplan.logic.planning.generator import validate_plan_length
from nutriplan.logic.targets.calculator import calculate_macro_target
from nutriplan.utilities.config import PlannerConfig
from nutriplan.utilities.constants import SLOT_ORDER

logger = logging.getLogger(__name__)


def generate_random_plan(profile: Any, days: int, catalog: Optional[MealCatalog] = None,
                         config: Optional[PlannerConfig] = None, seed: Optional[int] = None,
                         rng: Optional[random.Random] = None) -> MealPlan:
    config = config or PlannerConfig()
    profile = NutritionProfile.parse(profile)
    days = validate_plan_length(days, config)
    catalog = catalog if catalog is not None else get_catalog()
    rng = rng if rng is not None else random.Random(seed)

    target = calculate_macro_target(profile, config)
    weights = config.weights_for(profile.goal)
    assignments: List[PlanSlotAssignment] = []
    for day in range(1, days + 1):
        for slot in SLOT_ORDER:
            meals = catalog.meals(slot, (profile.cost_tier,))
            if not meals:
                raise CatalogExhausted(day, slot, profile.cost_tier)
            meal = rng.choice(meals)
            slot_target = target.for_slot(slot)
            assignments.append(PlanSlotAssignment(day, slot, meal, slot_target,
                                                  score_meal(meal, slot_target, weights)))
    plan = MealPlan(days, profile.cost_tier, target, assignments, goal=profile.goal)
    logger.debug("Random %d-day plan, deviation %.1f", days, plan.total_deviation)
    return plan


__all__ = ["generate_random_plan"]
