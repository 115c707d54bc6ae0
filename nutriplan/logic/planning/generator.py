"""Plan generation entry point: profile -> targets -> assembled MealPlan."""
import logging
import random
from typing import Any, Optional

from nutriplan.domain.Plan import MealPlan
from nutriplan.domain.Profile import NutritionProfile
from nutriplan.domain.errors import InvalidPlanLength
from nutriplan.infra.Meal_Catalog import MealCatalog, get_catalog
from nutriplan.logic.planning.assembler import DayPlanAssembler
from nutriplan.logic.targets.calculator import calculate_macro_target
from nutriplan.utilities.config import PlannerConfig
from nutriplan.utilities.constants import MIN_PLAN_DAYS

logger = logging.getLogger(__name__)


def validate_plan_length(days: Any, config: PlannerConfig) -> int:
    if isinstance(days, bool) or not isinstance(days, int):
        raise InvalidPlanLength(days, MIN_PLAN_DAYS, config.max_plan_days)
    if not MIN_PLAN_DAYS <= days <= config.max_plan_days:
        raise InvalidPlanLength(days, MIN_PLAN_DAYS, config.max_plan_days)
    return days


def generate_meal_plan(profile: Any, days: int, catalog: Optional[MealCatalog] = None,
                       config: Optional[PlannerConfig] = None, seed: Optional[int] = None) -> MealPlan:
    """Generate an N-day plan for a profile.

    Args:
        profile: NutritionProfile or a mapping with its fields.
        days: plan length, 1..config.max_plan_days.
        catalog: meal catalog; the process-wide catalog when omitted.
        config: planner configuration; defaults when omitted.
        seed: seeds the tie-break random source. None gives a non-reproducible plan.

    Raises:
        InvalidProfile, InvalidPlanLength, CatalogExhausted
    """
    config = config or PlannerConfig()
    profile = NutritionProfile.parse(profile)
    days = validate_plan_length(days, config)
    catalog = catalog if catalog is not None else get_catalog()

    target = calculate_macro_target(profile, config)
    logger.info("Generating %d-day plan for %s, target %s", days, profile, target)
    assembler = DayPlanAssembler(catalog, config, random.Random(seed))
    return assembler.assemble(target, profile.cost_tier, days, goal=profile.goal)


__all__ = ["generate_meal_plan", "validate_plan_length"]
