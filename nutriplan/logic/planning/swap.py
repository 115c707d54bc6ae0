"""Meal swapping: alternatives with similar macros and single-slot replacement."""
import logging
from typing import List, Optional

from nutriplan.domain.Macros import MACRO_KEYS
from nutriplan.domain.Meal import CostTier, Meal, SlotCategory
from nutriplan.domain.Plan import MealPlan, PlanSlotAssignment
from nutriplan.domain.errors import InvalidSwap
from nutriplan.infra.Meal_Catalog import MealCatalog
from nutriplan.logic.planning.assembler import score_meal
from nutriplan.utilities.config import PlannerConfig
from nutriplan.utilities.constants import SIMILAR_MEAL_LIMIT, SIMILAR_MEAL_TOLERANCE

logger = logging.getLogger(__name__)


def relative_deviation(meal: Meal, reference: Meal) -> float:
    """Mean relative difference of protein, carbs and fat against `reference`."""
    ref, other = reference.macros, meal.macros
    diffs = [abs(other.get(k) - ref.get(k)) / max(ref.get(k), 1) for k in MACRO_KEYS]
    return sum(diffs) / len(diffs)


def find_similar_meals(meal: Meal, slot: SlotCategory, tier: CostTier, catalog: MealCatalog,
                       tolerance: float = SIMILAR_MEAL_TOLERANCE,
                       limit: int = SIMILAR_MEAL_LIMIT) -> List[Meal]:
    """Same-slot meals within `tolerance` of `meal`, closest first.

    Only meals of the requested tier or the budget tier qualify; the meal
    itself is excluded.
    """
    tiers = {CostTier(tier), CostTier.BUDGET}
    scored = [(relative_deviation(m, meal), m.name, m)
              for m in catalog.meals(slot, tiers) if m.name != meal.name]
    scored = [item for item in scored if item[0] <= tolerance]
    scored.sort(key=lambda item: (item[0], item[1]))
    return [m for _, _, m in scored[:limit]]


def _violates_cap(plan: MealPlan, day: int, slot: SlotCategory, name: str, config: PlannerConfig) -> bool:
    days = [a.day for a in plan.assignments
            if a.meal.name == name and not (a.day == day and a.slot == slot)]
    days.append(day)
    window = config.variety_window_days
    for end in range(day, day + window):
        if sum(1 for d in days if end - window < d <= end) > config.variety_cap:
            return True
    return False


def swap_meal(plan: MealPlan, day: int, slot: SlotCategory, meal_name: str,
              catalog: MealCatalog, config: Optional[PlannerConfig] = None) -> MealPlan:
    """Returns a copy of `plan` with the meal at (day, slot) replaced by `meal_name`.

    Raises:
        InvalidSwap: no such assignment, meal not in the slot category, a dearer
            tier than the plan, or a variety cap violation.
    """
    config = config or PlannerConfig()
    slot = SlotCategory(slot)
    current = plan.get(day, slot)
    if current is None:
        raise InvalidSwap(f"Plan has no {slot.value} on day {day}")
    try:
        meal = catalog.get(slot, meal_name)
    except KeyError:
        raise InvalidSwap(f"'{meal_name}' is not a {slot.value} meal") from None
    if plan.tier.is_cheaper_than(meal.cost_tier):
        raise InvalidSwap(f"'{meal_name}' is {meal.cost_tier.value}, dearer than the {plan.tier.value} plan")
    if meal.name == current.meal.name:
        raise InvalidSwap(f"'{meal_name}' is already planned for day {day} {slot.value}")
    if _violates_cap(plan, day, slot, meal.name, config):
        raise InvalidSwap(f"'{meal_name}' would exceed {config.variety_cap} uses "
                          f"in {config.variety_window_days} days")

    target = current.target if current.target is not None else plan.target.for_slot(slot)
    replacement = PlanSlotAssignment(day, slot, meal, target,
                                     score_meal(meal, target, config.weights_for(plan.goal)))
    assignments = [replacement if a is current else a for a in plan.assignments]
    logger.info("Swapped day %d %s: %s -> %s", day, slot.value, current.meal.name, meal.name)
    # the relaxation recorded for the replaced meal no longer applies
    relaxations = [r for r in plan.relaxations if (r.day, r.slot) != (day, slot)]
    return MealPlan(plan.days, plan.tier, plan.target, assignments, relaxations, goal=plan.goal)


__all__ = ["find_similar_meals", "relative_deviation", "swap_meal"]
