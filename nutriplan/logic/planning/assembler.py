"""Day-plan assembly.

Greedy, slot by slot: every (day, slot) gets the catalog meal whose macros are
closest to the slot target, restricted to the requested cost tier and to meals
used fewer than `variety_cap` times in the trailing window. When that leaves no
candidate the constraints are loosened step by step (see `relaxation_ladder`)
and the step taken is recorded on the plan.
"""
import logging
import random
from typing import Iterator, List, Mapping, Optional, Sequence, Tuple

from nutriplan.domain.Macros import MACRO_KEYS, MacroTarget, Macros
from nutriplan.domain.Meal import CostTier, Meal, SlotCategory
from nutriplan.domain.Plan import MealPlan, PlanSlotAssignment, Relaxation
from nutriplan.domain.Profile import Goal
from nutriplan.domain.errors import CatalogExhausted
from nutriplan.infra.Meal_Catalog import MealCatalog
from nutriplan.logic.planning.history import UsageHistory
from nutriplan.utilities.config import PlannerConfig
from nutriplan.utilities.constants import SCORE_EPSILON, SLOT_ORDER

logger = logging.getLogger(__name__)


def score_meal(meal: Meal, target: Macros, weights: Mapping[str, float]) -> float:
    """Weighted sum of absolute gram deviations from the slot target."""
    macros = meal.macros
    return sum(weights[k] * abs(macros.get(k) - target.get(k)) for k in MACRO_KEYS)


class DayPlanAssembler:
    def __init__(self, catalog: MealCatalog, config: Optional[PlannerConfig] = None,
                 rng: Optional[random.Random] = None):
        self.catalog = catalog
        self.config = config or PlannerConfig()
        self.rng = rng if rng is not None else random.Random()

    def relaxation_ladder(self, tier: CostTier) -> Iterator[Tuple[int, Tuple[CostTier, ...], int]]:
        """Yields (level, allowed tiers, usage cap), strictest first.

        Level 0 is the requested tier at the normal cap. Each further tier from
        the fallback table is first tried at the normal cap and then at the
        relaxed cap, so a third use of a meal is preferred over a cheaper tier.
        """
        cap = self.config.variety_cap
        relaxed = cap + self.config.relaxed_extra_uses
        allowed: List[CostTier] = []
        level = 0
        for t in self.config.tier_ladder(tier):
            allowed.append(t)
            yield level, tuple(allowed), cap
            level += 1
            if relaxed != cap:
                yield level, tuple(allowed), relaxed
                level += 1

    def candidates(self, slot: SlotCategory, tiers: Sequence[CostTier], cap: int,
                   day: int, history: UsageHistory) -> List[Meal]:
        window = self.config.variety_window_days
        return [m for m in self.catalog.meals(slot, tiers)
                if history.count_in_window(m.name, day, window) < cap]

    def choose(self, candidates: Sequence[Meal], target: Macros, weights: Mapping[str, float],
               history: UsageHistory) -> Tuple[Meal, float]:
        '''Lowest score wins; ties go to the unused meal, then the least recently used, then the rng.'''
        scored = [(score_meal(m, target, weights), m) for m in candidates]
        best = min(s for s, _ in scored)
        tied = [m for s, m in scored if s - best <= SCORE_EPSILON]
        if len(tied) > 1:
            def recency(meal):
                last = history.last_used(meal.name)
                return (0, 0) if last is None else (1, last)
            oldest = min(recency(m) for m in tied)
            tied = sorted((m for m in tied if recency(m) == oldest), key=lambda m: m.name)
            if len(tied) > 1:
                return self.rng.choice(tied), best
        return tied[0], best

    def _slot_target(self, target: MacroTarget, slot: SlotCategory,
                     realized: Macros, remaining_slots: Sequence[SlotCategory]) -> Macros:
        if not self.config.rebalance_remaining:
            return target.for_slot(slot)
        missing = target.daily - realized
        missing = Macros(max(0, missing.protein_g), max(0, missing.carbs_g), max(0, missing.fat_g))
        share = sum(self.config.slot_proportions[s] for s in remaining_slots)
        if share <= 0:
            return target.for_slot(slot)
        return missing.scaled(self.config.slot_proportions[slot] / share)

    def assemble(self, target: MacroTarget, tier: CostTier, days: int,
                 goal: Optional[Goal] = None) -> MealPlan:
        """Builds a `days`-long plan for `target` in the given cost tier.

        Raises:
            CatalogExhausted: a slot has no candidate even at the last relaxation level.
        """
        tier = CostTier(tier)
        weights = self.config.weights_for(goal)
        history = UsageHistory()
        assignments: List[PlanSlotAssignment] = []
        relaxations: List[Relaxation] = []

        for day in range(1, days + 1):
            realized = Macros()
            for index, slot in enumerate(SLOT_ORDER):
                slot_target = self._slot_target(target, slot, realized, SLOT_ORDER[index:])
                for level, tiers, cap in self.relaxation_ladder(tier):
                    candidates = self.candidates(slot, tiers, cap, day, history)
                    if candidates:
                        break
                else:
                    logger.error("Catalog exhausted on day %d for %s (%s)", day, slot.value, tier.value)
                    raise CatalogExhausted(day, slot, tier)

                if level > 0:
                    relaxation = Relaxation(day, slot, level, tiers, cap)
                    relaxations.append(relaxation)
                    logger.warning("Relaxed constraints: %s", relaxation)

                meal, score = self.choose(candidates, slot_target, weights, history)
                history.record(meal.name, day)
                realized = realized + meal.macros
                assignments.append(PlanSlotAssignment(day, slot, meal, slot_target, score))
                logger.debug("Day %d %s -> %s (score %.2f)", day, slot.value, meal.name, score)

        plan = MealPlan(days, tier, target, assignments, relaxations, goal=goal)
        logger.info("Assembled %d-day %s plan: %d assignments, %d relaxations, deviation %.1f",
                    days, tier.value, len(plan), len(relaxations), plan.total_deviation)
        return plan


__all__ = ["DayPlanAssembler", "score_meal"]
