"""Plan domain entities: slot assignments, relaxation records, day summaries and the MealPlan."""
from typing import Dict, Iterable, List, Optional, Tuple

from nutriplan.domain.Macros import MacroTarget, Macros
from nutriplan.domain.Meal import CostTier, Meal, SlotCategory
from nutriplan.domain.Profile import Goal


class PlanSlotAssignment:
    def __init__(self, day: int, slot: SlotCategory, meal: Meal,
                 target: Optional[Macros] = None, deviation: float = 0.0):
        self.day = day
        self.slot = SlotCategory(slot)
        self.meal = meal
        self.target = target
        self.deviation = deviation

    @property
    def meal_name(self) -> str:
        return self.meal.name

    def __str__(self) -> str:
        return f"Day {self.day} {self.slot.value}: {self.meal.name}"

    __repr__ = __str__

    def to_dict(self):
        return {
            "day": self.day,
            "slot": self.slot.value,
            "meal_name": self.meal.name,
            "cost_tier": self.meal.cost_tier.value,
            "macros": self.meal.macros.to_dict(),
            "deviation": round(self.deviation, 2),
        }


class Relaxation:
    """A slot that could only be filled by loosening the variety cap or the tier."""

    def __init__(self, day: int, slot: SlotCategory, level: int,
                 tiers: Iterable[CostTier], cap: int):
        self.day = day
        self.slot = SlotCategory(slot)
        self.level = level
        self.tiers = tuple(CostTier(t) for t in tiers)
        self.cap = cap

    @property
    def tier_relaxed(self) -> bool:
        return len(self.tiers) > 1

    def __str__(self) -> str:
        tiers = "/".join(t.value for t in self.tiers)
        return f"Day {self.day} {self.slot.value}: level {self.level} (tiers {tiers}, cap {self.cap})"

    __repr__ = __str__

    def to_dict(self):
        return {
            "day": self.day,
            "slot": self.slot.value,
            "level": self.level,
            "tiers": [t.value for t in self.tiers],
            "cap": self.cap,
        }


class DaySummary:
    def __init__(self, day: int, realized: Macros, target: Macros):
        self.day = day
        self.realized = realized
        self.target = target

    @property
    def deviation(self) -> Dict[str, float]:
        return self.realized.deviation(self.target)

    def to_dict(self):
        return {
            "day": self.day,
            "realized": self.realized.to_dict(),
            "target": self.target.to_dict(),
            "deviation": {k: round(v, 1) for k, v in self.deviation.items()},
        }


class MealPlan:
    def __init__(self, days: int, tier: CostTier, target: MacroTarget,
                 assignments: Iterable[PlanSlotAssignment],
                 relaxations: Iterable[Relaxation] = (), goal: Optional[Goal] = None):
        self.days = days
        self.tier = CostTier(tier)
        self.goal = Goal(goal) if goal is not None else None
        self.target = target
        self.assignments: Tuple[PlanSlotAssignment, ...] = tuple(assignments)
        self.relaxations: Tuple[Relaxation, ...] = tuple(relaxations)

    def for_day(self, day: int) -> List[PlanSlotAssignment]:
        return [a for a in self.assignments if a.day == day]

    def get(self, day: int, slot: SlotCategory) -> Optional[PlanSlotAssignment]:
        slot = SlotCategory(slot)
        for a in self.assignments:
            if a.day == day and a.slot == slot:
                return a
        return None

    def day_macros(self, day: int) -> Macros:
        total = Macros()
        for a in self.for_day(day):
            total = total + a.meal.macros
        return total

    @property
    def summaries(self) -> List[DaySummary]:
        return [DaySummary(day, self.day_macros(day), self.target.daily)
                for day in range(1, self.days + 1)]

    @property
    def total_deviation(self) -> float:
        return sum(a.deviation for a in self.assignments)

    def __iter__(self):
        return iter(self.assignments)

    def __len__(self) -> int:
        return len(self.assignments)

    def __str__(self) -> str:
        lines = [f"{self.days}-day plan ({self.tier.value}) - target {self.target}"]
        lines.extend(f"\t{a}" for a in self.assignments)
        return "\n".join(lines)

    __repr__ = __str__

    def to_dict(self):
        return {
            "days": self.days,
            "tier": self.tier.value,
            "goal": self.goal.value if self.goal is not None else None,
            "target": self.target.to_dict(),
            "assignments": [a.to_dict() for a in self.assignments],
            "summaries": [s.to_dict() for s in self.summaries],
            "relaxations": [r.to_dict() for r in self.relaxations],
        }
