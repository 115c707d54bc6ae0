"""Ingredient aggregation: summed quantities per normalised ingredient name."""
from numbers import Real
from typing import Dict, List, Optional, Tuple

from nutriplan.domain.Meal import Meal
from nutriplan.domain.errors import UnitMismatch
from nutriplan.infra.Pack_Size_Registry import PackSizeRegistry, normalize_name
from nutriplan.utilities.constants import UNIT_CONVERSIONS


def normalize_unit(unit: str, quantity: float = 1) -> Tuple[str, float]:
    """Canonical unit for `unit` and `quantity` expressed in it (кг -> г, л -> мл)."""
    raw = (unit or "").strip()
    canonical, factor = UNIT_CONVERSIONS.get(raw.lower(), (raw, 1))
    return canonical, quantity * factor


class IngredientAggregate:
    """Accumulates ingredient quantities; totals only grow until `reset()`."""

    def __init__(self, registry: Optional[PackSizeRegistry] = None):
        self.registry = registry
        self._totals: Dict[str, List] = {}

    def key_for(self, name: str) -> str:
        if self.registry is not None:
            return self.registry.canonical_name(name)
        return normalize_name(name)

    def add(self, name: str, quantity: float, unit: str):
        if isinstance(quantity, bool) or not isinstance(quantity, Real) or quantity < 0:
            raise ValueError(f"Quantity for '{name}' must be a non-negative number, got {quantity!r}")
        key = self.key_for(name)
        if not key:
            raise ValueError("Ingredient name cannot be empty")
        unit, quantity = normalize_unit(unit, quantity)
        entry = self._totals.get(key)
        if entry is None:
            self._totals[key] = [quantity, unit]
            return
        if entry[1] != unit:
            raise UnitMismatch(key, (entry[1], unit))
        entry[0] += quantity

    def add_meal(self, meal: Meal, servings: int = 1):
        for ingredient in meal.ingredients:
            self.add(ingredient.name, ingredient.quantity * servings, ingredient.unit)

    def get(self, name: str) -> Optional[Tuple[float, str]]:
        entry = self._totals.get(self.key_for(name))
        return (entry[0], entry[1]) if entry is not None else None

    def items(self) -> List[Tuple[str, float, str]]:
        '''(name, quantity, unit) triples sorted by name.'''
        return [(k, v[0], v[1]) for k, v in sorted(self._totals.items())]

    def reset(self):
        self._totals.clear()

    def __contains__(self, name) -> bool:
        return self.key_for(name) in self._totals

    def __len__(self) -> int:
        return len(self._totals)

    def __repr__(self) -> str:
        return f"IngredientAggregate({len(self)} ingredients)"


__all__ = ["IngredientAggregate", "normalize_unit"]
