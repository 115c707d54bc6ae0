"""Meal catalog: read-only meals per slot category, loaded once per process."""
import json
import logging
from pathlib import Path
from threading import Lock
from types import MappingProxyType
from typing import Dict, Iterable, Optional, Tuple

from nutriplan.domain.Meal import CostTier, Meal, SlotCategory
from nutriplan.domain.errors import CatalogError
from nutriplan.utilities.config import MEALS_FILE

logger = logging.getLogger(__name__)


class MealCatalog:
    def __init__(self, meals_by_slot: Dict[SlotCategory, Iterable[Meal]]):
        by_slot = {}
        # usage history counts by name, so names are unique across all slots
        seen: Dict[str, SlotCategory] = {}
        for slot in SlotCategory:
            meals = tuple(meals_by_slot.get(slot, ()))
            for meal in meals:
                if meal.name in seen:
                    raise CatalogError(f"Duplicate {slot.value} meal '{meal.name}' "
                                       f"(already a {seen[meal.name].value} meal)")
                seen[meal.name] = slot
            by_slot[slot] = meals
        self._meals = MappingProxyType(by_slot)
        self._index = MappingProxyType({
            slot: MappingProxyType({m.name: m for m in meals}) for slot, meals in by_slot.items()
        })

    def meals(self, slot: SlotCategory, tiers: Optional[Iterable[CostTier]] = None) -> Tuple[Meal, ...]:
        '''Meals of one slot category, optionally restricted to the given tiers, in catalog order.'''
        meals = self._meals[SlotCategory(slot)]
        if tiers is None:
            return meals
        allowed = {CostTier(t) for t in tiers}
        return tuple(m for m in meals if m.cost_tier in allowed)

    def get(self, slot: SlotCategory, name: str) -> Meal:
        try:
            return self._index[SlotCategory(slot)][name]
        except KeyError:
            raise KeyError(f"No {SlotCategory(slot).value} meal named '{name}'") from None

    def find(self, name: str) -> Optional[Tuple[SlotCategory, Meal]]:
        for slot, index in self._index.items():
            if name in index:
                return slot, index[name]
        return None

    def __len__(self) -> int:
        return sum(len(m) for m in self._meals.values())

    def __iter__(self):
        for slot in SlotCategory:
            for meal in self._meals[slot]:
                yield slot, meal

    def __repr__(self) -> str:
        counts = ", ".join(f"{s.value}={len(m)}" for s, m in self._meals.items())
        return f"MealCatalog({counts})"

    @staticmethod
    def from_dict(data) -> "MealCatalog":
        '''Builds a catalog from {slot: [meal, ...]}; unknown slots are rejected.'''
        if not isinstance(data, dict):
            raise CatalogError("Meal catalog must be an object keyed by slot category")
        by_slot = {}
        for key, entries in data.items():
            try:
                slot = SlotCategory(key)
            except ValueError:
                raise CatalogError(f"Unknown slot category '{key}'") from None
            by_slot[slot] = [Meal.from_dict(entry) for entry in entries or []]
        return MealCatalog(by_slot)

    def to_dict(self):
        return {slot.value: [m.to_dict() for m in meals] for slot, meals in self._meals.items()}

    @classmethod
    def read_from_json(cls, path) -> "MealCatalog":
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            raise CatalogError(f"Meal catalog not found: {path}") from None
        except json.JSONDecodeError as e:
            raise CatalogError(f"Invalid JSON in meal catalog {path}: {e}") from e
        catalog = cls.from_dict(data)
        logger.info("Loaded meal catalog from %s: %r", path, catalog)
        return catalog


_lock = Lock()
_catalog: Optional[MealCatalog] = None


def get_catalog() -> MealCatalog:
    """Process-wide catalog, read from MEALS_FILE on first use."""
    global _catalog
    with _lock:
        if _catalog is None:
            _catalog = MealCatalog.read_from_json(MEALS_FILE)
        return _catalog


__all__ = ["MealCatalog", "get_catalog"]
