"""Meal domain entity: catalog entry with macros, cost tier and ingredients."""
from enum import Enum
from numbers import Real
from typing import Iterable

from nutriplan.domain.Ingredient import Ingredient
from nutriplan.domain.Macros import Macros
from nutriplan.domain.errors import CatalogError


class SlotCategory(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class CostTier(str, Enum):
    BUDGET = "budget"
    STANDARD = "standard"
    PREMIUM = "premium"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]

    def is_cheaper_than(self, other: "CostTier") -> bool:
        return self.rank < other.rank


_TIER_RANK = {CostTier.BUDGET: 0, CostTier.STANDARD: 1, CostTier.PREMIUM: 2}


class Meal:
    def __init__(self, name: str, protein_g: float, fat_g: float, carbs_g: float,
                 cost_tier: CostTier, ingredients: Iterable[Ingredient] = ()):
        self.name = name
        self.protein_g = protein_g
        self.fat_g = fat_g
        self.carbs_g = carbs_g
        self.cost_tier = CostTier(cost_tier)
        self.ingredients = tuple(ingredients)

    @property
    def macros(self) -> Macros:
        return Macros(self.protein_g, self.carbs_g, self.fat_g)

    @property
    def calories(self) -> float:
        return self.macros.calories

    def __str__(self) -> str:
        return f"{self.name} - {self.cost_tier.value} - {self.macros}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a Meal from a catalog dictionary; malformed entries raise CatalogError.'''
        if not isinstance(data, dict):
            raise CatalogError(f"Meal entry must be an object, got {data!r}")
        name = (data.get("name") or "").strip()
        if not name:
            raise CatalogError(f"Meal without a name: {data!r}")
        macros = {}
        for key in ("protein_g", "fat_g", "carbs_g"):
            value = data.get(key)
            if isinstance(value, bool) or not isinstance(value, Real) or value < 0:
                raise CatalogError(f"Meal '{name}' has invalid {key}: {value!r}")
            macros[key] = value
        try:
            tier = CostTier(data.get("cost_tier"))
        except ValueError:
            raise CatalogError(f"Meal '{name}' has unknown cost tier {data.get('cost_tier')!r}") from None
        raw_ingredients = data.get("ingredients") or []
        if not raw_ingredients:
            raise CatalogError(f"Meal '{name}' has no ingredients")
        ingredients = [Ingredient.from_dict(ing) for ing in raw_ingredients]
        return Meal(name, cost_tier=tier, ingredients=ingredients, **macros)

    def to_dict(self):
        return {
            "name": self.name,
            "protein_g": self.protein_g,
            "fat_g": self.fat_g,
            "carbs_g": self.carbs_g,
            "cost_tier": self.cost_tier.value,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
        }
