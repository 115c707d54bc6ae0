"""Macro-nutrient value objects: Macros (grams + derived calories) and MacroTarget."""
from types import MappingProxyType
from typing import Dict, Mapping

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

MACRO_KEYS = ("protein", "carbs", "fat")


class Macros:
    def __init__(self, protein_g: float = 0, carbs_g: float = 0, fat_g: float = 0):
        self.protein_g = protein_g
        self.carbs_g = carbs_g
        self.fat_g = fat_g

    @property
    def calories(self) -> float:
        return (self.protein_g * KCAL_PER_G_PROTEIN
                + self.carbs_g * KCAL_PER_G_CARBS
                + self.fat_g * KCAL_PER_G_FAT)

    def get(self, key: str) -> float:
        '''Returns grams for 'protein', 'carbs' or 'fat'.'''
        return getattr(self, f"{key}_g")

    def __add__(self, other: "Macros") -> "Macros":
        return Macros(self.protein_g + other.protein_g,
                      self.carbs_g + other.carbs_g,
                      self.fat_g + other.fat_g)

    def __sub__(self, other: "Macros") -> "Macros":
        return Macros(self.protein_g - other.protein_g,
                      self.carbs_g - other.carbs_g,
                      self.fat_g - other.fat_g)

    def scaled(self, factor: float) -> "Macros":
        return Macros(self.protein_g * factor, self.carbs_g * factor, self.fat_g * factor)

    def deviation(self, other: "Macros") -> Dict[str, float]:
        '''Absolute per-macro difference, calories included.'''
        return {
            "protein": abs(self.protein_g - other.protein_g),
            "carbs": abs(self.carbs_g - other.carbs_g),
            "fat": abs(self.fat_g - other.fat_g),
            "calories": abs(self.calories - other.calories),
        }

    def __eq__(self, other) -> bool:
        if not isinstance(other, Macros):
            return NotImplemented
        return (self.protein_g, self.carbs_g, self.fat_g) == (other.protein_g, other.carbs_g, other.fat_g)

    def __hash__(self):
        return hash((self.protein_g, self.carbs_g, self.fat_g))

    def __str__(self) -> str:
        return (f"Protein: {self.protein_g:g}g, Carbs: {self.carbs_g:g}g, "
                f"Fat: {self.fat_g:g}g, Calories: {round(self.calories)}")

    __repr__ = __str__

    def to_dict(self, ndigits: int = 1):
        return {
            "protein": round(self.protein_g, ndigits),
            "carbs": round(self.carbs_g, ndigits),
            "fat": round(self.fat_g, ndigits),
            "calories": round(self.calories),
        }


class MacroTarget:
    """Daily macro target plus its per-slot split.

    The daily values are whole numbers; `calories` is the goal-adjusted energy
    expenditure and may differ by a few kcal from the calories implied by the
    rounded grams.
    """

    def __init__(self, calories: int, protein_g: int, carbs_g: int, fat_g: int,
                 slot_targets: Mapping):
        self.calories = calories
        self.protein_g = protein_g
        self.carbs_g = carbs_g
        self.fat_g = fat_g
        self.slot_targets = MappingProxyType(dict(slot_targets))

    @property
    def daily(self) -> Macros:
        return Macros(self.protein_g, self.carbs_g, self.fat_g)

    def for_slot(self, slot) -> Macros:
        return self.slot_targets[slot]

    def __str__(self) -> str:
        return (f"{self.calories} kcal - Protein: {self.protein_g}g, "
                f"Carbs: {self.carbs_g}g, Fat: {self.fat_g}g")

    __repr__ = __str__

    def to_dict(self):
        return {
            "calories": self.calories,
            "protein": self.protein_g,
            "carbs": self.carbs_g,
            "fat": self.fat_g,
            "slots": {getattr(slot, "value", slot): m.to_dict() for slot, m in self.slot_targets.items()},
        }


__all__ = ["Macros", "MacroTarget", "MACRO_KEYS",
           "KCAL_PER_G_PROTEIN", "KCAL_PER_G_CARBS", "KCAL_PER_G_FAT"]
