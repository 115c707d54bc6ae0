from typing import Final

from nutriplan.domain.Meal import CostTier, SlotCategory
from nutriplan.domain.Profile import ActivityLevel, Goal

SLOT_ORDER: Final[tuple] = (
    SlotCategory.BREAKFAST,
    SlotCategory.LUNCH,
    SlotCategory.DINNER,
    SlotCategory.SNACK,
)

# Share of the daily target assigned to each slot
DEFAULT_SLOT_PROPORTIONS: Final[dict] = {
    SlotCategory.BREAKFAST: 0.25,
    SlotCategory.LUNCH: 0.35,
    SlotCategory.DINNER: 0.30,
    SlotCategory.SNACK: 0.10,
}

# Mifflin-St Jeor activity multipliers
ACTIVITY_MULTIPLIERS: Final[dict] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.VERY: 1.725,
    ActivityLevel.EXTREME: 1.9,
}

GOAL_CALORIE_FACTORS: Final[dict] = {
    Goal.CUT: 0.85,
    Goal.MAINTAIN: 1.0,
    Goal.BULK: 1.15,
}

PROTEIN_G_PER_KG: Final[float] = 1.8
FAT_CALORIE_SHARE: Final[float] = 0.35

DEFAULT_MACRO_WEIGHTS: Final[dict] = {"protein": 1.0, "carbs": 1.0, "fat": 1.0}
GOAL_MACRO_WEIGHTS: Final[dict] = {
    Goal.BULK: {"protein": 2.0, "carbs": 1.0, "fat": 1.0},
}

VARIETY_CAP: Final[int] = 2
VARIETY_WINDOW_DAYS: Final[int] = 7
RELAXED_EXTRA_USES: Final[int] = 1

# Cheaper tiers a request may fall back to, in order
TIER_FALLBACK: Final[dict] = {
    CostTier.PREMIUM: (CostTier.STANDARD, CostTier.BUDGET),
    CostTier.STANDARD: (CostTier.BUDGET,),
    CostTier.BUDGET: (),
}

MIN_PLAN_DAYS: Final[int] = 1
MAX_PLAN_DAYS: Final[int] = 30
DAYS_PER_WEEK: Final[int] = 7

SIMILAR_MEAL_TOLERANCE: Final[float] = 0.15
SIMILAR_MEAL_LIMIT: Final[int] = 5

# Equal scores closer than this are treated as ties
SCORE_EPSILON: Final[float] = 1e-9

# Unit spelling -> (canonical unit, factor); units not listed are kept as-is
UNIT_CONVERSIONS: Final[dict] = {
    "г": ("г", 1), "гр": ("г", 1), "g": ("г", 1),
    "кг": ("г", 1000), "kg": ("г", 1000),
    "мл": ("мл", 1), "ml": ("мл", 1),
    "л": ("мл", 1000), "l": ("мл", 1000),
    "бр": ("бр", 1), "бр.": ("бр", 1), "pcs": ("бр", 1), "pc": ("бр", 1),
}

# Shopping list categories, in display order, with the name stems that select them
DEFAULT_CATEGORY_TAXONOMY: Final[tuple] = (
    ("meat_fish", ("месо", "пилешк", "пуешк", "свинск", "телешк", "говежд", "агнешк", "патешк",
                   "риба", "сьомга", "тон", "скумрия", "лаврак", "кюфте", "шунка", "прошуто", "скарид")),
    ("dairy", ("яйц", "мляко", "сирене", "кашкавал", "извара", "фета", "пармезан", "скир")),
    ("produce", ("домат", "краставиц", "салат", "зеленчуц", "броколи", "спанак", "морков", "тиквич",
                 "гъби", "авокадо", "зеле", "лук", "чесън", "аспержи", "боровинк", "ябълк", "банан",
                 "лимон", "портокал", "смокин", "плодове", "картоф", "батат", "фасул")),
    ("grains", ("ориз", "хляб", "паста", "овесен", "мюсли", "гранола", "киноа", "булгур", "кус-кус",
                "фили", "крекер", "галета", "леща", "боб")),
    ("other", ()),
)
FALLBACK_CATEGORY: Final[str] = "other"

CATEGORY_LABELS: Final[dict] = {
    "meat_fish": "Месо и риба",
    "dairy": "Яйца и млечни",
    "produce": "Плодове и зеленчуци",
    "grains": "Зърнени",
    "other": "Други",
}
