"""Configuration management for the nutrition planner."""
import os
from pathlib import Path
from typing import Final, Mapping, Optional

from dotenv import load_dotenv

from nutriplan.domain.Meal import CostTier, SlotCategory
from nutriplan.domain.Profile import Goal
from nutriplan.utilities import constants

# Load environment variables from .env file if it exists
_env_path = Path(__file__).parent.parent.parent / '.env'
if _env_path.exists():
    load_dotenv(_env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = BASE_DIR / 'data'
MEALS_FILE: Final[Path] = Path(os.getenv('MEALS_FILE', str(DATA_DIR / 'meals.json')))
PACK_SIZES_FILE: Final[Path] = Path(os.getenv('PACK_SIZES_FILE', str(DATA_DIR / 'pack_sizes.json')))

# Planner overrides
VARIETY_CAP: Final[int] = int(os.getenv('VARIETY_CAP', str(constants.VARIETY_CAP)))
VARIETY_WINDOW_DAYS: Final[int] = int(os.getenv('VARIETY_WINDOW_DAYS', str(constants.VARIETY_WINDOW_DAYS)))
MAX_PLAN_DAYS: Final[int] = int(os.getenv('MAX_PLAN_DAYS', str(constants.MAX_PLAN_DAYS)))


class PlannerConfig:
    """Policy knobs for target calculation and plan assembly.

    slot_proportions: share of the daily target per slot, must sum to 1.
    macro_weights: default deviation weights for protein/carbs/fat.
    goal_macro_weights: per-goal overrides of macro_weights.
    variety_cap: maximum uses of one meal inside the rolling window.
    relaxed_extra_uses: extra uses allowed once a slot cannot be filled otherwise.
    tier_fallback: cheaper tiers tried, in order, after the requested one.
    rebalance_remaining: score each slot against its share of what is still
        missing from the daily target instead of the fixed slot split.
    """

    def __init__(self,
                 slot_proportions: Optional[Mapping] = None,
                 macro_weights: Optional[Mapping[str, float]] = None,
                 goal_macro_weights: Optional[Mapping] = None,
                 variety_cap: int = constants.VARIETY_CAP,
                 variety_window_days: int = constants.VARIETY_WINDOW_DAYS,
                 relaxed_extra_uses: int = constants.RELAXED_EXTRA_USES,
                 tier_fallback: Optional[Mapping] = None,
                 rebalance_remaining: bool = False,
                 max_plan_days: int = constants.MAX_PLAN_DAYS):
        proportions = slot_proportions if slot_proportions is not None else constants.DEFAULT_SLOT_PROPORTIONS
        self.slot_proportions = {SlotCategory(k): float(v) for k, v in proportions.items()}
        self.macro_weights = dict(macro_weights or constants.DEFAULT_MACRO_WEIGHTS)
        goal_weights = goal_macro_weights if goal_macro_weights is not None else constants.GOAL_MACRO_WEIGHTS
        self.goal_macro_weights = {Goal(k): dict(v) for k, v in goal_weights.items()}
        self.variety_cap = variety_cap
        self.variety_window_days = variety_window_days
        self.relaxed_extra_uses = relaxed_extra_uses
        fallback = tier_fallback if tier_fallback is not None else constants.TIER_FALLBACK
        self.tier_fallback = {CostTier(k): tuple(CostTier(t) for t in v) for k, v in fallback.items()}
        self.rebalance_remaining = rebalance_remaining
        self.max_plan_days = max_plan_days
        self._validate()

    def _validate(self):
        missing = [s.value for s in SlotCategory if s not in self.slot_proportions]
        if missing:
            raise ValueError(f"Slot proportions missing for: {', '.join(missing)}")
        if any(v < 0 for v in self.slot_proportions.values()):
            raise ValueError("Slot proportions must be non-negative")
        if abs(sum(self.slot_proportions.values()) - 1.0) > 1e-6:
            raise ValueError(f"Slot proportions must sum to 1, got {sum(self.slot_proportions.values())}")
        for weights in [self.macro_weights, *self.goal_macro_weights.values()]:
            if set(weights) != {"protein", "carbs", "fat"}:
                raise ValueError(f"Macro weights need exactly protein/carbs/fat, got {sorted(weights)}")
            if any(w < 0 for w in weights.values()):
                raise ValueError("Macro weights must be non-negative")
        if self.variety_cap < 1:
            raise ValueError("variety_cap must be at least 1")
        if self.variety_window_days < 1:
            raise ValueError("variety_window_days must be at least 1")
        if self.relaxed_extra_uses < 0:
            raise ValueError("relaxed_extra_uses cannot be negative")
        if self.max_plan_days < constants.MIN_PLAN_DAYS:
            raise ValueError("max_plan_days must be at least 1")
        for tier, fallbacks in self.tier_fallback.items():
            for fb in fallbacks:
                if not fb.is_cheaper_than(tier):
                    raise ValueError(f"Tier fallback {tier.value} -> {fb.value} would choose a dearer tier")

    def weights_for(self, goal: Optional[Goal] = None) -> dict:
        if goal is not None and Goal(goal) in self.goal_macro_weights:
            return self.goal_macro_weights[Goal(goal)]
        return self.macro_weights

    def tier_ladder(self, tier: CostTier):
        '''Requested tier first, then its cheaper fallbacks in configured order.'''
        tier = CostTier(tier)
        return (tier,) + self.tier_fallback.get(tier, ())

    @classmethod
    def from_env(cls) -> "PlannerConfig":
        return cls(variety_cap=VARIETY_CAP,
                   variety_window_days=VARIETY_WINDOW_DAYS,
                   max_plan_days=MAX_PLAN_DAYS)

    def __repr__(self) -> str:
        return (f"PlannerConfig(cap={self.variety_cap}/{self.variety_window_days}d, "
                f"rebalance={self.rebalance_remaining})")
