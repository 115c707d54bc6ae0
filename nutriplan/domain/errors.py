"""Error taxonomy for plan generation and shopping list building."""
from typing import Iterable, Optional


class NutriplanError(Exception):
    """Base class for all domain errors."""


class InvalidProfile(NutriplanError, ValueError):
    """A profile field is outside its valid domain."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Invalid profile field '{field}': {message}")


class InvalidPlanLength(NutriplanError, ValueError):
    def __init__(self, days, minimum: int, maximum: int):
        self.days = days
        super().__init__(f"Plan length must be between {minimum} and {maximum} days, got {days}")


class CatalogError(NutriplanError, ValueError):
    """Malformed catalog or pack-size data."""


class CatalogExhausted(NutriplanError):
    """No meal satisfies a slot even after every relaxation step."""

    def __init__(self, day: int, slot, tier):
        self.day = day
        self.slot = slot
        self.tier = tier
        slot_name = getattr(slot, "value", slot)
        tier_name = getattr(tier, "value", tier)
        super().__init__(f"No {slot_name} candidate left for day {day} (tier {tier_name})")


class UnitMismatch(NutriplanError, ValueError):
    """Two quantities for the same ingredient in incompatible units."""

    def __init__(self, ingredient: str, units: Iterable[str], context: Optional[str] = None):
        self.ingredient = ingredient
        self.units = tuple(units)
        msg = f"Incompatible units for '{ingredient}': {', '.join(self.units)}"
        if context:
            msg += f" ({context})"
        super().__init__(msg)


class InvalidSwap(NutriplanError, ValueError):
    pass


__all__ = [
    "NutriplanError", "InvalidProfile", "InvalidPlanLength", "CatalogError",
    "CatalogExhausted", "UnitMismatch", "InvalidSwap",
]
