"""Ingredient domain entity: one catalog line of a meal (name, quantity, unit)."""
from numbers import Real

from nutriplan.domain.errors import CatalogError


class Ingredient:
    def __init__(self, name: str, quantity: float, unit: str):
        self.name = name
        self.quantity = quantity
        self.unit = unit

    def __str__(self) -> str:
        return f"{self.quantity:g}{self.unit} {self.name}"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return (self.name, self.quantity, self.unit) == (other.name, other.quantity, other.unit)

    def __hash__(self):
        return hash((self.name, self.quantity, self.unit))

    @staticmethod
    def from_dict(data):
        '''Creates an Ingredient from a catalog dictionary, rejecting malformed lines.'''
        if not isinstance(data, dict):
            raise CatalogError(f"Ingredient entry must be an object, got {data!r}")
        name = (data.get("name") or "").strip()
        unit = (data.get("unit") or "").strip()
        quantity = data.get("quantity")
        if not name:
            raise CatalogError(f"Ingredient without a name: {data!r}")
        if not unit:
            raise CatalogError(f"Ingredient '{name}' has no unit")
        if isinstance(quantity, bool) or not isinstance(quantity, Real) or quantity < 0:
            raise CatalogError(f"Ingredient '{name}' has invalid quantity {quantity!r}")
        return Ingredient(name, quantity, unit)

    def to_dict(self):
        return {"name": self.name, "quantity": self.quantity, "unit": self.unit}
