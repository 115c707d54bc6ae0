"""Shopping list builder.

Provides build_shopping_list(plan, registry=None, days=None, week=None, taxonomy=None)
and convert_to_pack_format(name, quantity, unit, registry=None) which renders one
aggregated ingredient in retail pack units ("2 кофички кисело мляко (800г)").
"""
import logging
import math
from typing import Collection, Iterable, Optional, Set, Union

from nutriplan.domain.Plan import MealPlan, PlanSlotAssignment
from nutriplan.domain.ShoppingList import ShoppingItem, ShoppingList
from nutriplan.domain.errors import UnitMismatch
from nutriplan.infra.Pack_Size_Registry import PackSizeRegistry, get_registry
from nutriplan.logic.shopping.aggregate import IngredientAggregate, normalize_unit
from nutriplan.logic.shopping.categories import Taxonomy, categorize, category_names
from nutriplan.utilities.constants import DAYS_PER_WEEK, DEFAULT_CATEGORY_TAXONOMY

logger = logging.getLogger(__name__)


def _fmt(value: float) -> str:
    return f"{round(value, 3):g}"


def pack_count(quantity: float, standard_pack: float) -> int:
    """Smallest whole number of packs covering `quantity`."""
    if quantity <= 0:
        return 0
    count = math.ceil(round(quantity / standard_pack, 9))
    while count * standard_pack < quantity:
        count += 1
    return count


def convert_to_pack_format(name: str, quantity: float, unit: str,
                           registry: Optional[PackSizeRegistry] = None,
                           category: str = "other") -> ShoppingItem:
    """Renders an aggregated quantity in pack units.

    Without a registry entry the quantity passes through unchanged as
    "{quantity}{unit} {name}".

    Raises:
        UnitMismatch: the registry entry is measured in a different unit.
    """
    registry = registry if registry is not None else get_registry()
    unit, quantity = normalize_unit(unit, quantity)
    entry = registry.lookup(name)
    if entry is None:
        return ShoppingItem(name, quantity, unit, f"{_fmt(quantity)}{unit} {name}", category=category)

    pack_unit, _ = normalize_unit(entry.unit)
    if pack_unit != unit:
        raise UnitMismatch(name, (unit, pack_unit), context=f"pack size '{entry.name}'")

    count = pack_count(quantity, entry.standard_pack)
    form = entry.form_for(count)
    # a contained match keeps the ingredient's own name so "пушена сьомга" stays apart from "сьомга"
    exact = registry.canonical_name(name) == entry.name
    if entry.discrete:
        text = f"{count} {form}" if exact else f"{count} {form} ({name})"
    else:
        parts = [str(count), form]
        product = entry.product if exact else name
        if product:
            parts.append(product)
        parts.append(f"({_fmt(count * entry.standard_pack)}{unit})")
        text = " ".join(parts)
    return ShoppingItem(name, quantity, unit, text, pack_count=count,
                        pack_size=entry.standard_pack, category=category)


def week_days(week: int, plan_days: int) -> Set[int]:
    if isinstance(week, bool) or not isinstance(week, int) or week < 1:
        raise ValueError(f"week must be a positive integer, got {week!r}")
    first = DAYS_PER_WEEK * (week - 1) + 1
    return set(range(first, min(first + DAYS_PER_WEEK - 1, plan_days) + 1))


def build_shopping_list(plan: Union[MealPlan, Iterable[PlanSlotAssignment]],
                        registry: Optional[PackSizeRegistry] = None,
                        days: Optional[Collection[int]] = None,
                        week: Optional[int] = None,
                        taxonomy: Optional[Taxonomy] = None) -> ShoppingList:
    """Aggregate every ingredient of the selected assignments into a shopping list.

    Args:
        plan: MealPlan, or any iterable of PlanSlotAssignment.
        registry: pack-size registry; the process-wide one when omitted.
        days: restrict to these plan days.
        week: restrict to days 7(week-1)+1 .. 7*week. Cannot be combined with `days`.
        taxonomy: category taxonomy; the default dairy/meat/produce/grains split when omitted.

    Returns:
        ShoppingList sorted by ingredient name. Ingredients totalling zero are left out.

    Raises:
        UnitMismatch: one ingredient appears in incompatible units.
    """
    if days is not None and week is not None:
        raise ValueError("Pass either days or week, not both")
    registry = registry if registry is not None else get_registry()
    taxonomy = taxonomy if taxonomy is not None else DEFAULT_CATEGORY_TAXONOMY
    assignments = plan.assignments if isinstance(plan, MealPlan) else tuple(plan)

    selected = None
    if week is not None:
        last_day = max((a.day for a in assignments), default=0)
        selected = week_days(week, plan.days if isinstance(plan, MealPlan) else last_day)
    elif days is not None:
        selected = set(days)

    aggregate = IngredientAggregate(registry)
    for assignment in assignments:
        if selected is None or assignment.day in selected:
            aggregate.add_meal(assignment.meal)

    items = [convert_to_pack_format(name, quantity, unit, registry, categorize(name, taxonomy))
             for name, quantity, unit in aggregate.items() if quantity > 0]
    shopping_list = ShoppingList(items, category_names(taxonomy))
    logger.info("Built shopping list: %d items from %d assignments", len(shopping_list), len(assignments))
    return shopping_list


__all__ = ["build_shopping_list", "convert_to_pack_format", "pack_count", "week_days"]
