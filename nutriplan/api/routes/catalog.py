from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from nutriplan.domain.Meal import CostTier, SlotCategory
from nutriplan.infra.Meal_Catalog import get_catalog
from nutriplan.logic.planning.swap import find_similar_meals
from nutriplan.utilities.constants import SIMILAR_MEAL_TOLERANCE

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/catalog/{slot}")
def api_catalog(slot: SlotCategory, tier: Optional[CostTier] = None):
    """Meals of one slot category, optionally limited to a cost tier."""
    meals = get_catalog().meals(slot, (tier,) if tier is not None else None)
    return {"slot": slot.value, "count": len(meals), "meals": [m.to_dict() for m in meals]}


@router.get("/meals/similar")
def api_similar_meals(meal_name: str = Query(..., min_length=1),
                      slot: SlotCategory = Query(...),
                      tier: CostTier = CostTier.STANDARD,
                      tolerance: float = Query(SIMILAR_MEAL_TOLERANCE, gt=0, le=1)):
    """Swap candidates for a meal: same slot, requested or budget tier, macros within tolerance."""
    catalog = get_catalog()
    try:
        meal = catalog.get(slot, meal_name)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=e.args[0])
    similar = find_similar_meals(meal, slot, tier, catalog, tolerance=tolerance)
    return {"meal": meal.name, "count": len(similar), "similar": [m.to_dict() for m in similar]}
