from fastapi import APIRouter, HTTPException
import logging

from nutriplan.api.http_errors import to_http_exception
from nutriplan.domain.Plan import PlanSlotAssignment
from nutriplan.domain.errors import NutriplanError
from nutriplan.infra.Meal_Catalog import get_catalog
from nutriplan.logic.shopping.list_builder import build_shopping_list
from nutriplan.utilities.constants import CATEGORY_LABELS
from nutriplan.utilities.validators import ShoppingListRequest

router = APIRouter(prefix="/api", tags=["shopping"])
logger = logging.getLogger(__name__)


@router.post("/shopping-list")
def api_shopping_list(request: ShoppingListRequest):
    """Aggregate the ingredients of the given assignments into pack units.

    Response JSON structure:
        {
          "items": [ { name, quantity, unit, text, pack_count, pack_size, purchased_quantity, category } ],
          "text": { name: "2 кофички кисело мляко (800г)", ... },
          "count": <int>,
          "categories": [ { "category": str, "label": str, "items": [text, ...] } ]
        }
    """
    catalog = get_catalog()
    assignments = []
    for entry in request.assignments:
        try:
            meal = catalog.get(entry.slot, entry.meal_name)
        except KeyError as e:
            raise HTTPException(status_code=404, detail=e.args[0])
        assignments.append(PlanSlotAssignment(entry.day, entry.slot, meal))

    try:
        shopping_list = build_shopping_list(assignments, days=request.days, week=request.week)
    except NutriplanError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    result = shopping_list.to_dict()
    result["categories"] = [
        {"category": name, "label": CATEGORY_LABELS.get(name, name), "items": [i.text for i in items]}
        for name, items in shopping_list.grouped().items()
    ]
    return result
