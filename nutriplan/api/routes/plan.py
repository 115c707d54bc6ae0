from fastapi import APIRouter, HTTPException
import logging

from nutriplan.api.http_errors import to_http_exception
from nutriplan.domain.Profile import NutritionProfile
from nutriplan.domain.errors import NutriplanError
from nutriplan.infra.Meal_Catalog import get_catalog
from nutriplan.logic.planning.generator import generate_meal_plan
from nutriplan.logic.reporting.nutrition import analyze_plan_quality
from nutriplan.logic.shopping.list_builder import build_shopping_list
from nutriplan.logic.targets.calculator import calculate_macro_target
from nutriplan.utilities.config import PlannerConfig
from nutriplan.utilities.validators import PlanRequest

router = APIRouter(prefix="/api", tags=["plan"])
logger = logging.getLogger(__name__)


@router.post("/macro-targets")
def api_macro_targets(profile: NutritionProfile):
    """Daily and per-slot macro targets for a profile."""
    try:
        target = calculate_macro_target(profile)
    except NutriplanError as e:
        raise to_http_exception(e)
    return target.to_dict()


@router.post("/meal-plan")
def api_meal_plan(request: PlanRequest):
    """Generate a plan.

    Response JSON structure:
        {
          "plan": { days, tier, goal, target, assignments, summaries, relaxations },
          "quality": { average, deviation, deviation_pct, variety, relaxations, total_deviation },
          "shopping_list": { items, text, count }   # only with include_shopping_list
        }
    """
    config = PlannerConfig.from_env()
    if request.rebalance_remaining:
        config.rebalance_remaining = True
    try:
        plan = generate_meal_plan(request.profile, request.days, catalog=get_catalog(),
                                  config=config, seed=request.seed)
        result = {"plan": plan.to_dict(), "quality": analyze_plan_quality(plan)}
        if request.include_shopping_list:
            result["shopping_list"] = build_shopping_list(plan).to_dict()
    except NutriplanError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    logger.info("Served %d-day plan (%s)", plan.days, plan.tier.value)
    return result
