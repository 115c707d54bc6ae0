"""Plan quality reporting: average macros, deviation from target, variety."""
from typing import Any, Dict

from nutriplan.domain.Macros import MACRO_KEYS, Macros
from nutriplan.domain.Plan import MealPlan


def average_macros(plan: MealPlan) -> Macros:
    """Mean realized daily macros over the plan."""
    if not plan.days:
        return Macros()
    total = Macros()
    for assignment in plan.assignments:
        total = total + assignment.meal.macros
    return total.scaled(1 / plan.days)


def plan_deviation(plan: MealPlan) -> float:
    """Sum of the per-slot weighted deviation scores."""
    return plan.total_deviation


def analyze_plan_quality(plan: MealPlan) -> Dict[str, Any]:
    """Summary of how well a plan hits its target.

    Returns structure:
    {
      'average': {'protein': g, 'carbs': g, 'fat': g, 'calories': kcal},
      'deviation': {'protein': g, 'carbs': g, 'fat': g, 'calories': kcal},
      'deviation_pct': {'protein': %, 'carbs': %, 'fat': %, 'calories': %},
      'variety': {'unique_meals': int, 'total_meals': int, 'percentage': %},
      'relaxations': int,
      'total_deviation': float
    }
    """
    average = average_macros(plan)
    daily = plan.target.daily
    deviation = average.deviation(daily)
    pct = {}
    for key in MACRO_KEYS:
        reference = daily.get(key)
        pct[key] = round(100 * deviation[key] / reference, 1) if reference else 0.0
    pct["calories"] = round(100 * deviation["calories"] / daily.calories, 1) if daily.calories else 0.0

    total_meals = len(plan.assignments)
    unique_meals = len({a.meal.name for a in plan.assignments})
    return {
        "average": average.to_dict(),
        "deviation": {k: round(v, 1) for k, v in deviation.items()},
        "deviation_pct": pct,
        "variety": {
            "unique_meals": unique_meals,
            "total_meals": total_meals,
            "percentage": round(100 * unique_meals / total_meals) if total_meals else 0,
        },
        "relaxations": len(plan.relaxations),
        "total_deviation": round(plan_deviation(plan), 2),
    }


__all__ = ["analyze_plan_quality", "average_macros", "plan_deviation"]
