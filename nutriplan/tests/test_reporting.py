import unittest

from nutriplan.domain.Ingredient import Ingredient
from nutriplan.domain.Macros import MacroTarget, Macros
from nutriplan.domain.Meal import Meal, SlotCategory
from nutriplan.domain.Plan import MealPlan, PlanSlotAssignment, Relaxation
from nutriplan.logic.reporting.nutrition import analyze_plan_quality, average_macros, plan_deviation

TARGET = MacroTarget(1000, 50, 100, 40, {slot: Macros() for slot in SlotCategory})


def meal(name, protein, carbs, fat):
    return Meal(name, protein, fat, carbs, "standard", [Ingredient("ориз", 100, "г")])


class TestPlanReporting(unittest.TestCase):

    def setUp(self):
        a, b = meal("А", 20, 40, 10), meal("Б", 30, 80, 30)
        self.plan = MealPlan(2, "standard", TARGET, [
            PlanSlotAssignment(1, SlotCategory.LUNCH, a, deviation=1.5),
            PlanSlotAssignment(1, SlotCategory.DINNER, b, deviation=2.0),
            PlanSlotAssignment(2, SlotCategory.LUNCH, a, deviation=1.5),
            PlanSlotAssignment(2, SlotCategory.DINNER, a, deviation=4.0),
        ], relaxations=[Relaxation(2, SlotCategory.DINNER, 1, ["standard"], 3)])

    def test_average_macros(self):
        self.assertEqual(average_macros(self.plan), Macros(45, 100, 30))

    def test_plan_deviation_sums_slot_scores(self):
        self.assertEqual(plan_deviation(self.plan), 9.0)

    def test_quality_summary(self):
        quality = analyze_plan_quality(self.plan)
        self.assertEqual(quality["deviation"]["protein"], 5)
        self.assertEqual(quality["deviation"]["carbs"], 0)
        self.assertEqual(quality["deviation"]["fat"], 10)
        self.assertEqual(quality["deviation_pct"]["protein"], 10.0)
        self.assertEqual(quality["deviation_pct"]["fat"], 25.0)
        self.assertEqual(quality["variety"], {"unique_meals": 2, "total_meals": 4, "percentage": 50})
        self.assertEqual(quality["relaxations"], 1)
        self.assertEqual(quality["total_deviation"], 9.0)

    def test_day_macros(self):
        self.assertEqual(self.plan.day_macros(1), Macros(50, 120, 40))
        self.assertEqual(self.plan.summaries[1].realized, Macros(40, 80, 20))

    def test_plan_serialisation(self):
        data = self.plan.to_dict()
        self.assertEqual(data["tier"], "standard")
        self.assertEqual(data["assignments"][0]["meal_name"], "А")
        self.assertEqual(data["relaxations"][0]["cap"], 3)
        self.assertEqual(len(data["summaries"]), 2)


if __name__ == '__main__':
    unittest.main()
