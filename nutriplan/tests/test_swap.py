import unittest

from nutriplan.domain.Meal import CostTier, SlotCategory
from nutriplan.domain.Plan import MealPlan, Relaxation
from nutriplan.domain.errors import InvalidSwap
from nutriplan.infra.Meal_Catalog import MealCatalog
from nutriplan.logic.planning.generator import generate_meal_plan
from nutriplan.logic.planning.swap import find_similar_meals, relative_deviation, swap_meal
from nutriplan.logic.reporting.nutrition import analyze_plan_quality
from nutriplan.utilities.config import MEALS_FILE

PROFILE = {
    "weight_kg": 80,
    "height_cm": 175,
    "age": 30,
    "activity": "moderate",
    "goal": "bulk",
    "cost_tier": "standard",
}
CHICKEN_RICE = "Пилешки гърди с ориз и броколи"
TUNA_BULGUR = "Риба тон с булгур и краставица"


class TestSimilarMeals(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.catalog = MealCatalog.read_from_json(MEALS_FILE)

    def test_similar_lunches(self):
        meal = self.catalog.get(SlotCategory.LUNCH, CHICKEN_RICE)
        similar = find_similar_meals(meal, SlotCategory.LUNCH, CostTier.STANDARD, self.catalog)
        names = [m.name for m in similar]
        self.assertNotIn(CHICKEN_RICE, names)
        self.assertNotIn(TUNA_BULGUR, names)
        self.assertIn("Говеждо с картофи и зелена салата", names)
        self.assertLessEqual(len(similar), 5)
        deviations = [relative_deviation(m, meal) for m in similar]
        self.assertEqual(deviations, sorted(deviations))
        self.assertTrue(all(d <= 0.15 for d in deviations))

    def test_only_requested_or_budget_tier(self):
        meal = self.catalog.get(SlotCategory.DINNER, "Пилешка яхния с ориз")
        similar = find_similar_meals(meal, SlotCategory.DINNER, CostTier.STANDARD, self.catalog, tolerance=1.0)
        self.assertTrue(similar)
        self.assertTrue(all(m.cost_tier is not CostTier.PREMIUM for m in similar))

    def test_limit(self):
        meal = self.catalog.get(SlotCategory.SNACK, "Протеинов бар")
        similar = find_similar_meals(meal, SlotCategory.SNACK, CostTier.PREMIUM, self.catalog,
                                     tolerance=10, limit=3)
        self.assertEqual(len(similar), 3)


class TestSwapMeal(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.catalog = MealCatalog.read_from_json(MEALS_FILE)
        cls.plan = generate_meal_plan(PROFILE, 7, catalog=cls.catalog, seed=3)

    def test_swap_replaces_one_assignment(self):
        swapped = swap_meal(self.plan, 1, "lunch", TUNA_BULGUR, self.catalog)
        self.assertEqual(swapped.get(1, "lunch").meal_name, TUNA_BULGUR)
        self.assertGreater(swapped.get(1, "lunch").deviation, 0)
        before = [a.meal_name for a in self.plan]
        after = [a.meal_name for a in swapped]
        self.assertEqual(sum(1 for x, y in zip(before, after) if x != y), 1)
        self.assertNotEqual(self.plan.get(1, "lunch").meal_name, TUNA_BULGUR)

    def test_wrong_category(self):
        with self.assertRaises(InvalidSwap):
            swap_meal(self.plan, 1, "lunch", "Протеинов бар", self.catalog)

    def test_dearer_tier(self):
        with self.assertRaises(InvalidSwap):
            swap_meal(self.plan, 1, "lunch", "Рибай стек с печени картофи", self.catalog)

    def test_cheaper_tier_allowed(self):
        swapped = swap_meal(self.plan, 2, "dinner", "Леща яхния", self.catalog)
        self.assertEqual(swapped.get(2, "dinner").meal.cost_tier, CostTier.BUDGET)

    def test_variety_cap(self):
        first = self.plan.get(1, "lunch").meal_name
        self.assertEqual(self.plan.get(2, "lunch").meal_name, first)
        with self.assertRaises(InvalidSwap):
            swap_meal(self.plan, 3, "lunch", first, self.catalog)

    def test_same_meal(self):
        current = self.plan.get(4, "snack").meal_name
        with self.assertRaises(InvalidSwap):
            swap_meal(self.plan, 4, "snack", current, self.catalog)

    def test_unknown_day(self):
        with self.assertRaises(InvalidSwap):
            swap_meal(self.plan, 9, "lunch", TUNA_BULGUR, self.catalog)

    def test_swap_clears_relaxation_of_replaced_slot(self):
        relaxed = MealPlan(self.plan.days, self.plan.tier, self.plan.target, self.plan.assignments,
                           [Relaxation(3, SlotCategory.LUNCH, 1, ["standard"], 3),
                            Relaxation(5, SlotCategory.DINNER, 1, ["standard"], 3)], goal=self.plan.goal)
        current = relaxed.get(3, "lunch").meal_name
        replacement = next(m.name for m in self.catalog.meals(SlotCategory.LUNCH, [CostTier.BUDGET])
                           if m.name != current)
        swapped = swap_meal(relaxed, 3, "lunch", replacement, self.catalog)
        self.assertEqual([(r.day, r.slot) for r in swapped.relaxations], [(5, SlotCategory.DINNER)])
        self.assertEqual(analyze_plan_quality(swapped)["relaxations"], 1)
        self.assertEqual(len(relaxed.relaxations), 2)


if __name__ == '__main__':
    unittest.main()
