import unittest

from nutriplan.domain.Ingredient import Ingredient
from nutriplan.domain.Meal import Meal, SlotCategory
from nutriplan.domain.Plan import PlanSlotAssignment
from nutriplan.domain.errors import UnitMismatch
from nutriplan.infra.Meal_Catalog import MealCatalog
from nutriplan.infra.Pack_Size_Registry import PackSizeRegistry
from nutriplan.logic.planning.generator import generate_meal_plan
from nutriplan.logic.shopping.aggregate import IngredientAggregate, normalize_unit
from nutriplan.logic.shopping.categories import categorize
from nutriplan.logic.shopping.list_builder import build_shopping_list, convert_to_pack_format, pack_count
from nutriplan.utilities.config import MEALS_FILE, PACK_SIZES_FILE

PROFILE = {
    "weight_kg": 80,
    "height_cm": 175,
    "age": 30,
    "activity": "moderate",
    "goal": "bulk",
    "cost_tier": "standard",
}


def meal_with(*ingredients, name="Тест"):
    return Meal(name, 10, 10, 10, "standard", [Ingredient(*i) for i in ingredients])


def assignments(*meals):
    return [PlanSlotAssignment(day, SlotCategory.LUNCH, meal) for day, meal in enumerate(meals, start=1)]


class TestPackFormat(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.registry = PackSizeRegistry.read_from_json(PACK_SIZES_FILE)

    def test_yogurt_rounds_up_to_two_packs(self):
        item = convert_to_pack_format("кисело мляко", 650, "г", self.registry)
        self.assertEqual(item.text, "2 кофички кисело мляко (800г)")
        self.assertEqual(item.pack_count, 2)
        self.assertEqual(item.purchased_quantity, 800)

    def test_yogurt_summed_across_plan(self):
        plan = assignments(meal_with(("кисело мляко", 400, "г"), name="А"),
                           meal_with(("кисело мляко", 250, "г"), name="Б"))
        shopping_list = build_shopping_list(plan, self.registry)
        self.assertEqual(shopping_list["кисело мляко"].quantity, 650)
        self.assertEqual(shopping_list["кисело мляко"].text, "2 кофички кисело мляко (800г)")

    def test_single_pack_uses_singular(self):
        item = convert_to_pack_format("кисело мляко", 400, "г", self.registry)
        self.assertEqual(item.text, "1 кофичка кисело мляко (400г)")

    def test_discrete_items_render_bare_count(self):
        self.assertEqual(convert_to_pack_format("банан", 3, "бр", self.registry).text, "3 банана")
        self.assertEqual(convert_to_pack_format("банан", 1, "бр", self.registry).text, "1 банан")
        self.assertEqual(convert_to_pack_format("авокадо", 1.5, "бр", self.registry).text, "2 авокадота")

    def test_empty_product_label_omitted(self):
        self.assertEqual(convert_to_pack_format("хляб", 500, "г", self.registry).text, "2 хляба (800г)")

    def test_contained_match_keeps_ingredient_name(self):
        self.assertEqual(convert_to_pack_format("пушена сьомга", 150, "г", self.registry).text,
                         "1 филе пушена сьомга (200г)")
        self.assertEqual(convert_to_pack_format("сьомга", 350, "г", self.registry).text,
                         "2 филета сьомга (400г)")
        self.assertEqual(convert_to_pack_format("гръцко кисело мляко", 250, "г", self.registry).text,
                         "1 кофичка гръцко кисело мляко (400г)")
        self.assertEqual(convert_to_pack_format("пълнозърнест хляб", 120, "г", self.registry).text,
                         "1 хляб пълнозърнест хляб (400г)")
        self.assertEqual(convert_to_pack_format("зелена ябълка", 2, "бр", self.registry).text,
                         "2 ябълки (зелена ябълка)")

    def test_related_ingredients_render_distinct_lines(self):
        plan = assignments(meal_with(("сьомга", 200, "г"), ("пушена сьомга", 80, "г"), name="А"))
        texts = list(build_shopping_list(plan, self.registry).as_text().values())
        self.assertEqual(len(texts), len(set(texts)))
        self.assertIn("1 филе пушена сьомга (200г)", texts)
        self.assertIn("1 филе сьомга (200г)", texts)

    def test_unknown_ingredient_passes_through(self):
        item = convert_to_pack_format("сусамени гризини", 30, "г", self.registry)
        self.assertEqual(item.text, "30г сусамени гризини")
        self.assertIsNone(item.pack_count)
        self.assertEqual(item.purchased_quantity, 30)

    def test_kilograms_normalised(self):
        item = convert_to_pack_format("ориз", 1.5, "кг", self.registry)
        self.assertEqual(item.quantity, 1500)
        self.assertEqual(item.text, "3 пакета ориз (1500г)")

    def test_unit_differs_from_registry(self):
        with self.assertRaises(UnitMismatch) as ctx:
            convert_to_pack_format("кисело мляко", 500, "мл", self.registry)
        self.assertEqual(ctx.exception.ingredient, "кисело мляко")

    def test_pack_count_never_under_buys(self):
        self.assertEqual(pack_count(801, 400), 3)
        self.assertEqual(pack_count(800, 400), 2)
        self.assertEqual(pack_count(0.3, 0.1), 3)
        self.assertEqual(pack_count(0, 400), 0)
        for quantity in (1, 99.5, 399.999, 400.001, 1234):
            self.assertGreaterEqual(pack_count(quantity, 400) * 400, quantity)


class TestAggregation(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.registry = PackSizeRegistry.read_from_json(PACK_SIZES_FILE)
        cls.catalog = MealCatalog.read_from_json(MEALS_FILE)

    def test_n_identical_meals_sum(self):
        meal = meal_with(("яйца", 3, "бр"), ("зехтин", 20, "мл"))
        shopping_list = build_shopping_list(assignments(*[meal] * 5), self.registry)
        self.assertEqual(shopping_list["яйца"].quantity, 15)
        self.assertEqual(shopping_list["яйца"].text, "2 картона яйца (20бр)")
        self.assertEqual(shopping_list["зехтин"].quantity, 100)

    def test_aliases_share_one_total(self):
        plan = assignments(meal_with(("яйце", 1, "бр"), name="А"), meal_with(("Яйца", 2, "бр"), name="Б"))
        shopping_list = build_shopping_list(plan, self.registry)
        self.assertEqual(list(shopping_list.items), ["яйца"])
        self.assertEqual(shopping_list["яйца"].quantity, 3)

    def test_incompatible_units_raise(self):
        plan = assignments(meal_with(("мед", 20, "г"), name="А"), meal_with(("мед", 20, "мл"), name="Б"))
        with self.assertRaises(UnitMismatch) as ctx:
            build_shopping_list(plan, self.registry)
        self.assertEqual(ctx.exception.ingredient, "мед")
        self.assertEqual(set(ctx.exception.units), {"г", "мл"})

    def test_kilograms_and_grams_combine(self):
        aggregate = IngredientAggregate(self.registry)
        aggregate.add("ориз", 1, "кг")
        aggregate.add("ориз", 250, "g")
        self.assertEqual(aggregate.get("ориз"), (1250, "г"))
        self.assertEqual(normalize_unit("л", 2), ("мл", 2000))

    def test_aggregate_reset(self):
        aggregate = IngredientAggregate()
        aggregate.add("ориз", 100, "г")
        self.assertIn("ориз", aggregate)
        aggregate.reset()
        self.assertEqual(len(aggregate), 0)

    def test_negative_quantity_rejected(self):
        with self.assertRaises(ValueError):
            IngredientAggregate().add("ориз", -1, "г")

    def test_zero_totals_left_out(self):
        shopping_list = build_shopping_list(assignments(meal_with(("сол", 0, "г"), ("ориз", 50, "г"))),
                                            self.registry)
        self.assertNotIn("сол", shopping_list)
        self.assertIn("ориз", shopping_list)

    def test_sorted_by_name(self):
        plan = assignments(meal_with(("ябълка", 1, "бр"), ("банан", 2, "бр"), ("мед", 10, "г")))
        shopping_list = build_shopping_list(plan, self.registry)
        self.assertEqual(list(shopping_list.as_text()), ["банан", "мед", "ябълка"])

    def test_every_catalog_meal_aggregates(self):
        everything = [PlanSlotAssignment(1, slot, meal) for slot, meal in self.catalog]
        shopping_list = build_shopping_list(everything, self.registry)
        self.assertGreater(len(shopping_list), 40)
        for item in shopping_list:
            self.assertGreaterEqual(item.purchased_quantity, item.quantity)


class TestPlanShoppingList(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.registry = PackSizeRegistry.read_from_json(PACK_SIZES_FILE)
        cls.catalog = MealCatalog.read_from_json(MEALS_FILE)
        cls.plan = generate_meal_plan(PROFILE, 14, catalog=cls.catalog, seed=5)

    def test_idempotent(self):
        first = build_shopping_list(self.plan, self.registry)
        second = build_shopping_list(self.plan, self.registry)
        self.assertEqual(first.to_dict(), second.to_dict())

    def test_no_under_buying(self):
        for item in build_shopping_list(self.plan, self.registry):
            if item.pack_count is not None:
                self.assertGreaterEqual(item.pack_count * item.pack_size, item.quantity, item.name)

    def test_week_filter(self):
        by_week = build_shopping_list(self.plan, self.registry, week=2)
        by_days = build_shopping_list(self.plan, self.registry, days=range(8, 15))
        self.assertEqual(by_week.to_dict(), by_days.to_dict())

    def test_weeks_add_up_to_whole_plan(self):
        whole = build_shopping_list(self.plan, self.registry)
        weeks = [build_shopping_list(self.plan, self.registry, week=k) for k in (1, 2)]
        for name, item in whole.items.items():
            split = sum(w[name].quantity for w in weeks if name in w)
            self.assertAlmostEqual(split, item.quantity, msg=name)

    def test_week_beyond_plan_is_empty(self):
        self.assertEqual(len(build_shopping_list(self.plan, self.registry, week=3)), 0)

    def test_days_and_week_together_rejected(self):
        with self.assertRaises(ValueError):
            build_shopping_list(self.plan, self.registry, days=[1], week=1)

    def test_grouped_by_category(self):
        grouped = build_shopping_list(self.plan, self.registry).grouped()
        self.assertEqual(list(grouped), ["meat_fish", "dairy", "produce", "grains", "other"])
        dairy = [item.name for item in grouped["dairy"]]
        self.assertIn("мляко", dairy)

    def test_default_taxonomy(self):
        self.assertEqual(categorize("пилешки гърди"), "meat_fish")
        self.assertEqual(categorize("риба тон"), "meat_fish")
        self.assertEqual(categorize("кисело мляко"), "dairy")
        self.assertEqual(categorize("броколи"), "produce")
        self.assertEqual(categorize("овесени ядки"), "grains")
        self.assertEqual(categorize("фъстъчено масло"), "other")

    def test_custom_taxonomy(self):
        taxonomy = (("sweet", ("мед",)), ("rest", ()))
        shopping_list = build_shopping_list(
            assignments(meal_with(("мед", 10, "г"), ("ориз", 50, "г"))), self.registry, taxonomy=taxonomy)
        self.assertEqual(shopping_list["мед"].category, "sweet")
        self.assertEqual(shopping_list["ориз"].category, "rest")


if __name__ == '__main__':
    unittest.main()
