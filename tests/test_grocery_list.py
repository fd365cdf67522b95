"""Tests for grocery list aggregation and checked-state persistence."""

from datetime import date

from dietplanner.plan.grocery_list import GroceryItem, GroceryList, GroceryListAggregator
from dietplanner.schemas import MealType, UnitSystem
from dietplanner.store import CHECKED_INGREDIENTS_KEY, CheckedItemsRepository

# =============================================================================
# Grocery List Tests
# =============================================================================


class TestGroceryList:
    """Tests for GroceryList counters and text export."""

    def test_empty_list(self):
        """Test counters on an empty list."""
        grocery_list = GroceryList()
        assert grocery_list.is_empty
        assert grocery_list.total_count == 0
        assert grocery_list.completion_percentage == 0.0
        assert not grocery_list.is_completed

    def test_counters(self):
        """Test checked and unchecked counts."""
        grocery_list = GroceryList(
            items=[
                GroceryItem("aguacate", "3 aguacates"),
                GroceryItem("ajo", "2 cloves"),
                GroceryItem("tomate", "2 tomates", checked=True),
            ]
        )
        assert grocery_list.checked_count == 1
        assert grocery_list.unchecked_count == 2
        assert grocery_list.progress_text == "1 of 3 items"
        assert grocery_list.completion_text == "33% completed"
        assert grocery_list.checked_names() == {"tomate"}

    def test_all_checked_is_completed(self):
        """Test a fully checked list is complete."""
        grocery_list = GroceryList(items=[GroceryItem("ajo", "2 cloves", checked=True)])
        assert grocery_list.is_completed
        assert grocery_list.completion_text == "100% completed"

    def test_to_text(self):
        """Test the shareable text lists pending items before completed ones."""
        grocery_list = GroceryList(
            items=[
                GroceryItem("aguacate", "3 aguacates"),
                GroceryItem("ajo", "2 cloves"),
                GroceryItem("tomate", "2 tomates", checked=True),
            ]
        )
        assert grocery_list.to_text("Keto") == (
            "Grocery List (Keto)\n"
            "1 of 3 items — 33% completed\n\n"
            "Pending (2):\n"
            "- aguacate: 3 aguacates\n"
            "- ajo: 2 cloves\n\n"
            "Completed (1):\n"
            "- tomate: 2 tomates"
        )

    def test_to_text_without_completed_section(self):
        """Test sections without items are omitted."""
        grocery_list = GroceryList(items=[GroceryItem("ajo", "2 cloves")])
        assert "Completed" not in grocery_list.to_text("Keto")

    def test_to_text_empty(self):
        """Test the empty list text."""
        assert GroceryList().to_text("Low Carb") == (
            "Grocery List (Low Carb)\n0 of 0 items — 0% completed\n\nNo items in the list"
        )


# =============================================================================
# Aggregator Tests
# =============================================================================


class TestGroceryListAggregator:
    """Tests for GroceryListAggregator."""

    def test_aggregates_by_name(self, aggregator, weekly_plan):
        """Test quantities for the same name are combined and converted."""
        grocery_list = aggregator.recompute(weekly_plan)

        assert [item.name for item in grocery_list.items] == ["aguacate", "ajo", "tomate"]
        assert grocery_list.get("aguacate").quantity == "3 aguacates"
        assert grocery_list.get("tomate").quantity == "2 tomates"
        assert grocery_list.get("ajo").quantity == "2 cloves"

    def test_imperial_rendering(self, aggregator, weekly_plan):
        """Test the unit system only changes unit names."""
        grocery_list = aggregator.recompute(weekly_plan, UnitSystem.IMPERIAL)
        assert grocery_list.get("aguacate").quantity == "3 avocados"
        assert grocery_list.get("tomate").quantity == "2 tomatoes"

    def test_names_are_not_merged_across_spellings(self, aggregator, recipe_factory):
        """Test only identical names are grouped."""
        plan = {
            date(2026, 10, 19): [
                recipe_factory("A", MealType.LUNCH, 300, [("tomate", "100 g"), ("Tomate", "100 g")]),
            ]
        }
        grocery_list = aggregator.recompute(plan)
        assert [item.name for item in grocery_list.items] == ["Tomate", "tomate"]

    def test_plan_order_does_not_matter(self, aggregator, weekly_plan):
        """Test reversing the days gives the same list."""
        forward = aggregator.recompute(weekly_plan)
        backward = aggregator.recompute(dict(reversed(list(weekly_plan.items()))))
        assert forward == backward

    def test_empty_plan(self, aggregator):
        """Test an empty plan gives an empty list."""
        assert aggregator.recompute({}).is_empty

    def test_toggle_persists_checked_names(self, aggregator, memory_store, weekly_plan):
        """Test toggling writes the checked set to the store."""
        aggregator.recompute(weekly_plan)

        item = aggregator.toggle("tomate")

        assert item.checked
        assert memory_store.get(CHECKED_INGREDIENTS_KEY) == ["tomate"]
        assert aggregator.grocery_list.checked_count == 1

    def test_toggle_twice_unchecks(self, aggregator, memory_store, weekly_plan):
        """Test a second toggle reverts the item."""
        aggregator.recompute(weekly_plan)
        aggregator.toggle("tomate")
        item = aggregator.toggle("tomate")

        assert not item.checked
        assert memory_store.get(CHECKED_INGREDIENTS_KEY) == []

    def test_toggle_unknown_name(self, aggregator, memory_store, weekly_plan):
        """Test toggling a name not in the list changes nothing."""
        aggregator.recompute(weekly_plan)
        assert aggregator.toggle("papaya") is None
        assert memory_store.get(CHECKED_INGREDIENTS_KEY) is None

    def test_checked_state_survives_rebuild(self, aggregator, memory_store, converter, weekly_plan):
        """Test a checked item stays checked after a rebuild, even from a new aggregator."""
        aggregator.recompute(weekly_plan)
        aggregator.toggle("tomate")

        rebuilt = GroceryListAggregator(CheckedItemsRepository(memory_store), converter)
        grocery_list = rebuilt.recompute(weekly_plan)

        assert grocery_list.get("tomate").checked
        assert not grocery_list.get("aguacate").checked

    def test_checked_name_kept_while_absent(self, aggregator, memory_store, weekly_plan, recipe_factory):
        """Test checked names missing from a new plan come back checked later."""
        aggregator.recompute(weekly_plan)
        aggregator.toggle("ajo")

        other_plan = {date(2026, 10, 19): [recipe_factory("Salad", MealType.LUNCH, 300, [("pepino", "200 g")])]}
        assert aggregator.recompute(other_plan).checked_count == 0
        assert memory_store.get(CHECKED_INGREDIENTS_KEY) == ["ajo"]

        assert aggregator.recompute(weekly_plan).get("ajo").checked

    def test_clear_checked(self, aggregator, memory_store, weekly_plan):
        """Test clearing unchecks everything and persists the empty set."""
        aggregator.recompute(weekly_plan)
        aggregator.toggle("tomate")
        aggregator.toggle("ajo")

        aggregator.clear_checked()

        assert aggregator.grocery_list.checked_count == 0
        assert memory_store.get(CHECKED_INGREDIENTS_KEY) == []
