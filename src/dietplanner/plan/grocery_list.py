"""Grocery list aggregation from a weekly plan."""

from collections import defaultdict
from dataclasses import dataclass, field

from dietplanner.logging_config import get_logger
from dietplanner.normalize.quantity import combine_quantities
from dietplanner.plan.shopping import ShoppableQuantityConverter
from dietplanner.schemas import UnitSystem, WeeklyPlan
from dietplanner.store import CheckedItemsRepository

logger = get_logger(__name__)


@dataclass
class GroceryItem:
    """A single line of the grocery list."""

    name: str
    quantity: str
    checked: bool = False


@dataclass
class GroceryList:
    """Name-ordered grocery items with progress counters."""

    items: list[GroceryItem] = field(default_factory=list)

    def get(self, name: str) -> GroceryItem | None:
        return next((item for item in self.items if item.name == name), None)

    def checked_items(self) -> list[GroceryItem]:
        return [item for item in self.items if item.checked]

    def unchecked_items(self) -> list[GroceryItem]:
        return [item for item in self.items if not item.checked]

    def checked_names(self) -> set[str]:
        return {item.name for item in self.items if item.checked}

    @property
    def total_count(self) -> int:
        return len(self.items)

    @property
    def checked_count(self) -> int:
        return len(self.checked_items())

    @property
    def unchecked_count(self) -> int:
        return self.total_count - self.checked_count

    @property
    def completion_percentage(self) -> float:
        """Fraction of items checked, between 0.0 and 1.0."""
        if self.total_count == 0:
            return 0.0
        return self.checked_count / self.total_count

    @property
    def progress_text(self) -> str:
        return f"{self.checked_count} of {self.total_count} items"

    @property
    def completion_text(self) -> str:
        return f"{int(self.completion_percentage * 100)}% completed"

    @property
    def is_completed(self) -> bool:
        return self.total_count > 0 and self.checked_count == self.total_count

    @property
    def is_empty(self) -> bool:
        return self.total_count == 0

    def to_text(self, diet_label: str) -> str:
        """Shareable plain-text version: pending items first, then completed ones."""
        header = f"Grocery List ({diet_label})\n"
        counter = f"{self.progress_text} — {self.completion_text}\n\n"

        if self.is_empty:
            return header + counter + "No items in the list"

        sections = []
        pending = self.unchecked_items()
        if pending:
            lines = "\n".join(f"- {item.name}: {item.quantity}" for item in pending)
            sections.append(f"Pending ({len(pending)}):\n{lines}")

        completed = self.checked_items()
        if completed:
            lines = "\n".join(f"- {item.name}: {item.quantity}" for item in completed)
            sections.append(f"Completed ({len(completed)}):\n{lines}")

        return header + counter + "\n\n".join(sections)


class GroceryListAggregator:
    """
    Builds the grocery list for a weekly plan and keeps checked state.

    Ingredients are combined only when their names are exactly equal; fuzzy
    matching is applied later, when converting to purchase units. Checked
    state is persisted by ingredient name so it survives rebuilds.
    """

    def __init__(
        self,
        checked_items: CheckedItemsRepository,
        converter: ShoppableQuantityConverter | None = None,
    ):
        self.checked_items = checked_items
        self.converter = converter or ShoppableQuantityConverter()
        self.grocery_list = GroceryList()

    def recompute(
        self,
        weekly_plan: WeeklyPlan,
        unit_system: UnitSystem = UnitSystem.METRIC,
    ) -> GroceryList:
        """
        Rebuild the grocery list from scratch.

        Args:
            weekly_plan: Scaled recipes per day.
            unit_system: Unit names for purchase quantities.

        Returns:
            The new grocery list, also kept as ``self.grocery_list``.
        """
        quantities_by_name: dict[str, list[str]] = defaultdict(list)
        for recipes in weekly_plan.values():
            for recipe in recipes:
                for ingredient in recipe.ingredients:
                    quantities_by_name[ingredient.name].append(ingredient.quantity)

        checked = self.checked_items.load()
        items = []
        for name, quantities in quantities_by_name.items():
            combined = combine_quantities(quantities)
            items.append(
                GroceryItem(
                    name=name,
                    quantity=self.converter.convert(name, combined, unit_system),
                    checked=name in checked,
                )
            )

        self.grocery_list = GroceryList(items=sorted(items, key=lambda item: item.name))

        logger.info(
            f"Grocery list rebuilt: {self.grocery_list.total_count} items, "
            f"{self.grocery_list.checked_count} checked, "
            f"{self.grocery_list.unchecked_count} pending ({self.grocery_list.completion_text})"
        )
        return self.grocery_list

    def toggle(self, name: str) -> GroceryItem | None:
        """Flip the checked flag of the item with this name and persist the checked set."""
        item = self.grocery_list.get(name)
        if item is None:
            logger.warning(f"Cannot toggle '{name}': not in the grocery list")
            return None

        item.checked = not item.checked
        self.checked_items.save(self.grocery_list.checked_names())
        return item

    def clear_checked(self) -> None:
        """Uncheck every item and persist the empty set."""
        for item in self.grocery_list.items:
            item.checked = False
        self.checked_items.save(set())
