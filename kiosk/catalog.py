"""Static menu catalog."""

from __future__ import annotations

from kiosk.constant import CATEGORY_LABELS, CATEGORY_ORDER, FEATURED_ITEM_IDS, MENU_ITEMS
from kiosk.models import MenuItem


class Catalog:
    """Read-only menu entries grouped by category."""

    def __init__(
        self,
        items: list[MenuItem],
        categories: list[str] | None = None,
        featured: list[str] | None = None,
    ) -> None:
        self._items: dict[str, MenuItem] = {}
        for item in items:
            if item.item_id in self._items:
                raise ValueError(f"Duplicate menu item id: {item.item_id!r}")
            self._items[item.item_id] = item

        if categories is None:
            categories = []
            for item in items:
                if item.category not in categories:
                    categories.append(item.category)
        self._categories = list(categories)
        self._featured = list(featured or [])

    def list_categories(self) -> list[str]:
        return list(self._categories)

    def items_in(self, category: str) -> list[MenuItem]:
        return [item for item in self._items.values() if item.category == category]

    def get(self, item_id: str) -> MenuItem | None:
        return self._items.get(item_id)

    def all_items(self) -> list[MenuItem]:
        return list(self._items.values())

    def featured(self) -> list[MenuItem]:
        return [self._items[item_id] for item_id in self._featured if item_id in self._items]


def category_label(category: str) -> str:
    """Get display label for a category tag."""
    return CATEGORY_LABELS.get(category, category.replace("_", " ").title())


def _build_default_items() -> list[MenuItem]:
    return [
        MenuItem(
            item_id=item_id,
            category=str(meta["category"]),
            name=str(meta["name"]),
            price=int(meta["price"]),  # type: ignore[arg-type]
            description=str(meta.get("description", "")),
            icon=str(meta.get("icon", "")),
            aliases=tuple(meta.get("aliases", ())),  # type: ignore[arg-type]
        )
        for item_id, meta in MENU_ITEMS.items()
    ]


def default_catalog() -> Catalog:
    """Build the kiosk menu from the constants module."""
    return Catalog(_build_default_items(), categories=CATEGORY_ORDER, featured=FEATURED_ITEM_IDS)
