import pytest

from kiosk.catalog import Catalog, category_label
from kiosk.models import MenuItem


def test_categories_in_menu_order(catalog):
    assert catalog.list_categories() == ["espresso", "brewed", "tea", "bakery", "seasonal"]


def test_items_in_category(catalog):
    names = [item.name for item in catalog.items_in("espresso")]
    assert names == ["Americano", "Caffe Latte"]
    assert catalog.get("americano").price == 2500


def test_unknown_category_is_empty(catalog):
    assert catalog.items_in("sandwiches") == []


def test_get_unknown_item(catalog):
    assert catalog.get("nope") is None


def test_featured_quick_menu(catalog):
    assert [item.item_id for item in catalog.featured()] == ["americano", "green_tea_latte", "croissant"]


def test_every_item_belongs_to_a_listed_category(catalog):
    categories = set(catalog.list_categories())
    assert len(catalog.all_items()) == 10
    assert all(item.category in categories for item in catalog.all_items())


def test_duplicate_ids_rejected():
    item = MenuItem("tea", "tea", "Tea", 1000)
    with pytest.raises(ValueError):
        Catalog([item, item])


def test_categories_derived_when_not_given():
    catalog = Catalog([MenuItem("a", "x", "A", 1), MenuItem("b", "y", "B", 1), MenuItem("c", "x", "C", 1)])
    assert catalog.list_categories() == ["x", "y"]


def test_negative_price_rejected():
    with pytest.raises(ValueError):
        MenuItem("bad", "x", "Bad", -1)


def test_category_label():
    assert category_label("bakery") == "Bakery"
    assert category_label("hot_food") == "Hot Food"
