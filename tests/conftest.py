import pytest

from kiosk.cart import Cart
from kiosk.catalog import default_catalog


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def cart():
    return Cart()


@pytest.fixture
def americano(catalog):
    return catalog.get("americano")


@pytest.fixture
def latte(catalog):
    return catalog.get("caffe_latte")
