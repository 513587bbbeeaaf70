"""Unit tests for the category discount rule."""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal

import pytest

from stationery_store import pricing
from stationery_store.constants import DISCOUNTABLE_CATEGORY, UsageCategory


def test_discountable_category_is_coloring():
    assert DISCOUNTABLE_CATEGORY is UsageCategory.COLORING


def test_apply_discount_marks_down_coloring_products(crayons):
    assert pricing.apply_discount(crayons) == Decimal("0.9") * crayons.price


@pytest.mark.parametrize(
    "category",
    [member for member in UsageCategory if member is not UsageCategory.COLORING],
)
def test_apply_discount_leaves_other_categories_unchanged(notebook, category):
    product = replace(notebook, category=category, price=Decimal("7.35"))

    assert pricing.apply_discount(product) == Decimal("7.35")
    assert not pricing.is_discountable(product)


def test_apply_discount_does_not_modify_product(crayons):
    pricing.apply_discount(crayons)

    assert crayons.price == Decimal("10")


def test_apply_discount_announces_markdown(crayons, caplog):
    with caplog.at_level(logging.INFO, logger="stationery_store"):
        pricing.apply_discount(crayons)

    assert any("discount" in record.getMessage() for record in caplog.records)


def test_apply_discount_on_virtual_product_defaults_to_full_price(ebook):
    assert pricing.apply_discount(ebook) == ebook.price
