"""Discount policy applied to every cart line."""

from __future__ import annotations

from decimal import Decimal

from . import log
from .catalog import Product
from .constants import DISCOUNT_RATE, DISCOUNTABLE_CATEGORY


def is_discountable(product: Product) -> bool:
    """Return ``True`` when ``product`` falls in the discountable category."""

    return product.category == DISCOUNTABLE_CATEGORY


def apply_discount(product: Product) -> Decimal:
    """Return the unit price of ``product`` after the category markdown.

    Products in :data:`~stationery_store.constants.DISCOUNTABLE_CATEGORY`
    are sold at 90% of their price; every other product keeps its base price.
    The function is pure apart from the log record announcing the discount.

    Args:
        product (Product): Product whose price should be evaluated.

    Returns:
        Decimal: Adjusted unit price, in the same currency unit as
            ``product.price``.
    """

    if is_discountable(product):
        discounted = product.price * (Decimal("1") - DISCOUNT_RATE)
        log.info(
            "Applied %s%% discount to '%s': %s -> %s",
            DISCOUNT_RATE * 100,
            product.code,
            product.price,
            discounted,
        )
        return discounted
    return product.price
