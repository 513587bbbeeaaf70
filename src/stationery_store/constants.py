"""Enumerations and business constants shared across the store modules.

Keeps the catalogue, pricing, payment, and console layers pointing at a single
source of truth for category names, brand tags, and menu identifiers.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum


CURRENCY_LABEL = "S/."

# 10% markdown for the single discountable category.
DISCOUNT_RATE = Decimal("0.10")


class UsageCategory(str, Enum):
    """Enumerate how a product is used; drives discount eligibility."""

    READING = "Reading"
    WRITING = "Writing"
    COLORING = "Coloring"
    ERASERS = "Erasers"
    ACCESSORIES = "Accessories"
    FILING = "Filing"
    PAPER_AND_NOTEBOOKS = "Paper and Notebooks"


class Brand(str, Enum):
    """Enumerate the brand tags shown next to a product."""

    ARTESCO = "Artesco"
    FABER_CASTELL = "Faber-Castell"
    OVE = "OVE"
    UNIVERSAL = "Universal"
    STAEDTLER = "Staedtler"
    STANDFORD = "Standford"


class ProductKind(str, Enum):
    """Tag distinguishing the closed set of product variants."""

    PHYSICAL = "Physical"
    VIRTUAL = "Virtual"


class PaymentMethod(str, Enum):
    """Enumerate the supported payment gateways."""

    YAPE = "Yape"
    PLIN = "Plin"


class Role(str, Enum):
    """Enumerate the user roles selectable at start-up."""

    SUPPLIER = "supplier"
    CUSTOMER = "customer"
    SELLER = "seller"


class MenuOption(str, Enum):
    """Enumerate the entries of the main console menu."""

    LIST_PRODUCTS = "1"
    FIND_PRODUCT = "2"
    ADD_TO_CART = "3"
    VIEW_CART = "4"
    PAY = "5"
    ROLE_ORDER_HANDLING = "6"
    EXIT = "7"


DISCOUNTABLE_CATEGORY = UsageCategory.COLORING


__all__ = [
    "CURRENCY_LABEL",
    "DISCOUNT_RATE",
    "DISCOUNTABLE_CATEGORY",
    "UsageCategory",
    "Brand",
    "ProductKind",
    "PaymentMethod",
    "Role",
    "MenuOption",
]
