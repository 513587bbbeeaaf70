"""Application layer for the stationery store.

This module bundles the inventory and the cart into a :class:`RuntimeContext`
and exposes the operations the console driver performs on them. Every input
arrives already parsed (command objects, enums, integers); validation of
those values happens here, before the cart or the inventory is touched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from . import data_manager, log, set_log_directory
from .cart import Cart, CartLine, CartSummary, CheckoutResult
from .catalog import Inventory, Product, default_products
from .constants import PaymentMethod, Role
from .payments import gateway_for
from .roles import describe_all_roles


class StoreError(Exception):
    """Base class for errors raised by the store's application layer."""


class BusinessRuleViolation(StoreError):
    """Raised when a requested operation violates a domain constraint."""


class MissingReferenceError(BusinessRuleViolation):
    """Raised when an operation references a product code that is unknown."""


@dataclass(frozen=True)
class RuntimeContext:
    """Container for the settings and live collections of one session."""

    settings: data_manager.StoreSettings
    inventory: Inventory = field(default_factory=Inventory)
    cart: Cart = field(default_factory=Cart)


@dataclass(frozen=True)
class AddToCartCommand:
    """User intent for putting units of a product in the cart."""

    code: str
    quantity: int


@dataclass(frozen=True)
class CheckoutCommand:
    """User intent for paying the cart with a given gateway."""

    method: PaymentMethod


def load_settings(config_path: Optional[Path] = None) -> data_manager.StoreSettings:
    """Resolve the store settings for a session.

    An explicit ``config_path`` must exist. Without one, ``config.ini`` is
    searched upward from the working directory and the built-in defaults are
    used when none is found.

    Raises:
        FileNotFoundError: If ``config_path`` was given but does not exist.
        KeyError: When mandatory configuration options are missing.
    """

    try:
        located_config = data_manager.find_config_file(config_path)
    except FileNotFoundError:
        log.info("No configuration file found; using built-in store settings")
        return data_manager.StoreSettings.defaults()

    resolved_config = Path(located_config).expanduser().resolve()
    parser = data_manager.read_config(resolved_config)
    return data_manager.parse_settings(parser, base_path=resolved_config.parent)


def seed_inventory(settings: data_manager.StoreSettings) -> Inventory:
    """Build the inventory a session starts with.

    Products come from ``settings.seed_file`` when configured, otherwise from
    :func:`~stationery_store.catalog.default_products`.
    """

    if settings.seed_file is not None:
        products = data_manager.load_seed_products(settings.seed_file)
    else:
        products = default_products()

    inventory = Inventory()
    for product in products:
        inventory.insert(product)
    return inventory


def load_runtime_context(config_path: Optional[Path] = None) -> RuntimeContext:
    """Load settings, seed the inventory, and start with an empty cart.

    When the settings name a log directory the package log file moves there
    before the inventory is seeded.

    Args:
        config_path (Path | None): Optional override path for the configuration
            file.

    Returns:
        RuntimeContext: Context ready for the console driver.

    Raises:
        FileNotFoundError: If the configuration file or the seed workbook
            cannot be located.
        KeyError: When mandatory configuration options are missing.
    """

    settings = load_settings(config_path)
    if settings.log_dir is not None:
        set_log_directory(settings.log_dir)
    context = RuntimeContext(settings=settings, inventory=seed_inventory(settings))
    log.info(
        "Loaded runtime context for '%s' with %d product(s)",
        settings.store_name,
        len(context.inventory),
    )
    return context


def list_products(context: RuntimeContext) -> List[Product]:
    return context.inventory.list_all()


def find_product(context: RuntimeContext, code: str) -> Optional[Product]:
    """Look ``code`` up in the inventory; ``None`` means not found."""

    return context.inventory.find_by_code(code.strip())


def get_product(context: RuntimeContext, code: str) -> Product:
    """Resolve a product that an operation requires.

    Raises:
        MissingReferenceError: If no product carries ``code``.
    """

    product = find_product(context, code)
    if product is None:
        log.warning("Product lookup failed for code '%s'", code)
        raise MissingReferenceError(f"Unknown product code: {code}")
    return product


def require_positive_quantity(quantity: int) -> None:
    """Ensure ``quantity`` is an integer greater than zero.

    Raises:
        ValueError: If ``quantity`` is not an ``int`` or is not positive.
    """

    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        log.error("Quantity validation failed: %s", quantity)
        raise ValueError("Quantity must be a whole number greater than zero")


def add_to_cart(context: RuntimeContext, command: AddToCartCommand) -> CartLine:
    """Validate and apply an :class:`AddToCartCommand`.

    Raises:
        MissingReferenceError: If the code is not in the inventory.
        ValueError: If the quantity is not a positive integer.
    """

    product = get_product(context, command.code)
    require_positive_quantity(command.quantity)
    return context.cart.add_item(product, command.quantity)


def summarize_cart(context: RuntimeContext) -> CartSummary:
    return context.cart.summarize()


def checkout(context: RuntimeContext, command: CheckoutCommand) -> CheckoutResult:
    """Pay the cart through the gateway selected in ``command``.

    The cart is left untouched, so checking out twice charges twice.
    """

    gateway = gateway_for(command.method, currency_label=context.settings.currency_label)
    return context.cart.checkout(gateway)


def describe_roles() -> List[Tuple[Role, str]]:
    return describe_all_roles()
