"""Console entry point for the stationery store.

All orchestration in this module is limited to argparse wiring, prompting,
and translating typed-in text into the command objects consumed by
:mod:`stationery_store.core_logic`. Input and output go through injectable
callables so the whole menu loop can be driven from tests.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, Mapping, MutableMapping, Optional, Sequence

from . import core_logic, log
from .cart import CheckoutStatus
from .catalog import describe_product
from .constants import MenuOption, PaymentMethod, Role
from .roles import can_shop, describe_order_handling

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]

ROLE_CHOICES: Mapping[str, Role] = {
    "1": Role.SUPPLIER,
    "2": Role.CUSTOMER,
    "3": Role.SELLER,
}

PAYMENT_CHOICES: Mapping[str, PaymentMethod] = {
    "1": PaymentMethod.YAPE,
    "2": PaymentMethod.PLIN,
}


@dataclass(frozen=True)
class Console:
    """Pair of callables used to talk to the person at the keyboard."""

    read: InputFn = input
    write: OutputFn = print


@dataclass(frozen=True)
class Session:
    """State of one interactive run: the loaded context and the chosen role."""

    context: core_logic.RuntimeContext
    role: Role
    console: Console


@dataclass(frozen=True)
class MenuAction:
    """Describe how a main-menu entry is shown and executed."""

    option: MenuOption
    label: str
    shopping_only: bool
    execute: Callable[[Session], bool]


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="stationery-store",
        description="Interactive console for the Stationery Store simulator.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional path to config.ini (defaults to searching upward from the working directory).",
    )
    parser.add_argument(
        "--role",
        choices=[member.value for member in Role],
        default=None,
        help="Skip the role prompt and start with this role.",
    )
    return parser


def build_menu_table(actions: Iterable[MenuAction]) -> MutableMapping[str, MenuAction]:
    """Build an index of menu actions keyed by the option typed by the user."""
    table: Dict[str, MenuAction] = {}
    for action in actions:
        key = action.option.value
        if key in table:
            raise ValueError(f"Duplicate menu option: {key}")
        table[key] = action
    return table


def default_menu() -> MutableMapping[str, MenuAction]:
    """Return the main menu in display order."""
    return build_menu_table(
        [
            MenuAction(MenuOption.LIST_PRODUCTS, "View products", False, run_list_products),
            MenuAction(MenuOption.FIND_PRODUCT, "Find product by code", False, run_find_product),
            MenuAction(MenuOption.ADD_TO_CART, "Add product to cart", True, run_add_to_cart),
            MenuAction(MenuOption.VIEW_CART, "View cart", True, run_view_cart),
            MenuAction(MenuOption.PAY, "Pay", True, run_checkout),
            MenuAction(MenuOption.ROLE_ORDER_HANDLING, "View order handling by role", True, run_describe_roles),
            MenuAction(MenuOption.EXIT, "Exit", False, run_exit),
        ]
    )


def visible_actions(menu: Mapping[str, MenuAction], role: Role) -> list[MenuAction]:
    """Return the menu entries ``role`` is allowed to see."""
    shopper = can_shop(role)
    return [action for action in menu.values() if shopper or not action.shopping_only]


def select_role(console: Console, preset: Optional[str] = None) -> Optional[Role]:
    """Resolve the session role from ``--role`` or by prompting."""
    if preset is not None:
        return Role(preset)
    console.write("Select your role:")
    console.write("1. Supplier\n2. Customer\n3. Seller")
    choice = console.read("Option: ").strip()
    return ROLE_CHOICES.get(choice)


def translate_quantity(raw: str) -> Optional[int]:
    """Parse typed-in quantity text; ``None`` when it is not a positive integer."""
    try:
        quantity = int(raw.strip())
    except ValueError:
        return None
    return quantity if quantity > 0 else None


def translate_payment_method(raw: str) -> PaymentMethod:
    """Map the typed-in choice to a gateway; anything but a listed choice means Plin."""
    return PAYMENT_CHOICES.get(raw.strip(), PaymentMethod.PLIN)


def run_list_products(session: Session) -> bool:
    """Print every product in inventory order."""
    console = session.console
    console.write("\n--- Full Inventory ---")
    for product in core_logic.list_products(session.context):
        console.write(describe_product(product, session.context.settings.currency_label))
    return True


def run_find_product(session: Session) -> bool:
    """Prompt for a code and print the matching product."""
    console = session.console
    product = core_logic.find_product(session.context, console.read("Product code: "))
    if product is None:
        console.write("Product not found")
    else:
        console.write(describe_product(product, session.context.settings.currency_label))
    return True


def run_add_to_cart(session: Session) -> bool:
    """Prompt for a code and a quantity, then add the product to the cart."""
    console = session.console
    code = console.read("Product code: ").strip()
    if core_logic.find_product(session.context, code) is None:
        console.write("Product not found")
        return True
    quantity = translate_quantity(console.read("Quantity: "))
    if quantity is None:
        console.write("Invalid quantity")
        return True
    core_logic.add_to_cart(session.context, core_logic.AddToCartCommand(code=code, quantity=quantity))
    console.write("Product added to cart")
    return True


def run_view_cart(session: Session) -> bool:
    """Print each cart line with its discounted subtotal, then the total."""
    console = session.console
    if session.context.cart.is_empty:
        console.write("Cart is empty. Add products before continuing.")
        return True
    write_cart_summary(session)
    return True


def write_cart_summary(session: Session) -> None:
    currency = session.context.settings.currency_label
    summary = core_logic.summarize_cart(session.context)
    session.console.write("\nShopping Cart:")
    for line in summary.lines:
        session.console.write(f"{line.name} x {line.quantity} - Total: {currency} {line.subtotal}")
    session.console.write(f"Total: {currency} {summary.total}")


def run_checkout(session: Session) -> bool:
    """Ask for a payment method, then pay the cart if it has anything in it."""
    console = session.console
    method = translate_payment_method(console.read("Payment method: 1. Yape  2. Plin: "))
    if session.context.cart.is_empty:
        console.write("There are no products in the cart. Select a product before paying.")
        return True
    write_cart_summary(session)
    result = core_logic.checkout(session.context, core_logic.CheckoutCommand(method=method))
    if result.status is CheckoutStatus.PAID and result.receipt is not None:
        console.write(result.receipt.message)
    return True


def run_describe_roles(session: Session) -> bool:
    """Print how every role takes part in order handling."""
    session.console.write("\n=== Order handling by role ===")
    for _, description in core_logic.describe_roles():
        session.console.write(description)
    return True


def run_exit(session: Session) -> bool:
    session.console.write("Thank you for using the system")
    return False


def write_menu(session: Session, menu: Mapping[str, MenuAction]) -> None:
    session.console.write("\n===== MAIN MENU =====")
    for action in visible_actions(menu, session.role):
        session.console.write(f"{action.option.value}. {action.label}")


def dispatch_option(session: Session, option: str, menu: Mapping[str, MenuAction]) -> bool:
    """Execute the menu entry for ``option``; return ``False`` to stop the loop.

    Options hidden from the session's role are ignored, as are unknown ones
    (the latter with a message).
    """
    action = menu.get(option.strip())
    if action is None:
        session.console.write("Invalid option")
        return True
    if action.shopping_only and not can_shop(session.role):
        log.debug("Ignoring option %s for role %s", action.option.value, session.role.value)
        return True
    return action.execute(session)


def run_menu_loop(session: Session, menu: Optional[Mapping[str, MenuAction]] = None) -> int:
    """Show the menu and dispatch choices until the user exits."""
    menu = menu if menu is not None else default_menu()
    keep_going = True
    while keep_going:
        write_menu(session, menu)
        keep_going = dispatch_option(session, session.console.read("Option: "), menu)
    return 0


def handle_cli_error(error: Exception) -> int:
    """Convert raised exceptions into user-friendly exit codes."""
    if isinstance(error, core_logic.BusinessRuleViolation):
        log.error("%s", error)
        return 2
    if isinstance(error, FileNotFoundError):
        log.error("%s", error)
        return 3
    log.error("%s", error)
    return 1


def main(argv: Sequence[str] | None = None, console: Optional[Console] = None) -> int:
    """CLI entry point that orchestrates parsing, role selection, and the menu loop."""
    parser = build_parser()
    args = parser.parse_args(argv)
    console = console if console is not None else Console()
    try:
        context = core_logic.load_runtime_context(args.config)
        role = select_role(console, args.role)
        if role is None:
            console.write("Invalid role. Ending program.")
            return 2
        session = Session(context=context, role=role, console=console)
        console.write(describe_order_handling(role))
        return run_menu_loop(session)
    except Exception as error:  # pragma: no cover - centralised error handler tested separately
        return handle_cli_error(error)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
