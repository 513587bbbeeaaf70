"""Order-handling descriptions for each user role."""

from __future__ import annotations

from typing import Dict, FrozenSet, List, Tuple

from .constants import Role


_ORDER_HANDLING: Dict[Role, str] = {
    Role.SUPPLIER: "Supplier manages shipping products into the inventory.",
    Role.CUSTOMER: "Customer places an order from the shopping cart.",
    Role.SELLER: "Seller reviews and validates orders for dispatch.",
}

# Suppliers only browse the inventory.
_SHOPPING_ROLES: FrozenSet[Role] = frozenset({Role.CUSTOMER, Role.SELLER})


def describe_order_handling(role: Role) -> str:
    """Return how ``role`` takes part in order handling."""

    return _ORDER_HANDLING[role]


def describe_all_roles() -> List[Tuple[Role, str]]:
    """Return every role paired with its description, in declaration order."""

    return [(role, describe_order_handling(role)) for role in Role]


def can_shop(role: Role) -> bool:
    return role in _SHOPPING_ROLES
