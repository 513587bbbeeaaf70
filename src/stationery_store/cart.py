"""Shopping cart bookkeeping.

Lines are keyed by product code rather than by object identity, so two equal
products resolve to the same line. The cart only ever grows: there is no
remove operation and checkout does not clear it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

from . import log
from .catalog import Product
from .payments import PaymentProcessor, PaymentReceipt
from .pricing import apply_discount


@dataclass
class CartLine:
    """One product in the cart and how many units were requested."""

    product: Product
    quantity: int


@dataclass(frozen=True)
class LineSummary:
    """Priced view of a cart line."""

    code: str
    name: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


@dataclass(frozen=True)
class CartSummary:
    """Priced view of the whole cart, as shown before payment."""

    lines: List[LineSummary]
    total: Decimal


class CheckoutStatus(str, Enum):
    """Outcome of a checkout attempt."""

    EMPTY = "EMPTY"
    PAID = "PAID"


@dataclass(frozen=True)
class CheckoutResult:
    """Result of :meth:`Cart.checkout`; ``summary`` and ``receipt`` are set only when paid."""

    status: CheckoutStatus
    summary: Optional[CartSummary] = None
    receipt: Optional[PaymentReceipt] = None


@dataclass
class Cart:
    """Mapping from product code to the requested quantity."""

    _lines: Dict[str, CartLine] = field(default_factory=dict, repr=False)

    def add_item(self, product: Product, quantity: int) -> CartLine:
        """Add ``quantity`` units of ``product`` to the cart.

        Quantities are validated by the caller. When the product already has a
        line its quantity grows by ``quantity``; otherwise a new line is
        created.

        Returns:
            CartLine: The line holding ``product`` after the update.
        """

        line = self._lines.get(product.code)
        if line is None:
            line = CartLine(product=product, quantity=quantity)
            self._lines[product.code] = line
        else:
            line.quantity += quantity
        log.info("Cart line '%s' now holds %d unit(s)", product.code, line.quantity)
        return line

    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def compute_total(self) -> Decimal:
        """Sum the discounted subtotal of every line; an empty cart totals zero."""

        total = Decimal("0")
        for line in self._lines.values():
            total += apply_discount(line.product) * line.quantity
        log.debug("Computed cart total %s over %d line(s)", total, len(self._lines))
        return total

    def summarize(self) -> CartSummary:
        """Price every line and return the summary shown to the shopper."""

        summaries = []
        for line in self._lines.values():
            unit_price = apply_discount(line.product)
            summaries.append(
                LineSummary(
                    code=line.product.code,
                    name=line.product.name,
                    quantity=line.quantity,
                    unit_price=unit_price,
                    subtotal=unit_price * line.quantity,
                )
            )
        return CartSummary(lines=summaries, total=sum((s.subtotal for s in summaries), Decimal("0")))

    def checkout(self, payment: PaymentProcessor) -> CheckoutResult:
        """Charge the cart total through ``payment``.

        An empty cart is reported as :attr:`CheckoutStatus.EMPTY` and nothing
        is charged. Otherwise the cart is summarized and ``payment`` is called
        exactly once with the total. The cart keeps its lines afterwards, so a
        second checkout charges the same total again.

        Args:
            payment (PaymentProcessor): Gateway that performs the charge.

        Returns:
            CheckoutResult: Status plus, when paid, the summary and the
                receipt returned by ``payment``.
        """

        if self.is_empty:
            log.warning("Checkout requested on an empty cart; nothing charged")
            return CheckoutResult(status=CheckoutStatus.EMPTY)

        summary = self.summarize()
        receipt = payment.process_payment(summary.total)
        log.info("Checked out %d line(s) for %s", len(summary.lines), summary.total)
        return CheckoutResult(status=CheckoutStatus.PAID, summary=summary, receipt=receipt)
