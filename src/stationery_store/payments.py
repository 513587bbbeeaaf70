"""Payment gateways.

Gateways share one behavior and differ only in the label printed on the
confirmation, so a single :class:`PaymentGateway` is parameterized by a
:class:`~stationery_store.constants.PaymentMethod` and looks the label up in
``_CONFIRMATION_LABELS``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Protocol

from . import log
from .constants import CURRENCY_LABEL, PaymentMethod


class PaymentProcessor(Protocol):
    """Anything able to charge a monetary amount."""

    def process_payment(self, amount: Decimal) -> "PaymentReceipt":
        ...


@dataclass(frozen=True)
class PaymentReceipt:
    """Confirmation returned by a gateway after charging an amount."""

    method: PaymentMethod
    amount: Decimal
    message: str


_CONFIRMATION_LABELS: Dict[PaymentMethod, str] = {
    PaymentMethod.YAPE: "Yape",
    PaymentMethod.PLIN: "Plin",
}


@dataclass(frozen=True)
class PaymentGateway:
    """Simulated gateway; every charge succeeds."""

    method: PaymentMethod
    currency_label: str = CURRENCY_LABEL

    @property
    def label(self) -> str:
        return _CONFIRMATION_LABELS[self.method]

    def process_payment(self, amount: Decimal) -> PaymentReceipt:
        """Charge ``amount`` and return the confirmation.

        Any amount is accepted, including a negative one coming from a cart
        of negatively priced products; it is logged and charged as is.
        """

        if amount < 0:
            log.warning("Charging negative amount %s via %s", amount, self.label)
        message = f"Payment of {self.currency_label} {amount} made with {self.label}."
        log.info("Processed payment of %s via %s", amount, self.label)
        return PaymentReceipt(method=self.method, amount=amount, message=message)


def gateway_for(method: PaymentMethod, *, currency_label: str = CURRENCY_LABEL) -> PaymentGateway:
    """Return the gateway registered for ``method``.

    Raises:
        KeyError: If ``method`` has no confirmation label registered.
    """

    if method not in _CONFIRMATION_LABELS:
        raise KeyError(f"Unsupported payment method: {method}")
    return PaymentGateway(method, currency_label=currency_label)
