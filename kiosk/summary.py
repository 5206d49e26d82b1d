"""Order summary projection and the hand-off snapshot for payment."""

from __future__ import annotations

from dataclasses import dataclass

from kiosk.cart import Cart
from kiosk.models import CartLine


@dataclass(frozen=True)
class OrderSummary:
    line_count: int
    total_quantity: int
    total: int


@dataclass(frozen=True)
class PaymentSnapshot:
    """Cart contents frozen at the moment payment starts."""

    amount: int
    lines: tuple[CartLine, ...]


def summarize(cart: Cart) -> OrderSummary:
    return OrderSummary(
        line_count=cart.line_count(),
        total_quantity=cart.total_quantity(),
        total=cart.total(),
    )


def proceed_to_payment(cart: Cart) -> PaymentSnapshot:
    """Snapshot the cart for a payment attempt.

    Later cart mutations do not affect the returned snapshot.
    """
    lines = cart.lines()
    return PaymentSnapshot(amount=sum(line.subtotal for line in lines), lines=lines)
