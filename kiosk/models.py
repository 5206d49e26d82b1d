"""Domain models for the ordering kiosk."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


@dataclass(frozen=True)
class MenuItem:
    """A catalog entry keyed by a stable item id."""

    item_id: str
    category: str
    name: str
    price: int
    description: str = ""
    icon: str = ""
    aliases: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError(f"price must be non-negative for {self.item_id!r}")


@dataclass(frozen=True)
class CartLine:
    """One (item, quantity) pairing within a cart."""

    item: MenuItem
    quantity: int = 1

    @property
    def item_id(self) -> str:
        return self.item.item_id

    @property
    def subtotal(self) -> int:
        return self.item.price * self.quantity


class PaymentMethod(str, Enum):
    CARD = "card"
    CASH = "cash"


class PaymentStatus(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class FailureKind(str, Enum):
    DECLINED = "declined"
    GATEWAY_ERROR = "gateway_error"


@dataclass(frozen=True)
class PaymentOutcome:
    """Result reported by a payment gateway for one authorization."""

    approved: bool
    reference: str | None = None
    reason: str = ""


@dataclass
class PaymentAttempt:
    """One run of the payment state machine, from initiate to acknowledge."""

    attempt_id: int
    method: PaymentMethod
    amount: int
    lines: tuple[CartLine, ...] = ()
    status: PaymentStatus = PaymentStatus.PROCESSING
    failure: FailureKind | None = None
    reference: str | None = None
    reason: str = ""

    @property
    def is_resolved(self) -> bool:
        return self.status in {PaymentStatus.SUCCEEDED, PaymentStatus.FAILED}


ACCESSIBILITY_FLAGS: tuple[str, ...] = ("large_text", "high_contrast", "accessibility_mode")


@dataclass(frozen=True)
class AccessibilitySettings:
    """Display flags shared by every rendering surface."""

    large_text: bool = False
    high_contrast: bool = False
    accessibility_mode: bool = False

    def with_changes(self, **flags: bool) -> AccessibilitySettings:
        unknown = set(flags) - set(ACCESSIBILITY_FLAGS)
        if unknown:
            raise ValueError(f"Unknown accessibility flags: {', '.join(sorted(unknown))}")
        return replace(self, **flags)

