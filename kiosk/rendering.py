"""Rendering helpers shared by the kiosk screens."""

from __future__ import annotations

from rich.text import Text

from kiosk.catalog import category_label
from kiosk.config import CURRENCY_SUFFIX
from kiosk.models import AccessibilitySettings, CartLine, FailureKind, MenuItem, PaymentAttempt, PaymentStatus
from kiosk.summary import OrderSummary

_CATEGORY_STYLES: dict[str, str] = {
    "espresso": "bold #ffffff on #6f4e37",
    "brewed": "bold #ffffff on #2f6db5",
    "tea": "bold #0b1f0f on #5fbf72",
    "bakery": "bold #1f1300 on #e0b050",
    "seasonal": "bold #ffffff on #b23a48",
}
_HIGH_CONTRAST_BADGE = "bold black on yellow"


def format_price(amount: int, suffix: str = CURRENCY_SUFFIX) -> str:
    """Format an amount in won, e.g. ``2,500원``."""
    return f"{amount:,}{suffix}"


def category_style(category: str, settings: AccessibilitySettings) -> str:
    """Return a consistent badge style for category tabs."""
    if settings.high_contrast:
        return _HIGH_CONTRAST_BADGE
    return _CATEGORY_STYLES.get(category, "bold #ffffff on #555555")


def text_style(settings: AccessibilitySettings, emphasized: bool = False) -> str:
    parts = []
    if settings.large_text or emphasized:
        parts.append("bold")
    parts.append("white on black" if settings.high_contrast else "white")
    return " ".join(parts)


def format_category_tabs(categories: list[str], selected: int, settings: AccessibilitySettings) -> Text:
    text = Text()
    for idx, category in enumerate(categories):
        if idx > 0:
            text.append(" ")
        label = f" {idx + 1} {category_label(category)} "
        if idx == selected:
            text.append(label, style=category_style(category, settings))
        else:
            text.append(label, style="dim" if not settings.high_contrast else "white")
    return text


def format_menu_row(item: MenuItem, quantity: int, settings: AccessibilitySettings) -> Text:
    """Render a menu row with its price and the quantity already in the cart."""
    text = Text(style=text_style(settings))
    text.append(f"{item.icon} {item.name}" if item.icon else item.name)
    text.append(f"  {format_price(item.price)}")
    if quantity > 0:
        text.append(f"  x{quantity}", style="bold yellow" if settings.high_contrast else "bold green")
    if settings.large_text and item.description:
        text.append(f"\n      {item.description}", style="italic")
    return text


def format_cart_line(line: CartLine, settings: AccessibilitySettings) -> Text:
    text = Text(style=text_style(settings))
    text.append(line.item.name)
    text.append(f"  {format_price(line.item.price)} x {line.quantity}")
    text.append(f"  = {format_price(line.subtotal)}", style=text_style(settings, emphasized=True))
    return text


def format_summary(summary: OrderSummary, settings: AccessibilitySettings) -> Text:
    """Render the order summary bar: item count and total."""
    text = Text(style=text_style(settings, emphasized=True))
    if summary.line_count == 0:
        text.append("Cart is empty")
        return text
    text.append(f"{summary.total_quantity} item(s) in {summary.line_count} line(s)")
    text.append("   Total ")
    text.append(format_price(summary.total), style="bold yellow" if settings.high_contrast else "bold")
    return text


def format_payment_status(status: PaymentStatus, attempt: PaymentAttempt | None) -> Text:
    """Render the payment screen headline for an engine state."""
    text = Text()
    if status is PaymentStatus.IDLE or attempt is None:
        text.append("Choose a payment method", style="bold")
        return text
    amount = format_price(attempt.amount)
    if status is PaymentStatus.PROCESSING:
        text.append(f"Processing {attempt.method.value} payment of {amount}...", style="bold")
    elif status is PaymentStatus.SUCCEEDED:
        text.append(f"Payment complete! {amount}", style="bold green")
        if attempt.reference:
            text.append(f"\nReference {attempt.reference}", style="dim")
    else:
        headline = "Payment service unavailable" if attempt.failure is FailureKind.GATEWAY_ERROR else "Payment failed"
        text.append(headline, style="bold red")
        if attempt.reason:
            text.append(f"\n{attempt.reason}")
        text.append("\nYour cart was kept. Please try again.", style="dim")
    return text
