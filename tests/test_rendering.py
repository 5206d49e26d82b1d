from kiosk.models import AccessibilitySettings, FailureKind, PaymentAttempt, PaymentMethod, PaymentStatus
from kiosk.rendering import (
    category_style,
    format_cart_line,
    format_menu_row,
    format_payment_status,
    format_price,
    format_summary,
)
from kiosk.summary import summarize

PLAIN = AccessibilitySettings()
CONTRAST = AccessibilitySettings(high_contrast=True)


def test_format_price():
    assert format_price(2500) == "2,500원"
    assert format_price(0) == "0원"
    assert format_price(12000, suffix=" KRW") == "12,000 KRW"


def test_high_contrast_badge():
    assert category_style("tea", CONTRAST) == "bold black on yellow"
    assert category_style("tea", PLAIN) != category_style("tea", CONTRAST)


def test_menu_row_shows_cart_quantity(americano):
    assert "x2" in format_menu_row(americano, 2, PLAIN).plain
    assert "  x" not in format_menu_row(americano, 0, PLAIN).plain


def test_large_text_shows_description(americano):
    assert americano.description in format_menu_row(americano, 0, AccessibilitySettings(large_text=True)).plain
    assert americano.description not in format_menu_row(americano, 0, PLAIN).plain


def test_cart_line_subtotal(cart, americano):
    cart.add(americano)
    cart.add(americano)
    assert format_cart_line(cart.lines()[0], PLAIN).plain.endswith("= 5,000원")


def test_summary_text(cart, americano):
    assert format_summary(summarize(cart), PLAIN).plain == "Cart is empty"
    cart.add(americano)
    assert "2,500원" in format_summary(summarize(cart), PLAIN).plain


def test_payment_status_text():
    attempt = PaymentAttempt(attempt_id=1, method=PaymentMethod.CARD, amount=2500)
    assert "Processing card" in format_payment_status(PaymentStatus.PROCESSING, attempt).plain

    attempt.status = PaymentStatus.FAILED
    attempt.failure = FailureKind.GATEWAY_ERROR
    text = format_payment_status(PaymentStatus.FAILED, attempt).plain
    assert "unavailable" in text
    assert "cart was kept" in text

    assert format_payment_status(PaymentStatus.IDLE, None).plain == "Choose a payment method"
