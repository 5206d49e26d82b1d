"""Receipt printing for paid orders on a USB ESC/POS printer."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

from kiosk.config import (
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_LEFT_INDENT_PX,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
)
from kiosk.models import PaymentAttempt, PaymentStatus
from kiosk.rendering import format_price

_RIGHT_GUTTER_PX = 8
_LINE_EXTRA_PX = 12
_SEPARATOR_HEIGHT_PX = 14
_SEPARATOR_THICKNESS_PX = 3
_TAIL_SPACER_PX = 60
# Thermal printer fonts rarely carry Hangul, so receipts print a plain suffix.
_RECEIPT_CURRENCY_SUFFIX = " KRW"
_SEPARATOR_TOKEN = "__SEP__"
_FONT_OVERRIDE_ENV = "KIOSK_PRINTER_FONT_PATH"
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Regular.ttf",
)


def resolve_printer_font_path() -> str:
    """
    Resolve a printer font path.

    Resolution order:
    1. KIOSK_PRINTER_FONT_PATH (if set)
    2. PRINTER_FONT_PATH
    3. Known Linux fallbacks
    """
    env_override = os.environ.get(_FONT_OVERRIDE_ENV, "").strip()
    candidates: list[str] = []
    if env_override:
        candidates.append(env_override)
    candidates.append(PRINTER_FONT_PATH)
    candidates.extend(_LINUX_FONT_FALLBACKS)

    seen: set[str] = set()
    for candidate in candidates:
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        if Path(candidate).is_file():
            return candidate

    raise RuntimeError(
        f"No usable printer font found. Set {_FONT_OVERRIDE_ENV} to a valid .ttf/.otf file. "
        f"Tried: {', '.join(seen)}"
    )


def check_printer_dependencies() -> tuple[bool, str]:
    """Check whether printer dependencies are importable."""
    try:
        from escpos.printer import Usb  # noqa: F401
        from PIL import ImageFont

        font_path = resolve_printer_font_path()
        ImageFont.truetype(font_path, PRINTER_FONT_SIZE)
    except Exception as exc:
        return (False, f"Printer deps unavailable: {exc}")
    return (True, "Printer ready")


def _receipt_price(amount: int) -> str:
    return format_price(amount, suffix=_RECEIPT_CURRENCY_SUFFIX)


def receipt_rows(attempt: PaymentAttempt, printed_at: datetime | None = None) -> list[tuple[str, str]]:
    """Build (left, right) text rows for a paid attempt.

    A row equal to ``(_SEPARATOR_TOKEN, "")`` marks a ruled line.
    """
    if attempt.status is not PaymentStatus.SUCCEEDED:
        raise ValueError("Only succeeded payments get a receipt")

    stamp = (printed_at or datetime.now()).strftime("%Y-%m-%d %H:%M")
    rows: list[tuple[str, str]] = [("RECEIPT", f"#{attempt.attempt_id}"), (stamp, "")]
    rows.append((_SEPARATOR_TOKEN, ""))
    for line in attempt.lines:
        label = line.item.name if line.quantity == 1 else f"{line.item.name} x{line.quantity}"
        rows.append((label, _receipt_price(line.subtotal)))
    rows.append((_SEPARATOR_TOKEN, ""))
    rows.append(("TOTAL", _receipt_price(attempt.amount)))
    rows.append((attempt.method.value.upper(), attempt.reference or ""))
    return rows


def _render_row(left: str, right: str, font: object) -> object:
    from PIL import Image, ImageDraw

    canvas_height = PRINTER_FONT_SIZE + _LINE_EXTRA_PX
    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)

    left_bbox = draw.textbbox((0, 0), left, font=font)
    text_height = left_bbox[3] - left_bbox[1]
    # Offset by bbox top so descenders are not clipped.
    y = (canvas_height - text_height) // 2 - left_bbox[1]
    draw.text((PRINTER_LEFT_INDENT_PX, y), left, font=font, fill=0)

    if right:
        right_bbox = draw.textbbox((0, 0), right, font=font)
        right_x = PRINTER_WIDTH_PX - _RIGHT_GUTTER_PX - (right_bbox[2] - right_bbox[0]) - right_bbox[0]
        draw.text((right_x, y), right, font=font, fill=0)
    return img


def _render_separator() -> object:
    from PIL import Image, ImageDraw

    img = Image.new("1", (PRINTER_WIDTH_PX, _SEPARATOR_HEIGHT_PX), color=1)
    draw = ImageDraw.Draw(img)
    top = (_SEPARATOR_HEIGHT_PX - _SEPARATOR_THICKNESS_PX) // 2
    draw.rectangle((0, top, PRINTER_WIDTH_PX - 1, top + _SEPARATOR_THICKNESS_PX - 1), fill=0)
    return img


def _render_spacer(height_px: int) -> object:
    from PIL import Image

    return Image.new("1", (PRINTER_WIDTH_PX, max(1, height_px)), color=1)


def print_receipt(attempt: PaymentAttempt) -> None:
    """Print a receipt for a succeeded attempt and cut the paper."""
    rows = receipt_rows(attempt)

    try:
        from escpos.printer import Usb
        from PIL import ImageFont
    except Exception as exc:
        raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc

    printer = Usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)
    font = ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)

    for left, right in rows:
        if left == _SEPARATOR_TOKEN:
            printer.image(_render_separator())
            continue
        printer.image(_render_row(left, right, font))

    printer.image(_render_spacer(_TAIL_SPACER_PX))
    printer.cut()
