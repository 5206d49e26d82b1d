"""Runtime configuration defaults for payment simulation, logging and printing."""

from __future__ import annotations

import os


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return max(0.0, float(raw))
    except ValueError:
        return default


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


CURRENCY_SUFFIX = "원"

# The kiosk prototype resolved payments after a fixed two second wait.
PAYMENT_DELAY_SECONDS = _env_float("KIOSK_PAYMENT_DELAY_SECONDS", 2.0)
CARD_OUTCOME = os.environ.get("KIOSK_CARD_OUTCOME", "approve").strip().lower()
CASH_OUTCOME = os.environ.get("KIOSK_CASH_OUTCOME", "approve").strip().lower()

LOG_PATH = os.environ.get("KIOSK_LOG_PATH", "/tmp/kiosk-debug.log")
LOG_LEVEL = os.environ.get("KIOSK_LOG_LEVEL", "INFO").strip().upper()
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 2

PRINT_RECEIPTS = _env_flag("KIOSK_PRINT_RECEIPTS")
PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 28
PRINTER_FONT_PATH = "/System/Library/Fonts/SFNS.ttf"
PRINTER_LEFT_INDENT_PX = 16
