"""Entry point for the kiosk Textual app."""

from __future__ import annotations

from kiosk.kiosk_app import KioskApp
from kiosk.logging_config import configure_logging


def main() -> None:
    configure_logging()
    KioskApp().run()


if __name__ == "__main__":
    main()
