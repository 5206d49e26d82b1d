"""Main Textual app class."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.widgets import Header, Static

from kiosk.cart import Cart
from kiosk.catalog import Catalog, default_catalog
from kiosk.config import PRINT_RECEIPTS
from kiosk.constant import BRAND_TAGLINE, PROMO_BANNER
from kiosk.help_modal import HelpModal
from kiosk.models import AccessibilitySettings, MenuItem, PaymentAttempt, PaymentStatus
from kiosk.payment import PaymentEngine, PaymentGateway, simulated_gateway_from_config
from kiosk.payment_modal import PaymentModal
from kiosk.printer import check_printer_dependencies, print_receipt
from kiosk.rendering import (
    format_cart_line,
    format_category_tabs,
    format_menu_row,
    format_price,
    format_summary,
)
from kiosk.settings import SettingsStore
from kiosk.settings_modal import SettingsModal
from kiosk.summary import summarize
from kiosk.voice import VoiceOrder
from kiosk.voice_modal import VoiceOrderModal

logger = logging.getLogger(__name__)


class KioskApp(App):
    """A Textual self-service ordering kiosk."""

    TITLE = BRAND_TAGLINE
    SUB_TITLE = "Coffee & Bakery"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    KioskApp.accessibility-mode #main-layout {
        padding-top: 4;
    }

    KioskApp.high-contrast Screen {
        background: black;
    }

    #menu-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #cart-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    KioskApp.high-contrast #menu-pane, KioskApp.high-contrast #cart-pane {
        border: heavy yellow;
    }

    #category-tabs {
        margin-bottom: 1;
    }

    #menu-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #promo-banner {
        margin-top: 1;
        padding: 0 1;
        background: #d9822b;
        color: white;
        text-style: bold;
    }

    KioskApp.high-contrast #promo-banner {
        background: yellow;
        color: black;
    }

    #featured {
        margin-top: 1;
        color: $text-muted;
    }

    #cart-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #summary-bar {
        border: heavy $secondary;
        padding: 0 1;
        height: 3;
    }

    #status-line {
        color: $text-muted;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    category_index = reactive(0)
    menu_index = reactive(0)
    cart_index = reactive(None)

    BINDINGS = [
        ("left", "cycle_category(-1)", "Previous category"),
        ("right", "cycle_category(1)", "Next category"),
        ("up", "cycle_menu(-1)", "Previous item"),
        ("down", "cycle_menu(1)", "Next item"),
        ("enter", "add_selected", "Add"),
        ("plus", "add_selected", "Add"),
        ("minus", "decrement_selected", "Less"),
        ("j", "move_cart_selection(1)", "Next cart line"),
        ("k", "move_cart_selection(-1)", "Previous cart line"),
        ("d", "remove_cart_line", "Remove line"),
        ("p", "open_payment", "Pay"),
        ("s", "open_settings", "Accessibility"),
        ("v", "open_voice", "Voice order"),
        ("question_mark", "open_help", "Help"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        catalog: Catalog | None = None,
        gateway: PaymentGateway | None = None,
        settings_store: SettingsStore | None = None,
        print_receipts: bool = PRINT_RECEIPTS,
    ) -> None:
        super().__init__()
        self.catalog = catalog or default_catalog()
        self.cart = Cart()
        self.engine = PaymentEngine(self.cart, gateway or simulated_gateway_from_config())
        self.settings_store = settings_store or SettingsStore()
        self.voice = VoiceOrder(self.catalog, self.cart)
        self.print_receipts = print_receipts
        self.system_status = ""
        self.settings_store.subscribe(self._on_settings_changed)
        logger.info("app_init items=%d print_receipts=%s", len(self.catalog.all_items()), print_receipts)

    @property
    def settings(self) -> AccessibilitySettings:
        return self.settings_store.current

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="menu-pane"):
                yield Static(id="category-tabs")
                yield Static(id="menu-list")
                yield Static(PROMO_BANNER, id="promo-banner")
                yield Static(id="featured")
            with Vertical(id="cart-pane"):
                yield Static("Cart", classes="pane-title", id="cart-title")
                yield Static("(cart is empty)", id="cart-list")
                yield Static(id="summary-bar")
                yield Static(id="status-line")

    def on_mount(self) -> None:
        if self.print_receipts:
            _, msg = check_printer_dependencies()
            self.system_status = msg
            logger.info("on_mount printer_status=%r", msg)
        self._apply_settings_classes(self.settings)
        self._refresh_all()

    def action_cycle_category(self, delta: int) -> None:
        if self._modal_open():
            return
        categories = self.catalog.list_categories()
        if not categories:
            return
        self.category_index = (self.category_index + delta) % len(categories)
        self.menu_index = 0
        self._refresh_menu()

    def action_select_category(self, index: int) -> None:
        if self._modal_open():
            return
        if 0 <= index < len(self.catalog.list_categories()):
            self.category_index = index
            self.menu_index = 0
            self._refresh_menu()

    def action_cycle_menu(self, delta: int) -> None:
        if self._modal_open():
            return
        items = self._visible_items()
        if not items:
            return
        self.menu_index = (self.menu_index + delta) % len(items)
        self._refresh_menu()

    def action_add_selected(self) -> None:
        if self._modal_open():
            return
        item = self._selected_item()
        if item is None:
            return
        self.add_item(item.item_id)

    def action_decrement_selected(self) -> None:
        if self._modal_open():
            return
        item = self._selected_item()
        if item is None:
            return
        self.cart.decrement(item.item_id)
        self._refresh_orders()

    def action_move_cart_selection(self, delta: int) -> None:
        if self._modal_open():
            return
        lines = self.cart.lines()
        if not lines:
            return
        if self.cart_index is None:
            self.cart_index = 0 if delta > 0 else len(lines) - 1
        else:
            self.cart_index = (self.cart_index + delta) % len(lines)
        self._refresh_cart()

    def action_remove_cart_line(self) -> None:
        if self._modal_open():
            return
        lines = self.cart.lines()
        if not lines or self.cart_index is None or not (0 <= self.cart_index < len(lines)):
            return
        self.cart.remove(lines[self.cart_index].item_id)
        self._refresh_orders()

    def action_open_payment(self) -> None:
        if self._modal_open():
            return
        if self.cart.is_empty():
            self._set_status("Cart is empty")
            return
        if self.engine.state is not PaymentStatus.IDLE:
            self._set_status("A payment is already in progress")
            return
        self.push_screen(PaymentModal(self.engine, self.settings), self._on_payment_closed)

    def action_open_settings(self) -> None:
        if self._modal_open():
            return
        self.push_screen(SettingsModal(self.settings_store))

    def action_open_voice(self) -> None:
        if self._modal_open():
            return
        self.push_screen(VoiceOrderModal(), self._on_voice_utterance)

    def action_open_help(self) -> None:
        if self._modal_open():
            return
        self.push_screen(HelpModal())

    def add_item(self, item_id: str) -> None:
        """Add one of ``item_id`` to the cart; unknown ids are ignored."""
        item = self.catalog.get(item_id)
        if item is None:
            return
        self.cart.add(item)
        self._refresh_orders()

    def on_key(self, event) -> None:
        if self._modal_open():
            return
        if event.character and event.character.isdigit():
            self.action_select_category(int(event.character) - 1)
            event.stop()

    def _on_payment_closed(self, attempt: PaymentAttempt | None) -> None:
        if attempt is None:
            self._set_status("Payment cancelled, cart kept")
        elif attempt.status is PaymentStatus.SUCCEEDED:
            self._set_status(f"Paid {format_price(attempt.amount)}. Thank you!")
            self._print_receipt(attempt)
        else:
            self._set_status(f"Payment failed: {attempt.reason}")
        self._refresh_orders()

    def _print_receipt(self, attempt: PaymentAttempt) -> None:
        if not self.print_receipts:
            return
        try:
            print_receipt(attempt)
        except Exception as exc:
            logger.warning("receipt_print_failed attempt=%d error=%r", attempt.attempt_id, exc)
            self._set_status(f"Paid but receipt print failed: {exc}")
            return
        logger.info("receipt_printed attempt=%d", attempt.attempt_id)

    def _on_voice_utterance(self, utterance: str | None) -> None:
        if not utterance:
            return
        item = self.voice.apply(utterance)
        if item is None:
            self._set_status(f"Did not catch a menu item in {utterance!r}")
        else:
            self._set_status(f"Added {item.name}")
        self._refresh_orders()

    def _on_settings_changed(self, settings: AccessibilitySettings) -> None:
        self._apply_settings_classes(settings)
        self._refresh_all()

    def _apply_settings_classes(self, settings: AccessibilitySettings) -> None:
        self.set_class(settings.high_contrast, "high-contrast")
        self.set_class(settings.accessibility_mode, "accessibility-mode")

    def _query(self, selector: str) -> Static:
        # Main widgets live on the base screen, below any open modal.
        if not self.screen_stack:
            raise NoMatches(f"No nodes match {selector!r}")
        return self.screen_stack[0].query_one(selector, Static)

    def _modal_open(self) -> bool:
        return len(self.screen_stack) > 1

    def _visible_items(self) -> list[MenuItem]:
        categories = self.catalog.list_categories()
        if not categories:
            return []
        return self.catalog.items_in(categories[self.category_index])

    def _selected_item(self) -> MenuItem | None:
        items = self._visible_items()
        if not items:
            return None
        if self.menu_index >= len(items):
            self.menu_index = 0
        return items[self.menu_index]

    def _set_status(self, message: str) -> None:
        self.system_status = message
        self._refresh_summary()

    def _refresh_all(self) -> None:
        self._refresh_menu()
        self._refresh_orders()

    def _refresh_orders(self) -> None:
        self._refresh_menu()
        self._refresh_cart()
        self._refresh_summary()

    def _refresh_menu(self) -> None:
        try:
            tabs = self._query("#category-tabs")
        except NoMatches:
            return
        settings = self.settings
        tabs.update(format_category_tabs(self.catalog.list_categories(), self.category_index, settings))

        items = self._visible_items()
        lines = Text()
        for idx, item in enumerate(items):
            if idx > 0:
                lines.append("\n\n" if settings.large_text else "\n")
            pointer = "➤ " if idx == self.menu_index else "  "
            lines.append(pointer)
            lines.append_text(format_menu_row(item, self.cart.quantity_of(item.item_id), settings))
        self._query("#menu-list").update(lines if items else "No items")

        featured = ", ".join(f"{item.name} {format_price(item.price)}" for item in self.catalog.featured())
        self._query("#featured").update(f"Quick picks: {featured}" if featured else "")

    def _refresh_cart(self) -> None:
        try:
            cart_widget = self._query("#cart-list")
        except NoMatches:
            return
        badge = self.cart.total_quantity()
        self._query("#cart-title").update(f"Cart ({badge})" if badge else "Cart")

        lines = self.cart.lines()
        if not lines:
            self.cart_index = None
            cart_widget.update("(cart is empty)")
            return
        if self.cart_index is not None and self.cart_index >= len(lines):
            self.cart_index = len(lines) - 1

        text = Text()
        for idx, line in enumerate(lines):
            if idx > 0:
                text.append("\n")
            pointer = "➤ " if idx == self.cart_index else "  "
            text.append(pointer)
            text.append_text(format_cart_line(line, self.settings))
        cart_widget.update(text)

    def _refresh_summary(self) -> None:
        try:
            bar = self._query("#summary-bar")
        except NoMatches:
            return
        bar.update(format_summary(summarize(self.cart), self.settings))
        status = self.system_status or "Enter add, - less, P pay, S settings, V voice, ? help"
        self._query("#status-line").update(status)

