"""Order cart keyed by menu item id."""

from __future__ import annotations

import logging

from kiosk.models import CartLine, MenuItem

logger = logging.getLogger(__name__)


class Cart:
    """Mutable collection of cart lines, at most one per item id.

    Totals and counts are always derived from the lines. Unknown item ids
    are ignored by every mutating operation so the UI can call them
    without checking first.
    """

    def __init__(self) -> None:
        self._lines: dict[str, CartLine] = {}

    def add(self, item: MenuItem) -> None:
        line = self._lines.get(item.item_id)
        if line is None:
            self._lines[item.item_id] = CartLine(item=item, quantity=1)
        else:
            self._lines[item.item_id] = CartLine(item=line.item, quantity=line.quantity + 1)
        logger.debug("cart_add item=%s quantity=%d", item.item_id, self._lines[item.item_id].quantity)

    def decrement(self, item_id: str) -> None:
        line = self._lines.get(item_id)
        if line is None:
            return
        if line.quantity > 1:
            self._lines[item_id] = CartLine(item=line.item, quantity=line.quantity - 1)
        else:
            del self._lines[item_id]
        logger.debug("cart_decrement item=%s quantity=%d", item_id, self.quantity_of(item_id))

    def remove(self, item_id: str) -> None:
        if self._lines.pop(item_id, None) is not None:
            logger.debug("cart_remove item=%s", item_id)

    def clear(self) -> None:
        self._lines.clear()
        logger.debug("cart_clear")

    def total(self) -> int:
        return sum(line.subtotal for line in self._lines.values())

    def line_count(self) -> int:
        return len(self._lines)

    def total_quantity(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def quantity_of(self, item_id: str) -> int:
        line = self._lines.get(item_id)
        return line.quantity if line is not None else 0

    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines.values())

    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._lines
