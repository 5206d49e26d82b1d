"""Keyword matching from an utterance to a menu item."""

from __future__ import annotations

import logging
import re

from kiosk.cart import Cart
from kiosk.catalog import Catalog
from kiosk.models import MenuItem

logger = logging.getLogger(__name__)


def _normalize(text: str) -> str:
    return " ".join(token for token in re.split(r"[^\w]+", text.lower()) if token)


def _keywords(item: MenuItem) -> list[str]:
    keywords = [_normalize(item.name), _normalize(item.item_id.replace("_", " "))]
    keywords.extend(_normalize(alias) for alias in item.aliases)
    return [keyword for keyword in keywords if keyword]


def match_utterance(text: str, catalog: Catalog) -> str | None:
    """Return the id of the item named in ``text``, or None.

    Matching is case-insensitive on names and aliases. When several
    keywords match, the longest one wins so "caffe latte" beats "latte".
    """
    utterance = f" {_normalize(text)} "
    if not utterance.strip():
        return None

    best_id: str | None = None
    best_length = 0
    for item in catalog.all_items():
        for keyword in _keywords(item):
            if f" {keyword} " in utterance and len(keyword) > best_length:
                best_id = item.item_id
                best_length = len(keyword)
    return best_id


class VoiceOrder:
    """Applies recognized utterances to a cart, at most one add per utterance."""

    def __init__(self, catalog: Catalog, cart: Cart) -> None:
        self.catalog = catalog
        self.cart = cart

    def apply(self, text: str) -> MenuItem | None:
        item_id = match_utterance(text, self.catalog)
        item = self.catalog.get(item_id) if item_id is not None else None
        if item is None:
            logger.info("voice_no_match utterance=%r", text)
            return None
        self.cart.add(item)
        logger.info("voice_added item=%s", item.item_id)
        return item
