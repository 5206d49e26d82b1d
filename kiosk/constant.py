"""Editable static menu configuration."""

from __future__ import annotations

CATEGORY_ORDER: list[str] = ["espresso", "brewed", "tea", "bakery", "seasonal"]

CATEGORY_LABELS: dict[str, str] = {
    "espresso": "Espresso",
    "brewed": "Brewed",
    "tea": "Tea",
    "bakery": "Bakery",
    "seasonal": "Seasonal",
}

MENU_ITEMS: dict[str, dict[str, object]] = {
    "americano": {
        "category": "espresso",
        "name": "Americano",
        "price": 2500,
        "description": "Espresso shot + hot water",
        "icon": "☕",
        "aliases": ["아메리카노", "coffee"],
    },
    "caffe_latte": {
        "category": "espresso",
        "name": "Caffe Latte",
        "price": 3500,
        "description": "Espresso balanced with milk",
        "icon": "🥛",
        "aliases": ["카페 라떼", "latte"],
    },
    "cold_brew": {
        "category": "brewed",
        "name": "Cold Brew",
        "price": 3800,
        "description": "12-hour extraction",
        "icon": "💧",
        "aliases": ["콜드 브루", "coldbrew"],
    },
    "decaf": {
        "category": "brewed",
        "name": "Decaf",
        "price": 4000,
        "description": "Caffeine free",
        "icon": "🌱",
        "aliases": ["디카페인", "decaffeinated"],
    },
    "green_tea_latte": {
        "category": "tea",
        "name": "Green Tea Latte",
        "price": 3800,
        "description": "Fresh matcha powder",
        "icon": "🍵",
        "aliases": ["녹차 라떼", "matcha"],
    },
    "hibiscus_tea": {
        "category": "tea",
        "name": "Hibiscus Tea",
        "price": 3200,
        "description": "Tangy herbal tea",
        "icon": "🌺",
        "aliases": ["히비스커스 티", "hibiscus"],
    },
    "croissant": {
        "category": "bakery",
        "name": "Croissant",
        "price": 3200,
        "description": "Rich buttery flavor",
        "icon": "🥐",
        "aliases": ["크루아상"],
    },
    "madeleine": {
        "category": "bakery",
        "name": "Madeleine",
        "price": 2800,
        "description": "Three handmade madeleines",
        "icon": "🧁",
        "aliases": ["마들렌"],
    },
    "pumpkin_latte": {
        "category": "seasonal",
        "name": "Pumpkin Latte",
        "price": 4200,
        "description": "Autumn limited edition",
        "icon": "🎃",
        "aliases": ["호박 라떼", "pumpkin"],
    },
    "iced_chocolate": {
        "category": "seasonal",
        "name": "Iced Chocolate",
        "price": 3800,
        "description": "Deep chocolate flavor",
        "icon": "❄",
        "aliases": ["아이스 초코", "chocolate"],
    },
}

# Quick menu shown on the home pane.
FEATURED_ITEM_IDS: list[str] = ["americano", "green_tea_latte", "croissant"]

HELP_FAQ: list[tuple[str, str]] = [
    ("How do I order?", "Pick a menu item, adjust the quantity and it lands in your cart."),
    ("How do I pay?", "Press P, then choose card or cash."),
    ("Can I change my order?", "Use - to reduce a quantity or D to drop a line from the cart."),
    ("Need larger text?", "Press S to open accessibility settings."),
]

BRAND_TAGLINE = "The Scent of Beans, A Special Moment"

# Seasonal promo line shown above the quick menu.
PROMO_BANNER = "🎃 Autumn limited menu! Pumpkin Latte 10% off"
