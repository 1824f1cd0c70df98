from __future__ import annotations

import re
from typing import Iterable, List, Optional
from urllib.parse import urlparse

from bs4 import Tag
from loguru import logger

from src.models.product import Product

PRICE_SELECTOR = (
    "[class*='price'], [data-testid*='price'], .f-price, .our_price, .prod-price"
)
TILE_SELECTOR = (
    "[class*='product-card'], [class*='productCard'], [class*='product-tile'], "
    "[class*='prod-card'], [data-testid*='product']"
)
TITLE_SELECTOR = "[class*='title'], [class*='name'], h2, h3, h4"
LISTING_CLASS_HINTS = ("prod", "product", "list", "item")
PRODUCT_PATH_MARKERS = ("/product", "product-detail", "/p/")
OUT_OF_STOCK_PHRASE = "out of stock"
MIN_NAME_LENGTH = 4

_LEADING_PRICE = re.compile(r"\d+(?:\.\d+)?")


def parse_price(text: Optional[str]) -> Optional[float]:
    """'₹1,299.00' -> 1299.0; None for empty, unparsable or non-positive.

    Only the leading number counts, so "₹499 ₹599" (sale + list price) is 499.
    """
    if not text:
        return None
    match = _LEADING_PRICE.search(text.replace(",", ""))
    if match is None:
        return None
    price = float(match.group())
    if price <= 0:
        return None
    return price


def is_valid_name(name: Optional[str]) -> bool:
    return bool(name) and len(name.strip()) >= MIN_NAME_LENGTH


def normalize_url(href: Optional[str], base_url: str, page_url: str) -> str:
    """Absolute URLs pass through; relative ones are joined to the site origin."""
    href = (href or "").strip()
    if not href:
        return page_url
    if urlparse(href).scheme:
        return href
    if not href.startswith("/"):
        href = "/" + href
    return base_url.rstrip("/") + href


def dedupe_by_name(products: Iterable[Product]) -> List[Product]:
    seen = set()
    unique = []
    for product in products:
        if product.name in seen:
            continue
        seen.add(product.name)
        unique.append(product)
    return unique


def finalize_candidates(products: Iterable[Product]) -> List[Product]:
    """Drop candidates without a usable name or price, then dedupe by name."""
    valid = []
    for product in products:
        product.name = (product.name or "").strip()
        if not is_valid_name(product.name):
            logger.debug(f"Dropping candidate with short name: {product.name!r}")
            continue
        if product.price is None or product.price <= 0:
            logger.debug(f"Dropping candidate without price: {product.name}")
            continue
        valid.append(product)
    return dedupe_by_name(valid)


def is_in_stock(page_text: str) -> bool:
    """Best-effort: a page is in stock unless it says "out of stock" anywhere."""
    return OUT_OF_STOCK_PHRASE not in page_text.lower()


def has_listing_class(element: Tag) -> bool:
    classes = " ".join(element.get("class") or []).lower()
    return any(hint in classes for hint in LISTING_CLASS_HINTS)


def _tile_name(tile: Tag) -> str:
    title_el = tile.select_one(TITLE_SELECTOR)
    if title_el is not None:
        name = title_el.get_text(" ", strip=True)
        if name:
            return name
    link = tile.find("a", title=True)
    if link is not None:
        return link["title"].strip()
    return ""


def _tile_href(tile: Tag) -> Optional[str]:
    links = tile.find_all("a", href=True)
    for link in links:
        if any(marker in link["href"] for marker in PRODUCT_PATH_MARKERS):
            return link["href"]
    if links:
        return links[0]["href"]
    return None


def parse_tile(
    tile: Tag, category: str, base_url: str, page_url: str
) -> Optional[Product]:
    """Extract one candidate from a product tile, or None when it has no price."""
    price_el = tile.select_one(PRICE_SELECTOR)
    price = parse_price(price_el.get_text(strip=True)) if price_el else None
    if price is None:
        return None

    return Product(
        name=_tile_name(tile),
        category=category,
        price=price,
        url=normalize_url(_tile_href(tile), base_url, page_url),
        in_stock=is_in_stock(tile.get_text(" ")),
    )
