from __future__ import annotations

from typing import List, Optional

from bs4 import BeautifulSoup
from loguru import logger

from src.models.product import Product
from src.models.watchlist import MonitoredProduct
from src.trackers.base import BaseTracker
from src.trackers.utils import PRICE_SELECTOR, is_in_stock, parse_price


class FixedListTracker(BaseTracker):
    """Checks each configured product page individually."""

    strategy = "fixed_list"

    def fetch_candidates(self) -> List[Product]:
        results = []
        for item in self.settings.monitored_products:
            try:
                product = self._check(item)
            except Exception as e:
                logger.error(f"Error checking {item.name or item.url}: {e}")
                continue
            if product is not None:
                results.append(product)
        return results

    def _check(self, item: MonitoredProduct) -> Optional[Product]:
        logger.info(f"Checking: {item.name or item.url}")
        soup = self.fetcher.fetch(item.url)
        if soup is None:
            return None

        price_el = soup.select_one(PRICE_SELECTOR)
        price = parse_price(price_el.get_text(strip=True)) if price_el else None
        if price is None:
            logger.warning(f"No price found for {item.name or item.url}")
            return None

        in_stock = is_in_stock(soup.get_text(" "))
        product = Product(
            name=item.name or _page_title(soup),
            category=item.category or self.settings.default_category,
            price=price,
            url=item.url,
            in_stock=in_stock,
        )
        logger.info(
            f"Price: {price}, inStock: {'yes' if in_stock else 'no'} ({product.name})"
        )
        return product


def _page_title(soup: BeautifulSoup) -> str:
    heading = soup.find("h1")
    if heading is not None and heading.get_text(strip=True):
        return heading.get_text(" ", strip=True)
    if soup.title is not None and soup.title.string:
        return soup.title.string.strip()
    return ""
