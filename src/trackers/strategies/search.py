from __future__ import annotations

from typing import List
from urllib.parse import quote_plus

from loguru import logger

from src.models.product import Product
from src.models.watchlist import WatchlistEntry
from src.trackers.base import BaseTracker
from src.trackers.utils import TILE_SELECTOR, parse_tile


class SearchTracker(BaseTracker):
    """Runs one site search per watchlist entry and parses the result tiles."""

    strategy = "search"

    def fetch_candidates(self) -> List[Product]:
        results = []
        for entry in self.settings.watchlist:
            try:
                found = self._search(entry)
            except Exception as e:
                logger.error(f"Error searching {entry.name}: {e}")
                continue
            logger.info(f"{entry.name}: {len(found)} products")
            results.extend(found)
        return results

    def _search(self, entry: WatchlistEntry) -> List[Product]:
        url = self.settings.search_url.format(query=quote_plus(entry.search_query))
        logger.info(f"Searching {entry.name}: {url}")
        soup = self.fetcher.fetch(url)
        if soup is None:
            return []

        products = []
        for tile in soup.select(TILE_SELECTOR):
            try:
                product = parse_tile(tile, entry.name, self.settings.base_url, url)
            except Exception as e:
                logger.debug(f"Skipping unparsable tile: {e}")
                continue
            if product is None:
                continue
            if self.settings.enforce_keyword_filter and not entry.matches(product.name):
                logger.debug(f"Filtered out by keywords: {product.name}")
                continue
            products.append(product)
        return products
