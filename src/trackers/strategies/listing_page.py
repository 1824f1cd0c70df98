from __future__ import annotations

from typing import List

from loguru import logger

from src.models.product import Product
from src.trackers.base import BaseTracker
from src.trackers.utils import has_listing_class, parse_tile


class ListingPageTracker(BaseTracker):
    """Scans the list items of a single category listing page."""

    strategy = "listing_page"

    def fetch_candidates(self) -> List[Product]:
        url = self.settings.listing_url
        logger.info(f"Scanning listing page: {url}")
        try:
            soup = self.fetcher.fetch(url)
            if soup is None:
                return []
            items = [li for li in soup.find_all("li") if has_listing_class(li)]
        except Exception as e:
            logger.error(f"Error scanning listing page {url}: {e}")
            return []

        products = []
        for item in items:
            try:
                product = parse_tile(
                    item, self.settings.default_category, self.settings.base_url, url
                )
            except Exception as e:
                logger.debug(f"Skipping unparsable list item: {e}")
                continue
            if product is not None:
                products.append(product)
        return products
