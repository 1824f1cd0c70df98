from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class WatchlistEntry(BaseModel):
    """A search-mode category: its name doubles as the product category."""

    name: str
    keywords: List[str] = []
    query: Optional[str] = None

    @property
    def search_query(self) -> str:
        return self.query or self.name

    def matches(self, product_name: str) -> bool:
        if not self.keywords:
            return True
        lowered = product_name.lower()
        return any(keyword.lower() in lowered for keyword in self.keywords)


class MonitoredProduct(BaseModel):
    """A product page tracked by URL in fixed-list mode."""

    name: str = ""
    url: str
    category: Optional[str] = None
