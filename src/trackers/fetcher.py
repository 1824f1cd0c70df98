from __future__ import annotations

from typing import Optional

import httpx
from bs4 import BeautifulSoup
from loguru import logger

from src.config import Settings, get_settings


class PageFetcher:
    """Fetches HTML pages and parses them with lxml."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.client = httpx.Client(
            timeout=settings.request_timeout,
            follow_redirects=True,
            headers={
                "User-Agent": settings.user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            },
        )

    def fetch(self, url: str) -> Optional[BeautifulSoup]:
        try:
            resp = self.client.get(url)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP {e.response.status_code} fetching {url}")
            return None
        except httpx.RequestError as e:
            logger.error(f"Request failed for {url}: {e}")
            return None
        return BeautifulSoup(resp.text, "lxml")

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "PageFetcher":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
