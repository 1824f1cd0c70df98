from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from loguru import logger

from src.config import Settings, get_settings
from src.models.product import Product
from src.trackers.fetcher import PageFetcher
from src.trackers.utils import finalize_candidates


class BaseTracker(ABC):
    strategy: str = ""

    def __init__(self, fetcher: PageFetcher, settings: Optional[Settings] = None):
        self.fetcher = fetcher
        self.settings = settings or get_settings()

    @abstractmethod
    def fetch_candidates(self) -> List[Product]:
        """抓取本輪所有來源的候選商品（未過濾）"""
        ...

    def collect(self) -> List[Product]:
        """Run the strategy and apply the shared price/name/dedup rules."""
        logger.info(f"Collecting candidates with {self.strategy} strategy")
        candidates = finalize_candidates(self.fetch_candidates())
        logger.info(f"Collected {len(candidates)} candidates")
        return candidates
