from typing import Dict, Optional, Type

from loguru import logger

from src.config import Settings
from src.trackers.base import BaseTracker
from src.trackers.fetcher import PageFetcher
from src.trackers.strategies.fixed_list import FixedListTracker
from src.trackers.strategies.listing_page import ListingPageTracker
from src.trackers.strategies.search import SearchTracker

TRACKERS: Dict[str, Type[BaseTracker]] = {
    FixedListTracker.strategy: FixedListTracker,
    SearchTracker.strategy: SearchTracker,
    ListingPageTracker.strategy: ListingPageTracker,
}


def get_tracker(
    strategy: str, fetcher: PageFetcher, settings: Optional[Settings] = None
) -> Optional[BaseTracker]:
    """根據 matching strategy 名稱取得對應 Tracker 實例"""
    tracker_cls = TRACKERS.get(strategy)
    if tracker_cls is None:
        logger.warning(f"Unknown matching strategy: {strategy}")
        return None
    return tracker_cls(fetcher, settings)


__all__ = [
    "FixedListTracker",
    "ListingPageTracker",
    "SearchTracker",
    "TRACKERS",
    "get_tracker",
]
