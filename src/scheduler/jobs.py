from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from loguru import logger

from src.config import Settings, get_settings
from src.db.catalog_store import CatalogStore
from src.notifications.dispatcher import NotificationDispatcher
from src.trackers.fetcher import PageFetcher
from src.trackers.reconciler import ReconcileAction, reconcile
from src.trackers.strategies import get_tracker


@dataclass
class CycleReport:
    candidates: int = 0
    new: int = 0
    price_drops: int = 0
    unchanged: int = 0


class MonitorCycle:
    """One scrape → reconcile run. Overlapping runs are skipped, not queued."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[CatalogStore] = None,
        dispatcher: Optional[NotificationDispatcher] = None,
        fetcher_factory: Optional[Callable[[], PageFetcher]] = None,
    ):
        self.settings = settings or get_settings()
        self.store = store or CatalogStore(self.settings.store_path)
        self.dispatcher = dispatcher or NotificationDispatcher(self.settings)
        self.fetcher_factory = fetcher_factory or (lambda: PageFetcher(self.settings))
        self._lock = threading.Lock()

    @property
    def in_progress(self) -> bool:
        return self._lock.locked()

    def run(self, strategy: Optional[str] = None) -> Optional[CycleReport]:
        if not self._lock.acquire(blocking=False):
            logger.warning("Previous monitor cycle still running, skipping this tick")
            return None
        try:
            return self._run(strategy or self.settings.matching_strategy)
        except Exception:
            logger.exception("Monitor cycle failed")
            return None
        finally:
            self._lock.release()

    def _run(self, strategy: str) -> Optional[CycleReport]:
        logger.info(f"{self.settings.app_name} cycle started at {datetime.now()}")

        catalog = self.store.load()
        with self.fetcher_factory() as fetcher:
            tracker = get_tracker(strategy, fetcher, self.settings)
            if tracker is None:
                return None
            candidates = tracker.collect()

        results = reconcile(
            candidates,
            self.store,
            self.dispatcher,
            catalog=catalog,
            currency=self.settings.currency_symbol,
        )

        report = CycleReport(candidates=len(candidates))
        for result in results:
            if result.action is ReconcileAction.new:
                report.new += 1
            elif result.action is ReconcileAction.price_drop:
                report.price_drops += 1
            else:
                report.unchanged += 1

        logger.info(
            f"Monitor cycle complete: {report.candidates} checked, "
            f"{report.new} new, {report.price_drops} price drops"
        )
        return report
