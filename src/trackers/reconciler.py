from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, List, Optional

from loguru import logger

from src.db.catalog_store import Catalog, CatalogStore
from src.models.product import Product, utc_now_iso
from src.notifications.dispatcher import NotificationDispatcher
from src.notifications.formatter import format_new_product, format_price_drop


class ReconcileAction(enum.Enum):
    new = "new"
    price_drop = "price_drop"
    unchanged = "unchanged"


@dataclass
class ReconcileResult:
    action: ReconcileAction
    product: Product
    old_price: Optional[float] = None
    discount: Optional[float] = None


def calculate_discount(old_price: float, new_price: float) -> float:
    """Percentage off the old price, rounded to one decimal place."""
    return round((old_price - new_price) / old_price * 100, 1)


def reconcile(
    candidates: Iterable[Product],
    store: CatalogStore,
    dispatcher: NotificationDispatcher,
    catalog: Optional[Catalog] = None,
    currency: str = "₹",
) -> List[ReconcileResult]:
    """
    比對本輪候選商品與已儲存的目錄，新增或降價時寫回並發送通知。

    The store is saved before each alert goes out, so a failed notification
    never rolls back the recorded state.
    """
    if catalog is None:
        catalog = store.load()

    results: List[ReconcileResult] = []
    for candidate in candidates:
        try:
            result = _reconcile_one(candidate, catalog, store, dispatcher, currency)
        except Exception as e:
            logger.error(f"Error processing {getattr(candidate, 'name', candidate)}: {e}")
            continue
        results.append(result)
    return results


def _reconcile_one(
    candidate: Product,
    catalog: Catalog,
    store: CatalogStore,
    dispatcher: NotificationDispatcher,
    currency: str,
) -> ReconcileResult:
    existing = store.find(catalog, candidate.name)

    if existing is None:
        logger.info(
            f"NEW PRODUCT FOUND: {candidate.name} "
            f"[{candidate.category}] {currency}{candidate.price}"
        )
        candidate.last_alert_time = utc_now_iso()
        store.upsert(catalog, candidate)
        store.save(catalog)
        dispatcher.dispatch(format_new_product(candidate, currency), candidate.url)
        return ReconcileResult(ReconcileAction.new, candidate)

    if candidate.price < existing.price:
        old_price = existing.price
        discount = calculate_discount(old_price, candidate.price)
        logger.info(
            f"PRICE DROP: {candidate.name} {currency}{old_price} -> "
            f"{currency}{candidate.price} ({discount:.1f}%)"
        )
        existing.price = candidate.price
        existing.last_alert_time = utc_now_iso()
        store.save(catalog)
        dispatcher.dispatch(
            format_price_drop(candidate, old_price, discount, currency), candidate.url
        )
        return ReconcileResult(
            ReconcileAction.price_drop, existing, old_price=old_price, discount=discount
        )

    return ReconcileResult(ReconcileAction.unchanged, existing)
