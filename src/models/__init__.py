from src.models.product import Product, utc_now_iso
from src.models.watchlist import MonitoredProduct, WatchlistEntry

__all__ = [
    "MonitoredProduct",
    "Product",
    "WatchlistEntry",
    "utc_now_iso",
]
