from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class Product:
    name: str
    category: str
    price: float
    url: str
    in_stock: bool = True
    last_alert_time: str = ""

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the products.json record layout."""
        return {
            "name": self.name,
            "category": self.category,
            "price": self.price,
            "url": self.url,
            "inStock": self.in_stock,
            "lastAlertTime": self.last_alert_time,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Product":
        """Build a product from a stored record.

        Raises:
            KeyError, TypeError, ValueError: the record has no name or no
                positive price.
        """
        name = _text(record["name"])
        if not name:
            raise ValueError("record has no name")
        price = float(record["price"])
        if price <= 0:
            raise ValueError(f"non-positive price for {name}: {price}")

        in_stock = record.get("inStock")
        return cls(
            name=name,
            category=_text(record.get("category")),
            price=price,
            url=_text(record.get("url")),
            in_stock=True if in_stock is None else bool(in_stock),
            last_alert_time=_text(record.get("lastAlertTime")),
        )


def _text(value: Any) -> str:
    return "" if value is None else str(value)
