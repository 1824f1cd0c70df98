from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

from loguru import logger

from src.models.product import Product

Catalog = Dict[str, Product]


class CatalogStore:
    """Whole-snapshot JSON store of every product seen so far, keyed by name."""

    def __init__(self, path: Union[str, Path] = "products.json"):
        self.path = Path(path)

    def load(self) -> Catalog:
        """Read the catalog from disk.

        Returns an empty catalog when the file is missing or unreadable;
        never raises.
        """
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read {self.path}, starting empty: {e}")
            return {}

        if not isinstance(data, list):
            logger.warning(f"Unexpected content in {self.path}, starting empty")
            return {}

        catalog: Catalog = {}
        for record in data:
            try:
                product = Product.from_record(record)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Skipping malformed record in {self.path}: {e}")
                continue
            catalog[product.name] = product
        return catalog

    def save(self, catalog: Catalog) -> None:
        """Overwrite the file with the full catalog (temp file + rename)."""
        records = [product.to_record() for product in catalog.values()]
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            dir=directory, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

        logger.debug(f"Saved {len(records)} products to {self.path}")

    @staticmethod
    def find(catalog: Catalog, name: str) -> Optional[Product]:
        return catalog.get(name)

    @staticmethod
    def upsert(catalog: Catalog, product: Product) -> None:
        catalog[product.name] = product
