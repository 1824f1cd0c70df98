from __future__ import annotations

from typing import Optional

from src.models.product import Product


def format_price(price: float) -> str:
    """Render 100.0 as "100" and 99.5 as "99.5"."""
    if float(price).is_integer():
        return str(int(price))
    return str(price)


def format_new_product(product: Product, currency: str = "₹") -> str:
    return (
        f"🎉 *NEW {product.category.upper()}!*\n\n"
        f"{product.name}\n\n"
        f"💰 Price: {currency}{format_price(product.price)}"
    )


def format_price_drop(
    product: Product, old_price: float, discount: float, currency: str = "₹"
) -> str:
    return (
        f"💰 *PRICE DROP!*\n\n"
        f"{product.name}\n\n"
        f"Old: {currency}{format_price(old_price)}\n"
        f"New: {currency}{format_price(product.price)}\n"
        f"📉 {discount:.1f}% Off"
    )


def with_link(message: str, url: Optional[str] = None) -> str:
    return f"{message}\n\n🔗 {url}" if url else message
