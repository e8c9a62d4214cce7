# src/parsers/product_mapper.py

"""Map raw feed item records to canonical Product objects."""

from typing import Any

from src.models.product import Product
from src.parsers.value_parsers import (
    parse_availability,
    parse_price,
    scalar_text,
)

# Raw tag aliases per canonical field, highest priority first
FIELD_ALIASES: dict[str, list[str]] = {
    "id": ["id", "g:id", "sku"],
    "title": ["title", "g:title", "name", "product_title"],
    "link": ["link", "g:link", "url", "product_link"],
    "price": ["price", "g:price", "sale_price", "g:sale_price"],
    "availability": [
        "availability",
        "g:availability",
        "stock_status",
        "in_stock",
    ],
    "gtin": ["gtin", "g:gtin"],
    "brand": ["brand", "g:brand"],
    "image": ["image_link", "g:image_link", "image", "image_url"],
    "category": ["g:product_type", "product_type", "category"],
}


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (dict, list)):
        return not value
    return False


def first_value(item: dict[str, Any], aliases: list[str]) -> Any:
    """Return the first non-empty value among *aliases*, or None."""
    for alias in aliases:
        value = item.get(alias)
        if not _is_empty(value):
            return value
    return None


def _text(value: Any) -> str | None:
    if isinstance(value, list):
        value = value[0] if value else None
    value = scalar_text(value)
    if _is_empty(value) or isinstance(value, (dict, list)):
        return None
    return str(value).strip()


def map_item(item: Any) -> Product:
    """Build a Product from one raw item; never raises."""
    if not isinstance(item, dict):
        return Product(raw_source=item)

    def pick(name: str) -> Any:
        return first_value(item, FIELD_ALIASES[name])

    return Product(
        id=_text(pick("id")),
        title=_text(pick("title")),
        link=_text(pick("link")),
        price=parse_price(pick("price")),
        in_stock=parse_availability(pick("availability")),
        brand=_text(pick("brand")),
        gtin=_text(pick("gtin")),
        image=_text(pick("image")),
        category=_text(pick("category")),
        raw_source=item,
    )


def map_items(items: list[Any]) -> list[Product]:
    return [map_item(item) for item in items]
