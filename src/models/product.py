# src/models/product.py

"""Canonical product and query result models."""

import math
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Product:
    """One feed entry normalised to a schema-independent shape."""

    id: str | None = None
    title: str | None = None
    link: str | None = None
    price: float = math.nan
    in_stock: bool = False
    brand: str | None = None
    gtin: str | None = None
    image: str | None = None
    category: str | None = None
    raw_source: Any = field(
        default=None, compare=False, repr=False
    )

    @property
    def has_price(self) -> bool:
        return math.isfinite(self.price)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to JSON-safe primitives (unknown price -> None)."""
        return {
            "id": self.id,
            "title": self.title,
            "link": self.link,
            "price": self.price if self.has_price else None,
            "in_stock": self.in_stock,
            "brand": self.brand,
            "gtin": self.gtin,
            "image": self.image,
            "category": self.category,
        }


@dataclass(frozen=True)
class CheapestMatch:
    """Answer to a cheapest-product query."""

    query: str
    total_matches: int
    product: Product

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "total_matches": self.total_matches,
            "cheapest": self.product.to_dict(),
        }
