# src/parsers/value_parsers.py

"""Loose price and availability parsing for feed values."""

import math
import re
from typing import Any

from src.config.settings import Settings

_PRICE_TOKEN_RE = re.compile(r"\d+[.,]?\d*")


def scalar_text(raw: Any) -> Any:
    """Unwrap an attribute-bearing element to its text content.

    ``<g:price currency="BRL">10.00</g:price>`` parses to
    ``{"#text": "10.00", "@_currency": "BRL"}``; callers want ``"10.00"``.
    """
    if isinstance(raw, dict):
        return raw.get("#text")
    return raw


def parse_price(raw: Any) -> float:
    """Extract a numeric price from a value like ``'123.45 BRL'``.

    Numbers pass through unchanged. Strings yield their first numeric
    token, reading a comma as the decimal point. Anything without a
    token returns NaN, which callers treat as "price unknown".
    """
    raw = scalar_text(raw)
    if isinstance(raw, bool):
        return math.nan
    if isinstance(raw, (int, float)):
        return float(raw)
    if isinstance(raw, str):
        match = _PRICE_TOKEN_RE.search(raw)
        if match:
            return float(match.group(0).replace(",", ".", 1))
    return math.nan


def parse_availability(raw: Any) -> bool:
    """Return True if an availability value reads as in stock.

    A value is in stock when it contains any of
    ``Settings.IN_STOCK_TOKENS``, except that a value containing one of
    ``Settings.OUT_OF_STOCK_TOKENS`` is always out of stock. This departs
    from plain containment: "unavailable", "not available" and
    "sem estoque" each contain an in-stock token but read as False.
    """
    raw = scalar_text(raw)
    if raw is None:
        return False
    lowered = str(raw).lower()
    if lowered == "true":
        return True
    # "unavailable" would otherwise match "available"
    if any(token in lowered for token in Settings.OUT_OF_STOCK_TOKENS):
        return False
    return any(token in lowered for token in Settings.IN_STOCK_TOKENS)
