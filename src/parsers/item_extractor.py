# src/parsers/item_extractor.py

"""Locate the repeated product records inside a feed of unknown shape."""

from typing import Any

# Checked in order before the generic fallback search
KNOWN_ITEM_PATHS: list[tuple[str, ...]] = [
    ("rss", "channel", "item"),     # Google Merchant / RSS 2.0
    ("items", "item"),
    ("products", "product"),
]


def _follow(tree: dict[str, Any], path: tuple[str, ...]) -> Any:
    node: Any = tree
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def _as_list(node: Any) -> list[Any]:
    if isinstance(node, list):
        return node
    return [node]


def extract_items(tree: Any) -> list[Any]:
    """Return the item records of a parsed feed tree.

    The known feed shapes in :data:`KNOWN_ITEM_PATHS` win in order; a
    single record is wrapped in a list. Otherwise the tree is searched
    depth-first in key order: the first list-valued property is the
    answer, and nested objects are searched the same way, first
    non-empty hit wins. An empty list means nothing was found.
    """
    if not isinstance(tree, dict) or not tree:
        return []

    for path in KNOWN_ITEM_PATHS:
        found = _follow(tree, path)
        # "" is what an empty <item/> parses to
        if found is not None and found != "":
            return _as_list(found)

    for value in tree.values():
        if isinstance(value, list):
            return value
        if isinstance(value, dict):
            nested = extract_items(value)
            if nested:
                return nested
    return []

