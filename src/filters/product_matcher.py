# src/filters/product_matcher.py

"""Title search and cheapest-product selection."""

import logging

from src.filters.text_normalizer import normalize
from src.models.product import CheapestMatch, Product

logger = logging.getLogger("feed_catalog.filters")


class ProductMatcher:
    """Select products by normalised title containment."""

    @staticmethod
    def filter_by_title(
        products: list[Product],
        query: str,
    ) -> list[Product]:
        """Keep titled products whose normalised title contains *query*.

        Feed order is preserved. Products without a title never match.
        """
        needle = normalize(query)
        return [
            p
            for p in products
            if p.title and needle in normalize(p.title)
        ]

    @staticmethod
    def find_cheapest(
        products: list[Product],
        query: str,
    ) -> CheapestMatch | None:
        """Return the lowest-priced product matching *query*.

        Matches with an unknown (NaN) price are skipped by the price
        sort; if no match has a price, the first match in feed order
        is returned instead. Returns ``None`` when nothing matches.
        """
        matches = ProductMatcher.filter_by_title(products, query)
        if not matches:
            logger.info("No title matches for '%s'", query)
            return None

        # sorted() is stable: equal prices keep feed order
        priced = sorted(
            (p for p in matches if p.has_price),
            key=lambda p: p.price,
        )
        if priced:
            cheapest = priced[0]
        else:
            logger.info(
                "No parseable price among %d match(es) for '%s'",
                len(matches),
                query,
            )
            cheapest = matches[0]

        logger.info(
            "Cheapest of %d match(es) for '%s': %s (%s)",
            len(matches),
            query,
            cheapest.title,
            cheapest.price,
        )
        return CheapestMatch(
            query=query,
            total_matches=len(matches),
            product=cheapest,
        )
