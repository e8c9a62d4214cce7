# src/services/feed_service.py

"""Feed retrieval and cheapest-product queries over the cached feed."""

import asyncio
import logging
from typing import Any

from src.config.app_settings import AppSettings
from src.filters.product_matcher import ProductMatcher
from src.models.errors import (
    EmptyQuery,
    NoSourcesConfigured,
    ProductNotFound,
)
from src.models.product import CheapestMatch
from src.parsers.item_extractor import extract_items
from src.parsers.product_mapper import map_items
from src.parsers.xml_tree import TreeNode, parse_xml
from src.scrapers.feed_fetcher import FeedFetcher
from src.storage.feed_cache import FeedCache

logger = logging.getLogger("feed_catalog.service")


class FeedService:
    """Runs the fetch -> cache -> parse -> extract -> match pipeline.

    The cache and fetcher are injected so one process can share a cache
    across requests while tests supply their own. Concurrent cache
    misses are not coalesced: each one downloads and stores the feed,
    and the last store wins.
    """

    def __init__(
        self,
        cache: FeedCache | None = None,
        fetcher: FeedFetcher | None = None,
    ) -> None:
        self.cache = cache or FeedCache()
        self.fetcher = fetcher or FeedFetcher()

    async def get_feed_text(self, settings: AppSettings) -> str:
        """Return the raw feed XML, from cache when fresh.

        Raises:
            NoSourcesConfigured: ``settings.feed_source_urls`` is empty.
            FetchExhausted: no URL could be downloaded. A stale cache
                entry is not used as a fallback.
        """
        urls = settings.feed_source_urls
        if not urls:
            raise NoSourcesConfigured()

        if settings.cache_enabled:
            cached = self.cache.lookup(settings.cache_ttl_seconds)
            if cached is not None:
                return cached

        logger.info("Downloading feed from %d source(s)", len(urls))
        outcome = await asyncio.to_thread(
            self.fetcher.fetch_first, list(urls)
        )
        text: str = outcome.text or ""

        if settings.cache_enabled:
            self.cache.store(text)
        return text

    async def get_feed_tree(
        self, settings: AppSettings,
    ) -> dict[str, TreeNode]:
        """Return the whole feed as a parsed tree.

        XML syntax errors from the parser propagate unchanged.
        """
        text = await self.get_feed_text(settings)
        return parse_xml(text)

    async def find_cheapest(
        self,
        settings: AppSettings,
        query: str,
    ) -> CheapestMatch:
        """Return the cheapest product whose title contains *query*.

        Raises:
            EmptyQuery: *query* is blank.
            NoSourcesConfigured: no feed URLs are configured.
            FetchExhausted: every feed URL failed.
            ProductNotFound: no product title matches.
        """
        query = (query or "").strip()
        if not query:
            raise EmptyQuery()

        tree: Any = await self.get_feed_tree(settings)
        items = extract_items(tree)
        if items:
            logger.info("Extracted %d item(s) from feed", len(items))
        else:
            logger.warning("No item records found in feed tree")

        products = map_items(items)
        match = ProductMatcher.find_cheapest(products, query)
        if match is None:
            raise ProductNotFound(query)
        return match
