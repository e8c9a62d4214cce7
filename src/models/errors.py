# src/models/errors.py

"""Error conditions surfaced by the feed service."""

from collections.abc import Sequence
from typing import Any


class FeedError(Exception):
    """Base class for every condition the feed service reports."""

    exit_code: int = 1


class EmptyQuery(FeedError):
    """The caller supplied a blank search term."""

    exit_code = 2

    def __init__(self) -> None:
        super().__init__("Missing required search term")


class NoSourcesConfigured(FeedError):
    """The deployment has no feed URLs configured."""

    exit_code = 2

    def __init__(self) -> None:
        super().__init__(
            "No feed URL configured (settings.feed_source_urls)"
        )


class FetchExhausted(FeedError):
    """Every configured feed URL failed."""

    exit_code = 3

    def __init__(self, outcomes: Sequence[Any]) -> None:
        self.outcomes = list(outcomes)
        super().__init__(
            "Failed to download the feed from all "
            f"{len(self.outcomes)} configured URL(s)"
        )


class ProductNotFound(FeedError):
    """No product title contains the search term."""

    exit_code = 1

    def __init__(self, query: str) -> None:
        self.query = query
        super().__init__(f"No product found for '{query}'")
