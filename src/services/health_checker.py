# src/services/health_checker.py

"""Connectivity probe for the configured feed sources."""

import asyncio
import logging
import time
from dataclasses import dataclass

from src.config.settings import Settings
from src.scrapers.feed_fetcher import FeedFetcher

logger = logging.getLogger("feed_catalog.health")


@dataclass
class HealthResult:
    """Result of a single feed source probe."""

    url: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


def probe_source(url: str, fetcher: FeedFetcher) -> HealthResult:
    """Issue one GET against *url* and classify the response."""
    start = time.monotonic()
    try:
        resp = fetcher.session.get(
            url,
            headers=fetcher.settings.DEFAULT_HEADERS,
            timeout=fetcher.settings.REQUEST_TIMEOUT,
        )
        elapsed_ms = (time.monotonic() - start) * 1000

        if resp.status_code != 200:
            return HealthResult(
                url=url,
                status="down",
                latency_ms=elapsed_ms,
                message=f"HTTP {resp.status_code}",
            )
        if not resp.text.strip():
            return HealthResult(
                url=url,
                status="down",
                latency_ms=elapsed_ms,
                message="Empty response body",
            )
        if elapsed_ms > Settings.SLOW_SOURCE_MS:
            return HealthResult(
                url=url,
                status="slow",
                latency_ms=elapsed_ms,
                message="High latency",
            )
        return HealthResult(
            url=url,
            status="ok",
            latency_ms=elapsed_ms,
            message="",
        )

    except Exception as exc:
        elapsed_ms = (time.monotonic() - start) * 1000
        return HealthResult(
            url=url,
            status="down",
            latency_ms=elapsed_ms,
            message=str(exc)[:80],
        )


class HealthChecker:
    """Probes every configured feed URL concurrently."""

    def __init__(
        self,
        urls: list[str],
        fetcher: FeedFetcher | None = None,
    ) -> None:
        self.urls = list(urls)
        self.fetcher = fetcher or FeedFetcher()

    async def check_all(self) -> list[HealthResult]:
        tasks = [
            asyncio.to_thread(probe_source, url, self.fetcher)
            for url in self.urls
        ]
        results: list[HealthResult] = list(
            await asyncio.gather(*tasks)
        )
        for r in results:
            logger.info(
                "Health check %s: %s (%.0fms) %s",
                r.url,
                r.status,
                r.latency_ms,
                r.message,
            )
        return results
