# src/scrapers/feed_fetcher.py

"""Download feed documents from an ordered list of source URLs."""

import logging
import time
from dataclasses import dataclass
from typing import Any

import cloudscraper  # type: ignore[import-untyped]
from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.models.errors import FetchExhausted


@dataclass(frozen=True)
class FetchOutcome:
    """Result of one source URL: downloaded text or why it failed."""

    url: str
    text: str | None = None
    error: str = ""
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.text is not None


class FeedFetcher:
    """Fetches feed XML with bounded retries and a failover chain.

    Each URL gets ``MAX_RETRIES`` attempts through a browser-impersonating
    curl_cffi session, then one cloudscraper attempt. URLs are tried
    strictly in the configured order; the first success wins.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger("feed_catalog.fetcher")
        self.settings = Settings()
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    def _fetch_get(self, url: str) -> tuple[str | None, str]:
        """GET *url* with retries; return the body and the last error."""
        last_error = ""
        for attempt in range(self.settings.MAX_RETRIES):
            try:
                resp = self.session.get(
                    url,
                    headers=self.settings.DEFAULT_HEADERS,
                    timeout=self._request_timeout,
                )
                if resp.status_code == 200:
                    if resp.text.strip():
                        return str(resp.text), ""
                    last_error = "empty response body"
                    self.logger.warning(
                        "Empty body from %s on attempt %d",
                        url,
                        attempt + 1,
                    )
                else:
                    last_error = f"HTTP {resp.status_code}"
                    self.logger.warning(
                        "HTTP %d from %s on attempt %d",
                        resp.status_code,
                        url,
                        attempt + 1,
                    )
            except Exception as exc:
                last_error = str(exc) or type(exc).__name__
                self.logger.warning(
                    "Request error for %s on attempt %d: %s",
                    url,
                    attempt + 1,
                    exc,
                    exc_info=True,
                )
            if attempt + 1 < self.settings.MAX_RETRIES:
                time.sleep(self.settings.REQUEST_DELAY * (attempt + 1))
        return None, last_error

    def _fetch_fallback(self, url: str) -> str | None:
        """Single cloudscraper attempt after curl_cffi is exhausted."""
        self.logger.info(
            "curl_cffi exhausted for %s, falling back to cloudscraper",
            url,
        )
        try:
            _cs: Any = cloudscraper
            scraper: Any = _cs.create_scraper()
            resp: Any = scraper.get(
                url,
                headers=self.settings.DEFAULT_HEADERS,
                timeout=self._request_timeout,
            )
            if resp.status_code == 200 and str(resp.text).strip():
                return str(resp.text)
            self.logger.warning(
                "cloudscraper got HTTP %d from %s",
                resp.status_code,
                url,
            )
        except Exception as exc:
            self.logger.error(
                "cloudscraper fallback also failed for %s: %s",
                url,
                exc,
                exc_info=True,
            )
        return None

    def fetch_url(self, url: str) -> FetchOutcome:
        """Try one source URL; failures are returned, not raised."""
        start = time.monotonic()
        text, error = self._fetch_get(url)
        if text is None and self.settings.USE_CLOUDSCRAPER_FALLBACK:
            text = self._fetch_fallback(url)
        elapsed_ms = (time.monotonic() - start) * 1000

        if text is None:
            return FetchOutcome(
                url=url,
                error=error or "all attempts failed",
                elapsed_ms=elapsed_ms,
            )
        self.logger.info(
            "Fetched %d chars from %s in %.0fms",
            len(text),
            url,
            elapsed_ms,
        )
        return FetchOutcome(url=url, text=text, elapsed_ms=elapsed_ms)

    def fetch_first(self, urls: list[str]) -> FetchOutcome:
        """Return the first successful source in *urls* order.

        Raises:
            FetchExhausted: every URL failed.
        """
        failures: list[FetchOutcome] = []
        for url in urls:
            outcome = self.fetch_url(url)
            if outcome.ok:
                return outcome
            self.logger.warning(
                "Feed source %s failed, trying next", url
            )
            failures.append(outcome)

        self.logger.error(
            "All %d feed source(s) failed", len(failures)
        )
        raise FetchExhausted(failures)
