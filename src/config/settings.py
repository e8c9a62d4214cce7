# src/config/settings.py

"""Central configuration for the feed_catalog engine."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the feed_catalog engine."""

    APP_NAME: str = "feed_catalog"
    APP_VERSION: str = os.getenv("FEED_CATALOG_VERSION", "0.1.0")

    # --- Fetching ---
    REQUEST_DELAY: float = 0.5          # Base backoff between retries
    REQUEST_TIMEOUT: int = 4            # Seconds before an attempt times out
    MAX_RETRIES: int = 2                # Tries per source URL
    USE_CLOUDSCRAPER_FALLBACK: bool = True
    SLOW_SOURCE_MS: float = 5000.0      # Health probe "slow" threshold

    # --- Feed cache ---
    FEED_CACHE_KEY: str = "FEED_XML_CACHE"
    DEFAULT_CACHE_TTL: float = 300.0    # Seconds

    # --- Product mapping ---
    IN_STOCK_TOKENS: list[str] = [
        "in stock",
        "instock",
        "em estoque",
        "available",
    ]
    OUT_OF_STOCK_TOKENS: list[str] = [
        "out of stock",
        "outofstock",
        "unavailable",
        "not available",
        "sem estoque",
    ]

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": (
            "application/xml,text/xml;q=0.9,"
            "application/rss+xml;q=0.9,*/*;q=0.8"
        ),
        "Accept-Language": "en-US,en;q=0.9,pt-BR;q=0.8",
        "sec-ch-ua": (
            '"Google Chrome";v="131", '
            '"Chromium";v="131", '
            '"Not_A Brand";v="24"'
        ),
        "sec-ch-ua-mobile": "?0",
        "sec-ch-ua-platform": '"Windows"',
    }

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    APP_SETTINGS_PATH: Path = Path(
        os.getenv("FEED_APP_SETTINGS", str(BASE_DIR / "app_settings.json"))
    )
    RESULTS_DIR: Path = BASE_DIR / "results"
    LOGS_DIR: Path = BASE_DIR / "logs"
