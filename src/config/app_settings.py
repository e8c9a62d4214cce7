# src/config/app_settings.py

"""Deployment settings for the feed service, loaded per request.

Settings come from a JSON document (``app_settings.json`` by default).
A missing file, unreadable JSON, or a field of the wrong type never
fails a request: the affected values fall back to their defaults and
the reason is reported on the returned :class:`SettingsLoad`.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.config.settings import Settings

logger = logging.getLogger("feed_catalog.settings")


@dataclass(frozen=True)
class AppSettings:
    """Feed sources, cache policy, and CORS origins for one deployment."""

    feed_source_urls: list[str] = field(default_factory=list)
    cache_enabled: bool = True
    cache_ttl_seconds: float = Settings.DEFAULT_CACHE_TTL
    allowed_origins: list[str] = field(default_factory=list)

    def allows_origin(self, origin: str) -> bool:
        """Return True if a browser request from *origin* may be answered.

        Policy hook for an HTTP layer serving the feed; the CLI never
        consults it. An empty origin list is permissive. Requests without
        an ``Origin`` header are never given CORS headers.
        """
        if not origin:
            return False
        return not self.allowed_origins or origin in self.allowed_origins


@dataclass(frozen=True)
class SettingsLoad:
    """Outcome of a settings lookup: always usable, maybe degraded."""

    settings: AppSettings
    error: str = ""

    @property
    def used_defaults(self) -> bool:
        return bool(self.error)


def _string_list(value: Any, name: str, problems: list[str]) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list) and all(
        isinstance(v, str) for v in value
    ):
        return [v.strip() for v in value if v.strip()]
    problems.append(f"{name} must be a list of strings")
    return []


def settings_from_dict(data: dict[str, Any]) -> SettingsLoad:
    """Build AppSettings from a decoded JSON object, field by field."""
    problems: list[str] = []

    urls = _string_list(
        data.get("feed_source_urls"), "feed_source_urls", problems
    )
    origins = _string_list(
        data.get("allowed_origins"), "allowed_origins", problems
    )

    cache_enabled = data.get("cache_enabled", True)
    if not isinstance(cache_enabled, bool):
        problems.append("cache_enabled must be a boolean")
        cache_enabled = True

    ttl = data.get("cache_ttl_seconds", Settings.DEFAULT_CACHE_TTL)
    if (
        isinstance(ttl, bool)
        or not isinstance(ttl, (int, float))
        or ttl < 0
    ):
        problems.append("cache_ttl_seconds must be a non-negative number")
        ttl = Settings.DEFAULT_CACHE_TTL

    return SettingsLoad(
        settings=AppSettings(
            feed_source_urls=urls,
            cache_enabled=cache_enabled,
            cache_ttl_seconds=float(ttl),
            allowed_origins=origins,
        ),
        error="; ".join(problems),
    )


class AppSettingsProvider:
    """Reads :class:`AppSettings` from a JSON file on every call."""

    def __init__(self, path: Path | None = None) -> None:
        self.path: Path = path or Settings.APP_SETTINGS_PATH

    def load(self) -> SettingsLoad:
        """Return the current settings, degrading to defaults on failure."""
        if not self.path.exists():
            logger.warning(
                "Settings file %s not found, using defaults", self.path
            )
            return SettingsLoad(
                settings=AppSettings(),
                error=f"settings file not found: {self.path}",
            )

        try:
            with open(self.path, encoding="utf-8") as f:
                data: Any = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning(
                "Could not read settings from %s: %s",
                self.path,
                exc,
                exc_info=True,
            )
            return SettingsLoad(settings=AppSettings(), error=str(exc))

        if not isinstance(data, dict):
            logger.warning(
                "Settings file %s is not a JSON object, using defaults",
                self.path,
            )
            return SettingsLoad(
                settings=AppSettings(),
                error="settings document must be a JSON object",
            )

        result = settings_from_dict(data)
        if result.error:
            logger.warning(
                "Invalid settings in %s: %s", self.path, result.error
            )
        logger.debug(
            "Loaded settings: %d source(s), cache=%s, ttl=%.0fs",
            len(result.settings.feed_source_urls),
            result.settings.cache_enabled,
            result.settings.cache_ttl_seconds,
        )
        return result
