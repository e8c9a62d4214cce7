# src/storage/file_manager.py

"""Saves feed snapshots and query answers to disk as JSON."""

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.models.product import CheapestMatch

logger = logging.getLogger("feed_catalog.storage")

_UNSAFE_CHARS_RE = re.compile(r"[^\w-]+")


class FileManager:
    """Writes timestamped JSON files into the results directory."""

    def __init__(self, results_dir: Path | None = None) -> None:
        self.results_dir: Path = results_dir or Settings.RESULTS_DIR
        self.results_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(
            "FileManager initialised — results_dir=%s", self.results_dir
        )

    def _write_json(self, stem: str, data: Any) -> Path:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.results_dir / f"{stem}_{timestamp}.json"
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        return filepath

    def save_feed(self, tree: dict[str, Any]) -> Path:
        """Save a parsed feed tree."""
        filepath = self._write_json("feed", tree)
        logger.info("Saved feed snapshot to %s", filepath)
        return filepath

    def save_match(self, match: CheapestMatch) -> Path:
        """Save a cheapest-product answer, named after its query."""
        slug = _UNSAFE_CHARS_RE.sub("_", match.query).strip("_") or "query"
        filepath = self._write_json(f"cheapest_{slug}", match.to_dict())
        logger.info(
            "Saved cheapest match for '%s' to %s", match.query, filepath
        )
        return filepath
