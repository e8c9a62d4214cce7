# tests/test_file_manager.py

"""Tests for the FileManager storage module."""

import json
import tempfile
import unittest
from pathlib import Path

from src.models.product import CheapestMatch, Product
from src.storage.file_manager import FileManager


class TestFileManager(unittest.TestCase):
    """Tests for JSON snapshot saving."""

    def setUp(self) -> None:
        self.tmp_dir = Path(tempfile.mkdtemp())
        self.fm = FileManager(self.tmp_dir)

    def test_creates_results_dir(self) -> None:
        target = self.tmp_dir / "nested" / "results"
        FileManager(target)
        self.assertTrue(target.is_dir())

    def test_save_feed_writes_tree(self) -> None:
        tree = {"rss": {"channel": {"item": [{"title": "Ração"}]}}}
        path = self.fm.save_feed(tree)
        self.assertEqual(path.parent, self.tmp_dir)
        self.assertTrue(path.name.startswith("feed_"))
        with open(path, encoding="utf-8") as f:
            self.assertEqual(json.load(f), tree)

    def test_save_match_writes_answer(self) -> None:
        match = CheapestMatch(
            query="ração 10kg",
            total_matches=2,
            product=Product(title="Ração 10kg"),
        )
        path = self.fm.save_match(match)
        self.assertTrue(path.name.startswith("cheapest_ração_10kg_"))
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(data["total_matches"], 2)
        self.assertIsNone(data["cheapest"]["price"])

    def test_save_match_unsafe_query(self) -> None:
        match = CheapestMatch(
            query="../..", total_matches=1, product=Product(title="x")
        )
        path = self.fm.save_match(match)
        self.assertEqual(path.parent, self.tmp_dir)
        self.assertTrue(path.name.startswith("cheapest_query_"))


if __name__ == "__main__":
    unittest.main()
