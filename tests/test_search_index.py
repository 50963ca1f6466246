from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from mavenindex.storage import SearchIndex


class SearchIndexTests(unittest.TestCase):
    def test_flush_writes_entries_in_recorded_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "search-index.json"
            index = SearchIndex(path)
            index.record("com")
            index.record("com/acme")
            index.record("org\\example")

            with self.assertLogs("mavenindex.storage.search_index", level="INFO") as logs:
                index.flush()

            self.assertEqual(json.loads(path.read_text(encoding="utf-8")), ["com", "com/acme", "org/example"])
            self.assertIn("Wrote 3 entries", logs.output[0])
            self.assertEqual(SearchIndex.load(path), ["com", "com/acme", "org/example"])

    def test_empty_index_is_an_empty_array(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "search-index.json"
            SearchIndex(path).flush()
            self.assertEqual(path.read_text(encoding="utf-8"), "[]\n")

    def test_index_is_single_use(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            index = SearchIndex(Path(tmp) / "search-index.json")
            index.flush()
            with self.assertRaises(RuntimeError):
                index.flush()
            with self.assertRaises(RuntimeError):
                index.record("com")

    def test_entries_is_a_copy(self) -> None:
        index = SearchIndex("unused.json")
        index.record("com")
        index.entries.append("org")
        self.assertEqual(index.entries, ["com"])
        self.assertEqual(len(index), 1)

    def test_load_rejects_non_list(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "search-index.json"
            path.write_text('{"com": 1}', encoding="utf-8")
            with self.assertRaises(ValueError):
                SearchIndex.load(path)


if __name__ == "__main__":
    unittest.main()
