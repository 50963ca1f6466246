from __future__ import annotations

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from helpers import build_repository, write_file

from mavenindex import cli


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = build_repository(Path(self._tmp.name).resolve())

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_generate_writes_pages_and_search_index(self) -> None:
        cli.main(["generate", str(self.root)])

        self.assertTrue((self.root / "index.md").exists())
        entries = json.loads((self.root / "search-index.json").read_text(encoding="utf-8"))
        self.assertEqual(entries[0], "com")

    def test_generate_with_config_and_layout_override(self) -> None:
        config = write_file(
            Path(self._tmp.name) / "scripts" / "site.yml",
            "layout: page\nfooter_links:\n  - {label: Home, url: 'https://example.com'}\n",
        )

        cli.main(["generate", str(self.root), "--config", str(config), "--layout", "wide"])

        page = (self.root / "index.md").read_text(encoding="utf-8")
        self.assertIn("layout: wide\n", page)
        self.assertIn("- [Home](https://example.com)", page)

    def test_generate_rejects_missing_root(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            cli.main(["generate", str(self.root / "missing")])
        self.assertEqual(ctx.exception.code, 1)

    def test_generate_rejects_bad_config(self) -> None:
        config = write_file(self.root / "scripts" / "bad.yml", "colour: blue\n")
        with self.assertRaises(SystemExit):
            cli.main(["generate", str(self.root), "--config", str(config)])
        self.assertFalse((self.root / "index.md").exists())

    def test_generate_exits_on_write_failure(self) -> None:
        with mock.patch.object(Path, "write_text", side_effect=PermissionError("read-only")):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["generate", str(self.root)])
        self.assertEqual(ctx.exception.code, 1)

    def test_search_prints_matches_from_page(self) -> None:
        cli.main(["generate", str(self.root)])

        out = io.StringIO()
        with redirect_stdout(out):
            cli.main(["search", "acme", "--root", str(self.root), "--from", "com"])

        self.assertEqual(
            out.getvalue().splitlines(),
            [
                '<a href="/com/acme">com/<strong>acme</strong></a>',
                '<a href="/com/acme/lib">com/<strong>acme</strong>/lib</a>',
                '<a href="/com/acme/lib/1.0">com/<strong>acme</strong>/lib/1.0</a>',
            ],
        )

    def test_search_outside_prefix(self) -> None:
        cli.main(["generate", str(self.root)])

        out = io.StringIO()
        with redirect_stdout(out):
            cli.main(["search", "acme", "--root", str(self.root), "--from", "org"])

        self.assertEqual(out.getvalue().strip(), "No results! Try searching for something else.")

    def test_search_requires_generated_index(self) -> None:
        with self.assertRaises(SystemExit):
            cli.main(["search", "acme", "--root", str(self.root)])

    def test_info_counts_generated_output(self) -> None:
        cli.main(["generate", str(self.root)])

        out = io.StringIO()
        with redirect_stdout(out):
            cli.main(["info", str(self.root)])

        self.assertIn("Search entries: 4", out.getvalue())
        self.assertIn("Index pages: 5", out.getvalue())
        self.assertIn("Javadoc trees: 1", out.getvalue())


if __name__ == "__main__":
    unittest.main()
