from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from mavenindex.settings import (
    DEFAULT_FOOTER_LINKS,
    IGNORED,
    SettingsError,
    SiteSettings,
    load_settings,
)


class SettingsTests(unittest.TestCase):
    def test_defaults_without_file(self) -> None:
        settings = load_settings()
        self.assertEqual(settings, SiteSettings())
        self.assertEqual(settings.footer_links, DEFAULT_FOOTER_LINKS)

    def test_file_values_and_overrides(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "site.yml"
            path.write_text(
                "layout: page\n"
                "footer_links:\n"
                "  - label: Docs\n"
                "    url: https://example.com/docs\n",
                encoding="utf-8",
            )

            settings = load_settings(path, layout="wide")

            self.assertEqual(settings.layout, "wide")
            self.assertEqual(settings.footer_links, (("Docs", "https://example.com/docs"),))

            self.assertEqual(load_settings(path, layout=None).layout, "page")

    def test_unknown_keys_are_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "site.yml"
            path.write_text("ignored: [target]\n", encoding="utf-8")
            with self.assertRaises(SettingsError):
                load_settings(path)

    def test_malformed_footer_links(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "site.yml"
            path.write_text("footer_links: [Docs]\n", encoding="utf-8")
            with self.assertRaises(SettingsError):
                load_settings(path)

    def test_missing_file(self) -> None:
        with self.assertRaises(SettingsError):
            load_settings("/nonexistent/site.yml")

    def test_ignore_list_covers_site_files(self) -> None:
        for name in (".git", "_config.yml", "README.md", "index.md", "changelog", "package.json"):
            self.assertIn(name, IGNORED)


if __name__ == "__main__":
    unittest.main()
