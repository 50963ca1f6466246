"""JSON-backed search index for a generated site."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class SearchIndex:
    """Ordered list of indexed directory paths, written once per run."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._entries: list[str] = []
        self._flushed = False

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def record(self, rel_path: str) -> None:
        """Append a root-relative directory path."""
        if self._flushed:
            raise RuntimeError("Search index already flushed; start a new run")
        self._entries.append(rel_path.replace("\\", "/"))

    def flush(self) -> None:
        """Write the entries as a JSON array."""
        if self._flushed:
            raise RuntimeError("Search index already flushed")
        self.path.write_text(
            json.dumps(self._entries, ensure_ascii=False) + "\n", encoding="utf-8"
        )
        self._flushed = True
        logger.info(f"Wrote {len(self._entries)} entries to {self.path.name}")

    @staticmethod
    def load(path: Path | str) -> list[str]:
        """Read the entries of a previously flushed index."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, list) or not all(isinstance(e, str) for e in data):
            raise ValueError(f"{path} is not a JSON array of paths")
        return data
