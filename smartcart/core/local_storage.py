# smartcart/core/local_storage.py
import logging
import os
import re
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalStorage:
    """
    Durable key/value storage for the storefront session.

    Mirrors the browser `localStorage` contract:
      - values are strings (the caller serializes JSON)
      - a missing key reads as None
      - writes replace the whole value

    Each key is one file inside `root_dir`. Writes go through a temp file
    and `os.replace` so a crash never leaves a half-written value.
    """

    def __init__(self, root_dir: str | Path):
        self.root_dir = Path(root_dir)

    @staticmethod
    def _safe_key(key: str) -> str:
        """
        Map a storage key to a filename:
          - non [A-Za-z0-9_-] characters -> '_'
        """
        value = re.sub(r"[^A-Za-z0-9_-]", "_", key.strip())
        if not value:
            raise ValueError("storage key cannot be empty")
        return value

    def path_for(self, key: str) -> Path:
        return self.root_dir / f"{self._safe_key(key)}.json"

    def get_item(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set_item(self, key: str, value: str) -> None:
        self.root_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.root_dir, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove_item(self, key: str) -> None:
        path = self.path_for(key)
        path.unlink(missing_ok=True)
        logger.debug(f"Removed local storage key {key!r}")
