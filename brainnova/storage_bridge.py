"""Durable storage backends holding the serialized fact map."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

__all__ = ["JsonFileStorage", "MemoryStorage"]


class MemoryStorage:
    """Keep the serialized map in process memory (tests, throwaway sessions)."""

    def __init__(self, initial: Optional[str] = None) -> None:
        self._payload = initial

    def read_all(self) -> Optional[str]:
        return self._payload

    def write_all(self, payload: str) -> None:
        self._payload = payload

    def clear(self) -> None:
        self._payload = None


class JsonFileStorage:
    """Persist the serialized map as a single JSON file on disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path).expanduser()

    def read_all(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def write_all(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write next to the target first so a crash never leaves half a file.
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(payload, encoding="utf-8")
        tmp_path.replace(self.path)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
            logger.debug(f"Removed {self.path}")
