"""Directory-backed local store."""

import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

from habit_engine.services.storage import LocalStore


@dataclass
class FileLocalStore(LocalStore):
    """Stores each key as one file; writes replace the file atomically."""

    directory: Path

    def __post_init__(self) -> None:
        self.directory = Path(self.directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def get(self, key: str) -> bytes | None:
        """Return the stored bytes, if any."""
        path = self._path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None

    def set(self, key: str, value: bytes) -> None:
        """Write bytes through a temporary file, then swap it in."""
        path = self._path(key)
        temporary = path.with_name(f"{path.name}.tmp")
        temporary.write_bytes(value)
        os.replace(temporary, path)

    def remove(self, key: str) -> None:
        """Remove a key if present."""
        self._path(key).unlink(missing_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{quote(key, safe='')}.json"
