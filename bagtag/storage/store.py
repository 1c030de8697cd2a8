"""
Key-Value Stores

Backends holding named JSON blobs. ``JsonFileStore`` keeps one ``<key>.json``
file per key in a data folder; ``InMemoryStore`` keeps strings in a dict and
is meant for tests and previews.
"""

from pathlib import Path
from typing import Dict, Optional, Protocol

from bagtag.config import DATA_FOLDER
from bagtag.utils import atomic_write_text, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


class StorageError(Exception):
    """Raised when a blob cannot be written"""
    pass


class KeyValueStore(Protocol):
    """Minimal string store the tracker persists its blobs in."""

    def get_string(self, key: str) -> Optional[str]:
        ...

    def set_string(self, key: str, value: str) -> None:
        ...

    def clear_all(self) -> None:
        ...


class InMemoryStore:
    """Dict-backed store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_string(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_string(self, key: str, value: str) -> None:
        self._data[key] = value

    def clear_all(self) -> None:
        self._data.clear()


class JsonFileStore:
    """
    File-backed store writing each key to ``<folder>/<key>.json``.

    Writes go through a temporary file and a rename, so a reader never sees a
    half-written blob.
    """

    def __init__(self, folder: Path = DATA_FOLDER):
        self.folder = Path(folder)

    def _path(self, key: str) -> Path:
        if not key or not key.replace("_", "").isalnum():
            raise ValueError(f"Invalid storage key: '{key}'")
        return self.folder / f"{key}.json"

    def get_string(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_string(self, key: str, value: str) -> None:
        atomic_write_text(value, self._path(key))

    def clear_all(self) -> None:
        if not self.folder.exists():
            return
        for f in self.folder.glob("*.json"):
            f.unlink()
            logger.debug(f"Deleted {f}")
