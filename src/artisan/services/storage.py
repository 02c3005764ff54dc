"""Key/value persistence media for the gallery.

The gallery is persisted as a single value under a versioned key. A medium only
needs to read and write raw text for a key; parsing and validation happen in
``GalleryStore``.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class Storage(ABC):
    """Abstract text store addressed by key."""

    @abstractmethod
    def read(self, key: str) -> str | None:
        """Return the stored text, or None if nothing is stored under the key."""

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Store text under the key, replacing any previous value.

        Raises:
            OSError: If the medium cannot be written
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the key. Missing keys are ignored."""


class JsonFileStorage(Storage):
    """One ``<key>.json`` file per key inside a directory."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, value: str) -> None:
        # Write to a sibling temp file first so a failed write never truncates
        # the previously persisted gallery.
        path = self.path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)
        logger.debug(f"Wrote {len(value)} characters to {path}")

    def delete(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)


class MemoryStorage(Storage):
    """In-process store, used for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.values: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self.values.get(key)

    def write(self, key: str, value: str) -> None:
        self.values[key] = value

    def delete(self, key: str) -> None:
        self.values.pop(key, None)
