"""Gallery persistence for Artisan Studio.

The gallery is intentionally simple:

- the whole collection lives under a single versioned key
- each record is ``{id, originalImage, processedImage, styleId, timestamp}``
- list order is reverse-chronological (newest first)

The in-memory collection is authoritative for the running session. Every
mutation is applied in memory first and then written through to the storage
medium. If the write fails the mutation is kept and ``PersistenceWriteError``
is raised, so the caller can surface the divergence as a warning.

Loading never fails the caller: missing data yields an empty gallery, and a
value that cannot be parsed or validated is discarded with a warning.
"""

import json
import logging

from pydantic import TypeAdapter, ValidationError

from artisan.core.errors import PersistenceCorruptError, PersistenceWriteError
from artisan.core.models import GalleryItem

from .storage import Storage

logger = logging.getLogger(__name__)

_ITEMS_ADAPTER = TypeAdapter(list[GalleryItem])

DEFAULT_GALLERY_KEY = "artisan_gallery_v2"


def parse_gallery(raw: str) -> list[GalleryItem]:
    """Parse a persisted gallery value.

    Items sharing an id with an earlier item are dropped so the loaded
    collection keeps ids unique.

    Raises:
        PersistenceCorruptError: If the value is not valid JSON or a record
            does not match the gallery schema
    """
    try:
        items = _ITEMS_ADAPTER.validate_json(raw)
    except ValidationError as e:
        raise PersistenceCorruptError(f"Persisted gallery is unreadable: {e}") from e

    seen: set[str] = set()
    unique_items: list[GalleryItem] = []
    for item in items:
        if item.id in seen:
            logger.warning(f"Dropping duplicate gallery item id: {item.id}")
            continue
        seen.add(item.id)
        unique_items.append(item)

    return unique_items


def serialize_gallery(items: list[GalleryItem] | tuple[GalleryItem, ...]) -> str:
    """Render gallery items in the persisted record layout."""
    return json.dumps([item.model_dump(by_alias=True) for item in items])


class GalleryStore:
    """Ordered, persisted collection of saved results.

    Attributes:
        storage: Medium the collection is written to
        key: Versioned key the collection is stored under
    """

    def __init__(self, storage: Storage, key: str = DEFAULT_GALLERY_KEY):
        self.storage = storage
        self.key = key
        self._items: list[GalleryItem] = []

    def load(self) -> tuple[GalleryItem, ...]:
        """Read the persisted collection into memory.

        Returns:
            The loaded items, newest first (empty on missing or malformed data)
        """
        try:
            raw = self.storage.read(self.key)
        except UnicodeDecodeError as e:
            return self._discard(f"Persisted gallery is not valid text: {e}")
        except OSError as e:
            logger.warning(f"Could not read gallery '{self.key}', starting empty: {e}")
            self._items = []
            return self.all()

        if raw is None:
            logger.info(f"No persisted gallery under '{self.key}', starting empty")
            self._items = []
            return self.all()

        try:
            self._items = parse_gallery(raw)
        except PersistenceCorruptError as e:
            return self._discard(str(e))

        logger.info(f"Loaded {len(self._items)} gallery items from '{self.key}'")
        return self.all()

    def add(self, item: GalleryItem) -> None:
        """Prepend an item and persist the collection.

        Raises:
            ValueError: If an item with the same id is already stored
            PersistenceWriteError: If the medium fails (the item stays in memory)
        """
        if self.get(item.id) is not None:
            raise ValueError(f"Gallery already contains an item with id {item.id}")

        self._items.insert(0, item)
        logger.info(f"Added gallery item {item.id} (style={item.style_id})")
        self._persist()

    def remove(self, item_id: str) -> bool:
        """Remove an item by id and persist the collection.

        Returns:
            True if an item was removed, False if the id was not found

        Raises:
            PersistenceWriteError: If the medium fails (the removal is kept)
        """
        remaining = [item for item in self._items if item.id != item_id]
        if len(remaining) == len(self._items):
            logger.debug(f"Gallery item not found: {item_id}")
            return False

        self._items = remaining
        logger.info(f"Removed gallery item {item_id}")
        self._persist()
        return True

    def get(self, item_id: str) -> GalleryItem | None:
        return next((item for item in self._items if item.id == item_id), None)

    def all(self) -> tuple[GalleryItem, ...]:
        """Current ordered snapshot of the collection."""
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def _discard(self, reason: str) -> tuple[GalleryItem, ...]:
        logger.warning(f"{reason}; discarding it and starting empty")
        self._items = []
        try:
            self.storage.delete(self.key)
        except OSError as e:
            logger.warning(f"Could not discard unreadable gallery: {e}")
        return self.all()

    def _persist(self) -> None:
        try:
            self.storage.write(self.key, serialize_gallery(self._items))
        except OSError as e:
            logger.warning(
                f"Failed to persist gallery '{self.key}'; in-memory gallery is now "
                f"ahead of the persisted copy: {e}"
            )
            raise PersistenceWriteError(f"Could not save the gallery: {e}") from e
