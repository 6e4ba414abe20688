"""
Storage backends for inventory items.

Both backends implement the InventoryStore interface and return
schemas.InventoryItem snapshots, so callers never hold on to internal state.
"""
import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from . import crud, schemas
from .config import Settings
from .database import make_engine, make_session_factory
from .errors import StorageError

logger = logging.getLogger(__name__)

PhotoUrlFor = Callable[[int], str]


class InventoryStore(ABC):
    """Interface shared by the in-memory and database backends."""

    @abstractmethod
    def insert(self, item: schemas.InventoryItemCreate, photo_url_for: Optional[PhotoUrlFor] = None) -> schemas.InventoryItem:
        """
        Create a new item with a fresh unique ID.

        Args:
            item: Data of the new item
            photo_url_for: Builds photo_url from the new ID when the item has a photo

        Returns:
            The created item
        """

    @abstractmethod
    def list(self) -> List[schemas.InventoryItem]:
        """Return every stored item."""

    @abstractmethod
    def get_by_id(self, item_id: int) -> Optional[schemas.InventoryItem]:
        """Return the item with this ID, or None."""

    @abstractmethod
    def update(self, item_id: int, item: schemas.InventoryItemUpdate) -> Optional[schemas.InventoryItem]:
        """Overwrite the non-empty fields of item, or return None if the ID is unknown."""

    @abstractmethod
    def update_photo(self, item_id: int, photo_filename: str, photo_url: str) -> Optional[schemas.InventoryItem]:
        """Replace both photo fields, or return None if the ID is unknown."""

    @abstractmethod
    def delete(self, item_id: int) -> Optional[schemas.InventoryItem]:
        """Remove the item and return it, or return None if the ID is unknown."""


class MemoryInventoryStore(InventoryStore):
    """
    Process-local store keeping items in creation order.

    IDs start at 1 and are never reused, even after a delete. Nothing here is
    locked; concurrent writers are not supported.
    """

    def __init__(self):
        self._items: Dict[int, schemas.InventoryItem] = {}
        self._next_id = 1

    def _generate_id(self) -> int:
        item_id = self._next_id
        self._next_id += 1
        return item_id

    def insert(self, item, photo_url_for=None):
        item_id = self._generate_id()
        photo_url = None
        if item.photo_filename and photo_url_for is not None:
            photo_url = photo_url_for(item_id)
        stored = schemas.InventoryItem(
            id=item_id,
            inventory_name=item.inventory_name,
            description=item.description or "",
            photo_filename=item.photo_filename,
            photo_url=photo_url,
        )
        self._items[item_id] = stored
        return stored.model_copy()

    def list(self):
        return [item.model_copy() for item in self._items.values()]

    def get_by_id(self, item_id):
        item = self._items.get(item_id)
        return item.model_copy() if item is not None else None

    def update(self, item_id, item):
        stored = self._items.get(item_id)
        if stored is None:
            return None
        if item.inventory_name:
            stored.inventory_name = item.inventory_name
        if item.description:
            stored.description = item.description
        return stored.model_copy()

    def update_photo(self, item_id, photo_filename, photo_url):
        stored = self._items.get(item_id)
        if stored is None:
            return None
        stored.photo_filename = photo_filename
        stored.photo_url = photo_url
        return stored.model_copy()

    def delete(self, item_id):
        item = self._items.pop(item_id, None)
        return item.model_copy() if item is not None else None


class SqlInventoryStore(InventoryStore):
    """
    Store backed by the inventory table through SQLAlchemy.

    Each operation runs in its own session. Any SQLAlchemy failure is rolled
    back, logged and re-raised as StorageError.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def _run(self, operation: str, func, *args):
        db = self._session_factory()
        try:
            result = func(db, *args)
            if result is None:
                return None
            if isinstance(result, list):
                return [schemas.InventoryItem.model_validate(row) for row in result]
            return schemas.InventoryItem.model_validate(result)
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception(f"Database error during {operation}: {e}")
            raise StorageError(f"{operation} failed") from e
        finally:
            db.close()

    def insert(self, item, photo_url_for=None):
        return self._run("insert", crud.create_inventory_item, item, photo_url_for)

    def list(self):
        return self._run("list", crud.get_inventory_items)

    def get_by_id(self, item_id):
        return self._run("get", crud.get_inventory_item, item_id)

    def update(self, item_id, item):
        return self._run("update", crud.update_inventory_item, item_id, item)

    def update_photo(self, item_id, photo_filename, photo_url):
        return self._run("update photo", crud.update_inventory_item_photo, item_id, photo_filename, photo_url)

    def delete(self, item_id):
        return self._run("delete", crud.delete_inventory_item, item_id)


def create_store(settings: Settings) -> InventoryStore:
    """
    Build the storage backend selected by settings.storage_backend.

    Args:
        settings: Service settings

    Returns:
        InventoryStore: memory or database backed store
    """
    if settings.storage_backend == "database":
        engine = make_engine(settings.database_url, echo=settings.database_echo)
        try:
            session_factory = make_session_factory(engine)
        except SQLAlchemyError as e:
            raise StorageError(f"could not prepare inventory table: {e}") from e
        logger.info("Using database storage backend")
        return SqlInventoryStore(session_factory)
    logger.info("Using in-memory storage backend")
    return MemoryInventoryStore()
