"""
Key-value persistence for the named inventory collections.

Each collection is written whole (no merge) and read back as plain JSON data.
Writes are published on a ChangeChannel so that other stores sharing the
channel can refresh their in-memory state. Notifications are advisory only:
the last writer wins.
"""

from __future__ import annotations

import json
import logging
import threading
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy.orm import sessionmaker

from .collection import StoredCollection
from .database import session_maker

logger = logging.getLogger(__name__)

STOCK_ITEMS = "stockItems"
STOCK_TRANSACTIONS = "stockTransactions"
MEASURING_UNITS = "measuringUnits"
STOCK_GROUPS = "stockGroups"
LEGACY_STOCK_GROUPS = "stockGroupsData"
SUPPLIERS = "suppliers"
SIDEBAR_COLLAPSED = "sidebarCollapsed"

ChangeListener = Callable[[str, Any], None]

# Held around every load -> mutate -> write sequence. Collections are rewritten
# whole, so two unserialized writers would drop each other's records.
write_lock = threading.RLock()


class ChangeChannel:
    """In-process broadcast of collection writes, tagged with the writer's origin."""

    def __init__(self) -> None:
        self._listeners: List[Tuple[str, ChangeListener]] = []

    def listen(self, origin: str, callback: ChangeListener) -> None:
        self._listeners.append((origin, callback))

    def unlisten(self, origin: str, callback: ChangeListener) -> None:
        self._listeners = [
            (o, cb) for (o, cb) in self._listeners if not (o == origin and cb == callback)
        ]

    def publish(self, origin: str, key: str, value: Any) -> None:
        for listener_origin, callback in list(self._listeners):
            # a writer never hears about its own writes
            if listener_origin == origin:
                continue
            callback(key, value)


default_channel = ChangeChannel()


class CollectionStore:
    def __init__(
        self,
        session_factory: sessionmaker = session_maker,
        channel: Optional[ChangeChannel] = None,
        origin: Optional[str] = None,
    ) -> None:
        self._session_factory = session_factory
        self.channel = channel if channel is not None else default_channel
        self.origin = origin or uuid.uuid4().hex

    def read(self, key: str, default: Any = None) -> Any:
        """Return the stored value for ``key``, or ``default`` if absent or unreadable."""
        with self._session_factory() as db:
            row: Optional[StoredCollection] = db.get(StoredCollection, key)
            raw = row.value if row is not None else None
        if raw is None:
            return default
        try:
            value = json.loads(raw)
        except ValueError:
            logger.warning("Stored collection %r is not valid JSON; falling back to default", key)
            return default
        if default is not None and not isinstance(value, type(default)):
            logger.warning(
                "Stored collection %r holds %s, expected %s; falling back to default",
                key, type(value).__name__, type(default).__name__,
            )
            return default
        return value

    def write(self, key: str, value: Any) -> None:
        """Replace the whole collection stored under ``key``."""
        payload = json.dumps(value, ensure_ascii=False)
        with self._session_factory() as db:
            db.merge(StoredCollection(key=key, value=payload, updated_at=datetime.now()))
            db.commit()
        self.channel.publish(self.origin, key, value)

    def keys(self) -> List[str]:
        with self._session_factory() as db:
            return [row.key for row in db.query(StoredCollection).order_by(StoredCollection.key).all()]

    def subscribe(self, callback: ChangeListener) -> None:
        """Be told about writes that other stores on the same channel make."""
        self.channel.listen(self.origin, callback)

    def unsubscribe(self, callback: ChangeListener) -> None:
        self.channel.unlisten(self.origin, callback)


_store: Optional[CollectionStore] = None


def get_store() -> CollectionStore:
    """FastAPI dependency returning the process-wide store."""
    global _store
    if _store is None:
        _store = CollectionStore()
    return _store


def snapshot(store: CollectionStore, keys: List[str]) -> Dict[str, Any]:
    return {key: store.read(key) for key in keys}
