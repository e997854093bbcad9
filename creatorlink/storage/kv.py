"""Key-value store backends used for draft persistence."""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from creatorlink.core.config import Config, get_config
from creatorlink.core.exceptions import StorageError
from creatorlink.database.db import get_session_factory, init_db
from creatorlink.database.models import KeyValueEntry

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """Process-local store; contents are lost on restart."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self._lock = Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._data


class NamespacedKeyValueStore:
    """View of another store where every key is prefixed with ``namespace``.

    Used to give each authenticated caller a private slice of the shared
    draft store while keeping the plain key format inside the slice.
    """

    def __init__(self, store: KeyValueStore, namespace: str) -> None:
        if not namespace:
            raise ValueError("namespace must not be empty")
        self._store = store
        self.namespace = namespace

    def scoped_key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get(self, key: str) -> str | None:
        return self._store.get(self.scoped_key(key))

    def set(self, key: str, value: str) -> None:
        self._store.set(self.scoped_key(key), value)

    def delete(self, key: str) -> None:
        self._store.delete(self.scoped_key(key))


def owner_namespace(owner_id: str | int) -> str:
    return f"user_{owner_id}"


class SqlKeyValueStore:
    """Store backed by the `kv_entries` table.

    Every operation runs in its own short-lived session so the store can be
    shared between request handlers and the auto-save timer thread.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def get(self, key: str) -> str | None:
        session = self._session_factory()
        try:
            entry = session.get(KeyValueEntry, key)
            return entry.value if entry is not None else None
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to read key {key!r}.") from exc
        finally:
            session.close()

    def set(self, key: str, value: str) -> None:
        session = self._session_factory()
        try:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                session.add(KeyValueEntry(key=key, value=value))
            else:
                entry.value = value
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageError(f"Failed to write key {key!r}.") from exc
        finally:
            session.close()

    def delete(self, key: str) -> None:
        session = self._session_factory()
        try:
            entry = session.get(KeyValueEntry, key)
            if entry is not None:
                session.delete(entry)
                session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageError(f"Failed to delete key {key!r}.") from exc
        finally:
            session.close()


def build_store(config: Config | None = None) -> KeyValueStore:
    """Create the store selected by DRAFT_STORE_BACKEND."""
    cfg = config or get_config()
    if cfg.DRAFT_STORE_BACKEND == "database":
        init_db()
        return SqlKeyValueStore(get_session_factory())
    logger.info("storage.backend.memory", extra={"event": "storage.backend.memory"})
    return MemoryKeyValueStore()
