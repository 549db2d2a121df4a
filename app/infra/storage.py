from __future__ import annotations

from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from .db import SessionLocal
from .models import StorageEntryModel


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


class SqlKeyValueStorage:
    """String-keyed durable storage backed by the ``storage_entries`` table.

    Writes are last-writer-wins; each call runs in its own session.
    """

    def __init__(self, session_factory: sessionmaker | None = None) -> None:
        self._session_factory = session_factory or SessionLocal

    def get_item(self, key: str) -> str | None:
        with self._session_factory() as session:
            return session.scalar(select(StorageEntryModel.value).where(StorageEntryModel.key == key))

    def set_item(self, key: str, value: str) -> None:
        with self._session_factory() as session:
            entry = session.get(StorageEntryModel, key)
            if entry is None:
                session.add(StorageEntryModel(key=key, value=value))
            else:
                entry.value = value
            session.commit()
