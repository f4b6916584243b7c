# app/core/cart_storage.py
"""
Persistence backends for cart snapshots.

A backend stores opaque serialized snapshots under string keys, the
way the storefront keeps its cart in browser local storage. The cart
store owns the format; backends never parse payloads.

Backends:
  - MemoryCartStorage   : process-local dict (tests, fallback)
  - FileCartStorage     : one JSON file per key in a directory
  - DatabaseCartStorage : cart_snapshots table via SQLModel
"""
from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from sqlalchemy.engine import Engine
from sqlmodel import Session

from app.core.config import Settings
from app.models.cart import CartSnapshot

logger = logging.getLogger(__name__)


class CartStorage(Protocol):
    def load(self, key: str) -> str | None: ...

    def save(self, key: str, payload: str) -> None: ...


class MemoryCartStorage:
    """Dict-backed storage. Contents die with the process."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def load(self, key: str) -> str | None:
        return self._data.get(key)

    def save(self, key: str, payload: str) -> None:
        self._data[key] = payload


class FileCartStorage:
    """
    One file per key under `directory`.

    Keys are sanitized into file names: anything outside
    [A-Za-z0-9._-] becomes '_' (e.g. 'sultani-cart:abc' ->
    'sultani-cart_abc.json').
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    @staticmethod
    def _filename(key: str) -> str:
        return re.sub(r"[^A-Za-z0-9._-]", "_", key) + ".json"

    def _path(self, key: str) -> Path:
        return self.directory / self._filename(key)

    def load(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def save(self, key: str, payload: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        # write-then-rename so readers never see a half-written file
        tmp = path.with_suffix(".tmp")
        tmp.write_text(payload, encoding="utf-8")
        tmp.replace(path)


class DatabaseCartStorage:
    """
    Snapshots in the cart_snapshots table.

    Opens a short-lived session per call; every write commits.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def load(self, key: str) -> str | None:
        with Session(self.engine) as session:
            row = session.get(CartSnapshot, key)
            return row.payload if row else None

    def save(self, key: str, payload: str) -> None:
        with Session(self.engine) as session:
            row = session.get(CartSnapshot, key)
            if row is None:
                row = CartSnapshot(key=key, payload=payload)
            else:
                row.payload = payload
                row.updated_at = datetime.now(timezone.utc)
            session.add(row)
            session.commit()


def build_cart_storage(settings: Settings) -> CartStorage:
    """
    Pick the storage backend from CART_STORAGE_BACKEND.
    """
    backend = settings.CART_STORAGE_BACKEND

    if backend == "memory":
        logger.warning("Cart storage is in-memory; carts are lost on restart")
        return MemoryCartStorage()

    if backend == "database":
        from app.database import engine

        return DatabaseCartStorage(engine)

    return FileCartStorage(settings.CART_STORAGE_DIR)
