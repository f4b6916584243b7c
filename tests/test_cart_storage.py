from __future__ import annotations

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from app.core.cart_storage import (
    DatabaseCartStorage,
    FileCartStorage,
    MemoryCartStorage,
    build_cart_storage,
)
from app.services.cart_store import CartStore


@pytest.fixture
def sqlite_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


def test_file_storage_missing_key_loads_none(tmp_path) -> None:
    assert FileCartStorage(tmp_path).load("sultani-cart:nope") is None


def test_file_storage_round_trip_and_file_name(tmp_path) -> None:
    storage = FileCartStorage(tmp_path / "carts")

    storage.save("sultani-cart:abc123", '{"state": {"items": []}, "version": 0}')

    assert (tmp_path / "carts" / "sultani-cart_abc123.json").exists()
    assert storage.load("sultani-cart:abc123") == '{"state": {"items": []}, "version": 0}'


def test_file_storage_key_cannot_escape_directory(tmp_path) -> None:
    storage = FileCartStorage(tmp_path / "carts")

    storage.save("../../etc/passwd", "x")

    assert [p.name for p in (tmp_path / "carts").iterdir()] == [".._.._etc_passwd.json"]


def test_file_storage_overwrite(tmp_path) -> None:
    storage = FileCartStorage(tmp_path)
    storage.save("k", "first")
    storage.save("k", "second")

    assert storage.load("k") == "second"
    assert [p.name for p in tmp_path.iterdir()] == ["k.json"]


def test_database_storage_round_trip(sqlite_engine) -> None:
    storage = DatabaseCartStorage(sqlite_engine)
    assert storage.load("sultani-cart:t1") is None

    storage.save("sultani-cart:t1", "one")
    storage.save("sultani-cart:t1", "two")
    storage.save("sultani-cart:t2", "other")

    assert storage.load("sultani-cart:t1") == "two"
    assert storage.load("sultani-cart:t2") == "other"


@pytest.mark.parametrize("backend", ["file", "database"])
def test_cart_survives_restart_on_persistent_backends(backend, tmp_path, sqlite_engine, make_item) -> None:
    if backend == "file":
        storage = FileCartStorage(tmp_path)
    else:
        storage = DatabaseCartStorage(sqlite_engine)

    cart = CartStore(storage, "sultani-cart:restart")
    cart.add_item(make_item("p1", price=1000, quantity=2))
    cart.add_item(make_item("p2", price=2000, discounted_price=1500))

    reloaded = CartStore(storage, "sultani-cart:restart")

    assert reloaded.items == cart.items
    assert reloaded.get_total_price() == 3500


def test_build_cart_storage_selects_backend(settings, tmp_path) -> None:
    memory = build_cart_storage(settings.model_copy(update={"CART_STORAGE_BACKEND": "memory"}))
    assert isinstance(memory, MemoryCartStorage)

    file_backend = build_cart_storage(
        settings.model_copy(update={"CART_STORAGE_BACKEND": "file", "CART_STORAGE_DIR": str(tmp_path)})
    )
    assert isinstance(file_backend, FileCartStorage)
    assert file_backend.directory == tmp_path

    db_backend = build_cart_storage(settings.model_copy(update={"CART_STORAGE_BACKEND": "database"}))
    assert isinstance(db_backend, DatabaseCartStorage)
