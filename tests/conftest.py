"""Shared pytest fixtures: env, cart stores and BaaS fakes."""
from __future__ import annotations

import os

# Settings are read at import time by app modules.
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ["CART_STORAGE_BACKEND"] = "memory"
os.environ.pop("GROQ_API_KEY", None)

from typing import Any

import pytest

from app.core.cart_storage import MemoryCartStorage
from app.core.config import get_settings
from app.schemas.cart import CartLineItemInput
from app.services.cart_store import CartStore

CART_KEY = "sultani-cart:test"


class FakeOrderRepository:
    """In-memory stand-in for the Supabase orders/order_items tables."""

    def __init__(self) -> None:
        self.orders: list[dict[str, Any]] = []
        self.items: list[dict[str, Any]] = []
        self.deleted_order_ids: list[str] = []
        self.fail_order = False
        self.fail_items = False

    def create_order(self, order: dict[str, Any]) -> dict[str, Any]:
        if self.fail_order:
            raise RuntimeError("orders insert rejected")
        row = {
            **order,
            "id": f"order-{len(self.orders) + 1}",
            "created_at": "2026-10-19T10:00:00+00:00",
        }
        self.orders.append(row)
        return row

    def delete_order(self, order_id: str) -> None:
        self.deleted_order_ids.append(order_id)
        self.orders = [o for o in self.orders if o["id"] != order_id]

    def create_items(self, items: list[dict[str, Any]]) -> list[dict[str, Any]]:
        if self.fail_items:
            raise RuntimeError("order_items insert rejected")
        rows = [{**item, "id": f"item-{len(self.items) + i + 1}"} for i, item in enumerate(items)]
        self.items.extend(rows)
        return rows


class FakeProductRepository:
    """Catalog rows keyed by product id."""

    def __init__(self, products: dict[str, dict[str, Any]] | None = None) -> None:
        self.products = products or {}

    def get_by_id(self, product_id: str) -> dict[str, Any] | None:
        return self.products.get(product_id)


def make_product_row(product_id: str = "p1", **overrides: Any) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": product_id,
        "name": "Longi Hi-MO 6 550W",
        "slug": "longi-hi-mo-6-550w",
        "price": 42000,
        "discounted_price": None,
        "is_active": True,
        "images": [
            {"image_url": "https://cdn.example.com/longi-back.jpg", "alt_text": None, "display_order": 2},
            {"image_url": "https://cdn.example.com/longi-front.jpg", "alt_text": None, "display_order": 1},
        ],
        "inventory": [{"quantity": 8}],
    }
    row.update(overrides)
    return row


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def storage() -> MemoryCartStorage:
    return MemoryCartStorage()


@pytest.fixture
def store(storage: MemoryCartStorage) -> CartStore:
    return CartStore(storage, CART_KEY)


@pytest.fixture
def make_item():
    """Factory for add-to-cart payloads with sensible defaults."""

    def _make(product_id: str = "p1", **overrides: Any) -> CartLineItemInput:
        data: dict[str, Any] = {
            "product_id": product_id,
            "name": f"Product {product_id}",
            "slug": f"product-{product_id}",
            "price": 1000,
            "discounted_price": None,
            "image": f"https://cdn.example.com/{product_id}.jpg",
            "max_stock": 5,
        }
        data.update(overrides)
        return CartLineItemInput(**data)

    return _make


@pytest.fixture
def order_repo() -> FakeOrderRepository:
    return FakeOrderRepository()


@pytest.fixture
def product_repo() -> FakeProductRepository:
    return FakeProductRepository({"p1": make_product_row("p1")})


@pytest.fixture
def product_row():
    return make_product_row
