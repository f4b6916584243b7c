# app/models/cart.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class CartSnapshot(SQLModel, table=True):
    """
    Persisted cart for one anonymous cart token.

    The whole line-item list is stored as a single JSON document,
    exactly as the cart store serializes it. One row per storage key.
    """

    __tablename__ = "cart_snapshots"

    key: str = Field(
        primary_key=True,
        max_length=255,
        description="Storage key, e.g. 'sultani-cart:<token>'",
    )

    payload: str = Field(
        description="Serialized cart snapshot (JSON)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last write timestamp (UTC)",
    )
