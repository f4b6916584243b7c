# app/repositories/product_repo.py
from typing import Any

from supabase import Client

PRODUCT_CART_COLUMNS = """
    id, name, slug, price, discounted_price, is_active,
    images:product_images(image_url, alt_text, display_order),
    inventory(quantity)
"""


class ProductRepository:
    """
    Read-only access to catalog products in Supabase.

    - Pure data access, returns raw rows (dicts).
    - No FastAPI, no business logic.
    """

    def __init__(self, client: Client):
        self.client = client

    def get_by_id(self, product_id: str) -> dict[str, Any] | None:
        resp = (
            self.client.table("products")
            .select(PRODUCT_CART_COLUMNS)
            .eq("id", product_id)
            .eq("is_active", True)
            .limit(1)
            .execute()
        )
        rows = resp.data or []
        return rows[0] if rows else None
