# app/repositories/order_repo.py
from typing import Any

from supabase import Client


class OrderRepository:
    """
    Data access layer for orders and order_items in Supabase.

    NOTE:
      - The BaaS has no multi-table transaction from the client side.
        Order placement is two inserts; the service undoes the order
        with delete_order() if the items insert fails.
    """

    def __init__(self, client: Client):
        self.client = client

    # ---- Orders ----

    def create_order(self, order: dict[str, Any]) -> dict[str, Any]:
        """
        Insert an order row and return it as stored (id populated).
        """
        resp = self.client.table("orders").insert(order).execute()
        return resp.data[0]

    def delete_order(self, order_id: str) -> None:
        self.client.table("orders").delete().eq("id", order_id).execute()

    # ---- Order items ----

    def create_items(self, items: list[dict[str, Any]]) -> list[dict[str, Any]]:
        resp = self.client.table("order_items").insert(items).execute()
        return resp.data
