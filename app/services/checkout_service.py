# app/services/checkout_service.py
import logging
import secrets
import string
import time
from typing import Any

from fastapi import HTTPException, status

from app.core.auth import AuthUser
from app.core.config import Settings
from app.repositories.order_repo import OrderRepository
from app.schemas.order import CheckoutCreate, OrderItemRead, OrderRead
from app.services.cart_store import CartStore
from app.services.delivery import calculate_checkout_totals

logger = logging.getLogger(__name__)

ORDER_NUMBER_PREFIX = "SE"
ORDER_NUMBER_ALPHABET = string.ascii_uppercase + string.digits


def generate_order_number() -> str:
    """
    Human-facing order number: SE-<epoch ms>-<6 random chars>.
    """
    suffix = "".join(secrets.choice(ORDER_NUMBER_ALPHABET) for _ in range(6))
    return f"{ORDER_NUMBER_PREFIX}-{int(time.time() * 1000)}-{suffix}"


class CheckoutService:
    """
    Cash-on-delivery order placement.

    Responsibilities:
      - compute subtotal / delivery / total from the cart
      - write the order, then its items (1:1 from cart lines)
      - undo the order if the items write fails
      - clear the cart only after both writes succeeded
    """

    def __init__(self, order_repo: OrderRepository, settings: Settings):
        self.order_repo = order_repo
        self.settings = settings

    def place_order(
        self,
        cart: CartStore,
        user: AuthUser,
        payload: CheckoutCreate,
    ) -> OrderRead:
        """
        Convert the cart into an order.

        Steps:
          1. Reject an empty cart.
          2. Compute totals with the shared delivery policy.
          3. Insert the order row (status='pending').
          4. Insert order_items; on failure delete the order.
          5. Clear the cart.

        Any failure before step 5 leaves the cart untouched so the
        shopper can retry.
        """
        # 1) Load cart
        lines = cart.items
        if not lines:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cart is empty",
            )

        # 2) Totals
        totals = calculate_checkout_totals(cart.get_total_price(), self.settings)

        # 3) Create the order
        order_data: dict[str, Any] = {
            "user_id": user.id,
            "order_number": generate_order_number(),
            "status": "pending",
            "subtotal": totals.subtotal,
            "delivery_cost": totals.delivery_cost,
            "total": totals.total,
            "delivery_address_id": payload.address_id,
            "customer_name": payload.customer_name,
            "customer_email": payload.customer_email,
            "customer_phone": payload.customer_phone,
            "notes": payload.notes,
        }
        try:
            order = self.order_repo.create_order(order_data)
        except Exception as exc:
            logger.error("Order insert failed for user %s: %s", user.id, exc)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to create order",
            ) from exc

        # 4) Create order items (unit_price = effective price)
        item_rows = [
            {
                "order_id": order["id"],
                "product_id": line.product_id,
                "product_name": line.name,
                "product_sku": line.slug,
                "quantity": line.quantity,
                "unit_price": line.effective_unit_price,
                "total_price": line.line_total,
            }
            for line in lines
        ]
        try:
            saved_items = self.order_repo.create_items(item_rows)
        except Exception as exc:
            logger.error("Order items insert failed for order %s: %s", order["id"], exc)
            self._rollback_order(order["id"])
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to create order items",
            ) from exc

        # 5) Both writes are durable: now the cart can go
        cart.clear_cart()
        logger.info("Order %s placed by user %s", order["order_number"], user.id)

        return OrderRead(
            **{**order_data, **order},
            items=[OrderItemRead(**row) for row in (saved_items or item_rows)],
        )

    def _rollback_order(self, order_id: str) -> None:
        try:
            self.order_repo.delete_order(order_id)
        except Exception as exc:
            logger.error("Could not roll back order %s: %s", order_id, exc)
