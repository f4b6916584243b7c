# app/schemas/order.py
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, EmailStr, field_validator
from sqlmodel import SQLModel

OrderStatus = Literal[
    "pending",
    "confirmed",
    "processing",
    "dispatched",
    "delivered",
    "cancelled",
]


class CheckoutCreate(SQLModel):
    """
    Payload for placing a cash-on-delivery order from the current cart.

    User provides:
      - customer name / email / phone
      - saved delivery address id (optional)
      - notes (optional)

    Backend derives:
      - user_id from token
      - order_number, status = 'pending'
      - subtotal, delivery_cost, total from the cart
      - items from the cart
    """

    model_config = ConfigDict(extra="forbid")

    customer_name: str
    customer_email: EmailStr
    customer_phone: str
    address_id: str | None = None
    notes: str | None = None

    @field_validator("customer_name", "customer_phone")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v

    @field_validator("address_id", "notes")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class OrderItemRead(SQLModel):
    """
    Representation of a single order line item.
    """

    id: str | None = None
    order_id: str
    product_id: str
    product_name: str
    product_sku: str
    quantity: int
    unit_price: float
    total_price: float


class OrderRead(SQLModel):
    """
    Placed order including its items.
    """

    id: str
    order_number: str
    user_id: str
    status: OrderStatus
    subtotal: float
    delivery_cost: float
    total: float
    delivery_address_id: str | None
    customer_name: str
    customer_email: str
    customer_phone: str
    notes: str | None
    created_at: datetime | None = None
    items: list[OrderItemRead]
