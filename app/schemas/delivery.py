# app/schemas/delivery.py
from sqlmodel import SQLModel


class DeliveryBreakdown(SQLModel):
    """
    How a delivery cost was composed.
    """

    base_cost: float
    weight_cost: float
    discount: float


class DeliveryQuote(SQLModel):
    """
    City-based delivery quote for an order total.
    """

    city: str
    cost: float
    is_free: bool
    breakdown: DeliveryBreakdown
    estimate: str
