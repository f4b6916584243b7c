# app/routers/delivery.py
from fastapi import APIRouter, Query

from app.core.config import get_settings
from app.schemas.delivery import DeliveryQuote
from app.services.delivery import available_cities, quote_delivery

router = APIRouter(prefix="/delivery", tags=["Delivery"])

settings = get_settings()


@router.get("/cities", response_model=list[str])
def list_cities():
    """
    Cities with a known delivery rate (public).
    """
    return available_cities()


@router.get("/quote", response_model=DeliveryQuote)
def get_quote(
    city: str = Query(min_length=1),
    order_total: float = Query(ge=0),
    total_weight: float = Query(default=0, ge=0),
):
    """
    Delivery quote for a city and order total (public).
    """
    return quote_delivery(city, order_total, settings, total_weight=total_weight)
