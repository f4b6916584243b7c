# app/services/delivery.py
import math

from app.core.config import Settings
from app.schemas.cart import CheckoutTotals
from app.schemas.delivery import DeliveryBreakdown, DeliveryQuote

# Base delivery cost per city (PKR)
DELIVERY_LOCATIONS: dict[str, float] = {
    "Karachi": 200,
    "Lahore": 250,
    "Islamabad": 300,
    "Rawalpindi": 300,
    "Faisalabad": 350,
    "Multan": 400,
    "Peshawar": 450,
    "Quetta": 600,
    "Sialkot": 350,
    "Gujranwala": 300,
}

# Cities outside the table
DEFAULT_CITY_COST = 500

# Heavy orders: every started kg above the free allowance is charged
FREE_WEIGHT_KG = 10
WEIGHT_COST_PER_KG = 50

MAJOR_CITIES = {"Karachi", "Lahore", "Islamabad", "Rawalpindi"}


def calculate_checkout_totals(subtotal: float, settings: Settings) -> CheckoutTotals:
    """
    Delivery cost and grand total for a cart subtotal.

        delivery_cost = 0 if subtotal >= FREE_DELIVERY_THRESHOLD
                        else STANDARD_DELIVERY_FEE
        total         = subtotal + delivery_cost

    Cart page, checkout page and order placement all go through here
    so the numbers shown and the numbers charged agree.
    """
    threshold = settings.FREE_DELIVERY_THRESHOLD
    is_free = subtotal >= threshold
    delivery_cost = 0.0 if is_free else float(settings.STANDARD_DELIVERY_FEE)

    return CheckoutTotals(
        subtotal=subtotal,
        delivery_cost=delivery_cost,
        total=subtotal + delivery_cost,
        is_free_delivery=is_free,
        free_delivery_threshold=threshold,
        amount_to_free_delivery=max(0.0, threshold - subtotal),
    )


def quote_delivery(
    city: str,
    order_total: float,
    settings: Settings,
    total_weight: float = 0,
) -> DeliveryQuote:
    """
    City-based delivery quote.

    Rules:
      - free at or above FREE_DELIVERY_THRESHOLD
      - otherwise city base cost (case-insensitive, DEFAULT_CITY_COST
        for unlisted cities) + WEIGHT_COST_PER_KG per started kg above
        FREE_WEIGHT_KG
    """
    if order_total >= settings.FREE_DELIVERY_THRESHOLD:
        return DeliveryQuote(
            city=city,
            cost=0,
            is_free=True,
            breakdown=DeliveryBreakdown(base_cost=0, weight_cost=0, discount=0),
            estimate=delivery_estimate(city),
        )

    base_cost = _city_base_cost(city)

    weight_cost = 0.0
    if total_weight > FREE_WEIGHT_KG:
        weight_cost = math.ceil(total_weight - FREE_WEIGHT_KG) * WEIGHT_COST_PER_KG

    return DeliveryQuote(
        city=city,
        cost=base_cost + weight_cost,
        is_free=False,
        breakdown=DeliveryBreakdown(
            base_cost=base_cost,
            weight_cost=weight_cost,
            discount=0,
        ),
        estimate=delivery_estimate(city),
    )


def _city_base_cost(city: str) -> float:
    wanted = city.strip().lower()
    for name, cost in DELIVERY_LOCATIONS.items():
        if name.lower() == wanted:
            return cost
    return DEFAULT_CITY_COST


def available_cities() -> list[str]:
    return list(DELIVERY_LOCATIONS)


def delivery_estimate(city: str) -> str:
    if city.strip().title() in MAJOR_CITIES:
        return "2-3 business days"
    return "3-5 business days"
