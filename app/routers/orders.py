# app/routers/orders.py
from fastapi import APIRouter, Depends, status

from app.core.auth import AuthUser, require_auth
from app.dependencies import get_cart_store, get_checkout_service
from app.schemas.order import CheckoutCreate, OrderRead
from app.services.cart_store import CartStore
from app.services.checkout_service import CheckoutService

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post(
    "/checkout",
    response_model=OrderRead,
    status_code=status.HTTP_201_CREATED,
)
def checkout(
    payload: CheckoutCreate,
    cart: CartStore = Depends(get_cart_store),
    current_user: AuthUser = Depends(require_auth),
    service: CheckoutService = Depends(get_checkout_service),
):
    """
    Place a cash-on-delivery order from the cart in X-Cart-Token.

    Auth:
      - Signed-in users only.

    The cart is cleared only after the order and its items are stored.
    """
    return service.place_order(cart, current_user, payload)
