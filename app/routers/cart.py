# app/routers/cart.py
from fastapi import APIRouter, Depends, Query

from app.core.config import get_settings
from app.dependencies import get_cart_store, get_catalog_service
from app.schemas.cart import CartLineItemInput, CartQuantityUpdate, CartSummary
from app.services.cart_service import CartService
from app.services.cart_store import CartStore
from app.services.catalog_service import CatalogService

router = APIRouter(prefix="/cart", tags=["Cart"])

service = CartService(get_settings())


@router.get("", response_model=CartSummary)
def get_cart(cart: CartStore = Depends(get_cart_store)):
    """
    Get the cart for the X-Cart-Token header.

    Auth:
      - None. Carts are anonymous and owned by the client token.
    """
    return service.get_cart_summary(cart)


@router.post("/items", response_model=CartSummary)
def add_item(
    payload: CartLineItemInput,
    cart: CartStore = Depends(get_cart_store),
):
    """
    Add a product snapshot to the cart.

    Adding a product already in the cart increases its quantity.
    Quantities above maxStock are clamped, not rejected.
    """
    return service.add_item(cart, payload)


@router.post("/products/{product_id}", response_model=CartSummary)
def add_product(
    product_id: str,
    quantity: int = Query(default=1),
    cart: CartStore = Depends(get_cart_store),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """
    Add a catalog product by id; price/image/stock are read now and
    snapshotted into the cart.
    """
    return service.add_product(cart, catalog, product_id, quantity)


@router.patch("/items/{item_id}", response_model=CartSummary)
def update_cart_item(
    item_id: str,
    payload: CartQuantityUpdate,
    cart: CartStore = Depends(get_cart_store),
):
    """
    Set the quantity of a line.

    quantity <= 0 removes the line; unknown ids are ignored.
    """
    return service.update_quantity(cart, item_id, payload)


@router.delete("/items/{item_id}", response_model=CartSummary)
def remove_cart_item(
    item_id: str,
    cart: CartStore = Depends(get_cart_store),
):
    """
    Remove a line from the cart (no-op if absent).
    """
    return service.remove_item(cart, item_id)


@router.delete("", response_model=CartSummary)
def clear_cart(cart: CartStore = Depends(get_cart_store)):
    """
    Clear the entire cart.

    Returns an empty cart summary.
    """
    return service.clear_cart(cart)
