# app/services/catalog_service.py
from typing import Any

from fastapi import HTTPException, status

from app.repositories.product_repo import ProductRepository
from app.schemas.cart import CartLineItemInput

PLACEHOLDER_IMAGE = "/placeholder.jpg"

# Used when a product row carries no inventory record
DEFAULT_MAX_STOCK = 100


def _first_image_url(product: dict[str, Any]) -> str:
    images = product.get("images") or []
    images = sorted(images, key=lambda img: img.get("display_order") or 0)
    for img in images:
        if img.get("image_url"):
            return img["image_url"]
    return PLACEHOLDER_IMAGE


def _stock_quantity(product: dict[str, Any]) -> int | None:
    """
    Inventory comes back as a list (one-to-many embed) or a single
    object (one-to-one embed) depending on the FK definition.
    """
    inventory = product.get("inventory")
    if isinstance(inventory, list):
        inventory = inventory[0] if inventory else None
    if not inventory:
        return None
    return inventory.get("quantity")


def line_item_from_product(product: dict[str, Any], quantity: int = 1) -> CartLineItemInput:
    """
    Snapshot a catalog product row into an add-to-cart payload.

    Price, image and stock are copied now and never re-read by the cart.
    """
    stock = _stock_quantity(product)
    return CartLineItemInput(
        id=str(product["id"]),
        product_id=str(product["id"]),
        name=product["name"],
        slug=product["slug"],
        price=product["price"],
        discounted_price=product.get("discounted_price"),
        image=_first_image_url(product),
        max_stock=DEFAULT_MAX_STOCK if stock is None else stock,
        quantity=quantity,
    )


class CatalogService:
    """
    Builds cart inputs from live catalog rows.

    Responsibilities:
      - product must exist and be active
      - out-of-stock products never reach the cart store
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    def get_cart_input(self, product_id: str, quantity: int = 1) -> CartLineItemInput:
        product = self.repo.get_by_id(product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )

        stock = _stock_quantity(product)
        if stock is not None and stock < 1:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Product is out of stock",
            )

        return line_item_from_product(product, quantity)
