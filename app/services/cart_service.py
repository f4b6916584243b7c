# app/services/cart_service.py
from app.core.config import Settings
from app.schemas.cart import (
    CartLineItemInput,
    CartLineRead,
    CartQuantityUpdate,
    CartSummary,
)
from app.services.cart_store import CartStore
from app.services.catalog_service import CatalogService
from app.services.delivery import calculate_checkout_totals


class CartService:
    """
    HTTP-facing cart operations.

    Responsibilities:
      - delegate every mutation to the CartStore (which owns the
        merge / clamp / persist rules)
      - build catalog snapshots for add-by-product-id
      - compute line totals, cart totals and the delivery preview
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def get_cart_summary(self, cart: CartStore) -> CartSummary:
        """
        Return full cart summary:
          - list of CartLineRead (with line_total)
          - total_items / total_price
          - delivery cost and grand total preview
        """
        total_price = cart.get_total_price()
        return CartSummary(
            items=[CartLineRead.from_line(line) for line in cart.items],
            total_items=cart.get_total_items(),
            total_price=total_price,
            totals=calculate_checkout_totals(total_price, self.settings),
        )

    def add_item(self, cart: CartStore, payload: CartLineItemInput) -> CartSummary:
        cart.add_item(payload)
        return self.get_cart_summary(cart)

    def add_product(
        self,
        cart: CartStore,
        catalog: CatalogService,
        product_id: str,
        quantity: int = 1,
    ) -> CartSummary:
        """
        Add a catalog product, snapshotting its current price and stock.
        """
        cart.add_item(catalog.get_cart_input(product_id, quantity))
        return self.get_cart_summary(cart)

    def update_quantity(
        self,
        cart: CartStore,
        item_id: str,
        payload: CartQuantityUpdate,
    ) -> CartSummary:
        cart.update_quantity(item_id, payload.quantity)
        return self.get_cart_summary(cart)

    def remove_item(self, cart: CartStore, item_id: str) -> CartSummary:
        cart.remove_item(item_id)
        return self.get_cart_summary(cart)

    def clear_cart(self, cart: CartStore) -> CartSummary:
        cart.clear_cart()
        return self.get_cart_summary(cart)
