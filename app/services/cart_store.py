# app/services/cart_store.py
import json
import logging

from pydantic import ValidationError

from app.core.cart_storage import CartStorage
from app.schemas.cart import CartLineItem, CartLineItemInput

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 0


class CartStore:
    """
    Client-owned shopping cart with write-through persistence.

    Responsibilities:
      - one line per product (adding again increments quantity)
      - keep every quantity within [1, max_stock] by clamping
      - derive total item count and total price
      - rehydrate from storage once, write the full snapshot after
        every mutation

    The store never raises for over-limit quantities or unknown line
    ids, and storage failures never unwind an in-memory mutation.
    """

    def __init__(self, storage: CartStorage, key: str):
        self.storage = storage
        self.key = key
        self._items: list[CartLineItem] = self._rehydrate()

    # ---- read side ----

    @property
    def items(self) -> tuple[CartLineItem, ...]:
        return tuple(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def get_item(self, item_id: str) -> CartLineItem | None:
        for line in self._items:
            if line.id == item_id:
                return line
        return None

    def get_total_items(self) -> int:
        return sum(line.quantity for line in self._items)

    def get_total_price(self) -> float:
        return sum((line.line_total for line in self._items), 0.0)

    # ---- mutations ----

    def add_item(self, item: CartLineItemInput) -> None:
        """
        Insert a line, or increment the existing line for the same product.

        The requested amount counts as at least 1, so adding never lowers
        a line. The increment is clamped to the stored line's max_stock;
        a new line starts at the requested amount clamped to [1, max_stock].
        The line id is always the product id.
        """
        requested = max(1, item.quantity)
        for idx, line in enumerate(self._items):
            if line.product_id == item.product_id:
                quantity = min(line.quantity + requested, line.max_stock)
                self._items[idx] = line.model_copy(update={"quantity": quantity})
                break
        else:
            self._items.append(
                CartLineItem(
                    id=item.product_id,
                    product_id=item.product_id,
                    name=item.name,
                    slug=item.slug,
                    price=item.price,
                    discounted_price=item.discounted_price,
                    image=item.image,
                    max_stock=item.max_stock,
                    quantity=requested,
                )
            )
        self._persist()

    def update_quantity(self, item_id: str, quantity: int) -> None:
        """
        Set the absolute quantity of a line.

        quantity <= 0 removes the line; anything above max_stock is
        clamped. Unknown ids are ignored.
        """
        if quantity <= 0:
            self.remove_item(item_id)
            return

        for idx, line in enumerate(self._items):
            if line.id == item_id:
                self._items[idx] = line.model_copy(
                    update={"quantity": min(quantity, line.max_stock)}
                )
                break
        self._persist()

    def remove_item(self, item_id: str) -> None:
        self._items = [line for line in self._items if line.id != item_id]
        self._persist()

    def clear_cart(self) -> None:
        """
        Empty the cart.

        Call only after the order and its items are durably recorded;
        the cleared lines cannot be recovered.
        """
        self._items = []
        self._persist()

    # ---- persistence ----

    def snapshot(self) -> str:
        return json.dumps(
            {
                "state": {
                    "items": [line.model_dump(by_alias=True) for line in self._items]
                },
                "version": SNAPSHOT_VERSION,
            }
        )

    def _persist(self) -> None:
        try:
            self.storage.save(self.key, self.snapshot())
        except Exception as exc:
            logger.warning("Cart %s not persisted, keeping in-memory state: %s", self.key, exc)

    def _rehydrate(self) -> list[CartLineItem]:
        try:
            raw = self.storage.load(self.key)
        except Exception as exc:
            logger.warning("Cart %s could not be loaded, starting empty: %s", self.key, exc)
            return []

        if not raw:
            return []

        try:
            return parse_snapshot(raw)
        except (ValueError, TypeError, KeyError, ValidationError) as exc:
            logger.warning("Malformed cart snapshot for %s, starting empty: %s", self.key, exc)
            return []


def parse_snapshot(raw: str) -> list[CartLineItem]:
    """
    Decode a persisted snapshot into normalized cart lines.

    Accepts the {"state": {"items": [...]}, "version": N} envelope or a
    bare list of lines. Lines for the same product are merged and
    quantities clamped to [1, max_stock]. Each line's id is reset to its
    product id.

    Raises:
        ValueError / TypeError / KeyError / ValidationError if the
        payload is not a cart snapshot.
    """
    data = json.loads(raw)
    if isinstance(data, dict):
        data = data["state"]["items"]
    if not isinstance(data, list):
        raise TypeError("cart snapshot items must be a list")

    merged: dict[str, CartLineItem] = {}
    for entry in data:
        line = CartLineItem.model_validate(entry)
        if line.id != line.product_id:
            line = line.model_copy(update={"id": line.product_id})
        existing = merged.get(line.product_id)
        if existing is None:
            merged[line.product_id] = line
        else:
            quantity = min(existing.quantity + line.quantity, existing.max_stock)
            merged[line.product_id] = existing.model_copy(update={"quantity": quantity})
    return list(merged.values())
