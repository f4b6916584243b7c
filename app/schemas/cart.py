# app/schemas/cart.py
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator
from pydantic.alias_generators import to_camel


class CartModel(BaseModel):
    """
    Base for cart payloads.

    Cart data travels in the same camelCase shape the storefront keeps
    in its persisted cart ("productId", "maxStock", ...). Snake_case
    names are accepted on input too.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class CartLineItemInput(CartModel):
    """
    Payload for adding a product to the cart.

    - id is optional; when sent it must equal product_id (one line per
      product, lines are addressed by id)
    - quantity is the amount to add, defaults to 1; it is clamped into
      [1, max_stock], never rejected
    - price/stock are snapshots taken by the caller at add time
    """

    id: str | None = None
    product_id: str = Field(min_length=1)
    name: str
    slug: str
    price: float = Field(ge=0)
    discounted_price: float | None = Field(default=None, ge=0)
    image: str = "/placeholder.jpg"
    max_stock: int = Field(ge=1)
    quantity: int = 1

    @model_validator(mode="after")
    def id_matches_product(self) -> "CartLineItemInput":
        if self.id is not None and self.id != self.product_id:
            raise ValueError("id must equal productId")
        return self


class CartLineItem(CartModel):
    """
    One product line in the cart.

    Immutable snapshot: name, price, image and max_stock are captured
    when the product is added and never re-read from the catalog.

    Invariant: 1 <= quantity <= max_stock (clamped on construction).
    """

    model_config = ConfigDict(frozen=True)

    id: str
    product_id: str
    name: str
    slug: str
    price: float = Field(ge=0)
    discounted_price: float | None = None
    image: str
    # declared before quantity so the quantity validator can see it
    max_stock: int = Field(ge=1)
    quantity: int

    @field_validator("quantity")
    @classmethod
    def clamp_quantity(cls, v: int, info: ValidationInfo) -> int:
        max_stock = info.data.get("max_stock")
        if max_stock is None:
            return max(v, 1)
        return max(1, min(v, max_stock))

    @property
    def effective_unit_price(self) -> float:
        """Discounted price when set (and non-zero), else the regular price."""
        return self.discounted_price or self.price

    @property
    def line_total(self) -> float:
        return self.effective_unit_price * self.quantity


class CartQuantityUpdate(CartModel):
    """
    Payload for setting the absolute quantity of a line.
    Zero or negative removes the line.
    """

    quantity: int


class CartLineRead(CartModel):
    """
    Read model for a single cart line, including line_total.
    """

    id: str
    product_id: str
    name: str
    slug: str
    price: float
    discounted_price: float | None = None
    image: str
    max_stock: int
    quantity: int
    effective_unit_price: float
    line_total: float

    @classmethod
    def from_line(cls, line: CartLineItem) -> "CartLineRead":
        return cls(
            **line.model_dump(),
            effective_unit_price=line.effective_unit_price,
            line_total=line.line_total,
        )


class CheckoutTotals(CartModel):
    """
    Subtotal + delivery breakdown shown on the cart and checkout pages.
    """

    subtotal: float
    delivery_cost: float
    total: float
    is_free_delivery: bool
    free_delivery_threshold: float
    amount_to_free_delivery: float


class CartSummary(CartModel):
    """
    Full cart response model with totals.
    """

    items: list[CartLineRead]
    total_items: int
    total_price: float
    totals: CheckoutTotals
