# smartcart/schemas/cart.py
from pydantic import ConfigDict
from sqlmodel import SQLModel, Field

from smartcart.schemas.product import ProductRead


class CartItem(SQLModel):
    """
    One line of the local cart.

    - quantity is local only; the remote shopping list has no quantity
    - scanned mirrors `shopping_list.scanned` for rows merged from remote
    - shopping_list_id is the remote row id once known
    """

    product: ProductRead
    quantity: int = Field(ge=1)
    scanned: bool = False
    shopping_list_id: str | None = None


class CartItemCreate(SQLModel):
    """
    Payload for adding to cart.
    """

    model_config = ConfigDict(extra="forbid")

    product_id: str
    quantity: int = Field(default=1, gt=0)


class CartItemUpdate(SQLModel):
    """
    Payload for updating quantity of a cart item.

    0 or less removes the item.
    """

    model_config = ConfigDict(extra="forbid")

    quantity: int


class CartSummary(SQLModel):
    """
    Full cart response model with totals.
    """

    items: list[CartItem]
    total_items: int
    total_price: float
    scanned_items: int = 0
    scanned_total_price: float
    synced: bool = Field(
        default=False,
        description="True while a shopper's remote list is mirrored",
    )
