# smartcart/models/cart.py
import uuid

from sqlmodel import SQLModel, Field


class ShoppingListItem(SQLModel, table=True):
    """
    Remote shopping list entry for a shopper (Supabase `shopping_list`).

    One shopper should not have 2 rows for the same product.
    There is no quantity: the row only records presence and whether the
    physical cart has scanned the product.
    """

    __tablename__ = "shopping_list"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
        index=True,
    )

    shopper_id: str = Field(
        foreign_key="shoppers.id",
        index=True,
    )

    product_id: int = Field(
        foreign_key="products.id",
        index=True,
    )

    scanned: bool = Field(
        default=False,
        description="Set by the RFID cart when the product is scanned",
    )
