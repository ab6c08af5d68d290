# smartcart/models/product.py
from sqlalchemy import Column, Float, Integer, String
from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Remote product row (Supabase `products` table).

    The table keeps the column names of the store's original spreadsheet
    import ("Product", "Price", ...), so attributes map onto them explicitly.

    Shape on the wire:
      - id, "Product", "Price", "Category", "Subcategory",
        "Stock", "Aisle", image_url

    The id doubles as the barcode for remotely sourced products.
    """

    __tablename__ = "products"

    id: int | None = Field(
        default=None,
        primary_key=True,
        description="Numeric product id / barcode",
    )

    name: str = Field(
        sa_column=Column("Product", String, nullable=False),
        description="Display name",
    )

    price: float = Field(
        sa_column=Column("Price", Float, nullable=False),
        description="Unit price (TND)",
    )

    category: str = Field(
        sa_column=Column("Category", String, nullable=False),
    )

    subcategory: str = Field(
        sa_column=Column("Subcategory", String, nullable=False),
    )

    stock: int = Field(
        sa_column=Column("Stock", Integer, nullable=False),
        description="How many units currently in stock",
    )

    aisle: str | None = Field(
        default=None,
        sa_column=Column("Aisle", String, nullable=True),
    )

    image_url: str | None = Field(
        default=None,
        description="Public image URL",
    )
