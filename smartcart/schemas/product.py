# smartcart/schemas/product.py
from typing import Any

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from smartcart.models.product import Product

PLACEHOLDER_IMAGE = "/placeholder.svg"


class ProductRead(SQLModel):
    """
    Canonical product shape used everywhere past the catalog boundary.

    Static catalog entries and remote `products` rows are both turned into
    this model by `normalize_product` / `product_from_record`, so ids are
    always strings and the image lives in `image_url` only.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    barcode_id: str
    name: str = Field(min_length=1)
    description: str = ""
    image_url: str | None = None
    category: str
    subcategory: str
    aisle: str = "Unknown"
    price: float = Field(ge=0)
    quantity_in_stock: int = Field(default=0, ge=0)
    popular: bool = False

    @field_validator("id", "barcode_id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> str:
        if v is None:
            raise ValueError("id cannot be empty")
        v = str(v).strip()
        if not v:
            raise ValueError("id cannot be empty")
        return v

    @property
    def display_image(self) -> str:
        return self.image_url or PLACEHOLDER_IMAGE

    def remote_ref(self) -> int | None:
        """
        The `shopping_list.product_id` this product maps to.

        Remote rows reference products by barcode; a non-numeric barcode
        cannot be mirrored remotely.
        """
        try:
            return int(self.barcode_id)
        except ValueError:
            return None

    def matches_ref(self, ref: int | str | None) -> bool:
        if ref is None:
            return False
        ref = str(ref)
        return ref == self.barcode_id or ref == self.id


def normalize_product(raw: dict[str, Any]) -> ProductRead:
    """
    Normalize a catalog entry into a ProductRead.

    Accepts:
      - `id` / `barcodeId` as str or int (barcode defaults to id)
      - `image` or `image-url` or `image_url`
      - `quantityInStock` or `quantity_in_stock`
    """
    image = raw.get("image_url") or raw.get("image-url") or raw.get("image")
    if image == PLACEHOLDER_IMAGE:
        image = None

    barcode = raw.get("barcodeId", raw.get("barcode_id"))
    if barcode is None:
        barcode = raw["id"]

    stock = raw.get("quantityInStock", raw.get("quantity_in_stock", 0))

    return ProductRead(
        id=raw["id"],
        barcode_id=barcode,
        name=raw["name"],
        description=raw.get("description") or "",
        image_url=image,
        category=raw["category"],
        subcategory=raw["subcategory"],
        aisle=raw.get("aisle") or "Unknown",
        price=raw["price"],
        quantity_in_stock=stock,
        popular=bool(raw.get("popular", False)),
    )


def product_from_record(record: Product) -> ProductRead:
    """
    Map a remote `products` row to the canonical shape.

    Remote ids are barcodes, so id == barcode_id.
    """
    return ProductRead(
        id=record.id,
        barcode_id=record.id,
        name=record.name,
        description=f"Product from {record.category} category",
        image_url=record.image_url or None,
        category=record.category,
        subcategory=record.subcategory,
        aisle=record.aisle or "Unknown",
        price=record.price,
        quantity_in_stock=max(record.stock or 0, 0),
        popular=False,
    )


class CategoryRead(SQLModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    name: str
    icon: str
