from __future__ import annotations

import pytest
from pydantic import ValidationError

from smartcart.core.local_storage import LocalStorage
from smartcart.core.realtime import parse_change_payload
from smartcart.core.errors import RemoteStoreError
from smartcart.models.product import Product
from smartcart.schemas.product import normalize_product, product_from_record
from smartcart.services.catalog_service import CatalogService


def test_normalize_accepts_image_variants_and_numeric_ids() -> None:
    a = normalize_product(
        {
            "id": 7,
            "name": "Harissa",
            "image-url": "https://cdn.example/harissa.png",
            "category": "condiments",
            "subcategory": "Sauces",
            "price": 2.5,
            "quantityInStock": 12,
        }
    )
    b = normalize_product(
        {
            "id": "8",
            "barcodeId": 6190000000008,
            "name": "Couscous",
            "image": "/placeholder.svg",
            "category": "pantry",
            "subcategory": "Pasta & Rice",
            "price": 1.9,
        }
    )

    assert (a.id, a.barcode_id, a.image_url, a.quantity_in_stock) == (
        "7",
        "7",
        "https://cdn.example/harissa.png",
        12,
    )
    assert a.aisle == "Unknown"
    assert (b.barcode_id, b.image_url, b.display_image) == (
        "6190000000008",
        None,
        "/placeholder.svg",
    )


def test_normalize_rejects_negative_price() -> None:
    with pytest.raises(ValidationError):
        normalize_product(
            {"id": "1", "name": "X", "category": "c", "subcategory": "s", "price": -1}
        )


def test_remote_record_mapping() -> None:
    record = Product(
        id=6191402801327,
        name="Cornstarch Vanoise",
        price=1.75,
        category="Baking & Cooking",
        subcategory="Baking Ingredients",
        stock=60,
    )
    product = product_from_record(record)

    assert product.id == product.barcode_id == "6191402801327"
    assert product.aisle == "Unknown"
    assert product.description == "Product from Baking & Cooking category"
    assert product.remote_ref() == 6191402801327
    assert product.matches_ref(6191402801327)


def test_catalog_lookup_by_id_or_barcode(catalog) -> None:
    assert catalog.get("1").name == "Water bottle Sabrine 1.5L"
    assert catalog.get("6194007510014").id == "1"
    assert catalog.get("nope") is None


def test_catalog_filters(catalog) -> None:
    assert len(catalog.products) == 16
    assert [p.id for p in catalog.list_products(category="beverages")] == ["1", "2", "3"]
    assert [p.id for p in catalog.list_products(subcategory="Chocolate")] == ["10", "12"]
    assert [p.id for p in catalog.list_products(search="MENTOS")] == ["11", "13"]
    assert {p.id for p in catalog.list_products(popular=True)} == {"1", "3", "6", "9", "14"}


def test_taxonomy(catalog) -> None:
    assert len(catalog.categories()) == 11
    assert catalog.subcategories("dairy") == ["Milk", "Cheese", "Yogurt", "Eggs", "Butter"]
    assert catalog.subcategories("unknown") == []


def test_custom_catalog_entries() -> None:
    catalog = CatalogService(
        products=[
            {
                "id": "x1",
                "name": "Dates Deglet Nour",
                "category": "fruits",
                "subcategory": "Fresh Fruits",
                "price": 6.0,
            }
        ]
    )
    product = catalog.get("x1")
    assert product.remote_ref() is None
    assert product.quantity_in_stock == 0


def test_local_storage_roundtrip(tmp_path) -> None:
    storage = LocalStorage(tmp_path / "kv")
    assert storage.get_item("cart") is None

    storage.set_item("cart", "[1]")
    storage.set_item("cart", "[2]")
    assert storage.get_item("cart") == "[2]"
    assert storage.path_for("my cart").name == "my_cart.json"

    storage.remove_item("cart")
    storage.remove_item("cart")
    assert storage.get_item("cart") is None


def test_parse_change_payload_shapes() -> None:
    legacy = parse_change_payload(
        {"eventType": "INSERT", "new": {"product_id": 1}, "old": {}}
    )
    current = parse_change_payload(
        {"data": {"type": "DELETE", "record": None, "old_record": {"id": "r1"}}}
    )

    assert (legacy.event_type, legacy.new) == ("INSERT", {"product_id": 1})
    assert (current.event_type, current.old, current.new) == ("DELETE", {"id": "r1"}, {})

    with pytest.raises(RemoteStoreError):
        parse_change_payload({"new": {}})
