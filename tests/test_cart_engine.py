from __future__ import annotations

import json

from conftest import (
    FLOUR_BARCODE,
    MILK_BARCODE,
    REMOTE_ONLY_BARCODE,
    WATER_BARCODE,
    failing_session_factory,
    remote_rows,
)
from smartcart.core.realtime import ChangeEvent
from smartcart.models.cart import ShoppingListItem
from smartcart.services.cart_service import CartEngine


def _titles(notifier) -> list[str]:
    return [n.title for n in notifier.drain()]


def _seed_rows(factory, shopper_id: str, *refs: int, scanned: bool = False) -> list[str]:
    ids = []
    with factory() as session:
        for ref in refs:
            row = ShoppingListItem(shopper_id=shopper_id, product_id=ref, scanned=scanned)
            session.add(row)
            ids.append(row.id)
        session.commit()
    return ids


# ---- local cart ----


def test_add_same_product_accumulates_quantity(cart, catalog) -> None:
    water = catalog.get("1")
    cart.add_to_cart(water, 2)
    summary = cart.add_to_cart(water, 3)

    assert len(summary.items) == 1
    assert summary.items[0].quantity == 5
    assert summary.total_items == 5
    assert summary.total_price == round(0.99 * 5, 2)


def test_operation_sequence_keeps_one_line_per_product(cart, catalog) -> None:
    water, milk, flour = catalog.get("1"), catalog.get("3"), catalog.get("4")
    cart.add_to_cart(water, 1)
    cart.add_to_cart(milk, 2)
    cart.add_to_cart(water, 4)
    cart.update_quantity("3", 7)
    cart.add_to_cart(flour, 1)
    cart.remove_from_cart("1")
    cart.add_to_cart(water, 1)
    summary = cart.add_to_cart(milk, 1)

    ids = [item.product.id for item in summary.items]
    assert len(ids) == len(set(ids))
    assert ids == ["3", "4", "1"]
    assert summary.total_items == sum(item.quantity for item in summary.items) == 10


def test_add_clamps_to_stock(cart, catalog, notifier) -> None:
    chocolate = catalog.get("10")  # 30 in stock
    summary = cart.add_to_cart(chocolate, 40)

    assert summary.items[0].quantity == 30
    assert "Limited stock" in _titles(notifier)


def test_add_out_of_stock_product_is_refused(cart, catalog, notifier) -> None:
    sold_out = catalog.get("1").model_copy(update={"quantity_in_stock": 0})
    summary = cart.add_to_cart(sold_out, 1)

    assert summary.items == []
    notes = notifier.drain()
    assert notes[0].title == "Out of stock"
    assert notes[0].variant == "destructive"


def test_update_to_zero_is_remove(cart, catalog) -> None:
    cart.add_to_cart(catalog.get("1"), 3)
    cart.add_to_cart(catalog.get("3"), 1)

    summary = cart.update_quantity("1", 0)

    assert [item.product.id for item in summary.items] == ["3"]


def test_update_quantity_sets_in_place(cart, catalog) -> None:
    cart.add_to_cart(catalog.get("1"), 3)
    summary = cart.update_quantity("1", 8)
    assert summary.items[0].quantity == 8


def test_clear_cart_empties_and_persists(cart, catalog, storage) -> None:
    cart.add_to_cart(catalog.get("1"), 3)
    summary = cart.clear_cart()

    assert summary.items == []
    assert storage.get_item("cart") == "[]"


def test_every_mutation_is_written_through(cart, catalog, storage, notifier, seeded, feed) -> None:
    cart.add_to_cart(catalog.get("1"), 2)
    cart.add_to_cart(catalog.get("4"), 1)

    stored = json.loads(storage.get_item("cart"))
    assert [(row["product"]["id"], row["quantity"]) for row in stored] == [("1", 2), ("4", 1)]

    reloaded = CartEngine(storage, notifier, seeded, feed)
    summary = reloaded.load()
    assert summary.total_items == 3


def test_corrupt_storage_loads_empty_and_drops_key(storage, notifier, seeded) -> None:
    storage.set_item("cart", "{not json")
    engine = CartEngine(storage, notifier, seeded)

    summary = engine.load()

    assert summary.items == []
    assert storage.get_item("cart") is None


def test_undecodable_storage_loads_empty_and_drops_key(storage, notifier, seeded) -> None:
    path = storage.path_for("cart")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\xff\xfe[garbage")
    engine = CartEngine(storage, notifier, seeded)

    assert engine.load().items == []
    assert storage.get_item("cart") is None


def test_schema_invalid_storage_loads_empty(storage, notifier, seeded) -> None:
    storage.set_item("cart", json.dumps([{"product": {"id": "1"}, "quantity": 0}]))
    engine = CartEngine(storage, notifier, seeded)

    assert engine.load().items == []
    assert storage.get_item("cart") is None


# ---- remote sync ----


def test_attach_merges_remote_list_local_wins(cart, catalog, seeded, feed) -> None:
    cart.add_to_cart(catalog.get("1"), 5)
    _seed_rows(seeded, "shopper-1", WATER_BARCODE, REMOTE_ONLY_BARCODE)

    summary = cart.attach_shopper("shopper-1")

    assert [(i.product.name, i.quantity) for i in summary.items] == [
        ("Water bottle Sabrine 1.5L", 5),
        ("Zitouna olive oil 1L", 1),
    ]
    assert summary.items[1].product.id == str(REMOTE_ONLY_BARCODE)
    assert summary.items[1].product.description == "Product from Oils & Condiments category"
    assert summary.synced is True
    assert feed.subscribe_calls == ["shopper-1"]


def test_catalog_add_after_merge_reuses_remote_line(cart, catalog, seeded) -> None:
    _seed_rows(seeded, "shopper-1", WATER_BARCODE)
    merged = cart.attach_shopper("shopper-1").items[0]
    assert merged.product.id == str(WATER_BARCODE)

    summary = cart.add_to_cart(catalog.get("1"), 1)

    assert [(i.product.barcode_id, i.quantity) for i in summary.items] == [
        (str(WATER_BARCODE), 2)
    ]
    assert len(remote_rows(seeded, "shopper-1")) == 1

    summary = cart.remove_from_cart(merged.product.id)
    assert summary.items == []
    assert remote_rows(seeded, "shopper-1") == []


def test_add_units_reports_what_went_in(cart, catalog, notifier) -> None:
    chocolate = catalog.get("10")  # 30 in stock
    assert cart.add_units(chocolate, 25) == 25
    assert cart.add_units(chocolate, 10) == 5
    assert cart.add_units(chocolate, 1) == 0
    assert cart.add_units(catalog.get("1").model_copy(update={"quantity_in_stock": 0})) == 0
    assert notifier.drain() == []


def test_attach_skips_rows_without_product(cart, seeded) -> None:
    _seed_rows(seeded, "shopper-1", 999)
    summary = cart.attach_shopper("shopper-1")
    assert summary.items == []


def test_scanned_rows_feed_scanned_totals(cart, seeded) -> None:
    _seed_rows(seeded, "shopper-1", MILK_BARCODE, scanned=True)
    _seed_rows(seeded, "shopper-1", FLOUR_BARCODE)

    summary = cart.attach_shopper("shopper-1")

    assert summary.scanned_items == 1
    assert summary.scanned_total_price == 2.3
    assert summary.total_price == round(2.3 + 3.2, 2)


def test_add_while_attached_inserts_one_remote_row(cart, catalog, seeded) -> None:
    cart.attach_shopper("shopper-1")
    cart.add_to_cart(catalog.get("1"), 1)
    summary = cart.add_to_cart(catalog.get("1"), 2)

    rows = remote_rows(seeded, "shopper-1")
    assert [(r.product_id, r.scanned) for r in rows] == [(WATER_BARCODE, False)]
    assert summary.items[0].quantity == 3
    assert summary.items[0].shopping_list_id == rows[0].id


def test_add_product_missing_remotely_stays_local(cart, catalog, seeded, notifier) -> None:
    cart.attach_shopper("shopper-1")
    summary = cart.add_to_cart(catalog.get("9"), 1)  # chips are not in `products`

    assert summary.total_items == 1
    assert remote_rows(seeded, "shopper-1") == []
    assert "Available locally only" in _titles(notifier)


def test_remote_insert_increments_present_product(cart, catalog, feed) -> None:
    cart.add_to_cart(catalog.get("1"), 2)
    cart.attach_shopper("shopper-1")

    feed.emit("shopper-1", "INSERT", new={"id": "row-9", "product_id": WATER_BARCODE, "scanned": True})

    item = cart.get_item("1")
    assert item.quantity == 3
    assert item.scanned is True


def test_remote_insert_of_new_product_fetches_it(cart, feed) -> None:
    cart.attach_shopper("shopper-1")

    feed.emit("shopper-1", "INSERT", new={"id": "row-1", "product_id": MILK_BARCODE})

    summary = cart.get_summary()
    assert [(i.product.name, i.quantity, i.shopping_list_id) for i in summary.items] == [
        ("Vitalait semi-skimmed milk 1L", 1, "row-1")
    ]


def test_remote_insert_of_unknown_product_is_ignored(cart, feed) -> None:
    cart.attach_shopper("shopper-1")
    feed.emit("shopper-1", "INSERT", new={"id": "row-1", "product_id": 424242})
    assert cart.get_summary().items == []


def test_remote_delete_removes_item_entirely(cart, catalog, feed) -> None:
    cart.add_to_cart(catalog.get("1"), 5)
    cart.attach_shopper("shopper-1")

    feed.emit("shopper-1", "DELETE", old={"product_id": WATER_BARCODE})

    assert cart.get_summary().items == []


def test_remote_delete_by_row_id_only(cart, seeded, feed) -> None:
    (row_id,) = _seed_rows(seeded, "shopper-1", MILK_BARCODE)
    cart.attach_shopper("shopper-1")

    feed.emit("shopper-1", "DELETE", old={"id": row_id})

    assert cart.get_summary().items == []


def test_remote_update_is_ignored(cart, catalog, feed) -> None:
    cart.add_to_cart(catalog.get("1"), 2)
    cart.attach_shopper("shopper-1")
    feed.emit("shopper-1", "UPDATE", new={"product_id": WATER_BARCODE, "scanned": True})
    assert cart.get_item("1").quantity == 2


def test_own_insert_echo_is_dropped_once(cart, catalog, feed) -> None:
    cart.attach_shopper("shopper-1")
    cart.add_to_cart(catalog.get("1"), 1)

    feed.emit("shopper-1", "INSERT", new={"product_id": WATER_BARCODE})
    assert cart.get_item("1").quantity == 1

    # A later scan of the same product is a real event.
    feed.emit("shopper-1", "INSERT", new={"product_id": WATER_BARCODE})
    assert cart.get_item("1").quantity == 2


def test_echo_after_window_counts(cart, catalog, feed, clock) -> None:
    cart.attach_shopper("shopper-1")
    cart.add_to_cart(catalog.get("1"), 1)

    clock.now += 30
    feed.emit("shopper-1", "INSERT", new={"product_id": WATER_BARCODE})

    assert cart.get_item("1").quantity == 2


def test_echo_does_not_resurrect_removed_item(cart, catalog, seeded, feed) -> None:
    cart.attach_shopper("shopper-1")
    cart.add_to_cart(catalog.get("1"), 1)
    cart.remove_from_cart("1")

    feed.emit("shopper-1", "INSERT", new={"product_id": WATER_BARCODE})

    assert cart.get_summary().items == []
    assert remote_rows(seeded, "shopper-1") == []


def test_remove_and_clear_delete_remote_rows(cart, catalog, seeded) -> None:
    _seed_rows(seeded, "shopper-2", MILK_BARCODE)
    cart.attach_shopper("shopper-1")
    cart.add_to_cart(catalog.get("1"), 1)
    cart.add_to_cart(catalog.get("3"), 1)
    cart.add_to_cart(catalog.get("4"), 1)

    cart.remove_from_cart("1")
    assert sorted(r.product_id for r in remote_rows(seeded, "shopper-1")) == sorted(
        [MILK_BARCODE, FLOUR_BARCODE]
    )

    cart.clear_cart()
    assert remote_rows(seeded, "shopper-1") == []
    assert len(remote_rows(seeded, "shopper-2")) == 1


def test_update_quantity_never_touches_remote(cart, catalog, seeded) -> None:
    cart.attach_shopper("shopper-1")
    cart.add_to_cart(catalog.get("1"), 1)
    cart.update_quantity("1", 4)

    assert len(remote_rows(seeded, "shopper-1")) == 1


def test_remote_failure_keeps_local_change(storage, notifier, feed, catalog) -> None:
    engine = CartEngine(storage, notifier, failing_session_factory, feed)
    engine.load()
    engine.attach_shopper("shopper-1")
    notifier.drain()

    summary = engine.add_to_cart(catalog.get("1"), 2)
    assert summary.total_items == 2
    notes = notifier.drain()
    assert any(n.title == "Sync Error" and n.variant == "destructive" for n in notes)

    summary = engine.remove_from_cart("1")
    assert summary.items == []
    assert "Sync Error" in _titles(notifier)


def test_detach_drops_late_events(cart, catalog, feed) -> None:
    cart.add_to_cart(catalog.get("1"), 1)
    cart.attach_shopper("shopper-1")
    callback = feed.callbacks["shopper-1"]

    summary = cart.detach()
    assert summary.synced is False
    assert "shopper-1" not in feed.callbacks

    callback(ChangeEvent(event_type="INSERT", new={"product_id": WATER_BARCODE}))
    assert cart.get_item("1").quantity == 1


def test_local_mutations_after_detach_stay_local(cart, catalog, seeded) -> None:
    cart.attach_shopper("shopper-1")
    cart.detach()
    cart.add_to_cart(catalog.get("1"), 1)

    assert remote_rows(seeded, "shopper-1") == []
