# smartcart/services/cart_service.py
import logging
import threading
import time
from collections import deque
from collections.abc import Callable
from typing import Any

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError

from smartcart.core.errors import RemoteStoreError
from smartcart.core.local_storage import LocalStorage
from smartcart.core.notifications import Notifier
from smartcart.core.realtime import ChangeEvent, ChangeFeed, Subscription
from smartcart.database import SessionFactory
from smartcart.models.cart import ShoppingListItem
from smartcart.repositories.product_repo import ProductRepository
from smartcart.repositories.shopping_list_repo import ShoppingListRepository
from smartcart.schemas.cart import CartItem, CartSummary
from smartcart.schemas.product import ProductRead, product_from_record

logger = logging.getLogger(__name__)

_REMOTE_ERRORS = (SQLAlchemyError, RemoteStoreError)


class _Message:
    """One unit of work for the engine queue."""

    def __init__(self, fn: Callable[..., Any], args: tuple, posted: bool = False):
        self.fn = fn
        self.args = args
        self.posted = posted
        self.result: Any = None
        self.error: Exception | None = None

    def run(self) -> None:
        try:
            self.result = self.fn(*self.args)
        except Exception as e:
            self.error = e


class CartEngine:
    """
    Authoritative cart of the storefront session.

    Responsibilities:
      - keep one CartItem per product (insertion order)
      - write the whole cart through to local storage on every mutation
      - mirror adds/removes/clears to the shopper's `shopping_list` rows
        while a shopper is attached
      - apply remote INSERT/DELETE events from the change feed

    Ordering:
      Local calls and change feed events are queued as messages and run one
      at a time. Feed callbacks never block: if another thread is draining,
      that thread picks their message up.

    Echoes:
      When the engine inserts a remote row it remembers the product ref; an
      INSERT event for that ref inside `echo_window` seconds is its own echo
      and is dropped once.
    """

    def __init__(
        self,
        storage: LocalStorage,
        notifier: Notifier,
        session_factory: SessionFactory,
        change_feed: ChangeFeed | None = None,
        *,
        storage_key: str = "cart",
        echo_window: float = 10.0,
        list_repo: ShoppingListRepository | None = None,
        product_repo: ProductRepository | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.storage = storage
        self.notifier = notifier
        self.session_factory = session_factory
        self.change_feed = change_feed
        self.storage_key = storage_key
        self.echo_window = echo_window
        self.list_repo = list_repo or ShoppingListRepository()
        self.product_repo = product_repo or ProductRepository()
        self.clock = clock

        self._items: list[CartItem] = []
        self._adapter = TypeAdapter(list[CartItem])

        self._shopper_id: str | None = None
        self._subscription: Subscription | None = None
        self._generation = 0
        self._pending_echoes: dict[str, float] = {}

        self._queue: deque[_Message] = deque()
        self._queue_lock = threading.Lock()
        self._drain_lock = threading.Lock()

    # ---- queue ----

    def _drain(self, blocking: bool) -> None:
        while True:
            if not self._drain_lock.acquire(blocking=blocking):
                return
            try:
                while True:
                    with self._queue_lock:
                        if not self._queue:
                            break
                        msg = self._queue.popleft()
                    msg.run()
                    if msg.error is not None and msg.posted:
                        logger.error(
                            f"Failed to apply remote change: {msg.error!r}",
                            exc_info=msg.error,
                        )
            finally:
                self._drain_lock.release()

            # A message posted while we were releasing would be stranded.
            with self._queue_lock:
                if not self._queue:
                    return
            blocking = False

    def _submit(self, fn: Callable[..., Any], *args: Any) -> Any:
        msg = _Message(fn, args)
        with self._queue_lock:
            self._queue.append(msg)
        self._drain(blocking=True)
        if msg.error is not None:
            raise msg.error
        return msg.result

    def _post(self, fn: Callable[..., Any], *args: Any) -> None:
        with self._queue_lock:
            self._queue.append(_Message(fn, args, posted=True))
        self._drain(blocking=False)

    # ---- helpers ----

    def _find(self, product_id: str) -> CartItem | None:
        for item in self._items:
            if item.product.id == product_id:
                return item
        for item in self._items:
            if item.product.matches_ref(product_id):
                return item
        return None

    def _find_product(self, product: ProductRead) -> CartItem | None:
        """Existing line for a product, whether it came from the catalog or a remote row."""
        for item in self._items:
            if item.product.id == product.id or item.product.barcode_id == product.barcode_id:
                return item
        return None

    def _find_remote(self, ref: Any) -> CartItem | None:
        for item in self._items:
            if item.product.matches_ref(ref):
                return item
        return None

    def _persist(self) -> None:
        try:
            payload = self._adapter.dump_json(self._items).decode("utf-8")
            self.storage.set_item(self.storage_key, payload)
        except OSError:
            logger.exception("Failed to write cart to local storage")

    def _summary(self) -> CartSummary:
        items = [item.model_copy(deep=True) for item in self._items]
        scanned = [item for item in items if item.scanned]
        return CartSummary(
            items=items,
            total_items=sum(item.quantity for item in items),
            total_price=round(
                sum(item.product.price * item.quantity for item in items), 2
            ),
            scanned_items=sum(item.quantity for item in scanned),
            scanned_total_price=round(
                sum(item.product.price * item.quantity for item in scanned), 2
            ),
            synced=self._shopper_id is not None,
        )

    def _sync_error(self, action: str, notify: bool) -> None:
        logger.exception(f"Remote shopping list {action} failed")
        if notify:
            self.notifier.notify(
                "Sync Error",
                f"Could not {action} your online shopping list. "
                "Your cart was updated on this device.",
                variant="destructive",
            )

    # ---- startup ----

    def load(self) -> CartSummary:
        return self._submit(self._load)

    def _load(self) -> CartSummary:
        """
        Read the stored cart once.

        Unreadable or invalid data is dropped and the key removed.
        """
        try:
            raw = self.storage.get_item(self.storage_key)
            if raw is None:
                self._items = []
                return self._summary()
            items = self._adapter.validate_json(raw)
        except (ValidationError, UnicodeDecodeError) as e:
            logger.warning(f"Discarding corrupt stored cart: {e}")
            self.storage.remove_item(self.storage_key)
            self._items = []
            return self._summary()

        # Collapse duplicates written by older versions.
        merged: list[CartItem] = []
        for item in items:
            existing = next(
                (m for m in merged if m.product.id == item.product.id), None
            )
            if existing is None:
                merged.append(item)
            else:
                existing.quantity += item.quantity
        self._items = merged
        logger.info(f"Loaded cart with {len(merged)} items from local storage")
        return self._summary()

    # ---- read ----

    @property
    def shopper_id(self) -> str | None:
        return self._shopper_id

    def get_summary(self) -> CartSummary:
        return self._submit(self._summary)

    def get_item(self, product_id: str) -> CartItem | None:
        def _get() -> CartItem | None:
            item = self._find(str(product_id))
            return item.model_copy(deep=True) if item else None

        return self._submit(_get)

    # ---- local mutations ----

    def add_to_cart(
        self, product: ProductRead, quantity: int = 1, notify: bool = True
    ) -> CartSummary:
        """
        Add `quantity` units of a product.

        Rules:
          - existing item: quantity is incremented, otherwise a new line is appended
          - quantity never exceeds the product's stock (clamped + notification)
          - a shopper's remote list gets a row only if it has none for the product
          - notify=False silences every per-product toast except sync errors
        """
        if quantity <= 0:
            raise ValueError("quantity must be positive")
        return self._submit(self._add, product, quantity, notify)

    def add_units(self, product: ProductRead, quantity: int = 1) -> int:
        """
        Add without per-product toasts and return how many units went in.

        0 means the product was out of stock or already at its stock limit.
        """
        if quantity <= 0:
            raise ValueError("quantity must be positive")
        return self._submit(self._apply_add, product, quantity, False)

    def _add(self, product: ProductRead, quantity: int, notify: bool) -> CartSummary:
        self._apply_add(product, quantity, notify)
        return self._summary()

    def _apply_add(self, product: ProductRead, quantity: int, notify: bool) -> int:
        stock = product.quantity_in_stock
        if stock <= 0:
            if notify:
                self.notifier.notify(
                    "Out of stock",
                    f"{product.name} is currently out of stock.",
                    variant="destructive",
                )
            return 0

        item = self._find_product(product)
        if item is not None:
            before = item.quantity
            wanted = before + quantity
            item.quantity = max(before, min(wanted, stock))
            if wanted > stock:
                if notify:
                    self._limited_stock(product)
            elif notify:
                self.notifier.notify(
                    "Cart updated",
                    f"{product.name} quantity increased to {item.quantity}.",
                )
            added = item.quantity - before
        else:
            item = CartItem(product=product, quantity=min(quantity, stock))
            self._items.append(item)
            if quantity > stock:
                if notify:
                    self._limited_stock(product)
            elif notify:
                self.notifier.notify(
                    "Added to cart",
                    f"{product.name} has been added to your cart.",
                )
            added = item.quantity

        if added == 0:
            return 0

        self._persist()

        if self._shopper_id is not None:
            self._push_remote(item, notify)
            self._persist()

        return added

    def _limited_stock(self, product: ProductRead) -> None:
        self.notifier.notify(
            "Limited stock",
            f"Only {product.quantity_in_stock} units of {product.name} are available.",
        )

    def _push_remote(self, item: CartItem, notify: bool = True) -> None:
        """
        Ensure the shopper's list has a row for this product.

        The remote list carries no quantity, so an existing row is reused.
        """
        product = item.product
        ref = product.remote_ref()
        if ref is None:
            logger.warning(
                f"Product {product.id} has non-numeric barcode "
                f"{product.barcode_id!r}; not mirrored remotely"
            )
            return

        shopper_id = self._shopper_id
        key = str(ref)
        try:
            with self.session_factory() as session:
                row = self.list_repo.get_item(session, shopper_id, ref)
                if row is not None:
                    item.shopping_list_id = row.id
                    return

                if not self.product_repo.exists(session, ref):
                    logger.info(f"Product {ref} missing from remote inventory; kept local")
                    if notify:
                        self.notifier.notify(
                            "Available locally only",
                            f"{product.name} is not in the store inventory yet, "
                            "so it was only added to this device's cart.",
                        )
                    return

                self._pending_echoes[key] = self.clock()
                created = self.list_repo.create(
                    session,
                    ShoppingListItem(shopper_id=shopper_id, product_id=ref, scanned=False),
                )
                item.shopping_list_id = created.id
                logger.info(f"Added product {ref} to shopping list of {shopper_id}")
        except _REMOTE_ERRORS:
            self._pending_echoes.pop(key, None)
            self._sync_error("update", notify=True)

    def remove_from_cart(self, product_id: str) -> CartSummary:
        """
        Remove a product entirely.

        The remote row is deleted first; the local item goes regardless.
        """
        return self._submit(self._remove, str(product_id))

    def _remove(self, product_id: str) -> CartSummary:
        item = self._find(product_id)
        if item is None:
            return self._summary()

        if self._shopper_id is not None:
            ref = item.product.remote_ref()
            if ref is not None:
                try:
                    with self.session_factory() as session:
                        self.list_repo.delete_for_product(session, self._shopper_id, ref)
                except _REMOTE_ERRORS:
                    self._sync_error("update", notify=True)

        self._items.remove(item)
        self._persist()
        self.notifier.notify(
            "Removed from cart",
            f"{item.product.name} has been removed from your cart.",
        )
        return self._summary()

    def update_quantity(self, product_id: str, quantity: int) -> CartSummary:
        """
        Set the quantity of a line in place.

        0 or less removes the product. Local only: the remote list has no
        quantity to update.
        """
        if quantity <= 0:
            return self.remove_from_cart(product_id)
        return self._submit(self._update, str(product_id), quantity)

    def _update(self, product_id: str, quantity: int) -> CartSummary:
        item = self._find(product_id)
        if item is None:
            return self._summary()

        stock = item.product.quantity_in_stock
        if quantity > stock:
            self._limited_stock(item.product)
            quantity = max(stock, 1)
        item.quantity = quantity
        self._persist()
        return self._summary()

    def clear_cart(self) -> CartSummary:
        return self._submit(self._clear)

    def _clear(self) -> CartSummary:
        if self._shopper_id is not None:
            try:
                with self.session_factory() as session:
                    self.list_repo.clear_for_shopper(session, self._shopper_id)
            except _REMOTE_ERRORS:
                self._sync_error("clear", notify=True)

        self._items = []
        self._persist()
        self.notifier.notify("Cart cleared", "All items have been removed from your cart.")
        return self._summary()

    # ---- remote sync ----

    def attach_shopper(self, shopper_id: str) -> CartSummary:
        """
        Start mirroring to a shopper's remote list.

        Merges the remote list into the cart (local quantities win,
        remote-only products are appended with quantity 1) and subscribes
        to the shopper's change feed.
        """
        return self._submit(self._attach, shopper_id)

    def _attach(self, shopper_id: str) -> CartSummary:
        if self._shopper_id == shopper_id:
            return self._summary()
        if self._shopper_id is not None:
            self._detach()

        self._generation += 1
        generation = self._generation
        self._shopper_id = shopper_id

        self._merge_remote(shopper_id)

        if self.change_feed is not None:
            try:
                self._subscription = self.change_feed.subscribe_shopping_list(
                    shopper_id,
                    lambda event: self._post(self._on_remote_event, generation, event),
                )
            except RemoteStoreError:
                logger.exception(f"Could not subscribe to shopping list of {shopper_id}")

        logger.info(f"Cart attached to shopper {shopper_id}")
        return self._summary()

    def _merge_remote(self, shopper_id: str) -> None:
        try:
            with self.session_factory() as session:
                rows = self.list_repo.list_for_shopper(session, shopper_id)
                remote = [
                    (row.id, row.product_id, row.scanned, product_from_record(product))
                    for row, product in rows
                    if product is not None
                ]
        except _REMOTE_ERRORS:
            self._sync_error("load", notify=False)
            return

        added = 0
        for row_id, ref, scanned, product in remote:
            item = self._find_remote(ref)
            if item is not None:
                item.scanned = scanned
                item.shopping_list_id = row_id
                continue
            self._items.append(
                CartItem(
                    product=product,
                    quantity=1,
                    scanned=scanned,
                    shopping_list_id=row_id,
                )
            )
            added += 1

        self._persist()
        logger.info(
            f"Merged {len(remote)} remote rows for {shopper_id} ({added} new)"
        )

    def detach(self) -> CartSummary:
        """Stop mirroring (sign-out). The local cart is kept."""
        return self._submit(self._detach_and_summarize)

    def _detach_and_summarize(self) -> CartSummary:
        self._detach()
        return self._summary()

    def _detach(self) -> None:
        self._generation += 1
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        if self._shopper_id is not None:
            logger.info(f"Cart detached from shopper {self._shopper_id}")
        self._shopper_id = None
        self._pending_echoes.clear()

    def close(self) -> None:
        self._submit(self._detach)

    def _on_remote_event(self, generation: int, event: ChangeEvent) -> None:
        if generation != self._generation or self._shopper_id is None:
            logger.debug(f"Dropping stale {event.event_type} event")
            return

        if event.event_type == "INSERT":
            self._apply_insert(event.new)
        elif event.event_type == "DELETE":
            self._apply_delete(event.old)

    def _is_echo(self, ref: Any) -> bool:
        key = str(ref)
        stamp = self._pending_echoes.pop(key, None)
        if stamp is None:
            return False
        return self.clock() - stamp <= self.echo_window

    def _apply_insert(self, row: dict[str, Any]) -> None:
        ref = row.get("product_id")
        if ref is None:
            return
        if self._is_echo(ref):
            logger.debug(f"Dropping echo of own insert for product {ref}")
            return

        scanned = bool(row.get("scanned", False))
        item = self._find_remote(ref)
        if item is not None:
            # A physical scan is a fact: not clamped to stock.
            item.quantity += 1
            item.scanned = scanned or item.scanned
            item.shopping_list_id = item.shopping_list_id or row.get("id")
            self._persist()
            return

        try:
            with self.session_factory() as session:
                record = self.product_repo.get_by_id(session, int(ref))
                product = product_from_record(record) if record else None
        except (ValueError, *_REMOTE_ERRORS):
            logger.exception(f"Could not fetch product {ref} for remote insert")
            return

        if product is None:
            logger.warning(f"Remote insert references unknown product {ref}")
            return

        self._items.append(
            CartItem(
                product=product,
                quantity=1,
                scanned=scanned,
                shopping_list_id=row.get("id"),
            )
        )
        self._persist()

    def _apply_delete(self, old: dict[str, Any]) -> None:
        item = None
        ref = old.get("product_id")
        if ref is not None:
            item = self._find_remote(ref)
        row_id = old.get("id")
        if item is None and row_id is not None:
            item = next(
                (i for i in self._items if i.shopping_list_id == str(row_id)), None
            )
        if item is None:
            return
        self._items.remove(item)
        self._persist()
