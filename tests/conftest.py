from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from smartcart.core.config import Settings
from smartcart.core.errors import AuthProviderError
from smartcart.core.local_storage import LocalStorage
from smartcart.core.notifications import Notifier
from smartcart.core.realtime import ChangeEvent
from smartcart.database import create_db_and_tables, create_db_engine, session_factory
from smartcart.models.cart import ShoppingListItem
from smartcart.models.product import Product
from smartcart.models.user import Owner, Shopper
from smartcart.schemas.user import Identity
from smartcart.services.cart_service import CartEngine
from smartcart.services.catalog_service import CatalogService

WATER_BARCODE = 6194007510014  # catalog id "1"
MILK_BARCODE = 6191507220214  # catalog id "3"
FLOUR_BARCODE = 6191564600059  # catalog id "4"
REMOTE_ONLY_BARCODE = 5000000000001  # in `products`, not in the static catalog


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakeSubscription:
    def __init__(self, on_unsubscribe):
        self._on_unsubscribe = on_unsubscribe
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._on_unsubscribe()


class FakeChangeFeed:
    """In-process change feed: tests push events with `emit`."""

    def __init__(self):
        self.callbacks: dict[str, object] = {}
        self.subscribe_calls: list[str] = []
        self.closed = False

    def subscribe_shopping_list(self, shopper_id, callback):
        self.subscribe_calls.append(shopper_id)
        self.callbacks[shopper_id] = callback
        return FakeSubscription(lambda: self.callbacks.pop(shopper_id, None))

    def emit(self, shopper_id: str, event_type: str, new=None, old=None) -> None:
        callback = self.callbacks.get(shopper_id)
        if callback is not None:
            callback(ChangeEvent(event_type=event_type, new=new or {}, old=old or {}))

    def close(self) -> None:
        self.closed = True


class FakeAuthProvider:
    """
    Supabase Auth stand-in. Like supabase-py, sign in/out fire the
    registered auth-change callbacks synchronously.
    """

    def __init__(self):
        self.accounts: dict[str, tuple[str, Identity]] = {}
        self.session: Identity | None = None
        self.callbacks: list = []
        self.require_confirmation = False

    def register(self, email: str, password: str, user_id: str) -> Identity:
        identity = Identity(id=user_id, email=email)
        self.accounts[email] = (password, identity)
        return identity

    def _fire(self, event: str) -> None:
        for callback in list(self.callbacks):
            callback(event, self.session)

    def get_session(self):
        return self.session

    def sign_in(self, email, password):
        account = self.accounts.get(email)
        if account is None or account[0] != password:
            raise AuthProviderError("Invalid login credentials")
        self.session = account[1]
        self._fire("SIGNED_IN")
        return self.session

    def sign_up(self, email, password, username=None):
        if email in self.accounts:
            raise AuthProviderError("User already registered")
        identity = self.register(email, password, f"user-{len(self.accounts) + 1}")
        if self.require_confirmation:
            return None
        self.session = identity
        self._fire("SIGNED_IN")
        return identity

    def sign_out(self):
        self.session = None
        self._fire("SIGNED_OUT")

    def on_auth_state_change(self, callback):
        self.callbacks.append(callback)
        return FakeSubscription(lambda: self.callbacks.remove(callback))


def failing_session_factory():
    raise OperationalError("SELECT 1", {}, Exception("connection refused"))


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        SUPABASE_URL="http://localhost:54321",
        SUPABASE_KEY="anon-key",
        DATABASE_URL="sqlite://",
        SUPABASE_JWT_SECRET="test-secret",
        CART_STORAGE_DIR=str(tmp_path / "storage"),
    )


@pytest.fixture
def db_engine():
    engine = create_db_engine("sqlite://")
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def factory(db_engine):
    return session_factory(db_engine)


@pytest.fixture
def seeded(factory):
    """Remote tables with a few products, one owner and one shopper."""
    with factory() as session:
        session.add(
            Product(
                id=WATER_BARCODE,
                name="Water bottle Sabrine 1.5L",
                price=0.99,
                category="Beverages",
                subcategory="Water",
                stock=120,
                aisle="A1",
            )
        )
        session.add(
            Product(
                id=MILK_BARCODE,
                name="Vitalait semi-skimmed milk 1L",
                price=2.3,
                category="Beverages",
                subcategory="Milk",
                stock=45,
                aisle="A2",
            )
        )
        session.add(
            Product(
                id=FLOUR_BARCODE,
                name="Warda Cake Flour 1kg",
                price=3.2,
                category="Baking & Cooking",
                subcategory="Flour",
                stock=50,
            )
        )
        session.add(
            Product(
                id=REMOTE_ONLY_BARCODE,
                name="Zitouna olive oil 1L",
                price=12.5,
                category="Oils & Condiments",
                subcategory="Cooking Oils",
                stock=20,
            )
        )
        session.add(Owner(id="owner-1", email="owner@smartcart.tn"))
        session.add(
            Shopper(
                id="shopper-1",
                email="amira@example.com",
                dietary_preferences=["vegetarian"],
                username="amira",
            )
        )
        session.commit()
    return factory


@pytest.fixture
def catalog() -> CatalogService:
    return CatalogService()


@pytest.fixture
def notifier() -> Notifier:
    return Notifier()


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorage:
    return LocalStorage(tmp_path / "storage")


@pytest.fixture
def feed() -> FakeChangeFeed:
    return FakeChangeFeed()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cart(storage, notifier, seeded, feed, clock) -> CartEngine:
    engine = CartEngine(storage, notifier, seeded, feed, echo_window=10.0, clock=clock)
    engine.load()
    return engine


def remote_rows(factory, shopper_id: str) -> list[ShoppingListItem]:
    with factory() as session:
        stmt = select(ShoppingListItem).where(ShoppingListItem.shopper_id == shopper_id)
        return list(session.exec(stmt).all())
