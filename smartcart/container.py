# smartcart/container.py
import logging
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.engine import Engine

from smartcart.core.config import Settings
from smartcart.core.local_storage import LocalStorage
from smartcart.core.notifications import Notifier
from smartcart.core.realtime import ChangeFeed, SupabaseChangeFeed
from smartcart.core.supabase_client import AuthProvider, SupabaseAuthProvider
from smartcart.database import SessionFactory, create_db_engine, session_factory
from smartcart.schemas.user import AuthSnapshot
from smartcart.services.auth_service import AuthService
from smartcart.services.cart_service import CartEngine
from smartcart.services.catalog_service import CatalogService
from smartcart.services.dietary_service import DietaryPreferenceService
from smartcart.services.recipe_service import RecipeService
from smartcart.services.stats_service import StatsService

logger = logging.getLogger(__name__)


@dataclass
class Storefront:
    """
    Every service of one storefront session, wired together.

    Built once per app by `build_storefront` and kept on `app.state`.
    """

    settings: Settings
    engine: Engine
    session_factory: SessionFactory
    notifier: Notifier
    catalog: CatalogService
    cart: CartEngine
    auth: AuthService
    preferences: DietaryPreferenceService
    recipes: RecipeService
    stats: StatsService
    change_feed: ChangeFeed | None = None

    def start(self) -> None:
        self.cart.load()
        self.auth.start()

    def close(self) -> None:
        self.auth.close()
        self.cart.close()
        if self.change_feed is not None:
            self.change_feed.close()


def cart_sync_listener(cart: CartEngine):
    """
    Auth listener that switches cart mirroring on for shoppers only.
    """

    def _on_auth(snapshot: AuthSnapshot) -> None:
        if snapshot.state == "shopper" and snapshot.identity is not None:
            cart.attach_shopper(snapshot.identity.id)
        elif snapshot.state != "resolving":
            cart.detach()

    return _on_auth


def build_storefront(
    settings: Settings,
    *,
    auth_provider: AuthProvider | None = None,
    change_feed: ChangeFeed | None = None,
    engine: Engine | None = None,
) -> Storefront:
    """
    Construct the storefront from settings.

    Supabase-backed auth and realtime are created unless replacements are
    passed in (tests pass in-process fakes).
    """
    engine = engine or create_db_engine(settings.DATABASE_URL)
    factory = session_factory(engine)
    notifier = Notifier(maxlen=settings.NOTIFICATION_BUFFER)

    if auth_provider is None:
        auth_provider = SupabaseAuthProvider.from_settings(settings)
    if change_feed is None:
        change_feed = SupabaseChangeFeed(settings)

    catalog = CatalogService()
    cart = CartEngine(
        LocalStorage(Path(settings.CART_STORAGE_DIR)),
        notifier,
        factory,
        change_feed,
        storage_key=settings.CART_STORAGE_KEY,
        echo_window=settings.ECHO_SUPPRESSION_SECONDS,
    )
    auth = AuthService(auth_provider, notifier, factory)
    auth.add_listener(cart_sync_listener(cart))

    storefront = Storefront(
        settings=settings,
        engine=engine,
        session_factory=factory,
        notifier=notifier,
        catalog=catalog,
        cart=cart,
        auth=auth,
        preferences=DietaryPreferenceService(notifier, factory),
        recipes=RecipeService(catalog, cart, notifier),
        stats=StatsService(
            catalog, factory, low_stock_threshold=settings.LOW_STOCK_THRESHOLD
        ),
        change_feed=change_feed,
    )
    logger.info(f"Storefront built ({len(catalog.products)} products)")
    return storefront
