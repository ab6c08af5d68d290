# smartcart/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from smartcart.container import Storefront, build_storefront
from smartcart.core.config import Settings, get_settings
from smartcart.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from smartcart.models import user as _user_models  # noqa: F401
from smartcart.models import product as _product_models  # noqa: F401
from smartcart.models import cart as _cart_models  # noqa: F401

# Routers
from smartcart.routers.auth import router as auth_router
from smartcart.routers.navigation import router as navigation_router
from smartcart.routers.shop import router as shop_router
from smartcart.routers.cart import router as cart_router
from smartcart.routers.recipes import router as recipes_router
from smartcart.routers.preferences import router as preferences_router
from smartcart.routers.dashboard import router as dashboard_router
from smartcart.routers.notifications import router as notifications_router

logger = logging.getLogger("uvicorn")


def create_app(
    settings: Settings | None = None,
    storefront: Storefront | None = None,
) -> FastAPI:
    """
    Build the FastAPI app.

    `storefront` lets tests inject one wired with fakes; otherwise it is
    built from settings with the Supabase clients.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        Startup:
          - Verify DB connectivity and create tables.
          - Load the local cart, then resolve the current session.

        Shutdown:
          - Drop auth and realtime subscriptions.
        """
        front: Storefront = app.state.storefront
        logger.info("🔄 Startup: Connecting to Supabase Postgres...")
        try:
            create_db_and_tables(front.engine)
            logger.info("✅ Startup: DB connection OK, tables verified.")
        except Exception as e:
            logger.error(f"❌ Startup: DB connection FAILED: {e}")
            raise
        front.start()
        yield
        logger.info("Shutdown: closing storefront session")
        front.close()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.storefront = storefront or build_storefront(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Versioned API prefix, e.g. /api/v1
    for router in (
        auth_router,
        navigation_router,
        shop_router,
        cart_router,
        recipes_router,
        preferences_router,
        dashboard_router,
        notifications_router,
    ):
        app.include_router(router, prefix=settings.API_V1_STR)

    @app.get("/")
    def root():
        """Health check endpoint."""
        return {"status": "ok", "service": "smartcart-storefront"}

    return app
