# smartcart/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Storefront settings, read from the environment or a .env file.

    Must be set:
      - SUPABASE_URL, SUPABASE_KEY: project URL and anon key (auth + realtime)
      - DATABASE_URL: Postgres behind the project, or sqlite:// for local runs
      - SUPABASE_JWT_SECRET: verifies tokens handed to POST /auth/session

    Everything else has a default suited to local development.
    """

    PROJECT_NAME: str = "SmartCart Storefront"
    API_V1_STR: str = "/api/v1"

    # Supabase project and its Postgres
    SUPABASE_URL: str
    SUPABASE_KEY: str
    DATABASE_URL: str

    # JWT verification for session restore
    SUPABASE_JWT_SECRET: str
    SUPABASE_JWT_ALG: str = "HS256"

    # Realtime subscribes with this key when set (RLS would hide other rows)
    SUPABASE_SERVICE_ROLE_KEY: str | None = None

    # Local durable storage for the cart
    CART_STORAGE_DIR: str = ".smartcart"
    CART_STORAGE_KEY: str = "cart"

    # Cart sync
    ECHO_SUPPRESSION_SECONDS: float = 10.0
    REALTIME_TIMEOUT_SECONDS: float = 10.0

    # Dashboard analytics
    LOW_STOCK_THRESHOLD: int = 50

    # Max pending user-visible notifications
    NOTIFICATION_BUFFER: int = 50

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Settings are parsed once per process; tests build their own."""
    return Settings()
