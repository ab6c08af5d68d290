# smartcart/core/navigation.py
from typing import Literal

# App-level roles. "unauthenticated" = no session.
Role = Literal["owner", "shopper"]

SHOP_SCREEN = "/shop"
CART_SCREEN = "/cart"
RECIPES_SCREEN = "/recipes"
DASHBOARD_SCREEN = "/dashboard"
AUTH_SCREEN = "/auth"

SHOPPER_ONLY_SCREENS = frozenset({SHOP_SCREEN, CART_SCREEN, RECIPES_SCREEN})
OWNER_ONLY_SCREENS = frozenset({DASHBOARD_SCREEN})


def _screen_of(path: str) -> str:
    """
    Reduce a route path to its top-level screen:
        "/recipes/3" -> "/recipes", "shop" -> "/shop"
    """
    parts = [p for p in path.split("?", 1)[0].split("/") if p]
    return f"/{parts[0]}" if parts else "/"


def redirect_for(role: Role | None, path: str) -> str | None:
    """
    Return where a visitor with `role` must be sent instead of `path`,
    or None when the screen is allowed.

    Rules:
      - owner on shop/cart/recipes -> dashboard
      - shopper on dashboard -> shop
      - unauthenticated on dashboard -> auth
    """
    screen = _screen_of(path)

    if role == "owner" and screen in SHOPPER_ONLY_SCREENS:
        return DASHBOARD_SCREEN

    if screen in OWNER_ONLY_SCREENS:
        if role == "shopper":
            return SHOP_SCREEN
        if role is None:
            return AUTH_SCREEN

    return None
