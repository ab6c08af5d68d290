# smartcart/core/auth.py
from typing import Any

from fastapi import Depends, HTTPException, Request, status
from jose import jwt, JWTError

from smartcart.container import Storefront
from smartcart.core.config import Settings
from smartcart.core.navigation import redirect_for
from smartcart.schemas.user import AuthSnapshot, Identity


def get_storefront(request: Request) -> Storefront:
    """The storefront built at startup (see `smartcart.main.create_app`)."""
    return request.app.state.storefront


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """
    Decode and verify a Supabase access token (JWT).

    Verification:
      - signature (HS256 using SUPABASE_JWT_SECRET)
      - expiration time (exp)
      - audience is NOT verified (Supabase 'aud' may vary)

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def identity_from_claims(claims: dict[str, Any]) -> Identity:
    """
    Build the Identity from decoded claims ('sub' and 'email').

    Raises:
        HTTPException(401): if token is missing required claims.
    """
    sub = claims.get("sub")
    email = claims.get("email")
    if not sub or not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing sub/email",
        )
    return Identity(id=str(sub), email=email)


def get_auth_status(storefront: Storefront = Depends(get_storefront)) -> AuthSnapshot:
    return storefront.auth.snapshot()


def require_auth(snapshot: AuthSnapshot = Depends(get_auth_status)) -> AuthSnapshot:
    """
    Enforce a resolved session.

    Raises:
        HTTPException(401): if nobody is signed in (or the role is still resolving).
    """
    if snapshot.identity is None or snapshot.role is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return snapshot


def require_shopper(snapshot: AuthSnapshot = Depends(require_auth)) -> Identity:
    """
    Enforce that only shoppers can access a route.

    Use this for:
      - dietary preference endpoints
    Owners will be rejected with 403.
    """
    if snapshot.role != "shopper":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Shopper access required",
        )
    return snapshot.identity


def require_owner(snapshot: AuthSnapshot = Depends(require_auth)) -> Identity:
    """
    Enforce owner role.

    Raises:
        HTTPException(403): if role is not owner.
    """
    if snapshot.role != "owner":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Owner access required",
        )
    return snapshot.identity


class ScreenGate:
    """
    Route dependency that keeps each role on its own screens.

    A visitor who may not see `screen` gets a 307 to the screen they
    belong on (see `redirect_for`).
    """

    def __init__(self, screen: str):
        self.screen = screen

    def __call__(self, snapshot: AuthSnapshot = Depends(get_auth_status)) -> None:
        target = redirect_for(snapshot.role, self.screen)
        if target is not None:
            raise HTTPException(
                status_code=status.HTTP_307_TEMPORARY_REDIRECT,
                detail=f"Redirecting to {target}",
                headers={"Location": target},
            )
