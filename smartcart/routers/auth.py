# smartcart/routers/auth.py
from fastapi import APIRouter, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from smartcart.container import Storefront
from smartcart.core.auth import (
    decode_access_token,
    get_auth_status,
    get_storefront,
    identity_from_claims,
)
from smartcart.schemas.user import AuthResult, AuthSnapshot, LoginRequest, SignupRequest

router = APIRouter(prefix="/auth", tags=["Auth"])

bearer_scheme = HTTPBearer()


@router.get("/status", response_model=AuthSnapshot)
def read_status(snapshot: AuthSnapshot = Depends(get_auth_status)):
    """Current session state and resolved role."""
    return snapshot


@router.post("/login", response_model=AuthResult)
def login(
    payload: LoginRequest,
    storefront: Storefront = Depends(get_storefront),
):
    """
    Sign in with email and password.

    A rejected sign in answers success=false; the reason is in the
    notifications.
    """
    return storefront.auth.login(payload.email, payload.password)


@router.post("/signup", response_model=AuthResult)
def signup(
    payload: SignupRequest,
    storefront: Storefront = Depends(get_storefront),
):
    """
    Create an account. The shopper profile is provisioned on first sign in.
    """
    return storefront.auth.signup(payload.email, payload.password, payload.username)


@router.post("/session", response_model=AuthResult)
def restore_session(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    storefront: Storefront = Depends(get_storefront),
):
    """
    Adopt an existing Supabase session from its access token.

    Raises 401 for an invalid/expired token.
    """
    claims = decode_access_token(credentials.credentials, storefront.settings)
    identity = identity_from_claims(claims)
    return storefront.auth.restore_session(identity)


@router.post("/logout", response_model=AuthResult)
def logout(storefront: Storefront = Depends(get_storefront)):
    """Sign out and stop mirroring the cart."""
    return storefront.auth.logout()
