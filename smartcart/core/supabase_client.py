# smartcart/core/supabase_client.py
import logging
from collections.abc import Callable
from typing import Any, Protocol

from supabase import create_client, Client

from smartcart.core.config import Settings
from smartcart.core.errors import AuthProviderError
from smartcart.core.realtime import Subscription
from smartcart.schemas.user import Identity

logger = logging.getLogger(__name__)

# (event, identity or None)
AuthChangeCallback = Callable[[str, Identity | None], None]


def supabase_public(settings: Settings) -> Client:
    """
    Create a Supabase client with the anon/public key.

    Use cases:
      - Supabase Auth (sign in / sign up / sign out)

    Note: This client still respects RLS.
    """
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


class AuthProvider(Protocol):
    """
    Remote authentication provider used by AuthService.
    """

    def get_session(self) -> Identity | None: ...

    def sign_in(self, email: str, password: str) -> Identity: ...

    def sign_up(
        self, email: str, password: str, username: str | None = None
    ) -> Identity | None: ...

    def sign_out(self) -> None: ...

    def on_auth_state_change(self, callback: AuthChangeCallback) -> Subscription: ...


def _identity_of(session: Any) -> Identity | None:
    """Extract the identity from a supabase-py Session (or None)."""
    if session is None or getattr(session, "user", None) is None:
        return None
    user = session.user
    return Identity(id=str(user.id), email=user.email or "")


class SupabaseAuthProvider:
    """
    AuthProvider backed by supabase-py `client.auth`.

    Every provider failure is re-raised as AuthProviderError carrying the
    message Supabase returned.
    """

    def __init__(self, client: Client):
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseAuthProvider":
        return cls(supabase_public(settings))

    def get_session(self) -> Identity | None:
        try:
            session = self.client.auth.get_session()
        except Exception as e:
            raise AuthProviderError(str(e)) from e
        return _identity_of(session)

    def sign_in(self, email: str, password: str) -> Identity:
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            raise AuthProviderError(str(e)) from e

        identity = _identity_of(response.session)
        if identity is None:
            raise AuthProviderError("Sign in returned no session")
        return identity

    def sign_up(
        self, email: str, password: str, username: str | None = None
    ) -> Identity | None:
        """
        Register a new account.

        Returns None when Supabase requires email confirmation first
        (no session is issued yet).
        """
        credentials: dict[str, Any] = {"email": email, "password": password}
        if username:
            credentials["options"] = {"data": {"username": username}}
        try:
            response = self.client.auth.sign_up(credentials)
        except Exception as e:
            raise AuthProviderError(str(e)) from e
        return _identity_of(response.session)

    def sign_out(self) -> None:
        try:
            self.client.auth.sign_out()
        except Exception as e:
            raise AuthProviderError(str(e)) from e

    def on_auth_state_change(self, callback: AuthChangeCallback) -> Subscription:
        def _forward(event: Any, session: Any) -> None:
            callback(str(getattr(event, "value", event)), _identity_of(session))

        return self.client.auth.on_auth_state_change(_forward)
