# smartcart/services/auth_service.py
import logging
import threading
from collections.abc import Callable
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from smartcart.core.errors import AuthProviderError
from smartcart.core.notifications import Notifier
from smartcart.core.realtime import Subscription
from smartcart.core.supabase_client import AuthProvider
from smartcart.database import SessionFactory
from smartcart.models.user import Shopper
from smartcart.repositories.user_repo import OwnerRepository, ShopperRepository
from smartcart.schemas.user import (
    AuthResult,
    AuthSnapshot,
    AuthState,
    Identity,
    RoleResolution,
)

logger = logging.getLogger(__name__)

AuthListener = Callable[[AuthSnapshot], None]

SIGN_IN_EVENTS = frozenset({"SIGNED_IN", "INITIAL_SESSION", "TOKEN_REFRESHED", "USER_UPDATED"})
SIGN_OUT_EVENTS = frozenset({"SIGNED_OUT"})


def default_username(email: str) -> str:
    """
    Derive a default display name from email if the shopper did not
    choose one at sign up.
    """
    if "@" in email:
        return email.split("@", 1)[0]
    return email


class AuthService:
    """
    Session and role resolver.

    States: unauthenticated -> resolving -> shopper | owner.

    Responsibilities:
      - follow the provider's session (start, provider events)
      - sign in / sign up / sign out / restore a session from a token
      - resolve the role of every signed-in identity:
          owners (by id or email) -> owner
          shoppers (by id)        -> shopper
          neither                 -> shopper, row provisioned
      - tell listeners (the cart engine) about every state change

    Rules:
      - only one role check runs at a time; a concurrent one is dropped
      - lookup failures are logged and read as "no row"
    """

    def __init__(
        self,
        provider: AuthProvider,
        notifier: Notifier,
        session_factory: SessionFactory,
        owner_repo: OwnerRepository | None = None,
        shopper_repo: ShopperRepository | None = None,
    ):
        self.provider = provider
        self.notifier = notifier
        self.session_factory = session_factory
        self.owner_repo = owner_repo or OwnerRepository()
        self.shopper_repo = shopper_repo or ShopperRepository()

        self._state: AuthState = "unauthenticated"
        self._identity: Identity | None = None
        self._provisioned = False

        self._listeners: list[AuthListener] = []
        self._subscription: Subscription | None = None
        self._check_lock = threading.Lock()
        # email -> username chosen at sign up, used when the row is provisioned
        self._signup_usernames: dict[str, str] = {}
        self._state_lock = threading.RLock()

    # ---- state ----

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def identity(self) -> Identity | None:
        return self._identity

    def snapshot(self) -> AuthSnapshot:
        with self._state_lock:
            role = self._state if self._state in ("shopper", "owner") else None
            return AuthSnapshot(
                state=self._state,
                identity=self._identity,
                role=role,
                provisioned=self._provisioned,
            )

    def add_listener(self, listener: AuthListener) -> None:
        self._listeners.append(listener)

    def _emit(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception(f"Auth listener failed for state {snapshot.state}")

    def _set_unauthenticated(self) -> None:
        with self._state_lock:
            changed = self._state != "unauthenticated" or self._identity is not None
            self._state = "unauthenticated"
            self._identity = None
            self._provisioned = False
        if changed:
            logger.info("Session cleared")
        self._emit()

    # ---- lifecycle ----

    def start(self) -> AuthSnapshot:
        """
        Subscribe to provider events and resolve the current session.
        """
        with self._state_lock:
            self._state = "resolving"

        if self._subscription is None:
            try:
                self._subscription = self.provider.on_auth_state_change(
                    self._on_provider_event
                )
            except AuthProviderError as e:
                logger.error(f"Could not subscribe to auth changes: {e.message}")

        try:
            identity = self.provider.get_session()
        except AuthProviderError as e:
            logger.error(f"Session check failed: {e.message}")
            identity = None

        if identity is None:
            self._set_unauthenticated()
        else:
            self._handle_sign_in(identity)
        return self.snapshot()

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_provider_event(self, event: str, identity: Identity | None) -> None:
        logger.info(f"Auth event {event}")
        if event in SIGN_OUT_EVENTS:
            self._set_unauthenticated()
        elif event in SIGN_IN_EVENTS:
            if identity is None:
                self._set_unauthenticated()
            else:
                self._handle_sign_in(identity)

    # ---- role resolution ----

    def _lookup(self, table: str, query: Callable[[Any], Any]) -> Any:
        try:
            with self.session_factory() as session:
                return query(session)
        except SQLAlchemyError:
            logger.exception(f"Role lookup in {table} failed")
            return None

    def check_role(
        self, identity: Identity, username: str | None = None
    ) -> RoleResolution:
        """
        Resolve the role of an identity, provisioning a shopper row if needed.
        """
        owner = self._lookup(
            "owners",
            lambda s: self.owner_repo.find(s, identity.id, identity.email),
        )
        if owner is not None:
            return RoleResolution(role="owner")

        shopper = self._lookup(
            "shoppers",
            lambda s: self.shopper_repo.get_by_id(s, identity.id),
        )
        if shopper is not None:
            return RoleResolution(role="shopper")

        try:
            with self.session_factory() as session:
                self.shopper_repo.create(
                    session,
                    Shopper(
                        id=identity.id,
                        email=identity.email,
                        rfid_tag=None,
                        dietary_preferences=[],
                        username=username or default_username(identity.email),
                    ),
                )
        except SQLAlchemyError:
            logger.exception(f"Provisioning shopper {identity.id} failed")
            return RoleResolution(role="shopper", provisioned=False)

        logger.info(f"Provisioned shopper profile for {identity.email}")
        return RoleResolution(role="shopper", provisioned=True)

    def _handle_sign_in(
        self, identity: Identity, username: str | None = None
    ) -> RoleResolution | None:
        """
        Run the role check for a sign-in event.

        Returns None when another check is already running.
        """
        if not self._check_lock.acquire(blocking=False):
            logger.info(f"Role check in progress; dropping check for {identity.email}")
            return None
        try:
            with self._state_lock:
                # A refresh for the signed-in identity keeps its role visible.
                if self._identity != identity or self._state not in ("shopper", "owner"):
                    self._state = "resolving"
                self._identity = identity

            username = username or self._signup_usernames.pop(identity.email, None)
            resolution = self.check_role(identity, username=username)

            with self._state_lock:
                # Signed out while resolving.
                if self._identity != identity:
                    return None
                self._state = resolution.role
                self._provisioned = resolution.provisioned
            logger.info(f"Resolved {identity.email} as {resolution.role}")
        finally:
            self._check_lock.release()

        self._emit()
        return resolution

    def _ensure_resolved(
        self, identity: Identity, username: str | None = None
    ) -> None:
        # The provider may already have reported this sign-in through its event.
        with self._state_lock:
            if self._identity == identity and self._state in ("shopper", "owner"):
                return
        self._handle_sign_in(identity, username=username)

    # ---- user actions ----

    def login(self, email: str, password: str) -> AuthResult:
        try:
            identity = self.provider.sign_in(email, password)
        except AuthProviderError as e:
            logger.warning(f"Login failed for {email}: {e.message}")
            self.notifier.notify("Login failed", e.message, variant="destructive")
            return AuthResult(success=False, status=self.snapshot())

        self._ensure_resolved(identity)
        self.notifier.notify("Welcome back", f"Signed in as {identity.email}.")
        return AuthResult(success=True, status=self.snapshot())

    def signup(
        self, email: str, password: str, username: str | None = None
    ) -> AuthResult:
        """
        Register an account.

        When the provider asks for email confirmation no session exists yet;
        the shopper row is then provisioned on the first sign in.
        """
        if username:
            self._signup_usernames[email] = username
        try:
            identity = self.provider.sign_up(email, password, username)
        except AuthProviderError as e:
            logger.warning(f"Sign up failed for {email}: {e.message}")
            self.notifier.notify("Sign up failed", e.message, variant="destructive")
            return AuthResult(success=False, status=self.snapshot())

        if identity is None:
            self.notifier.notify(
                "Check your email",
                "We sent you a confirmation link to finish creating your account.",
            )
            return AuthResult(success=True, status=self.snapshot())

        self._ensure_resolved(identity, username=username)
        self.notifier.notify("Account created", f"Welcome, {username or identity.email}!")
        return AuthResult(success=True, status=self.snapshot())

    def restore_session(self, identity: Identity) -> AuthResult:
        """Adopt an identity taken from a verified access token."""
        self._ensure_resolved(identity)
        return AuthResult(success=True, status=self.snapshot())

    def logout(self) -> AuthResult:
        try:
            self.provider.sign_out()
        except AuthProviderError as e:
            logger.error(f"Provider sign out failed: {e.message}")
        self._set_unauthenticated()
        self.notifier.notify("Signed out", "You have been signed out.")
        return AuthResult(success=True, status=self.snapshot())
