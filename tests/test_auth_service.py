from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from conftest import FakeAuthProvider, failing_session_factory
from smartcart.models.user import Owner, Shopper
from smartcart.repositories.user_repo import OwnerRepository, ShopperRepository
from smartcart.schemas.user import Identity
from smartcart.services.auth_service import AuthService


class _BrokenInsertShopperRepository(ShopperRepository):
    def create(self, session, shopper):
        raise OperationalError("INSERT", {}, Exception("permission denied"))


class _RecordingOwnerRepository(OwnerRepository):
    """Records the role visible to requests while the owner lookup runs."""

    def __init__(self):
        self.auth: AuthService | None = None
        self.roles_during_lookup: list[str | None] = []

    def find(self, session, user_id, email):
        self.roles_during_lookup.append(self.auth.snapshot().role)
        return super().find(session, user_id, email)


@pytest.fixture
def provider() -> FakeAuthProvider:
    return FakeAuthProvider()


@pytest.fixture
def auth(provider, notifier, seeded) -> AuthService:
    return AuthService(provider, notifier, seeded)


def test_owner_row_wins_over_shopper_row(auth, seeded) -> None:
    with seeded() as session:
        session.add(Shopper(id="owner-1", email="owner@smartcart.tn"))
        session.commit()

    resolution = auth.check_role(Identity(id="owner-1", email="owner@smartcart.tn"))

    assert resolution.role == "owner"
    assert resolution.provisioned is False


def test_owner_matched_by_email(auth) -> None:
    resolution = auth.check_role(Identity(id="new-auth-id", email="owner@smartcart.tn"))
    assert resolution.role == "owner"


def test_existing_shopper(auth) -> None:
    resolution = auth.check_role(Identity(id="shopper-1", email="amira@example.com"))
    assert (resolution.role, resolution.provisioned) == ("shopper", False)


def test_unknown_identity_is_provisioned_as_shopper(auth, seeded) -> None:
    resolution = auth.check_role(Identity(id="fresh-1", email="yassine@example.com"))

    assert (resolution.role, resolution.provisioned) == ("shopper", True)
    with seeded() as session:
        row = session.get(Shopper, "fresh-1")
        assert row.username == "yassine"
        assert row.dietary_preferences == []
        assert row.rfid_tag is None
        assert session.get(Owner, "fresh-1") is None


def test_failed_provisioning_still_resolves_shopper(provider, notifier, seeded) -> None:
    auth = AuthService(
        provider, notifier, seeded, shopper_repo=_BrokenInsertShopperRepository()
    )
    resolution = auth.check_role(Identity(id="fresh-2", email="x@example.com"))
    assert (resolution.role, resolution.provisioned) == ("shopper", False)


def test_lookup_errors_fall_back_to_shopper(provider, notifier) -> None:
    auth = AuthService(provider, notifier, failing_session_factory)
    resolution = auth.check_role(Identity(id="owner-1", email="owner@smartcart.tn"))
    assert (resolution.role, resolution.provisioned) == ("shopper", False)


def test_concurrent_role_check_is_dropped(auth) -> None:
    auth._check_lock.acquire()
    try:
        result = auth._handle_sign_in(Identity(id="shopper-1", email="amira@example.com"))
    finally:
        auth._check_lock.release()

    assert result is None
    assert auth.state == "unauthenticated"


def test_start_without_session_is_unauthenticated(auth) -> None:
    snapshot = auth.start()
    assert snapshot.state == "unauthenticated"
    assert snapshot.identity is None


def test_start_with_session_resolves_role(auth, provider) -> None:
    provider.session = Identity(id="owner-1", email="owner@smartcart.tn")
    snapshot = auth.start()
    assert (snapshot.state, snapshot.role) == ("owner", "owner")


def test_login_resolves_and_notifies_listeners(auth, provider) -> None:
    provider.register("amira@example.com", "secret", "shopper-1")
    seen = []
    auth.add_listener(seen.append)
    auth.start()

    result = auth.login("amira@example.com", "secret")

    assert result.success is True
    assert result.status.role == "shopper"
    assert seen[-1].state == "shopper"
    assert seen[-1].identity.id == "shopper-1"


def test_failed_login_notifies(auth, notifier) -> None:
    auth.start()
    result = auth.login("nobody@example.com", "bad")

    assert result.success is False
    assert result.status.state == "unauthenticated"
    note = notifier.drain()[-1]
    assert (note.title, note.description, note.variant) == (
        "Login failed",
        "Invalid login credentials",
        "destructive",
    )


def test_logout_clears_role(auth, provider) -> None:
    provider.register("owner@smartcart.tn", "secret", "owner-1")
    auth.start()
    auth.login("owner@smartcart.tn", "secret")

    result = auth.logout()

    assert result.status.state == "unauthenticated"
    assert result.status.role is None


def test_provider_sign_out_event(auth, provider) -> None:
    provider.register("amira@example.com", "secret", "shopper-1")
    auth.start()
    auth.login("amira@example.com", "secret")

    provider.sign_out()

    assert auth.state == "unauthenticated"


def test_signup_provisions_with_chosen_username(auth, seeded) -> None:
    auth.start()
    result = auth.signup("new@example.com", "secret1", "Nour")

    assert result.success is True
    assert result.status.role == "shopper"
    assert result.status.provisioned is True
    with seeded() as session:
        row = session.get(Shopper, result.status.identity.id)
        assert row.username == "Nour"


def test_signup_awaiting_confirmation(auth, provider, notifier) -> None:
    provider.require_confirmation = True
    auth.start()

    result = auth.signup("new@example.com", "secret1")

    assert result.success is True
    assert result.status.state == "unauthenticated"
    assert notifier.drain()[-1].title == "Check your email"


def test_token_refresh_keeps_current_role_visible(provider, notifier, seeded) -> None:
    owners = _RecordingOwnerRepository()
    auth = AuthService(provider, notifier, seeded, owner_repo=owners)
    owners.auth = auth
    provider.register("owner@smartcart.tn", "secret", "owner-1")
    auth.start()
    auth.login("owner@smartcart.tn", "secret")
    assert owners.roles_during_lookup == [None]

    provider.callbacks[0]("TOKEN_REFRESHED", provider.session)

    assert owners.roles_during_lookup == [None, "owner"]
    assert auth.state == "owner"


def test_switching_identity_hides_previous_role(provider, notifier, seeded) -> None:
    owners = _RecordingOwnerRepository()
    auth = AuthService(provider, notifier, seeded, owner_repo=owners)
    owners.auth = auth
    provider.register("amira@example.com", "secret", "shopper-1")
    provider.register("owner@smartcart.tn", "secret", "owner-1")
    auth.start()
    auth.login("amira@example.com", "secret")

    auth.login("owner@smartcart.tn", "secret")

    assert owners.roles_during_lookup == [None, None]
    assert (auth.state, auth.identity.id) == ("owner", "owner-1")
