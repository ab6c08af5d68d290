# smartcart/repositories/user_repo.py
from sqlalchemy import func, or_
from sqlmodel import Session, select

from smartcart.models.user import Owner, Shopper


class OwnerRepository:
    """
    Read access to the `owners` table.

    Owners are registered by the store out of band; the app never inserts.
    """

    def find(self, session: Session, user_id: str, email: str) -> Owner | None:
        """Match an owner by auth id or by email (pre-registered owners)."""
        stmt = select(Owner).where(or_(Owner.id == user_id, Owner.email == email))
        return session.exec(stmt).first()


class ShopperRepository:
    """
    Data access layer for Shopper.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    def get_by_id(self, session: Session, shopper_id: str) -> Shopper | None:
        """Return a Shopper by primary key, or None if not found."""
        return session.get(Shopper, shopper_id)

    def create(self, session: Session, shopper: Shopper) -> Shopper:
        """Insert a new Shopper and return the persisted row."""
        session.add(shopper)
        session.commit()
        session.refresh(shopper)
        return shopper

    def update(self, session: Session, shopper: Shopper) -> Shopper:
        """Persist changes to an existing Shopper."""
        session.add(shopper)
        session.commit()
        session.refresh(shopper)
        return shopper

    def count(self, session: Session) -> int:
        stmt = select(func.count()).select_from(Shopper)
        value = session.exec(stmt).one()
        return int(value or 0)
