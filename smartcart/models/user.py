# smartcart/models/user.py
from datetime import datetime, timezone

from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field


class Owner(SQLModel, table=True):
    """
    Store owner account (Supabase `owners` table).

    Identity:
      - id: matches Supabase auth.users.id
      - email: lets an owner be registered before their first sign-in

    A row here always wins over a `shoppers` row for the same identity.
    """

    __tablename__ = "owners"

    id: str = Field(
        primary_key=True,
        description="Matches Supabase auth.users.id",
    )

    email: str = Field(
        index=True,
        description="Email from Supabase auth.users",
    )


class Shopper(SQLModel, table=True):
    """
    Shopper profile (Supabase `shoppers` table).

    Rows are provisioned lazily the first time an identity that is not an
    owner signs in. `rfid_tag` links the profile to a physical cart card and
    is filled in by the store, never by the shopper.

    `dietary_preferences` is a text[] column on Supabase; JSON keeps the
    model portable to SQLite.
    """

    __tablename__ = "shoppers"

    id: str = Field(
        primary_key=True,
        description="Matches Supabase auth.users.id",
    )

    email: str = Field(
        index=True,
    )

    rfid_tag: str | None = Field(
        default=None,
        description="RFID card id of the shopper's physical cart",
    )

    dietary_preferences: list[str] | None = Field(
        default=None,
        sa_column=Column(JSON, nullable=True),
    )

    username: str | None = Field(
        default=None,
        max_length=50,
    )

    timestamp: datetime | None = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Provisioning timestamp (UTC)",
    )
