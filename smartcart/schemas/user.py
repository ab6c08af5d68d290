# smartcart/schemas/user.py
from typing import Literal

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from smartcart.core.navigation import Role
from smartcart.data.recipes import DIETARY_RESTRICTION_IDS

AuthState = Literal["unauthenticated", "resolving", "shopper", "owner"]


class Identity(SQLModel):
    """
    Signed-in identity as reported by Supabase Auth.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    email: str


class RoleResolution(SQLModel):
    """
    Result of a role check.

    provisioned=True means a shopper row was created by this check.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    provisioned: bool = False


class AuthSnapshot(SQLModel):
    """
    Current state of the auth/role resolver.
    """

    state: AuthState
    identity: Identity | None = None
    role: Role | None = None
    provisioned: bool = False


class LoginRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=1)


class SignupRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=6)
    username: str | None = Field(default=None, max_length=50)

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("username cannot be empty")
        return v


class AuthResult(SQLModel):
    success: bool
    status: AuthSnapshot


class DietaryPreferencesUpdate(SQLModel):
    """
    Replace the shopper's dietary preferences.

    Only known restriction ids are accepted; duplicates are dropped while
    keeping the first occurrence (order drives substitution lookups).
    """

    model_config = ConfigDict(extra="forbid")

    preferences: list[str]

    @field_validator("preferences")
    @classmethod
    def known_tags(cls, v: list[str]) -> list[str]:
        seen: list[str] = []
        for tag in v:
            tag = tag.strip().lower()
            if tag not in DIETARY_RESTRICTION_IDS:
                raise ValueError(f"unknown dietary restriction: {tag}")
            if tag not in seen:
                seen.append(tag)
        return seen


class DietaryPreferencesRead(SQLModel):
    preferences: list[str]
    saved: bool = True


class DietaryRestrictionRead(SQLModel):
    id: str
    label: str
    description: str
