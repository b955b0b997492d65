# app/models/user.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Persistent user profile.

    Identity:
      - id: MUST match the identity provider's subject id (JWT "sub")

    Role:
      - "buyer" | "seller" | "admin"

    Credentials live with the identity provider; this table only mirrors
    identity, display name and application role.
    """

    __tablename__ = "users"

    id: str = Field(
        primary_key=True,
        index=True,
        description="Matches the identity provider subject id",
    )

    email: str = Field(
        index=True,
        description="Email from the identity provider",
    )

    name: str = Field(
        max_length=100,
        description="Display name",
    )

    # Application role (not Supabase RLS role)
    role: str = Field(
        default="buyer",
        index=True,
        description="Application role: buyer | seller | admin",
    )

    auth_provider: str | None = Field(
        default=None,
        description="Sign-in provider tag, e.g. password | google",
    )

    joined_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Registration timestamp (UTC)",
    )
