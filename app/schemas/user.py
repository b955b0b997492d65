# app/schemas/user.py
from datetime import datetime
from typing import Literal

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field

Role = Literal["buyer", "seller", "admin"]


def _normalize_name(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("name cannot be empty")
    return v


class UserCreate(SQLModel):
    """
    Registration payload, sent right after sign-up with the identity provider.

    `user_id` is optional; when given it must match the token subject
    unless the caller is an admin.
    """

    model_config = ConfigDict(extra="forbid")

    user_id: str | None = None
    email: EmailStr
    name: str = Field(max_length=100)
    role: Role = "buyer"
    auth_provider: str | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return _normalize_name(v)


class UserRead(SQLModel):
    """Response schema returned to clients."""

    id: str
    email: str
    name: str
    role: Role
    auth_provider: str | None = None
    joined_at: datetime


class UserUpdate(SQLModel):
    """
    Partial profile update. Only name and email are editable.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=100)
    email: EmailStr | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        return _normalize_name(v)


class CountRead(SQLModel):
    count: int


class MessageRead(SQLModel):
    message: str
