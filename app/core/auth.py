# app/core/auth.py
from dataclasses import dataclass
from typing import Any, Callable

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from app.core.config import get_settings
from app.core.errors import Forbidden, Unauthorized
from app.database import get_session
from app.models.user import User

settings = get_settings()

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so require_auth can answer with our own 401 body.
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CallerIdentity:
    """Who is calling: identity provider subject plus application role."""

    uid: str
    email: str | None = None
    role: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a Supabase access token (JWT).

    Verification:
      - signature (HS256 using SUPABASE_JWT_SECRET)
      - expiration time (exp)
      - audience is NOT verified (Supabase 'aud' may vary)

    Raises:
        Unauthorized: if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError as e:
        raise Unauthorized("Invalid or expired token", details=str(e))


def _role_claim(payload: dict[str, Any]) -> str | None:
    """
    Application role carried by the token, if any.

    Supabase's top-level `role` claim is the Postgres role
    ("authenticated"), so the app role lives in app_metadata.
    """
    app_metadata = payload.get("app_metadata") or {}
    return app_metadata.get("role") or payload.get("user_role")


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> CallerIdentity | None:
    """
    Resolve the caller from a bearer JWT.

    Flow:
      1. No Authorization header => anonymous => None.
      2. Decode JWT => 'sub' becomes the caller's user id.
      3. Role comes from the token claim, else from the stored profile.
    """
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    sub = payload.get("sub")
    if not sub:
        raise Unauthorized("Token missing sub")

    role = _role_claim(payload)
    if role is None:
        profile = session.get(User, sub)
        role = profile.role if profile else None

    return CallerIdentity(uid=sub, email=payload.get("email"), role=role)


def require_auth(
    identity: CallerIdentity | None = Depends(get_current_identity),
) -> CallerIdentity:
    """
    Enforce authentication. Anonymous callers are rejected with 401.
    """
    if identity is None:
        raise Unauthorized("Authentication required")
    return identity


def require_roles(*roles: str) -> Callable[..., CallerIdentity]:
    """
    Build a dependency that lets through only the given roles.

        @router.post("", dependencies=[Depends(require_roles("seller", "admin"))])
    """

    def dependency(identity: CallerIdentity = Depends(require_auth)) -> CallerIdentity:
        if identity.role not in roles:
            raise Forbidden(f"Requires role: {' or '.join(roles)}")
        return identity

    return dependency


require_admin = require_roles("admin")
require_seller = require_roles("seller", "admin")


def ensure_self_or_admin(identity: CallerIdentity, user_id: str) -> None:
    """Raise Forbidden unless the caller is `user_id` or an admin."""
    if identity.uid != user_id and not identity.is_admin:
        raise Forbidden("Not allowed to access another user's data")
