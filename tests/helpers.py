import os
import time

from jose import jwt
from sqlmodel import Session

from app.database import engine


def make_token(uid: str, role: str | None = "buyer", email: str | None = None) -> str:
    claims = {
        "sub": uid,
        "email": email or f"{uid}@example.com",
        "exp": int(time.time()) + 3600,
    }
    if role is not None:
        claims["app_metadata"] = {"role": role}
    return jwt.encode(claims, os.environ["SUPABASE_JWT_SECRET"], algorithm="HS256")


def auth(uid: str, role: str | None = "buyer") -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(uid, role)}"}


def fetch(model, key):
    """Read a row through a fresh session so no cached state leaks in."""
    with Session(engine) as s:
        return s.get(model, key)
