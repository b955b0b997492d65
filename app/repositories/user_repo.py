# app/repositories/user_repo.py
from sqlalchemy import func
from sqlmodel import Session, select

from app.models.user import User


class UserRepository:
    """
    Data access layer for User.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    def get_by_id(self, session: Session, user_id: str) -> User | None:
        """Return a User by primary key, or None if not found."""
        return session.get(User, user_id)

    def list_users(self, session: Session, skip: int = 0, limit: int = 50) -> list[User]:
        stmt = select(User).order_by(User.joined_at.desc()).offset(skip).limit(limit)
        return session.exec(stmt).all()

    def count_by_role(self, session: Session, role: str) -> int:
        stmt = select(func.count()).select_from(User).where(User.role == role)
        return int(session.exec(stmt).one() or 0)

    def save(self, session: Session, user: User) -> User:
        """Insert or update a User and return the persisted row."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def delete(self, session: Session, user: User) -> None:
        """Delete a User without committing; cascades commit together."""
        session.delete(user)
