# app/services/user_service.py
import logging

from sqlmodel import Session

from app.core import supabase_client
from app.core.auth import CallerIdentity, ensure_self_or_admin
from app.core.errors import Forbidden, NotFound, UpstreamFailure
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import UserCreate, UserUpdate
from app.services.seller_service import SellerService

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic for User.

    Responsibilities:
      - registration and profile edits
      - access rules (self or admin)
      - account deletion with its seller/product cascade
    """

    def __init__(self, repo: UserRepository, seller_service: SellerService):
        self.repo = repo
        self.seller_service = seller_service

    def register(
        self,
        session: Session,
        identity: CallerIdentity,
        payload: UserCreate,
    ) -> User:
        """
        Create (or overwrite) the profile row for a freshly signed-up user.

        Rules:
          - non-admins can only register themselves
          - non-admins cannot grant themselves the admin role
        """
        user_id = payload.user_id or identity.uid
        ensure_self_or_admin(identity, user_id)
        if payload.role == "admin" and not identity.is_admin:
            raise Forbidden("Cannot assign the admin role")

        user = self.repo.get_by_id(session, user_id) or User(
            id=user_id, email=payload.email, name=payload.name
        )
        user.email = payload.email
        user.name = payload.name
        user.role = payload.role
        user.auth_provider = payload.auth_provider
        return self.repo.save(session, user)

    def get_user(self, session: Session, identity: CallerIdentity, user_id: str) -> User:
        """
        Raises:
            Forbidden: caller is neither the user nor an admin.
            NotFound: no such user.
        """
        ensure_self_or_admin(identity, user_id)
        user = self.repo.get_by_id(session, user_id)
        if not user:
            raise NotFound("User not found")
        return user

    def update_user(
        self,
        session: Session,
        identity: CallerIdentity,
        user_id: str,
        payload: UserUpdate,
    ) -> bool:
        """
        Partial update of name / email. Returns False when nothing was sent.
        """
        user = self.get_user(session, identity, user_id)
        changes = payload.model_dump(exclude_none=True)
        if not changes:
            return False

        for name, value in changes.items():
            setattr(user, name, value)
        self.repo.save(session, user)
        return True

    def list_users(self, session: Session, skip: int, limit: int) -> list[User]:
        """List users with pagination (admin only)."""
        return self.repo.list_users(session, skip=skip, limit=limit)

    def count_by_role(self, session: Session, role: str) -> int:
        """Users holding `role`; a role nobody holds counts 0."""
        return self.repo.count_by_role(session, role)

    def delete_user(self, session: Session, identity: CallerIdentity, user_id: str) -> None:
        """
        Delete an account.

        Order:
          1. seller card and its products (if any) + user row, one commit
          2. revoke the identity with the provider

        A seller may own a card without a profile row; the account only
        counts as unknown when neither exists.
        """
        ensure_self_or_admin(identity, user_id)
        user = self.repo.get_by_id(session, user_id)

        had_card = self.seller_service.on_user_deleted(session, user_id)
        if user is None and not had_card:
            raise NotFound("User not found")

        if user is not None:
            self.repo.delete(session, user)
        session.commit()
        logger.info("User %s deleted (seller card removed: %s)", user_id, had_card)

        try:
            supabase_client.revoke_identity(user_id)
        except Exception as e:
            logger.error("Identity revocation failed for %s: %s", user_id, e)
            raise UpstreamFailure("Failed to revoke identity", details=str(e))
