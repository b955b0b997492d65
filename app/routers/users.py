# app/routers/users.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import CallerIdentity, require_admin, require_auth
from app.database import get_session
from app.repositories.product_repo import ProductRepository
from app.repositories.seller_repo import SellerRepository
from app.repositories.user_repo import UserRepository
from app.schemas.user import MessageRead, UserCreate, UserRead, UserUpdate
from app.services.seller_service import SellerService
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

service = UserService(
    UserRepository(),
    SellerService(SellerRepository(), ProductRepository()),
)


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(
    payload: UserCreate,
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_auth),
):
    """
    Store the profile of a user who just signed up with the identity provider.
    """
    return service.register(session, identity, payload)


@router.get("/me", response_model=UserRead)
def read_me(
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_auth),
):
    """Return the authenticated user's profile."""
    return service.get_user(session, identity, identity.uid)


@router.get(
    "",
    response_model=list[UserRead],
    dependencies=[Depends(require_admin)],
)
def list_users(
    session: Session = Depends(get_session),
    skip: int = 0,
    limit: int = 50,
):
    """List all users (admin only)."""
    return service.list_users(session, skip, limit)


@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: str,
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_auth),
):
    """Get a user by id (self or admin)."""
    return service.get_user(session, identity, user_id)


@router.patch("/{user_id}", response_model=MessageRead)
def update_user(
    user_id: str,
    payload: UserUpdate,
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_auth),
):
    """Update name and/or email (self or admin)."""
    if service.update_user(session, identity, user_id, payload):
        return MessageRead(message="User data updated successfully")
    return MessageRead(message="No updates provided")


@router.delete("/{user_id}", response_model=MessageRead)
def delete_user(
    user_id: str,
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_auth),
):
    """
    Delete an account (self or admin).

    Cascades to the seller card and its products, then revokes the
    identity with the provider.
    """
    service.delete_user(session, identity, user_id)
    return MessageRead(message="User deleted successfully")
