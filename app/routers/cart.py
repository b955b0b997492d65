# app/routers/cart.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import CallerIdentity, require_auth
from app.database import get_session
from app.repositories.cart_repo import CartRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.cart import (
    CartAddPayload,
    CartAddResult,
    CartRead,
    CartRemovePayload,
    CartRemoveResult,
)
from app.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])

cart_repo = CartRepository()
product_repo = ProductRepository()
service = CartService(cart_repo, product_repo)


@router.get("", response_model=CartRead)
@router.get("/retrieve", response_model=CartRead, include_in_schema=False)
def get_my_cart(
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_auth),
):
    """
    Get the current user's cart lines. A user without a cart gets [].
    """
    return CartRead(items=service.retrieve(session, identity.uid))


@router.post("/add", response_model=CartAddResult)
def add_to_cart(
    payload: CartAddPayload,
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_auth),
):
    """
    Add one unit of a product; repeated adds raise the line quantity.
    """
    service.add_item(session, identity.uid, payload)
    return CartAddResult(message="Item added to cart")


@router.post("/remove", response_model=CartRemoveResult)
def remove_from_cart(
    payload: CartRemovePayload,
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_auth),
):
    """
    Remove a product's line and return what is left.
    """
    items = service.remove_item(session, identity.uid, payload.product_id)
    return CartRemoveResult(message="Item removed from cart", updated_items=items)
