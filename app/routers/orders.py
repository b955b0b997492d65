# app/routers/orders.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import CallerIdentity, require_admin, require_auth
from app.database import get_session
from app.repositories.cart_repo import CartRepository
from app.repositories.order_repo import OrderRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.order import OrderCreate, OrderRead
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

order_repo = OrderRepository()
cart_repo = CartRepository()
product_repo = ProductRepository()
service = OrderService(order_repo, cart_repo, product_repo)


# -------- User-facing endpoints --------


@router.post("", response_model=OrderRead)
def place_order(
    payload: OrderCreate,
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_auth),
):
    """
    Create an order from the current user's cart.

    The body carries order details (address, phone, ...) which are stored
    as given. 400 when the cart is empty.
    """
    return service.place_order(session, identity.uid, payload.order_details())


@router.get("", response_model=list[OrderRead])
def list_my_orders(
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_auth),
    skip: int = 0,
    limit: int = 50,
):
    """
    List the authenticated user's orders, newest first.
    """
    return service.list_user_orders(session, identity.uid, skip, limit)


# -------- Admin endpoints --------


@router.get(
    "/all",
    response_model=list[OrderRead],
    dependencies=[Depends(require_admin)],
)
def list_all_orders(
    session: Session = Depends(get_session),
    skip: int = 0,
    limit: int = 50,
):
    """
    List all orders (admin only).
    """
    return service.list_all_orders(session, skip, limit)


@router.get("/{order_id}", response_model=OrderRead)
def get_order(
    order_id: str,
    session: Session = Depends(get_session),
    identity: CallerIdentity = Depends(require_auth),
):
    """
    Get one order. Owners and admins only; anyone else gets 404.
    """
    return service.get_order(session, identity, order_id)
