# app/services/order_service.py
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.auth import CallerIdentity
from app.core.errors import InvalidState, NotFound
from app.models.order import Order
from app.repositories.cart_repo import CartRepository
from app.repositories.order_repo import OrderRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.order import RESERVED_ORDER_KEYS, OrderRead

logger = logging.getLogger(__name__)

INITIAL_STATUS = "Pending"


class OrderService:
    """
    Business logic for orders.

    Responsibilities:
      - Turn the cart into an order holding a copy of its lines
      - Settle inventory: one sale (and one unit of stock) per order line
      - Clear the cart after every line was issued
      - Read access to own orders, all orders for admins

    Settlement is best-effort: once the order row is committed it is never
    rolled back. Lines whose product update fails are logged and skipped.
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ):
        self.order_repo = order_repo
        self.cart_repo = cart_repo
        self.product_repo = product_repo

    # -------- User-facing operations --------

    def place_order(
        self,
        session: Session,
        user_id: str,
        details: dict[str, Any],
    ) -> OrderRead:
        """
        Convert the current user's cart into an Order.

        Steps:
          1. Load cart; error if absent or empty.
          2. Snapshot the cart lines, merge caller details.
          3. Persist the Order (status 'Pending').
          4. For each line, record one sale on the product
             (and one unit of stock when stock is tracked).
          5. Clear the cart lines.
          6. Return the created order.
        """
        # 1) Load cart
        cart = self.cart_repo.get(session, user_id)
        if cart is None or not cart.items:
            raise InvalidState("Cart is empty")

        # 2) + 3) Persist the order with a copy of the lines
        order = Order(
            user_id=user_id,
            items=[dict(line) for line in cart.items],
            details={k: v for k, v in details.items() if k not in RESERVED_ORDER_KEYS},
            status=INITIAL_STATUS,
            created_at=datetime.now(timezone.utc),
        )
        order = self.order_repo.create(session, order)
        logger.info(
            "Order %s placed by %s with %d line(s)", order.id, user_id, len(order.items)
        )

        # 4) Settle inventory, one line at a time
        unsettled = self._settle_lines(session, order)
        if unsettled:
            logger.error(
                "Order %s left %d line(s) unsettled: %s",
                order.id,
                len(unsettled),
                ", ".join(unsettled),
            )

        # 5) Clear cart
        cart = self.cart_repo.get_for_update(session, user_id)
        if cart is not None:
            self.cart_repo.save_items(session, cart, [])

        return self.to_read(order)

    def list_user_orders(
        self,
        session: Session,
        user_id: str,
        skip: int = 0,
        limit: int = 50,
    ) -> list[OrderRead]:
        orders = self.order_repo.list_for_user(session, user_id, skip, limit)
        return [self.to_read(o) for o in orders]

    def get_order(
        self,
        session: Session,
        identity: CallerIdentity,
        order_id: str,
    ) -> OrderRead:
        """
        Get a single order.

        - 404 if order not found, or if it belongs to someone else and the
          caller is not an admin.
        """
        order = self.order_repo.get_by_id(session, order_id)
        if not order or (order.user_id != identity.uid and not identity.is_admin):
            raise NotFound("Order not found")
        return self.to_read(order)

    # -------- Admin operations --------

    def list_all_orders(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
    ) -> list[OrderRead]:
        orders = self.order_repo.list_all(session, skip, limit)
        return [self.to_read(o) for o in orders]

    # -------- Helpers --------

    def _settle_lines(self, session: Session, order: Order) -> list[str]:
        """
        Record one sale per order line. Returns the product ids that failed.

        Quantity is deliberately ignored: each distinct line moves sales
        and stock by exactly one.
        """
        failed: list[str] = []
        for line in order.items:
            product_id = line.get("product_id")
            try:
                product = self.product_repo.get_by_id(session, product_id)
                if product is None:
                    # Deleted products do not invalidate order history
                    logger.info(
                        "Order %s: product %s no longer exists, skipping",
                        order.id,
                        product_id,
                    )
                    continue
                self.product_repo.record_sale(
                    session, product.id, track_stock=product.stock is not None
                )
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                logger.error(
                    "Order %s: failed to settle product %s: %s", order.id, product_id, e
                )
                failed.append(str(product_id))
        return failed

    @staticmethod
    def to_read(order: Order) -> OrderRead:
        """Flatten stored details next to the order's own fields."""
        return OrderRead(
            **order.details,
            id=order.id,
            user_id=order.user_id,
            items=order.items,
            status=order.status,
            created_at=order.created_at,
        )
