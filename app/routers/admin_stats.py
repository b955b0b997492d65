# app/routers/admin_stats.py
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.repositories.product_repo import ProductRepository
from app.repositories.seller_repo import SellerRepository
from app.repositories.stats_repo import StatsRepository
from app.repositories.user_repo import UserRepository
from app.schemas.stats import (
    LatestOrderSummary,
    LatestSellerSummary,
    MonthlyPerformance,
    TopSeller,
    TotalSales,
)
from app.schemas.user import CountRead
from app.services.seller_service import SellerService
from app.services.stats_service import StatsService
from app.services.user_service import UserService

router = APIRouter(tags=["Admin Stats"], dependencies=[Depends(require_admin)])

service = StatsService(StatsRepository(), SellerRepository())
user_service = UserService(
    UserRepository(),
    SellerService(SellerRepository(), ProductRepository()),
)


@router.get("/reports/sales/total", response_model=TotalSales)
def get_total_sales(session: Session = Depends(get_session)):
    """Sum of price x quantity over every order line."""
    return service.total_sales(session)


@router.get("/reports/sales/monthly", response_model=list[MonthlyPerformance])
def get_monthly_performance(session: Session = Depends(get_session)):
    """
    Revenue for each of the last 12 calendar months, oldest first.
    Months without orders are reported as 0.
    """
    return service.monthly_performance(session)


@router.get("/reports/sellers/top", response_model=list[TopSeller])
def get_top_sellers(
    session: Session = Depends(get_session),
    limit: int = Query(5, ge=1, le=50),
):
    return service.top_sellers(session, limit=limit)


@router.get("/reports/orders/latest", response_model=list[LatestOrderSummary])
def get_latest_orders(
    session: Session = Depends(get_session),
    limit: int = Query(5, ge=1, le=100),
):
    return service.latest_orders(session, limit=limit)


@router.get("/reports/sellers/latest", response_model=list[LatestSellerSummary])
def get_latest_sellers(
    session: Session = Depends(get_session),
    limit: int = Query(5, ge=1, le=100),
):
    return service.latest_sellers(session, limit=limit)


# -------- Counts --------


@router.get("/roles/{role}/size", response_model=CountRead)
def get_role_size(role: str, session: Session = Depends(get_session)):
    """Number of users holding `role`."""
    return CountRead(count=user_service.count_by_role(session, role))


@router.get("/collections/{name}/size", response_model=CountRead)
def get_collection_size(name: str, session: Session = Depends(get_session)):
    """Number of documents in a collection (users, sellers, products, carts, orders)."""
    return CountRead(count=service.collection_size(session, name))
