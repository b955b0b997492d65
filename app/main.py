# app/main.py
"""
Marketplace API entrypoint.

Wires settings, logging, error envelopes and the routers into one FastAPI app.
Run with:
    uvicorn app.main:app --reload
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings
from app.core.errors import register_exception_handlers
from app.database import create_db_and_tables, engine

# Table classes must be imported before create_all()
from app.models import cart, order, product, seller, user  # noqa: F401

from app.routers import admin_stats, cart as cart_routes, orders, products, sellers, users

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("marketplace")

ROUTERS = (
    users.router,
    sellers.router,
    products.router,
    cart_routes.router,
    orders.router,
    admin_stats.router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Fail fast when the store is unreachable
    logger.info("Creating tables on %s", engine.url.render_as_string(hide_password=True))
    try:
        create_db_and_tables()
    except Exception:
        logger.exception("Database unavailable at startup")
        raise
    yield
    engine.dispose()


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(application)
    for router in ROUTERS:
        application.include_router(router, prefix=settings.API_PREFIX)

    @application.get("/")
    def health():
        return {"status": "ok", "service": "marketplace-api"}

    return application


app = create_app()
