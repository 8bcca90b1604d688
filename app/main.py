"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import get_settings
from app.infrastructure.database import engine, Base, SessionLocal
from app.core.logging import configure_logging
from app.core.middleware import setup_middleware
from app.core.exceptions import register_exception_handlers
from app.application.services.auth_service import ensure_default_admin

# Import all models so SQLAlchemy knows about them
from app.domain.models.route import Route
from app.domain.models.user import User
from app.domain.models.client import Client
from app.domain.models.product import Product
from app.domain.models.client_product import ClientProduct
from app.domain.models.order import Order, OrderItem
from app.domain.models.exchange import Exchange

# Import routers
from app.interfaces.api.auth import router as auth_router
from app.interfaces.api.users import router as users_router
from app.interfaces.api.delivery_routes import router as routes_router
from app.interfaces.api.clients import router as clients_router
from app.interfaces.api.products import router as products_router
from app.interfaces.api.client_products import router as client_products_router
from app.interfaces.api.orders import router as orders_router
from app.interfaces.api.exchanges import router as exchanges_router
from app.interfaces.api.history import router as history_router
from app.interfaces.api.reports import router as reports_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting APPEMP backend...", env=settings.ENVIRONMENT)

    # Create DB tables (dev only — use Alembic in production)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    db = SessionLocal()
    try:
        ensure_default_admin(db)
    finally:
        db.close()

    yield

    logger.info("APPEMP backend stopped")


app = FastAPI(
    title="APPEMP — Pedidos, Trocas e Extrato",
    description="API Backend — pedidos de venda, preços por cliente, trocas e histórico",
    version="1.0.0",
    lifespan=lifespan,
)

# Setup Middleware (Request logging, CORS, Correlation ID)
setup_middleware(app)

# Exception Handling
register_exception_handlers(app)

# Include routers
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(routes_router)
app.include_router(clients_router)
app.include_router(products_router)
app.include_router(client_products_router)
app.include_router(orders_router)
app.include_router(exchanges_router)
app.include_router(history_router)
app.include_router(reports_router)


@app.get("/")
def root():
    return {
        "name": "APPEMP Backend",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}
