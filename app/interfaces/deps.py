"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.application.services.exchange_service import ExchangeService
from app.application.services.order_service import OrderService
from app.domain.models.client import Client
from app.domain.models.client_product import ClientProduct
from app.domain.models.exchange import Exchange
from app.domain.models.order import Order
from app.domain.models.product import Product
from app.domain.models.route import Route
from app.domain.repositories.client_product_repository import ClientProductRepository
from app.domain.repositories.client_repository import ClientRepository
from app.domain.repositories.exchange_repository import ExchangeRepository
from app.domain.repositories.order_repository import OrderRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.repositories.route_repository import RouteRepository
from app.infrastructure.database import get_db
from app.infrastructure.repositories.client_product_repository import SQLAlchemyClientProductRepository
from app.infrastructure.repositories.client_repository import SQLAlchemyClientRepository
from app.infrastructure.repositories.exchange_repository import SQLAlchemyExchangeRepository
from app.infrastructure.repositories.order_repository import SQLAlchemyOrderRepository
from app.infrastructure.repositories.product_repository import SQLAlchemyProductRepository
from app.infrastructure.repositories.route_repository import SQLAlchemyRouteRepository


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    """Get product repository instance."""
    return SQLAlchemyProductRepository(db, Product)


def get_client_repository(db: Session = Depends(get_db)) -> ClientRepository:
    """Get client repository instance."""
    return SQLAlchemyClientRepository(db, Client)


def get_route_repository(db: Session = Depends(get_db)) -> RouteRepository:
    return SQLAlchemyRouteRepository(db, Route)


def get_client_product_repository(db: Session = Depends(get_db)) -> ClientProductRepository:
    return SQLAlchemyClientProductRepository(db, ClientProduct)


def get_order_repository(db: Session = Depends(get_db)) -> OrderRepository:
    return SQLAlchemyOrderRepository(db, Order)


def get_exchange_repository(db: Session = Depends(get_db)) -> ExchangeRepository:
    return SQLAlchemyExchangeRepository(db, Exchange)


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """Order service wired to repositories sharing one request session."""
    return OrderService(
        orders=SQLAlchemyOrderRepository(db, Order),
        clients=SQLAlchemyClientRepository(db, Client),
        products=SQLAlchemyProductRepository(db, Product),
        overrides=SQLAlchemyClientProductRepository(db, ClientProduct),
        routes=SQLAlchemyRouteRepository(db, Route),
    )


def get_exchange_service(db: Session = Depends(get_db)) -> ExchangeService:
    return ExchangeService(
        exchanges=SQLAlchemyExchangeRepository(db, Exchange),
        orders=SQLAlchemyOrderRepository(db, Order),
        products=SQLAlchemyProductRepository(db, Product),
    )
