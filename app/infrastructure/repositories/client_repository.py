"""
SQLAlchemy Implementation of Client Repository.
"""

from typing import List, Optional

from sqlalchemy import func

from app.domain.models.client import Client
from app.domain.models.order import Order
from app.domain.repositories.client_repository import ClientRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyClientRepository(SQLAlchemyRepository[Client], ClientRepository):
    """Client repository implementation using SQLAlchemy."""

    def list_all(self) -> List[Client]:
        return self.db.query(Client).order_by(Client.nome.asc()).all()

    def get_by_codigo(self, codigo_cliente: str) -> Optional[Client]:
        return self.db.query(Client).filter(Client.codigo_cliente == codigo_cliente).first()

    def count_orders(self, cliente_id: int) -> int:
        return self.db.query(func.count(Order.id)).filter(Order.cliente_id == cliente_id).scalar() or 0
