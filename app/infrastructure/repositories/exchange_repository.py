"""
SQLAlchemy Implementation of the Exchange (troca) Repository.
"""

from typing import List

from app.domain.models.exchange import Exchange
from app.domain.repositories.exchange_repository import ExchangeRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyExchangeRepository(SQLAlchemyRepository[Exchange], ExchangeRepository):
    """Exchange repository implementation using SQLAlchemy."""

    def list_for_order(self, pedido_id: int) -> List[Exchange]:
        return (
            self.db.query(Exchange)
            .filter(Exchange.pedido_id == pedido_id)
            .order_by(Exchange.criado_em.desc(), Exchange.id.desc())
            .all()
        )
