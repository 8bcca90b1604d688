"""
SQLAlchemy Implementation of the price override (cliente x produto) Repository.
"""

from typing import List, Optional

from app.domain.models.client import Client
from app.domain.models.client_product import ClientProduct
from app.domain.models.product import Product
from app.domain.repositories.client_product_repository import ClientProductRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyClientProductRepository(SQLAlchemyRepository[ClientProduct], ClientProductRepository):
    """Price override repository implementation using SQLAlchemy."""

    def get_by_pair(self, cliente_id: int, produto_id: int) -> Optional[ClientProduct]:
        return (
            self.db.query(ClientProduct)
            .filter(ClientProduct.cliente_id == cliente_id, ClientProduct.produto_id == produto_id)
            .first()
        )

    def list_for_client(self, cliente_id: Optional[int] = None) -> List[ClientProduct]:
        query = (
            self.db.query(ClientProduct)
            .join(Client, Client.id == ClientProduct.cliente_id)
            .join(Product, Product.id == ClientProduct.produto_id)
        )
        if cliente_id:
            query = query.filter(ClientProduct.cliente_id == cliente_id)
        return query.order_by(Client.nome.asc(), Product.nome.asc()).all()
