"""
SQLAlchemy Implementation of Product Repository.
"""

from typing import List, Optional

from sqlalchemy import func

from app.domain.models.order import OrderItem
from app.domain.models.product import Product
from app.domain.repositories.product_repository import ProductRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyProductRepository(SQLAlchemyRepository[Product], ProductRepository):
    """Product repository implementation using SQLAlchemy."""

    def list_all(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.nome.asc()).all()

    def get_by_codigo(self, codigo_produto: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.codigo_produto == codigo_produto).first()

    def exists(self, id: int) -> bool:
        return self.db.query(Product.id).filter(Product.id == id).first() is not None

    def count_order_items(self, produto_id: int) -> int:
        return (
            self.db.query(func.count(OrderItem.id)).filter(OrderItem.produto_id == produto_id).scalar() or 0
        )
