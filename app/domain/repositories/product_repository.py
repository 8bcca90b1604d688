"""
Product Repository Interface.
Defines specific data access operations for Products.
"""

from typing import List, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.product import Product


class ProductRepository(BaseRepository[Product]):
    """Interface for Product-specific operations."""

    def list_all(self) -> List[Product]:
        """All products ordered by name."""
        ...

    def get_by_codigo(self, codigo_produto: str) -> Optional[Product]:
        """Find a product by its external code."""
        ...

    def exists(self, id: int) -> bool:
        """Whether a product with this id exists."""
        ...

    def count_order_items(self, produto_id: int) -> int:
        """Number of order items referencing the product."""
        ...
