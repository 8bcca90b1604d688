"""
Base repository contract shared by the catalog and order aggregates.

RouteRepository, ClientRepository, ProductRepository, ClientProductRepository,
OrderRepository and ExchangeRepository extend it with their own queries; the
application services only see these protocols, never a Session.
"""

from typing import TypeVar, List, Optional, Any, Protocol

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """CRUD every aggregate supports. ``delete`` returns None when the id is unknown."""

    def get_by_id(self, id: int) -> Optional[T]:
        """Entity with this primary key, or None."""
        ...

    def list(self, skip: int = 0, limit: int = 100) -> List[T]:
        """One page of entities in primary key order."""
        ...

    def create(self, obj_in: Any) -> T:
        """Insert ``obj_in`` (column values, dict or schema) and commit."""
        ...

    def update(self, db_obj: T, obj_in: Any) -> T:
        """Apply the columns set in ``obj_in`` to ``db_obj`` and commit."""
        ...

    def delete(self, id: int) -> Optional[T]:
        """Remove the entity and return it."""
        ...
