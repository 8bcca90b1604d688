"""
Client Repository Interface.
Defines specific data access operations for Clients.
"""

from typing import List, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.client import Client


class ClientRepository(BaseRepository[Client]):
    """Interface for Client-specific operations."""

    def list_all(self) -> List[Client]:
        """All clients ordered by name."""
        ...

    def get_by_codigo(self, codigo_cliente: str) -> Optional[Client]:
        """Find a client by its external code."""
        ...

    def count_orders(self, cliente_id: int) -> int:
        """Number of orders referencing the client."""
        ...
