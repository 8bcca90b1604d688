"""
Client x Product (price override) Repository Interface.
"""

from typing import List, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.client_product import ClientProduct


class ClientProductRepository(BaseRepository[ClientProduct]):
    """Interface for price override operations."""

    def get_by_pair(self, cliente_id: int, produto_id: int) -> Optional[ClientProduct]:
        """The override for a (client, product) pair, if any."""
        ...

    def list_for_client(self, cliente_id: Optional[int] = None) -> List[ClientProduct]:
        """Overrides, optionally restricted to one client."""
        ...
