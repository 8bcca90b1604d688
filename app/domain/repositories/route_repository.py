"""
Route Repository Interface.
"""

from typing import Any, Dict, List, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.route import Route


class RouteRepository(BaseRepository[Route]):
    """Interface for delivery route operations."""

    def list_with_counts(self) -> List[Dict[str, Any]]:
        """Routes with the number of linked clients and orders."""
        ...

    def get_by_nome(self, nome: str) -> Optional[Route]:
        """Find a route by name."""
        ...

    def count_links(self, rota_id: int) -> int:
        """Clients, orders and users referencing the route."""
        ...
