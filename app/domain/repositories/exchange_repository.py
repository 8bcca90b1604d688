"""
Exchange (troca) Repository Interface.
"""

from typing import List

from app.domain.repositories.base import BaseRepository
from app.domain.models.exchange import Exchange


class ExchangeRepository(BaseRepository[Exchange]):
    """Interface for exchange records."""

    def list_for_order(self, pedido_id: int) -> List[Exchange]:
        """Exchanges of one order, newest first."""
        ...
