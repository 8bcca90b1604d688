"""
Order Repository Interface.
Defines data access for orders, their items and the status compare-and-swap.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from app.domain.repositories.base import BaseRepository
from app.domain.models.order import Order
from app.domain.schemas.order import OrderFilter


class OrderRepository(BaseRepository[Order]):
    """Interface for Order-specific operations."""

    def list_filtered(self, filters: OrderFilter) -> List[Order]:
        """All orders matching the filter, in listing order."""
        ...

    def paginate(self, filters: OrderFilter, page: int, limit: int) -> Tuple[List[Order], int]:
        """One page of orders plus the total count."""
        ...

    def list_between(self, data_inicio: date, data_fim: date, cliente_id: Optional[int] = None) -> List[Order]:
        """Orders dated within the inclusive period."""
        ...

    def add_order(self, values: Dict[str, Any], items: Sequence[Any]) -> Order:
        """Insert an order with its items in one transaction."""
        ...

    def apply_update(
        self,
        order: Order,
        expected_status: str,
        values: Dict[str, Any],
        items: Optional[Sequence[Any]] = None,
    ) -> bool:
        """Write ``values`` (and replace items) only if the status is still
        ``expected_status``. Returns False, with nothing written, otherwise."""
        ...

    def next_remaneio_position(self) -> int:
        """First free loading position among CONFERIR orders."""
        ...

    def conferir_ids_in_order(self) -> List[int]:
        """Ids of CONFERIR orders in current loading order."""
        ...

    def set_remaneio_positions(self, ordered_ids: Sequence[int], user_id: Optional[int]) -> None:
        """Assign positions 1..n to CONFERIR orders."""
        ...

    def exchange_summaries(self, order_ids: Sequence[int]) -> Dict[int, Tuple[int, Optional[str]]]:
        """Exchange count and sorted distinct product names per order."""
        ...
