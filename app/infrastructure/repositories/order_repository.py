"""
SQLAlchemy Implementation of Order Repository.
"""

from collections import defaultdict
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import and_, case, func, or_, update
from sqlalchemy.orm import Query

from app.domain.models.client import Client
from app.domain.models.exchange import Exchange
from app.domain.models.order import Order, OrderItem
from app.domain.models.product import Product
from app.domain.repositories.order_repository import OrderRepository
from app.domain.schemas.order import OrderFilter
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository

CONFERIR = "CONFERIR"


def _build_item(item: Any, pedido_id: Optional[int] = None) -> OrderItem:
    return OrderItem(
        pedido_id=pedido_id,
        produto_id=item.produto_id,
        quantidade=item.quantidade,
        embalagem=item.embalagem,
        valor_unitario=item.valor_unitario,
        valor_total_item=item.subtotal,
        comissao=item.comissao,
    )


class SQLAlchemyOrderRepository(SQLAlchemyRepository[Order], OrderRepository):
    """Order repository implementation using SQLAlchemy."""

    def _filtered_query(self, filters: OrderFilter) -> Query:
        query = self.db.query(Order).join(Client, Client.id == Order.cliente_id)

        if filters.data:
            query = query.filter(Order.data == filters.data)
        if filters.rota_id:
            query = query.filter(Order.rota_id == filters.rota_id)
        if filters.cliente_id:
            query = query.filter(Order.cliente_id == filters.cliente_id)
        if filters.status:
            query = query.filter(Order.status == filters.status)
        if filters.q:
            pattern = f"%{filters.q.strip()}%"
            query = query.filter(
                or_(
                    Client.nome.ilike(pattern),
                    Client.codigo_cliente.ilike(pattern),
                    Order.chave_pedido.ilike(pattern),
                )
            )
        return query

    @staticmethod
    def _listing_order(query: Query) -> Query:
        # Orders being loaded (CONFERIR with a position) come first, by position
        in_remaneio = case(
            (and_(Order.status == CONFERIR, Order.ordem_remaneio.isnot(None)), 0),
            else_=1,
        )
        return query.order_by(
            in_remaneio,
            Order.ordem_remaneio.is_(None),
            Order.ordem_remaneio.asc(),
            Order.data.desc(),
            Order.id.desc(),
        )

    def list_filtered(self, filters: OrderFilter) -> List[Order]:
        return self._listing_order(self._filtered_query(filters)).all()

    def paginate(self, filters: OrderFilter, page: int, limit: int) -> Tuple[List[Order], int]:
        query = self._filtered_query(filters)
        total = query.count()
        orders = self._listing_order(query).offset((page - 1) * limit).limit(limit).all()
        return orders, total

    def list_between(self, data_inicio: date, data_fim: date, cliente_id: Optional[int] = None) -> List[Order]:
        query = self.db.query(Order).filter(Order.data >= data_inicio, Order.data <= data_fim)
        if cliente_id:
            query = query.filter(Order.cliente_id == cliente_id)
        return query.order_by(Order.data.asc(), Order.id.asc()).all()

    def add_order(self, values: Dict[str, Any], items: Sequence[Any]) -> Order:
        order = Order(**values)
        order.itens = [_build_item(item) for item in items]
        self.db.add(order)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(order)
        return order

    def apply_update(
        self,
        order: Order,
        expected_status: str,
        values: Dict[str, Any],
        items: Optional[Sequence[Any]] = None,
    ) -> bool:
        try:
            if items is not None:
                # Exchanges outlive the item set they pointed at
                self.db.query(Exchange).filter(
                    Exchange.pedido_id == order.id,
                    Exchange.item_pedido_id.isnot(None),
                ).update({Exchange.item_pedido_id: None}, synchronize_session=False)
                order.itens = [_build_item(item, order.id) for item in items]
                self.db.flush()

            result = self.db.execute(
                update(Order)
                .where(Order.id == order.id, Order.status == expected_status)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                self.db.rollback()
                return False
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(order)
        return True

    def next_remaneio_position(self) -> int:
        current = (
            self.db.query(func.max(Order.ordem_remaneio)).filter(Order.status == CONFERIR).scalar()
        )
        return (current or 0) + 1

    def conferir_ids_in_order(self) -> List[int]:
        rows = (
            self.db.query(Order.id)
            .filter(Order.status == CONFERIR)
            .order_by(
                Order.ordem_remaneio.is_(None),
                Order.ordem_remaneio.asc(),
                Order.data.desc(),
                Order.id.desc(),
            )
            .all()
        )
        return [r[0] for r in rows]

    def set_remaneio_positions(self, ordered_ids: Sequence[int], user_id: Optional[int]) -> None:
        try:
            for position, order_id in enumerate(ordered_ids, start=1):
                self.db.execute(
                    update(Order)
                    .where(Order.id == order_id, Order.status == CONFERIR)
                    .values(ordem_remaneio=position, atualizado_por=user_id, atualizado_em=func.now())
                    .execution_options(synchronize_session=False)
                )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def exchange_summaries(self, order_ids: Sequence[int]) -> Dict[int, Tuple[int, Optional[str]]]:
        if not order_ids:
            return {}
        rows = (
            self.db.query(Exchange.pedido_id, Product.nome)
            .join(Product, Product.id == Exchange.produto_id)
            .filter(Exchange.pedido_id.in_(list(order_ids)))
            .all()
        )
        counts: Dict[int, int] = defaultdict(int)
        names: Dict[int, set] = defaultdict(set)
        for pedido_id, nome in rows:
            counts[pedido_id] += 1
            names[pedido_id].add(nome)
        return {
            pedido_id: (counts[pedido_id], ", ".join(sorted(names[pedido_id])) or None)
            for pedido_id in counts
        }
