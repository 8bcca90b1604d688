"""Historical extrato — chronological order ledger with a running balance.

Pure functions over order snapshots: the same orders and filter always give
the same entries, and the input is never modified.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

import structlog

from app.application.services.order_lifecycle import OrderStatus, normalize_status
from app.core.exceptions import ValidationException
from app.domain.repositories.order_repository import OrderRepository

logger = structlog.get_logger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class OrderSnapshot:
    id: int
    data: date
    status: str
    valor_total: Decimal
    valor_efetivado: Optional[Decimal] = None
    cliente_id: Optional[int] = None
    chave_pedido: Optional[str] = None
    cliente_nome: Optional[str] = None
    rota_id: Optional[int] = None

    @classmethod
    def from_order(cls, order) -> "OrderSnapshot":
        cliente = getattr(order, "cliente", None)
        return cls(
            id=order.id,
            data=order.data,
            status=order.status,
            valor_total=Decimal(order.valor_total or 0),
            valor_efetivado=Decimal(order.valor_efetivado) if order.valor_efetivado is not None else None,
            cliente_id=order.cliente_id,
            chave_pedido=order.chave_pedido,
            cliente_nome=cliente.nome if cliente is not None else None,
            rota_id=order.rota_id,
        )


@dataclass(frozen=True)
class LedgerFilter:
    data_inicio: Optional[date] = None
    data_fim: Optional[date] = None
    cliente_id: Optional[int] = None
    status: Optional[OrderStatus] = None

    @property
    def complete(self) -> bool:
        return self.data_inicio is not None and self.data_fim is not None


@dataclass(frozen=True)
class LedgerEntry:
    pedido: OrderSnapshot
    valor_movimento: Decimal
    saldo_acumulado: Decimal
    data_baixa: Optional[date]


@dataclass(frozen=True)
class LedgerSummary:
    total_vendas: Decimal
    total_efetivado: Decimal
    saldo_periodo: Decimal


def _matches(order: OrderSnapshot, filtro: LedgerFilter) -> bool:
    if order.data < filtro.data_inicio or order.data > filtro.data_fim:
        return False
    if filtro.cliente_id is not None and order.cliente_id != filtro.cliente_id:
        return False
    if filtro.status is not None and normalize_status(order.status) != filtro.status:
        return False
    return True


def movement_value(order: OrderSnapshot) -> Decimal:
    """What the order contributes to the balance; cancelled orders count 0."""
    if normalize_status(order.status) == OrderStatus.CANCELADO:
        return ZERO
    if order.valor_efetivado is not None:
        return order.valor_efetivado
    return order.valor_total


def build_extrato(orders: Iterable[OrderSnapshot], filtro: LedgerFilter) -> List[LedgerEntry]:
    if not filtro.complete:
        return []

    # sorted() is stable: same-day orders keep their input order
    selected = sorted((o for o in orders if _matches(o, filtro)), key=lambda o: o.data)

    entries: List[LedgerEntry] = []
    saldo = ZERO
    for order in selected:
        movimento = movement_value(order)
        saldo += movimento
        entries.append(
            LedgerEntry(
                pedido=order,
                valor_movimento=movimento,
                saldo_acumulado=saldo,
                data_baixa=order.data if normalize_status(order.status) == OrderStatus.EFETIVADO else None,
            )
        )
    return entries


def summarize(entries: List[LedgerEntry]) -> LedgerSummary:
    total_vendas = sum((e.pedido.valor_total for e in entries), ZERO)
    total_efetivado = sum(
        (
            e.pedido.valor_efetivado if e.pedido.valor_efetivado is not None else e.pedido.valor_total
            for e in entries
            if normalize_status(e.pedido.status) == OrderStatus.EFETIVADO
        ),
        ZERO,
    )
    saldo_periodo = entries[-1].saldo_acumulado if entries else ZERO
    return LedgerSummary(total_vendas=total_vendas, total_efetivado=total_efetivado, saldo_periodo=saldo_periodo)


def get_extrato(
    repo: OrderRepository,
    data_inicio: Optional[date],
    data_fim: Optional[date],
    cliente_id: Optional[int] = None,
    status: Optional[str] = None,
) -> Tuple[List[LedgerEntry], LedgerSummary]:
    """Load the period's orders and build the extrato with its summary."""
    if data_inicio is None or data_fim is None:
        raise ValidationException("Informe data_inicio e data_fim")
    if data_inicio > data_fim:
        raise ValidationException("data_inicio não pode ser maior que data_fim")

    parsed_status = None
    if status and status.strip():
        parsed_status = normalize_status(status)
        if parsed_status is None:
            logger.warning("Ignoring unknown status filter", status=status)

    filtro = LedgerFilter(data_inicio=data_inicio, data_fim=data_fim, cliente_id=cliente_id, status=parsed_status)
    orders = [OrderSnapshot.from_order(o) for o in repo.list_between(data_inicio, data_fim, cliente_id)]
    entries = build_extrato(orders, filtro)
    return entries, summarize(entries)
