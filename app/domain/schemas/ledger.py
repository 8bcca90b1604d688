"""Pydantic schemas for the historical extrato."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel

from app.domain.schemas.common import Money


class LedgerEntryRead(BaseModel):
    pedido_id: int
    chave_pedido: Optional[str] = None
    data: date
    status: str
    cliente_id: Optional[int] = None
    cliente_nome: Optional[str] = None
    valor_total: Money
    valor_efetivado: Optional[Money] = None
    valor_movimento: Money
    saldo_acumulado: Money
    data_baixa: Optional[date] = None

    @classmethod
    def from_entry(cls, entry) -> "LedgerEntryRead":
        pedido = entry.pedido
        return cls(
            pedido_id=pedido.id,
            chave_pedido=pedido.chave_pedido,
            data=pedido.data,
            status=pedido.status,
            cliente_id=pedido.cliente_id,
            cliente_nome=pedido.cliente_nome,
            valor_total=pedido.valor_total,
            valor_efetivado=pedido.valor_efetivado,
            valor_movimento=entry.valor_movimento,
            saldo_acumulado=entry.saldo_acumulado,
            data_baixa=entry.data_baixa,
        )


class LedgerSummaryRead(BaseModel):
    total_vendas: Money
    total_efetivado: Money
    saldo_periodo: Money


class ExtratoRead(BaseModel):
    entries: List[LedgerEntryRead]
    resumo: LedgerSummaryRead
