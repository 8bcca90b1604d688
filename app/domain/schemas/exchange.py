"""Pydantic schemas for exchanges (trocas)."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from app.domain.schemas.common import Money, Quantity


class ExchangeCreate(BaseModel):
    pedido_id: int
    produto_id: int
    quantidade: Optional[Decimal] = None
    valor_troca: Optional[Decimal] = None
    motivo: Optional[str] = None
    item_pedido_id: Optional[int] = None


class ExchangeRead(BaseModel):
    id: int
    pedido_id: int
    item_pedido_id: Optional[int] = None
    produto_id: int
    codigo_produto: Optional[str] = None
    produto_nome: Optional[str] = None
    quantidade: Quantity
    valor_troca: Money
    motivo: Optional[str] = None
    criado_em: Optional[datetime] = None

    @classmethod
    def from_model(cls, troca) -> "ExchangeRead":
        return cls(
            id=troca.id,
            pedido_id=troca.pedido_id,
            item_pedido_id=troca.item_pedido_id,
            produto_id=troca.produto_id,
            codigo_produto=troca.produto.codigo_produto if troca.produto else None,
            produto_nome=troca.produto.nome if troca.produto else None,
            quantidade=troca.quantidade,
            valor_troca=troca.valor_troca,
            motivo=troca.motivo,
            criado_em=troca.criado_em,
        )
