"""Pydantic schemas for client x product price overrides (vínculos)."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from app.domain.schemas.common import Money


class ClientProductCreate(BaseModel):
    cliente_id: int
    produto_id: int
    valor_unitario: Optional[Decimal] = None


class ClientProductUpdate(BaseModel):
    valor_unitario: Optional[Decimal] = None


class ClientProductRead(BaseModel):
    id: int
    cliente_id: int
    produto_id: int
    valor_unitario: Money
    codigo_cliente: Optional[str] = None
    cliente_nome: Optional[str] = None
    codigo_produto: Optional[str] = None
    produto_nome: Optional[str] = None
    embalagem: Optional[str] = None

    @classmethod
    def from_model(cls, obj) -> "ClientProductRead":
        return cls(
            id=obj.id,
            cliente_id=obj.cliente_id,
            produto_id=obj.produto_id,
            valor_unitario=obj.valor_unitario,
            codigo_cliente=obj.cliente.codigo_cliente if obj.cliente else None,
            cliente_nome=obj.cliente.nome if obj.cliente else None,
            codigo_produto=obj.produto.codigo_produto if obj.produto else None,
            produto_nome=obj.produto.nome if obj.produto else None,
            embalagem=obj.produto.embalagem if obj.produto else None,
        )


class PriceResolutionRead(BaseModel):
    cliente_id: int
    produto_id: int
    valor_unitario: Optional[Money] = None
    origem: Optional[str] = None
