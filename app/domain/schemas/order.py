"""Pydantic schemas for orders (pedidos) and their items."""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from app.domain.schemas.common import Money, Quantity


class OrderItemInput(BaseModel):
    # Range checks live in the order calculator so every problem is reported at once
    produto_id: Optional[int] = None
    quantidade: Optional[Decimal] = None
    embalagem: Optional[str] = None
    valor_unitario: Optional[Decimal] = None
    comissao: Optional[Decimal] = None


class OrderCreate(BaseModel):
    chave_pedido: Optional[str] = None
    cliente_id: int
    rota_id: Optional[int] = None
    data: date
    status: Optional[str] = None
    itens: List[OrderItemInput] = Field(default_factory=list)


class OrderUpdate(BaseModel):
    rota_id: Optional[int] = None
    data: Optional[date] = None
    status: Optional[str] = None
    valor_efetivado: Optional[Decimal] = None
    itens: Optional[List[OrderItemInput]] = None


class OrderStatusUpdate(BaseModel):
    status: Optional[str] = None
    valor_efetivado: Optional[Decimal] = None
    data: Optional[date] = None


class RemaneioOrder(BaseModel):
    pedido_ids: List[int] = Field(default_factory=list)


class OrderFilter(BaseModel):
    data: Optional[date] = None
    rota_id: Optional[int] = None
    cliente_id: Optional[int] = None
    status: Optional[str] = None
    q: Optional[str] = None


class OrderItemRead(BaseModel):
    id: int
    produto_id: int
    codigo_produto: Optional[str] = None
    produto_nome: Optional[str] = None
    quantidade: Quantity
    embalagem: Optional[str] = None
    valor_unitario: Money
    valor_total_item: Money
    comissao: Money

    @classmethod
    def from_model(cls, item) -> "OrderItemRead":
        return cls(
            id=item.id,
            produto_id=item.produto_id,
            codigo_produto=item.produto.codigo_produto if item.produto else None,
            produto_nome=item.produto.nome if item.produto else None,
            quantidade=item.quantidade,
            embalagem=item.embalagem,
            valor_unitario=item.valor_unitario,
            valor_total_item=item.valor_total_item,
            comissao=item.comissao or Decimal("0"),
        )


class OrderRead(BaseModel):
    id: int
    chave_pedido: str
    data: date
    status: str
    ordem_remaneio: Optional[int] = None
    valor_total: Money
    valor_efetivado: Optional[Money] = None
    cliente_id: int
    codigo_cliente: Optional[str] = None
    cliente_nome: Optional[str] = None
    rota_id: Optional[int] = None
    rota_nome: Optional[str] = None
    tem_trocas: bool = False
    qtd_trocas: int = 0
    nomes_trocas: Optional[str] = None
    itens: List[OrderItemRead] = Field(default_factory=list)

    @classmethod
    def from_model(cls, order, qtd_trocas: int = 0, nomes_trocas: Optional[str] = None) -> "OrderRead":
        return cls(
            id=order.id,
            chave_pedido=order.chave_pedido,
            data=order.data,
            status=order.status,
            ordem_remaneio=order.ordem_remaneio,
            valor_total=order.valor_total,
            valor_efetivado=order.valor_efetivado,
            cliente_id=order.cliente_id,
            codigo_cliente=order.cliente.codigo_cliente if order.cliente else None,
            cliente_nome=order.cliente.nome if order.cliente else None,
            rota_id=order.rota_id,
            rota_nome=order.rota.nome if order.rota else None,
            tem_trocas=qtd_trocas > 0,
            qtd_trocas=qtd_trocas,
            nomes_trocas=nomes_trocas,
            itens=[OrderItemRead.from_model(i) for i in order.itens],
        )


class OrderPage(BaseModel):
    data: List[OrderRead]
    page: int
    limit: int
    total: int
    totalPages: int
