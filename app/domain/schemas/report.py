"""Pydantic schemas for reports (relatórios)."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from app.domain.schemas.common import Money, Quantity


class ReportFilter(BaseModel):
    data_inicio: Optional[date] = None
    data_fim: Optional[date] = None
    status: Optional[str] = None


class ProductionRow(BaseModel):
    produto_id: int
    codigo_produto: str
    produto_nome: str
    embalagem: Optional[str] = None
    quantidade_total: Quantity


class RouteReportRow(BaseModel):
    rota_id: int
    rota_nome: str
    cliente_id: int
    codigo_cliente: str
    cliente_nome: str
    total_pedidos: int
    valor_total_pedidos: Money


class TopClientRow(BaseModel):
    cliente_id: int
    codigo_cliente: str
    cliente_nome: str
    total_pedidos: int
    valor_total_vendas: Money


class ExchangeReportRow(BaseModel):
    troca_id: int
    criado_em: Optional[datetime] = None
    quantidade: Quantity
    valor_troca: Money
    motivo: Optional[str] = None
    pedido_id: int
    chave_pedido: str
    pedido_data: date
    pedido_status: str
    rota_id: int
    rota_nome: str
    cliente_id: int
    codigo_cliente: str
    cliente_nome: str
    produto_id: int
    codigo_produto: str
    produto_nome: str
