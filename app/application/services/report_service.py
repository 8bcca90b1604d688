"""Report service — aggregate reports over orders, items and exchanges."""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from app.application.services.order_lifecycle import parse_status
from app.core.exceptions import ValidationException
from app.domain.models.client import Client
from app.domain.models.exchange import Exchange
from app.domain.models.order import Order, OrderItem
from app.domain.models.product import Product
from app.domain.models.route import Route
from app.domain.schemas.report import (
    ExchangeReportRow,
    ProductionRow,
    ReportFilter,
    RouteReportRow,
    TopClientRow,
)

SEM_ROTA = "Sem rota"
TOP_CLIENTES_LIMIT = 10


def _dec(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


def build_filter(data_inicio=None, data_fim=None, status: Optional[str] = None) -> ReportFilter:
    """Validate report query parameters. Unlike listings, an unknown status is rejected."""
    if data_inicio and data_fim and data_inicio > data_fim:
        raise ValidationException("data_inicio não pode ser maior que data_fim")
    parsed = parse_status(status).value if status and status.strip() else None
    return ReportFilter(data_inicio=data_inicio, data_fim=data_fim, status=parsed)


def _order_conditions(filtro: ReportFilter) -> list:
    conditions = []
    if filtro.data_inicio:
        conditions.append(Order.data >= filtro.data_inicio)
    if filtro.data_fim:
        conditions.append(Order.data <= filtro.data_fim)
    if filtro.status:
        conditions.append(Order.status == filtro.status)
    return conditions


def production_report(db: Session, filtro: ReportFilter) -> List[ProductionRow]:
    """Total quantity ordered per product."""
    quantidade_total = func.sum(OrderItem.quantidade)
    results = (
        db.query(
            Product.id,
            Product.codigo_produto,
            Product.nome,
            Product.embalagem,
            quantidade_total.label("quantidade_total"),
        )
        .join(OrderItem, OrderItem.produto_id == Product.id)
        .join(Order, Order.id == OrderItem.pedido_id)
        .filter(*_order_conditions(filtro))
        .group_by(Product.id, Product.codigo_produto, Product.nome, Product.embalagem)
        .having(quantidade_total > 0)
        .order_by(Product.nome.asc())
        .all()
    )
    return [
        ProductionRow(
            produto_id=r.id,
            codigo_produto=r.codigo_produto,
            produto_nome=r.nome,
            embalagem=r.embalagem,
            quantidade_total=_dec(r.quantidade_total),
        )
        for r in results
    ]


def routes_report(db: Session, filtro: ReportFilter) -> List[RouteReportRow]:
    """Every client grouped under its route, with order count and total for the period."""
    rota_nome = func.coalesce(Route.nome, SEM_ROTA)
    results = (
        db.query(
            Route.id.label("rota_id"),
            rota_nome.label("rota_nome"),
            Client.id.label("cliente_id"),
            Client.codigo_cliente,
            Client.nome.label("cliente_nome"),
            func.count(Order.id).label("total_pedidos"),
            func.coalesce(func.sum(Order.valor_total), 0).label("valor_total_pedidos"),
        )
        .select_from(Client)
        .outerjoin(Route, Route.id == Client.rota_id)
        .outerjoin(Order, and_(Order.cliente_id == Client.id, *_order_conditions(filtro)))
        .group_by(Route.id, Route.nome, Client.id, Client.codigo_cliente, Client.nome)
        .order_by(rota_nome.asc(), Client.nome.asc())
        .all()
    )
    return [
        RouteReportRow(
            rota_id=r.rota_id or 0,
            rota_nome=r.rota_nome,
            cliente_id=r.cliente_id,
            codigo_cliente=r.codigo_cliente,
            cliente_nome=r.cliente_nome,
            total_pedidos=int(r.total_pedidos),
            valor_total_pedidos=_dec(r.valor_total_pedidos),
        )
        for r in results
    ]


def top_clients_report(db: Session, filtro: ReportFilter, limit: int = TOP_CLIENTES_LIMIT) -> List[TopClientRow]:
    total_vendas = func.coalesce(func.sum(Order.valor_total), 0)
    total_pedidos = func.count(Order.id)
    results = (
        db.query(
            Client.id,
            Client.codigo_cliente,
            Client.nome,
            total_pedidos.label("total_pedidos"),
            total_vendas.label("valor_total_vendas"),
        )
        .join(Order, Order.cliente_id == Client.id)
        .filter(*_order_conditions(filtro))
        .group_by(Client.id, Client.codigo_cliente, Client.nome)
        .order_by(total_vendas.desc(), total_pedidos.desc(), Client.nome.asc())
        .limit(limit)
        .all()
    )
    return [
        TopClientRow(
            cliente_id=r.id,
            codigo_cliente=r.codigo_cliente,
            cliente_nome=r.nome,
            total_pedidos=int(r.total_pedidos),
            valor_total_vendas=_dec(r.valor_total_vendas),
        )
        for r in results
    ]


def exchanges_report(db: Session, filtro: ReportFilter) -> List[ExchangeReportRow]:
    results = (
        db.query(Exchange, Order, Client, Product, Route)
        .join(Order, Order.id == Exchange.pedido_id)
        .join(Client, Client.id == Order.cliente_id)
        .join(Product, Product.id == Exchange.produto_id)
        .outerjoin(Route, Route.id == Order.rota_id)
        .filter(*_order_conditions(filtro))
        .order_by(Order.data.desc(), Order.id.desc(), Exchange.criado_em.desc(), Exchange.id.desc())
        .all()
    )
    return [
        ExchangeReportRow(
            troca_id=troca.id,
            criado_em=troca.criado_em,
            quantidade=_dec(troca.quantidade),
            valor_troca=_dec(troca.valor_troca),
            motivo=troca.motivo,
            pedido_id=pedido.id,
            chave_pedido=pedido.chave_pedido,
            pedido_data=pedido.data,
            pedido_status=pedido.status,
            rota_id=rota.id if rota else 0,
            rota_nome=rota.nome if rota else SEM_ROTA,
            cliente_id=cliente.id,
            codigo_cliente=cliente.codigo_cliente,
            cliente_nome=cliente.nome,
            produto_id=produto.id,
            codigo_produto=produto.codigo_produto,
            produto_nome=produto.nome,
        )
        for troca, pedido, cliente, produto, rota in results
    ]
