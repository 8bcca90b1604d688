"""Orders API routes — create, edit, status changes, listings and remaneio."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, status

from app.application.services.order_service import OrderService
from app.domain.models.user import User
from app.domain.schemas.order import (
    OrderCreate,
    OrderPage,
    OrderRead,
    OrderStatusUpdate,
    OrderUpdate,
    RemaneioOrder,
)
from app.interfaces.api.deps import can_reorder_remaneio, get_current_user
from app.interfaces.deps import get_order_service

router = APIRouter(prefix="/api/pedidos", tags=["Pedidos"])


@router.get("")
def list_orders(
    data: Optional[date] = None,
    rota_id: Optional[int] = None,
    cliente_id: Optional[int] = None,
    status: Optional[str] = None,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    """All orders matching the filters, remaneio sequence first."""
    return service.list_orders(data=data, rota_id=rota_id, cliente_id=cliente_id, status=status)


@router.get("/paginado", response_model=OrderPage)
def list_orders_paginated(
    q: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
    data: Optional[date] = None,
    rota_id: Optional[int] = None,
    cliente_id: Optional[int] = None,
    status: Optional[str] = None,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    return service.paginate(
        page=page,
        limit=limit,
        q=q,
        data=data,
        rota_id=rota_id,
        cliente_id=cliente_id,
        status=status,
    )


@router.patch("/remaneio/ordem")
def reorder_remaneio(
    body: RemaneioOrder,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(can_reorder_remaneio),
):
    return service.reorder_remaneio(body.pedido_ids, user.id)


@router.get("/{pedido_id}", response_model=OrderRead)
def get_order(
    pedido_id: int,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    return service.to_read(service.get(pedido_id))


@router.post("", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
def create_order(
    body: OrderCreate,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    return service.to_read(service.create(body, user.id))


@router.put("/{pedido_id}", response_model=OrderRead)
def update_order(
    pedido_id: int,
    body: OrderUpdate,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    """Replace items and/or change status in one atomic step."""
    return service.to_read(service.update(pedido_id, body, user.id))


@router.patch("/{pedido_id}/status", response_model=OrderRead)
def update_order_status(
    pedido_id: int,
    body: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service),
    user: User = Depends(get_current_user),
):
    return service.to_read(service.change_status(pedido_id, body, user.id))
