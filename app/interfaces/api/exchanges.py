"""Exchange API routes — trocas recorded against an order."""

from fastapi import APIRouter, Depends, status

from app.application.services.exchange_service import ExchangeService
from app.domain.models.user import User
from app.domain.schemas.exchange import ExchangeCreate, ExchangeRead
from app.interfaces.api.deps import get_current_user
from app.interfaces.deps import get_exchange_service

router = APIRouter(prefix="/api", tags=["Trocas"])


@router.post("/trocas", response_model=ExchangeRead, status_code=status.HTTP_201_CREATED)
def create_exchange(
    body: ExchangeCreate,
    service: ExchangeService = Depends(get_exchange_service),
    user: User = Depends(get_current_user),
):
    return ExchangeRead.from_model(service.create(body, user.id))


@router.delete("/trocas/{troca_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exchange(
    troca_id: int,
    service: ExchangeService = Depends(get_exchange_service),
    user: User = Depends(get_current_user),
):
    service.delete(troca_id)


@router.get("/pedidos/{pedido_id}/trocas")
def list_order_exchanges(
    pedido_id: int,
    service: ExchangeService = Depends(get_exchange_service),
    user: User = Depends(get_current_user),
):
    """Exchanges of an order, newest first."""
    return [ExchangeRead.from_model(t) for t in service.list_for_order(pedido_id)]
