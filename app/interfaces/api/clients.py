"""Client API routes — client catalog CRUD."""

from fastapi import APIRouter, Depends, status

from app.interfaces.api.deps import can_manage_cadastros, get_current_user
from app.interfaces.deps import get_client_repository, get_route_repository
from app.domain.repositories.client_repository import ClientRepository
from app.domain.repositories.route_repository import RouteRepository
from app.domain.models.user import User
from app.domain.schemas.client import ClientCreate, ClientRead, ClientUpdate
from app.application.services.client_service import (
    create_client,
    delete_client,
    get_client,
    list_clients,
    update_client,
)

router = APIRouter(prefix="/api/clientes", tags=["Clientes"])


@router.get("")
def get_clients(
    repo: ClientRepository = Depends(get_client_repository),
    user: User = Depends(get_current_user),
):
    """List clients ordered by name."""
    return [ClientRead.model_validate(c) for c in list_clients(repo)]


@router.get("/{cliente_id}", response_model=ClientRead)
def get_one_client(
    cliente_id: int,
    repo: ClientRepository = Depends(get_client_repository),
    user: User = Depends(get_current_user),
):
    return ClientRead.model_validate(get_client(repo, cliente_id))


@router.post("", response_model=ClientRead, status_code=status.HTTP_201_CREATED)
def add_client(
    body: ClientCreate,
    repo: ClientRepository = Depends(get_client_repository),
    routes: RouteRepository = Depends(get_route_repository),
    user: User = Depends(can_manage_cadastros),
):
    return ClientRead.model_validate(create_client(repo, routes, body))


@router.patch("/{cliente_id}", response_model=ClientRead)
def edit_client(
    cliente_id: int,
    body: ClientUpdate,
    repo: ClientRepository = Depends(get_client_repository),
    routes: RouteRepository = Depends(get_route_repository),
    user: User = Depends(can_manage_cadastros),
):
    return ClientRead.model_validate(update_client(repo, routes, cliente_id, body))


@router.delete("/{cliente_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_client(
    cliente_id: int,
    repo: ClientRepository = Depends(get_client_repository),
    user: User = Depends(can_manage_cadastros),
):
    """Delete a client. Refused while orders reference it."""
    delete_client(repo, cliente_id)
