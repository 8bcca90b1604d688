"""Delivery route API routes — rotas CRUD with link counts."""

from fastapi import APIRouter, Depends, status

from app.interfaces.api.deps import can_manage_cadastros, get_current_user
from app.interfaces.deps import get_route_repository
from app.domain.repositories.route_repository import RouteRepository
from app.domain.models.user import User
from app.domain.schemas.route import RouteCreate, RouteRead, RouteUpdate, RouteWithCounts
from app.application.services.route_service import create_route, delete_route, list_routes, rename_route

router = APIRouter(prefix="/api/rotas", tags=["Rotas"])


@router.get("")
def get_routes(
    repo: RouteRepository = Depends(get_route_repository),
    user: User = Depends(get_current_user),
):
    """List routes with the number of linked clients and orders."""
    return [RouteWithCounts(**r) for r in list_routes(repo)]


@router.post("", response_model=RouteRead, status_code=status.HTTP_201_CREATED)
def add_route(
    body: RouteCreate,
    repo: RouteRepository = Depends(get_route_repository),
    user: User = Depends(can_manage_cadastros),
):
    return RouteRead.model_validate(create_route(repo, body.nome))


@router.patch("/{rota_id}", response_model=RouteRead)
def edit_route(
    rota_id: int,
    body: RouteUpdate,
    repo: RouteRepository = Depends(get_route_repository),
    user: User = Depends(can_manage_cadastros),
):
    return RouteRead.model_validate(rename_route(repo, rota_id, body.nome))


@router.delete("/{rota_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_route(
    rota_id: int,
    repo: RouteRepository = Depends(get_route_repository),
    user: User = Depends(can_manage_cadastros),
):
    delete_route(repo, rota_id)
