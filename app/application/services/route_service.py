"""Route service — delivery routes (rotas) used to group clients and orders."""

from typing import Any, Dict, List

import structlog
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictException, EntityNotFoundException, ValidationException
from app.domain.models.route import Route
from app.domain.repositories.route_repository import RouteRepository

logger = structlog.get_logger(__name__)


def list_routes(repo: RouteRepository) -> List[Dict[str, Any]]:
    return repo.list_with_counts()


def _clean_name(nome: str) -> str:
    nome = (nome or "").strip()
    if not nome:
        raise ValidationException("nome é obrigatório")
    return nome


def create_route(repo: RouteRepository, nome: str) -> Route:
    nome = _clean_name(nome)
    if repo.get_by_nome(nome) is not None:
        raise ConflictException("Rota já cadastrada", details={"nome": nome})
    try:
        route = repo.create({"nome": nome})
    except IntegrityError:
        raise ConflictException("Rota já cadastrada", details={"nome": nome})
    logger.info("Route created", rota_id=route.id, nome=nome)
    return route


def rename_route(repo: RouteRepository, rota_id: int, nome: str) -> Route:
    route = repo.get_by_id(rota_id)
    if route is None:
        raise EntityNotFoundException("Rota não encontrada", details={"rota_id": rota_id})
    nome = _clean_name(nome)
    existing = repo.get_by_nome(nome)
    if existing is not None and existing.id != route.id:
        raise ConflictException("Rota já cadastrada", details={"nome": nome})
    return repo.update(route, {"nome": nome})


def delete_route(repo: RouteRepository, rota_id: int) -> None:
    if repo.get_by_id(rota_id) is None:
        raise EntityNotFoundException("Rota não encontrada", details={"rota_id": rota_id})
    vinculos = repo.count_links(rota_id)
    if vinculos:
        raise ConflictException(
            "Rota possui clientes, pedidos ou usuários vinculados",
            details={"rota_id": rota_id, "vinculos": vinculos},
        )
    repo.delete(rota_id)
    logger.info("Route deleted", rota_id=rota_id)
