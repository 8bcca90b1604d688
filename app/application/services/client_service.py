"""Client service — business logic for the client catalog."""

from typing import List

import structlog
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictException, EntityNotFoundException, ValidationException
from app.domain.models.client import Client
from app.domain.repositories.client_repository import ClientRepository
from app.domain.repositories.route_repository import RouteRepository
from app.domain.schemas.client import ClientCreate, ClientUpdate

logger = structlog.get_logger(__name__)


def get_client(repo: ClientRepository, cliente_id: int) -> Client:
    client = repo.get_by_id(cliente_id)
    if client is None:
        raise EntityNotFoundException("Cliente não encontrado", details={"cliente_id": cliente_id})
    return client


def list_clients(repo: ClientRepository) -> List[Client]:
    return repo.list_all()


def _check_route(routes: RouteRepository, rota_id) -> None:
    if rota_id is not None and routes.get_by_id(rota_id) is None:
        raise EntityNotFoundException("Rota não encontrada", details={"rota_id": rota_id})


def create_client(repo: ClientRepository, routes: RouteRepository, body: ClientCreate) -> Client:
    codigo = body.codigo_cliente.strip()
    nome = body.nome.strip()
    if not codigo or not nome:
        raise ValidationException("codigo_cliente e nome são obrigatórios")
    _check_route(routes, body.rota_id)

    if repo.get_by_codigo(codigo) is not None:
        raise ConflictException("Código de cliente já cadastrado", details={"codigo_cliente": codigo})

    try:
        client = repo.create(
            {"codigo_cliente": codigo, "nome": nome, "rota_id": body.rota_id, "link": body.link or None}
        )
    except IntegrityError:
        raise ConflictException("Código de cliente já cadastrado", details={"codigo_cliente": codigo})

    logger.info("Client created", cliente_id=client.id, codigo_cliente=codigo)
    return client


def update_client(repo: ClientRepository, routes: RouteRepository, cliente_id: int, body: ClientUpdate) -> Client:
    client = get_client(repo, cliente_id)
    changes = body.model_dump(exclude_unset=True)

    if "nome" in changes:
        if not changes["nome"] or not changes["nome"].strip():
            raise ValidationException("nome não pode ser vazio")
        changes["nome"] = changes["nome"].strip()
    if "ativo" in changes and changes["ativo"] is None:
        del changes["ativo"]
    if "rota_id" in changes:
        _check_route(routes, changes["rota_id"])

    return repo.update(client, changes)


def delete_client(repo: ClientRepository, cliente_id: int) -> None:
    get_client(repo, cliente_id)
    pedidos = repo.count_orders(cliente_id)
    if pedidos:
        raise ConflictException(
            "Cliente possui pedidos e não pode ser excluído",
            details={"cliente_id": cliente_id, "pedidos_vinculados": pedidos},
        )
    try:
        repo.delete(cliente_id)
    except IntegrityError:
        raise ConflictException("Cliente possui vínculos e não pode ser excluído", details={"cliente_id": cliente_id})
    logger.info("Client deleted", cliente_id=cliente_id)
