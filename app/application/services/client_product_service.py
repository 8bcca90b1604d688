"""Client product service — per-client price overrides (vínculos)."""

from decimal import Decimal
from typing import List, Optional

import structlog
from sqlalchemy.exc import IntegrityError

from app.application.services.order_calculator import PRICE_PLACES, exceeds_places, to_decimal
from app.application.services.pricing import PriceResolution, PriceResolver
from app.core.exceptions import ConflictException, EntityNotFoundException, ValidationException
from app.domain.models.client_product import ClientProduct
from app.domain.repositories.client_product_repository import ClientProductRepository
from app.domain.repositories.client_repository import ClientRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.client_product import ClientProductCreate, ClientProductUpdate

logger = structlog.get_logger(__name__)


def _price(value, allow_zero: bool) -> Decimal:
    preco = to_decimal(value)
    if preco is None or not preco.is_finite() or preco < 0 or (preco == 0 and not allow_zero):
        rule = "maior ou igual a zero" if allow_zero else "maior que zero"
        raise ValidationException(f"valor_unitario deve ser {rule}", details={"valor_unitario": str(value)})
    # column scale; 0.00001 would be stored as 0
    if exceeds_places(preco, PRICE_PLACES):
        raise ValidationException(
            f"valor_unitario aceita no máximo {PRICE_PLACES} casas decimais",
            details={"valor_unitario": str(value)},
        )
    return preco


def _check_client(clients: ClientRepository, cliente_id: int) -> None:
    if clients.get_by_id(cliente_id) is None:
        raise EntityNotFoundException("Cliente não encontrado", details={"cliente_id": cliente_id})


def list_overrides(repo: ClientProductRepository, cliente_id: Optional[int] = None) -> List[ClientProduct]:
    return repo.list_for_client(cliente_id)


def list_client_overrides(
    repo: ClientProductRepository, clients: ClientRepository, cliente_id: int
) -> List[ClientProduct]:
    _check_client(clients, cliente_id)
    return repo.list_for_client(cliente_id)


def create_override(
    repo: ClientProductRepository,
    clients: ClientRepository,
    products: ProductRepository,
    body: ClientProductCreate,
) -> ClientProduct:
    preco = _price(body.valor_unitario, allow_zero=False)
    _check_client(clients, body.cliente_id)
    if products.get_by_id(body.produto_id) is None:
        raise EntityNotFoundException("Produto não encontrado", details={"produto_id": body.produto_id})

    duplicate = ConflictException(
        "Produto já vinculado a este cliente",
        details={"cliente_id": body.cliente_id, "produto_id": body.produto_id},
    )
    if repo.get_by_pair(body.cliente_id, body.produto_id) is not None:
        raise duplicate
    try:
        override = repo.create(
            {"cliente_id": body.cliente_id, "produto_id": body.produto_id, "valor_unitario": preco}
        )
    except IntegrityError:
        raise duplicate

    logger.info(
        "Price override created",
        vinculo_id=override.id,
        cliente_id=body.cliente_id,
        produto_id=body.produto_id,
        valor_unitario=str(preco),
    )
    return override


def update_override(repo: ClientProductRepository, vinculo_id: int, body: ClientProductUpdate) -> ClientProduct:
    override = repo.get_by_id(vinculo_id)
    if override is None:
        raise EntityNotFoundException("Vínculo não encontrado", details={"vinculo_id": vinculo_id})
    preco = _price(body.valor_unitario, allow_zero=True)
    override = repo.update(override, {"valor_unitario": preco})
    logger.info("Price override updated", vinculo_id=vinculo_id, valor_unitario=str(preco))
    return override


def delete_override(repo: ClientProductRepository, vinculo_id: int) -> None:
    if repo.delete(vinculo_id) is None:
        raise EntityNotFoundException("Vínculo não encontrado", details={"vinculo_id": vinculo_id})
    logger.info("Price override deleted", vinculo_id=vinculo_id)


def resolve_price(
    repo: ClientProductRepository,
    clients: ClientRepository,
    products: ProductRepository,
    cliente_id: int,
    produto_id: int,
) -> PriceResolution:
    _check_client(clients, cliente_id)
    if products.get_by_id(produto_id) is None:
        raise EntityNotFoundException("Produto não encontrado", details={"produto_id": produto_id})
    return PriceResolver(repo, products).lookup(cliente_id, produto_id)
