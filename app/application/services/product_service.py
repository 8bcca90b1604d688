"""Product service — business logic for the product catalog."""

import time
from decimal import Decimal
from typing import List, Optional

import structlog
from sqlalchemy.exc import IntegrityError

from app.application.services.order_calculator import PRICE_PLACES, exceeds_places, to_decimal
from app.core.exceptions import ConflictException, EntityNotFoundException, ValidationException
from app.domain.models.product import Product
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.product import ProductCreate, ProductUpdate

logger = structlog.get_logger(__name__)


def generate_product_code() -> str:
    """PR followed by the last 8 digits of the millisecond clock."""
    return "PR" + str(int(time.time() * 1000))[-8:]


def _check_price(value) -> Optional[Decimal]:
    preco = to_decimal(value)
    if preco is not None and (not preco.is_finite() or preco < 0):
        raise ValidationException("preco_base não pode ser negativo", details={"preco_base": str(value)})
    if preco is not None and exceeds_places(preco, PRICE_PLACES):
        raise ValidationException(
            f"preco_base aceita no máximo {PRICE_PLACES} casas decimais", details={"preco_base": str(value)}
        )
    return preco


def get_product(repo: ProductRepository, produto_id: int) -> Product:
    product = repo.get_by_id(produto_id)
    if product is None:
        raise EntityNotFoundException("Produto não encontrado", details={"produto_id": produto_id})
    return product


def list_products(repo: ProductRepository) -> List[Product]:
    return repo.list_all()


def create_product(repo: ProductRepository, body: ProductCreate) -> Product:
    nome = body.nome.strip()
    if not nome:
        raise ValidationException("nome é obrigatório")
    preco = _check_price(body.preco_base)
    codigo = (body.codigo_produto or "").strip() or generate_product_code()

    if repo.get_by_codigo(codigo) is not None:
        raise ConflictException("Código de produto já cadastrado", details={"codigo_produto": codigo})

    try:
        product = repo.create(
            {
                "codigo_produto": codigo,
                "nome": nome,
                "embalagem": (body.embalagem or "").strip() or None,
                "preco_base": preco,
            }
        )
    except IntegrityError:
        raise ConflictException("Código de produto já cadastrado", details={"codigo_produto": codigo})

    logger.info("Product created", produto_id=product.id, codigo_produto=codigo)
    return product


def update_product(repo: ProductRepository, produto_id: int, body: ProductUpdate) -> Product:
    product = get_product(repo, produto_id)
    changes = body.model_dump(exclude_unset=True)

    if "nome" in changes:
        if not changes["nome"] or not changes["nome"].strip():
            raise ValidationException("nome não pode ser vazio")
        changes["nome"] = changes["nome"].strip()
    if "codigo_produto" in changes:
        codigo = (changes["codigo_produto"] or "").strip()
        if not codigo:
            raise ValidationException("codigo_produto não pode ser vazio")
        existing = repo.get_by_codigo(codigo)
        if existing is not None and existing.id != product.id:
            raise ConflictException("Código de produto já cadastrado", details={"codigo_produto": codigo})
        changes["codigo_produto"] = codigo
    if "preco_base" in changes:
        changes["preco_base"] = _check_price(changes["preco_base"])
    if "ativo" in changes and changes["ativo"] is None:
        del changes["ativo"]

    try:
        return repo.update(product, changes)
    except IntegrityError:
        raise ConflictException("Código de produto já cadastrado")


def delete_product(repo: ProductRepository, produto_id: int) -> None:
    get_product(repo, produto_id)
    itens = repo.count_order_items(produto_id)
    if itens:
        raise ConflictException(
            "Produto está em pedidos e não pode ser excluído",
            details={"produto_id": produto_id, "itens_vinculados": itens},
        )
    try:
        repo.delete(produto_id)
    except IntegrityError:
        raise ConflictException("Produto possui vínculos e não pode ser excluído", details={"produto_id": produto_id})
    logger.info("Product deleted", produto_id=produto_id)
