"""Products API routes — product catalog CRUD."""

from fastapi import APIRouter, Depends, status

from app.interfaces.api.deps import can_manage_cadastros, get_current_user
from app.interfaces.deps import get_product_repository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.models.user import User
from app.domain.schemas.product import ProductCreate, ProductRead, ProductUpdate
from app.application.services.product_service import (
    create_product,
    delete_product,
    get_product,
    list_products,
    update_product,
)

router = APIRouter(prefix="/api/produtos", tags=["Produtos"])


@router.get("")
def get_products(
    repo: ProductRepository = Depends(get_product_repository),
    user: User = Depends(get_current_user),
):
    return [ProductRead.model_validate(p) for p in list_products(repo)]


@router.get("/{produto_id}", response_model=ProductRead)
def get_one_product(
    produto_id: int,
    repo: ProductRepository = Depends(get_product_repository),
    user: User = Depends(get_current_user),
):
    return ProductRead.model_validate(get_product(repo, produto_id))


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def add_product(
    body: ProductCreate,
    repo: ProductRepository = Depends(get_product_repository),
    user: User = Depends(can_manage_cadastros),
):
    return ProductRead.model_validate(create_product(repo, body))


@router.patch("/{produto_id}", response_model=ProductRead)
def edit_product(
    produto_id: int,
    body: ProductUpdate,
    repo: ProductRepository = Depends(get_product_repository),
    user: User = Depends(can_manage_cadastros),
):
    return ProductRead.model_validate(update_product(repo, produto_id, body))


@router.delete("/{produto_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_product(
    produto_id: int,
    repo: ProductRepository = Depends(get_product_repository),
    user: User = Depends(can_manage_cadastros),
):
    delete_product(repo, produto_id)
