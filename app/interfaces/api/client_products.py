"""Client product API routes — per-client price overrides and price lookup."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from app.interfaces.api.deps import can_manage_cadastros, get_current_user
from app.interfaces.deps import get_client_product_repository, get_client_repository, get_product_repository
from app.domain.repositories.client_product_repository import ClientProductRepository
from app.domain.repositories.client_repository import ClientRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.models.user import User
from app.domain.schemas.client_product import (
    ClientProductCreate,
    ClientProductRead,
    ClientProductUpdate,
    PriceResolutionRead,
)
from app.application.services.client_product_service import (
    create_override,
    delete_override,
    list_client_overrides,
    list_overrides,
    resolve_price,
    update_override,
)

router = APIRouter(prefix="/api", tags=["Cliente x Produtos"])


@router.get("/cliente-produtos")
def get_overrides(
    cliente_id: Optional[int] = None,
    repo: ClientProductRepository = Depends(get_client_product_repository),
    user: User = Depends(get_current_user),
):
    return [ClientProductRead.from_model(v) for v in list_overrides(repo, cliente_id)]


@router.get("/clientes/{cliente_id}/produtos")
def get_client_overrides(
    cliente_id: int,
    repo: ClientProductRepository = Depends(get_client_product_repository),
    clients: ClientRepository = Depends(get_client_repository),
    user: User = Depends(get_current_user),
):
    return [ClientProductRead.from_model(v) for v in list_client_overrides(repo, clients, cliente_id)]


@router.get("/clientes/{cliente_id}/produtos/{produto_id}/preco", response_model=PriceResolutionRead)
def get_resolved_price(
    cliente_id: int,
    produto_id: int,
    repo: ClientProductRepository = Depends(get_client_product_repository),
    clients: ClientRepository = Depends(get_client_repository),
    products: ProductRepository = Depends(get_product_repository),
    user: User = Depends(get_current_user),
):
    """Unit price the client pays for the product and where it comes from."""
    resolution = resolve_price(repo, clients, products, cliente_id, produto_id)
    return PriceResolutionRead(
        cliente_id=cliente_id,
        produto_id=produto_id,
        valor_unitario=resolution.valor_unitario,
        origem=resolution.origem,
    )


@router.post("/cliente-produtos", response_model=ClientProductRead, status_code=status.HTTP_201_CREATED)
def add_override(
    body: ClientProductCreate,
    repo: ClientProductRepository = Depends(get_client_product_repository),
    clients: ClientRepository = Depends(get_client_repository),
    products: ProductRepository = Depends(get_product_repository),
    user: User = Depends(can_manage_cadastros),
):
    return ClientProductRead.from_model(create_override(repo, clients, products, body))


@router.patch("/cliente-produtos/{vinculo_id}", response_model=ClientProductRead)
def edit_override(
    vinculo_id: int,
    body: ClientProductUpdate,
    repo: ClientProductRepository = Depends(get_client_product_repository),
    user: User = Depends(can_manage_cadastros),
):
    return ClientProductRead.from_model(update_override(repo, vinculo_id, body))


@router.delete("/cliente-produtos/{vinculo_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_override(
    vinculo_id: int,
    repo: ClientProductRepository = Depends(get_client_product_repository),
    user: User = Depends(can_manage_cadastros),
):
    delete_override(repo, vinculo_id)
