"""Price resolver — unit price for a client/product pair."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from app.domain.repositories.client_product_repository import ClientProductRepository
from app.domain.repositories.product_repository import ProductRepository

ORIGEM_VINCULO = "vinculo"
ORIGEM_PRODUTO = "produto"


@dataclass(frozen=True)
class PriceResolution:
    valor_unitario: Optional[Decimal]
    origem: Optional[str]

    @property
    def resolved(self) -> bool:
        return self.valor_unitario is not None


class PriceResolver:
    """Prefers the client's override (vínculo) over the product's base price.

    Absence of both is a valid outcome: the caller must then supply the
    unit price explicitly.
    """

    def __init__(self, overrides: ClientProductRepository, products: ProductRepository):
        self.overrides = overrides
        self.products = products

    def lookup(self, cliente_id: int, produto_id: int) -> PriceResolution:
        override = self.overrides.get_by_pair(cliente_id, produto_id)
        if override is not None and override.valor_unitario is not None:
            return PriceResolution(Decimal(override.valor_unitario), ORIGEM_VINCULO)

        product = self.products.get_by_id(produto_id)
        if product is not None and product.preco_base is not None:
            return PriceResolution(Decimal(product.preco_base), ORIGEM_PRODUTO)

        return PriceResolution(None, None)

    def resolve(self, cliente_id: int, produto_id: int) -> Optional[Decimal]:
        return self.lookup(cliente_id, produto_id).valor_unitario
