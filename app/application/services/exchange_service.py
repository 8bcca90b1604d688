"""Exchange service — post-order adjustments (trocas) attached to an order."""

from decimal import Decimal
from typing import List, Optional

import structlog

from app.application.services.order_calculator import PRICE_PLACES, QUANTITY_PLACES, exceeds_places, to_decimal
from app.core.exceptions import EntityNotFoundException, ValidationException
from app.domain.models.exchange import Exchange
from app.domain.repositories.exchange_repository import ExchangeRepository
from app.domain.repositories.order_repository import OrderRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.exchange import ExchangeCreate

logger = structlog.get_logger(__name__)

ZERO = Decimal("0")


class ExchangeService:
    def __init__(self, exchanges: ExchangeRepository, orders: OrderRepository, products: ProductRepository):
        self.exchanges = exchanges
        self.orders = orders
        self.products = products

    def _get_order(self, pedido_id: int):
        order = self.orders.get_by_id(pedido_id)
        if order is None:
            raise EntityNotFoundException("Pedido não encontrado", details={"pedido_id": pedido_id})
        return order

    def create(self, body: ExchangeCreate, user_id: Optional[int] = None) -> Exchange:
        """Record an exchange. Allowed in any order status."""
        errors: List[str] = []

        quantidade = to_decimal(body.quantidade)
        if quantidade is None or not quantidade.is_finite() or quantidade <= ZERO:
            errors.append("quantidade deve ser maior que zero")
        elif exceeds_places(quantidade, QUANTITY_PLACES):
            errors.append(f"quantidade aceita no máximo {QUANTITY_PLACES} casas decimais")

        valor_troca = to_decimal(body.valor_troca)
        if valor_troca is None:
            valor_troca = ZERO
        elif not valor_troca.is_finite() or valor_troca < ZERO:
            errors.append("valor_troca não pode ser negativo")
        elif exceeds_places(valor_troca, PRICE_PLACES):
            errors.append(f"valor_troca aceita no máximo {PRICE_PLACES} casas decimais")

        if errors:
            raise ValidationException("Troca inválida: " + "; ".join(errors), details={"errors": errors})

        order = self._get_order(body.pedido_id)
        if self.products.get_by_id(body.produto_id) is None:
            raise EntityNotFoundException("Produto não encontrado", details={"produto_id": body.produto_id})

        if body.item_pedido_id is not None and body.item_pedido_id not in {i.id for i in order.itens}:
            raise ValidationException(
                "Item não pertence ao pedido",
                details={"pedido_id": order.id, "item_pedido_id": body.item_pedido_id},
            )

        motivo = body.motivo.strip() if body.motivo and body.motivo.strip() else None
        troca = self.exchanges.create(
            {
                "pedido_id": order.id,
                "item_pedido_id": body.item_pedido_id,
                "produto_id": body.produto_id,
                "quantidade": quantidade,
                "valor_troca": valor_troca,
                "motivo": motivo,
                "criado_por": user_id,
            }
        )
        logger.info(
            "Exchange recorded",
            troca_id=troca.id,
            pedido_id=order.id,
            produto_id=body.produto_id,
            quantidade=str(quantidade),
            valor_troca=str(valor_troca),
        )
        return troca

    def delete(self, troca_id: int) -> None:
        troca = self.exchanges.delete(troca_id)
        if troca is None:
            raise EntityNotFoundException("Troca não encontrada", details={"troca_id": troca_id})
        logger.info("Exchange deleted", troca_id=troca_id, pedido_id=troca.pedido_id)

    def list_for_order(self, pedido_id: int) -> List[Exchange]:
        self._get_order(pedido_id)
        return self.exchanges.list_for_order(pedido_id)
