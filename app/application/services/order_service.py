"""Order service — creation, full replacement, status changes and listings.

Pricing, validation and the status table live in their own modules; this
service wires them to the repositories and makes each request all-or-nothing.
"""

import math
import time
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

import pytz
import structlog
from sqlalchemy.exc import IntegrityError

from app.application.services.order_calculator import OrderTotals, compute_totals
from app.application.services.order_lifecycle import (
    TERMINAL_STATUSES,
    ChangeStatus,
    OrderState,
    OrderStatus,
    ReplaceItems,
    ReplaceItemsAndChangeStatus,
    apply_command,
    initial_status,
    normalize_status,
    parse_status,
)
from app.application.services.pricing import PriceResolver
from app.config import get_settings
from app.core.exceptions import ConflictException, EntityNotFoundException, ValidationException
from app.domain.models.order import Order
from app.domain.repositories.client_product_repository import ClientProductRepository
from app.domain.repositories.client_repository import ClientRepository
from app.domain.repositories.order_repository import OrderRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.repositories.route_repository import RouteRepository
from app.domain.schemas.order import (
    OrderCreate,
    OrderFilter,
    OrderItemInput,
    OrderPage,
    OrderRead,
    OrderStatusUpdate,
    OrderUpdate,
)

settings = get_settings()
tz = pytz.timezone(settings.TIMEZONE)
logger = structlog.get_logger(__name__)

BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def now() -> datetime:
    return datetime.now(tz)


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(BASE36[rem])
    return "".join(reversed(digits))


def generate_order_key(codigo_cliente: str) -> str:
    """Client code followed by the base-36 millisecond timestamp."""
    return f"{codigo_cliente}{to_base36(int(time.time() * 1000))}"


def normalize_status_filter(value: Optional[str]) -> Optional[str]:
    """Status filter for listings. Unknown values mean "no filter"."""
    if value is None or not str(value).strip():
        return None
    status = normalize_status(value)
    if status is None:
        logger.warning("Ignoring unknown status filter", status=value)
        return None
    return status.value


class OrderService:
    def __init__(
        self,
        orders: OrderRepository,
        clients: ClientRepository,
        products: ProductRepository,
        overrides: ClientProductRepository,
        routes: RouteRepository,
    ):
        self.orders = orders
        self.clients = clients
        self.products = products
        self.routes = routes
        self.prices = PriceResolver(overrides, products)

    # --------- reads ----------

    def get(self, order_id: int) -> Order:
        order = self.orders.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundException("Pedido não encontrado", details={"pedido_id": order_id})
        return order

    def to_read(self, order: Order) -> OrderRead:
        return self.to_read_many([order])[0]

    def to_read_many(self, orders: Iterable[Order]) -> List[OrderRead]:
        orders = list(orders)
        summaries = self.orders.exchange_summaries([o.id for o in orders])
        return [OrderRead.from_model(o, *summaries.get(o.id, (0, None))) for o in orders]

    def list_orders(
        self,
        data=None,
        rota_id: Optional[int] = None,
        cliente_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> List[OrderRead]:
        filters = OrderFilter(
            data=data,
            rota_id=rota_id,
            cliente_id=cliente_id,
            status=normalize_status_filter(status),
        )
        return self.to_read_many(self.orders.list_filtered(filters))

    def paginate(
        self,
        page: Optional[int] = 1,
        limit: Optional[int] = 10,
        q: Optional[str] = None,
        data=None,
        rota_id: Optional[int] = None,
        cliente_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> OrderPage:
        page = max(page or 1, 1)
        limit = min(max(limit or 10, 1), settings.PAGE_SIZE_MAX)
        filters = OrderFilter(
            data=data,
            rota_id=rota_id,
            cliente_id=cliente_id,
            status=normalize_status_filter(status),
            q=q.strip() if q and q.strip() else None,
        )
        orders, total = self.orders.paginate(filters, page, limit)
        return OrderPage(
            data=self.to_read_many(orders),
            page=page,
            limit=limit,
            total=total,
            totalPages=max(math.ceil(total / limit), 1),
        )

    # --------- writes ----------

    def _priced_items(self, cliente_id: int, itens: Optional[List[OrderItemInput]]) -> List[Dict[str, Any]]:
        """Fill in missing unit prices from the client's override or the base price."""
        priced = []
        for item in itens or []:
            data = item.model_dump()
            if data.get("valor_unitario") is None and data.get("produto_id"):
                data["valor_unitario"] = self.prices.resolve(cliente_id, data["produto_id"])
            priced.append(data)
        return priced

    def _compute(self, cliente_id: int, itens: Optional[List[OrderItemInput]]) -> OrderTotals:
        return compute_totals(self._priced_items(cliente_id, itens), product_exists=self.products.exists)

    def _check_route(self, rota_id: Optional[int]) -> None:
        if rota_id is not None and self.routes.get_by_id(rota_id) is None:
            raise EntityNotFoundException("Rota não encontrada", details={"rota_id": rota_id})

    def _remaneio_values(self, order: Optional[Order], status: OrderStatus) -> Dict[str, Any]:
        if status != OrderStatus.CONFERIR:
            return {"ordem_remaneio": None}
        if order is not None and order.status == OrderStatus.CONFERIR.value and order.ordem_remaneio is not None:
            return {}
        return {"ordem_remaneio": self.orders.next_remaneio_position()}

    def create(self, body: OrderCreate, user_id: Optional[int] = None) -> Order:
        cliente = self.clients.get_by_id(body.cliente_id)
        if cliente is None:
            raise EntityNotFoundException("Cliente não encontrado", details={"cliente_id": body.cliente_id})
        self._check_route(body.rota_id)

        status = initial_status(body.status)
        totals = self._compute(cliente.id, body.itens)

        chave = (body.chave_pedido or "").strip() or generate_order_key(cliente.codigo_cliente)
        values = {
            "chave_pedido": chave,
            "cliente_id": cliente.id,
            "rota_id": body.rota_id,
            "data": body.data,
            "status": status.value,
            "valor_total": totals.valor_total,
            "valor_efetivado": totals.valor_total if status == OrderStatus.EFETIVADO else None,
            "criado_por": user_id,
            **self._remaneio_values(None, status),
        }

        try:
            order = self.orders.add_order(values, totals.items)
        except IntegrityError:
            raise ConflictException("Chave do pedido já existe", details={"chave_pedido": chave})

        logger.info(
            "Order created",
            pedido_id=order.id,
            chave_pedido=order.chave_pedido,
            status=order.status,
            valor_total=str(totals.valor_total),
            itens=len(totals.items),
        )
        return order

    def _state(self, order: Order) -> OrderState:
        return OrderState(
            status=OrderStatus(order.status),
            valor_total=Decimal(order.valor_total or 0),
            item_count=len(order.itens),
            valor_efetivado=Decimal(order.valor_efetivado) if order.valor_efetivado is not None else None,
        )

    def _persist(self, order: Order, state: OrderState, values: Dict[str, Any], totals: Optional[OrderTotals], user_id):
        values["atualizado_em"] = now()
        values["atualizado_por"] = user_id
        applied = self.orders.apply_update(
            order,
            expected_status=state.status.value,
            values=values,
            items=totals.items if totals is not None else None,
        )
        if not applied:
            logger.warning("Concurrent order update rejected", pedido_id=order.id, expected_status=state.status.value)
            raise ConflictException(
                "Pedido foi alterado por outra requisição. Recarregue e tente novamente.",
                details={"pedido_id": order.id},
            )

    def update(self, order_id: int, body: OrderUpdate, user_id: Optional[int] = None) -> Order:
        """Full update: optional item-set replacement and/or status change, atomically."""
        order = self.get(order_id)
        state = self._state(order)
        sent = body.model_fields_set

        if state.status in TERMINAL_STATUSES:
            raise ConflictException(
                f"Pedido {state.status.value} não pode mais ser alterado",
                details={"status_atual": state.status.value},
            )

        target = parse_status(body.status) if "status" in sent and body.status is not None else None
        valor_efetivado = body.valor_efetivado if "valor_efetivado" in sent else None

        totals = None
        if "itens" in sent and body.itens is not None:
            totals = self._compute(order.cliente_id, body.itens)
        elif "itens" in sent:
            raise ValidationException("O pedido deve ter ao menos um item", details={"errors": ["itens: nulo"]})

        if totals is not None and target is not None:
            command = ReplaceItemsAndChangeStatus(totals, target, valor_efetivado)
        elif totals is not None:
            if valor_efetivado is not None:
                raise ValidationException("valor_efetivado só pode ser informado ao efetivar o pedido")
            command = ReplaceItems(totals)
        elif target is not None:
            command = ChangeStatus(target, valor_efetivado)
        else:
            command = None

        values: Dict[str, Any] = {}
        if "rota_id" in sent:
            self._check_route(body.rota_id)
            values["rota_id"] = body.rota_id
        if "data" in sent:
            if body.data is None:
                raise ValidationException("data não pode ser vazia")
            values["data"] = body.data

        result = apply_command(state, command) if command is not None else None
        if result is not None:
            values.update(
                status=result.status.value,
                valor_total=result.valor_total,
                valor_efetivado=result.valor_efetivado,
            )
            values.update(self._remaneio_values(order, result.status))

        if not values:
            return order

        self._persist(order, state, values, totals, user_id)
        logger.info(
            "Order updated",
            pedido_id=order.id,
            status_anterior=state.status.value,
            status=order.status,
            itens_substituidos=totals is not None,
            valor_total=str(order.valor_total),
        )
        return order

    def change_status(self, order_id: int, body: OrderStatusUpdate, user_id: Optional[int] = None) -> Order:
        """Status-only change through the transition table."""
        if body.status is None or not str(body.status).strip():
            raise ValidationException("status é obrigatório")
        target = parse_status(body.status)

        order = self.get(order_id)
        state = self._state(order)
        result = apply_command(state, ChangeStatus(target, body.valor_efetivado))

        values: Dict[str, Any] = {
            "status": result.status.value,
            "valor_efetivado": result.valor_efetivado,
            **self._remaneio_values(order, result.status),
        }
        if body.data is not None:
            values["data"] = body.data

        self._persist(order, state, values, None, user_id)
        logger.info(
            "Order status changed",
            pedido_id=order.id,
            status_anterior=state.status.value,
            status=order.status,
            valor_efetivado=str(order.valor_efetivado) if order.valor_efetivado is not None else None,
        )
        return order

    def reorder_remaneio(self, pedido_ids: List[int], user_id: Optional[int] = None) -> Dict[str, Any]:
        """Put the given CONFERIR orders first in the loading sequence."""
        requested: List[int] = []
        for pedido_id in pedido_ids:
            if isinstance(pedido_id, int) and pedido_id > 0 and pedido_id not in requested:
                requested.append(pedido_id)
        if not requested:
            raise ValidationException("pedido_ids é obrigatório e deve ter ao menos 1 item.")

        conferindo = self.orders.conferir_ids_in_order()
        conferindo_set = set(conferindo)
        invalidos = [i for i in requested if i not in conferindo_set]
        if invalidos:
            raise ValidationException(
                "Um ou mais pedidos não estão no status Conferir.",
                details={"invalidos": invalidos},
            )

        final_order = requested + [i for i in conferindo if i not in requested]
        self.orders.set_remaneio_positions(final_order, user_id)
        logger.info("Remaneio reordered", total=len(final_order))
        return {"ok": True, "total": len(final_order)}
