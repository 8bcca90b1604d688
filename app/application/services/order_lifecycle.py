"""Order lifecycle — the status state machine.

All order mutations go through :func:`apply_command`, which takes the
current order state and one of three commands and returns the values to
persist. The transition table below is the only place that decides what is
legal.

    EM_ESPERA -> CONFERIR | CANCELADO | EFETIVADO
    CONFERIR  -> EFETIVADO | CANCELADO | EM_ESPERA
    EFETIVADO, CANCELADO: terminal
"""

import enum
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, FrozenSet, Optional, Union

from app.application.services.order_calculator import TOTAL_PLACES, OrderTotals, exceeds_places, to_decimal
from app.core.exceptions import ConflictException, ValidationException


class OrderStatus(str, enum.Enum):
    EM_ESPERA = "EM_ESPERA"
    CONFERIR = "CONFERIR"
    EFETIVADO = "EFETIVADO"
    CANCELADO = "CANCELADO"


TERMINAL_STATUSES: FrozenSet[OrderStatus] = frozenset({OrderStatus.EFETIVADO, OrderStatus.CANCELADO})

TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.EM_ESPERA: frozenset({OrderStatus.CONFERIR, OrderStatus.CANCELADO, OrderStatus.EFETIVADO}),
    OrderStatus.CONFERIR: frozenset({OrderStatus.EFETIVADO, OrderStatus.CANCELADO, OrderStatus.EM_ESPERA}),
    OrderStatus.EFETIVADO: frozenset(),
    OrderStatus.CANCELADO: frozenset(),
}

# Targets that only make sense for an order with at least one item
REQUIRES_ITEMS: FrozenSet[OrderStatus] = frozenset({OrderStatus.CONFERIR, OrderStatus.EFETIVADO})

STATUS_VALUES = ", ".join(s.value for s in OrderStatus)


def normalize_status(value) -> Optional[OrderStatus]:
    """Parse free-form status input. "ok" is accepted as EFETIVADO."""
    if value is None:
        return None
    if isinstance(value, OrderStatus):
        return value
    normalized = "_".join(str(value).strip().upper().split())
    if normalized == "OK":
        normalized = OrderStatus.EFETIVADO.value
    try:
        return OrderStatus(normalized)
    except ValueError:
        return None


def parse_status(value) -> OrderStatus:
    """Like normalize_status, but unknown values are a ValidationException."""
    status = normalize_status(value)
    if status is None:
        raise ValidationException(
            f"Status inválido. Valores permitidos: {STATUS_VALUES}",
            details={"status": value},
        )
    return status


@dataclass(frozen=True)
class OrderState:
    status: OrderStatus
    valor_total: Decimal
    item_count: int
    valor_efetivado: Optional[Decimal] = None


@dataclass(frozen=True)
class ReplaceItems:
    totals: OrderTotals


@dataclass(frozen=True)
class ChangeStatus:
    status: OrderStatus
    valor_efetivado: Optional[Decimal] = None


@dataclass(frozen=True)
class ReplaceItemsAndChangeStatus:
    totals: OrderTotals
    status: OrderStatus
    valor_efetivado: Optional[Decimal] = None


OrderCommand = Union[ReplaceItems, ChangeStatus, ReplaceItemsAndChangeStatus]


@dataclass(frozen=True)
class TransitionResult:
    previous_status: OrderStatus
    status: OrderStatus
    valor_total: Decimal
    valor_efetivado: Optional[Decimal]
    totals: Optional[OrderTotals] = None

    @property
    def status_changed(self) -> bool:
        return self.previous_status != self.status


def _check_transition(current: OrderStatus, target: OrderStatus, item_count: int) -> None:
    if current in TERMINAL_STATUSES:
        raise ConflictException(
            f"Pedido {current.value} não pode mais ser alterado",
            details={"status_atual": current.value, "status_destino": target.value},
        )
    if target != current and target not in TRANSITIONS[current]:
        raise ConflictException(
            f"Transição de {current.value} para {target.value} não permitida",
            details={"status_atual": current.value, "status_destino": target.value},
        )
    if target in REQUIRES_ITEMS and item_count < 1:
        raise ValidationException(
            f"Pedido sem itens não pode ir para {target.value}",
            details={"status_destino": target.value},
        )


def _capture_valor_efetivado(
    target: OrderStatus, requested: Optional[Decimal], valor_total: Decimal, current: Optional[Decimal]
) -> Optional[Decimal]:
    if target != OrderStatus.EFETIVADO:
        if requested is not None:
            raise ValidationException(
                "valor_efetivado só pode ser informado ao efetivar o pedido",
                details={"status_destino": target.value},
            )
        return current
    if requested is None:
        return valor_total
    value = to_decimal(requested)
    if value is None or not value.is_finite() or value < 0 or exceeds_places(value, TOTAL_PLACES):
        raise ValidationException("valor_efetivado inválido", details={"valor_efetivado": str(requested)})
    return value


def apply_command(state: OrderState, command: OrderCommand) -> TransitionResult:
    """Validate ``command`` against ``state`` and compute the new values.

    Nothing is persisted here; callers write the result guarded by
    ``state.status`` so a concurrent transition cannot be overwritten.
    """
    if isinstance(command, ReplaceItems):
        if state.status in TERMINAL_STATUSES:
            raise ConflictException(
                f"Itens de pedido {state.status.value} não podem ser alterados",
                details={"status_atual": state.status.value},
            )
        return TransitionResult(
            previous_status=state.status,
            status=state.status,
            valor_total=command.totals.valor_total,
            valor_efetivado=state.valor_efetivado,
            totals=command.totals,
        )

    if isinstance(command, ChangeStatus):
        _check_transition(state.status, command.status, state.item_count)
        valor_efetivado = _capture_valor_efetivado(
            command.status, command.valor_efetivado, state.valor_total, state.valor_efetivado
        )
        return TransitionResult(
            previous_status=state.status,
            status=command.status,
            valor_total=state.valor_total,
            valor_efetivado=valor_efetivado,
        )

    if isinstance(command, ReplaceItemsAndChangeStatus):
        _check_transition(state.status, command.status, len(command.totals.items))
        valor_efetivado = _capture_valor_efetivado(
            command.status, command.valor_efetivado, command.totals.valor_total, state.valor_efetivado
        )
        return TransitionResult(
            previous_status=state.status,
            status=command.status,
            valor_total=command.totals.valor_total,
            valor_efetivado=valor_efetivado,
            totals=command.totals,
        )

    raise TypeError(f"Unknown order command: {command!r}")


def initial_status(value) -> OrderStatus:
    """Status for a brand-new order: EM_ESPERA unless the caller asks otherwise.

    A new order may be created directly in any status; creation is not a
    transition, so the table does not apply.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return OrderStatus.EM_ESPERA
    return parse_status(value)
