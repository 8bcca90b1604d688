from decimal import Decimal

import pytest

from app.application.services.order_calculator import compute_totals
from app.application.services.order_lifecycle import (
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
from app.core.exceptions import ConflictException, ValidationException


def state(status=OrderStatus.EM_ESPERA, valor_total="46.5", item_count=1, valor_efetivado=None):
    return OrderState(
        status=status,
        valor_total=Decimal(valor_total),
        item_count=item_count,
        valor_efetivado=Decimal(valor_efetivado) if valor_efetivado is not None else None,
    )


def totals(quantidade="8", valor_unitario="10"):
    return compute_totals([{"produto_id": 1, "quantidade": quantidade, "valor_unitario": valor_unitario}])


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("ok", OrderStatus.EFETIVADO),
        (" OK ", OrderStatus.EFETIVADO),
        ("em espera", OrderStatus.EM_ESPERA),
        ("conferir", OrderStatus.CONFERIR),
        ("Cancelado", OrderStatus.CANCELADO),
        ("entregue", None),
        (None, None),
    ],
)
def test_normalize_status(raw, expected):
    assert normalize_status(raw) == expected


def test_parse_status_rejects_unknown_values():
    with pytest.raises(ValidationException):
        parse_status("ENTREGUE")


def test_initial_status_defaults_to_em_espera():
    assert initial_status(None) == OrderStatus.EM_ESPERA
    assert initial_status("") == OrderStatus.EM_ESPERA
    assert initial_status("conferir") == OrderStatus.CONFERIR


@pytest.mark.parametrize("terminal", [OrderStatus.EFETIVADO, OrderStatus.CANCELADO])
@pytest.mark.parametrize("target", list(OrderStatus))
def test_terminal_orders_cannot_change_status(terminal, target):
    with pytest.raises(ConflictException):
        apply_command(state(terminal), ChangeStatus(target))


@pytest.mark.parametrize("terminal", [OrderStatus.EFETIVADO, OrderStatus.CANCELADO])
def test_terminal_orders_cannot_replace_items(terminal):
    with pytest.raises(ConflictException):
        apply_command(state(terminal), ReplaceItems(totals()))


@pytest.mark.parametrize(
    "current, target",
    [
        (OrderStatus.EM_ESPERA, OrderStatus.CONFERIR),
        (OrderStatus.EM_ESPERA, OrderStatus.CANCELADO),
        (OrderStatus.EM_ESPERA, OrderStatus.EFETIVADO),
        (OrderStatus.CONFERIR, OrderStatus.EM_ESPERA),
        (OrderStatus.CONFERIR, OrderStatus.CANCELADO),
        (OrderStatus.CONFERIR, OrderStatus.EFETIVADO),
        (OrderStatus.CONFERIR, OrderStatus.CONFERIR),
    ],
)
def test_allowed_transitions(current, target):
    result = apply_command(state(current), ChangeStatus(target))

    assert result.previous_status == current
    assert result.status == target


def test_effectivation_captures_current_total():
    result = apply_command(state(valor_total="46.5"), ChangeStatus(OrderStatus.EFETIVADO))

    assert result.valor_efetivado == Decimal("46.5")
    assert result.status_changed


def test_effectivation_keeps_explicit_value():
    result = apply_command(state(), ChangeStatus(OrderStatus.EFETIVADO, Decimal("40")))

    assert result.valor_efetivado == Decimal("40")


def test_valor_efetivado_only_on_effectivation():
    with pytest.raises(ValidationException):
        apply_command(state(), ChangeStatus(OrderStatus.CONFERIR, Decimal("40")))


def test_negative_valor_efetivado_is_rejected():
    with pytest.raises(ValidationException):
        apply_command(state(), ChangeStatus(OrderStatus.EFETIVADO, Decimal("-1")))


def test_valor_efetivado_beyond_stored_places_is_rejected():
    with pytest.raises(ValidationException):
        apply_command(state(), ChangeStatus(OrderStatus.EFETIVADO, Decimal("40.00000001")))

    result = apply_command(state(), ChangeStatus(OrderStatus.EFETIVADO, Decimal("40.0000001")))
    assert result.valor_efetivado == Decimal("40.0000001")


@pytest.mark.parametrize("target", [OrderStatus.CONFERIR, OrderStatus.EFETIVADO])
def test_order_without_items_cannot_advance(target):
    with pytest.raises(ValidationException):
        apply_command(state(item_count=0), ChangeStatus(target))


def test_order_without_items_can_be_cancelled():
    result = apply_command(state(item_count=0), ChangeStatus(OrderStatus.CANCELADO))

    assert result.status == OrderStatus.CANCELADO


def test_replace_items_keeps_status_and_recomputes_total():
    result = apply_command(state(OrderStatus.CONFERIR), ReplaceItems(totals()))

    assert result.status == OrderStatus.CONFERIR
    assert result.valor_total == Decimal("80")
    assert not result.status_changed


def test_replace_and_effectivate_uses_new_total():
    result = apply_command(state(), ReplaceItemsAndChangeStatus(totals(), OrderStatus.EFETIVADO))

    assert result.valor_total == Decimal("80")
    assert result.valor_efetivado == Decimal("80")
    assert result.totals is not None
