from datetime import date
from decimal import Decimal

from app.application.services.ledger_service import (
    LedgerFilter,
    OrderSnapshot,
    build_extrato,
    movement_value,
    summarize,
)
from app.application.services.order_lifecycle import OrderStatus

JAN = LedgerFilter(data_inicio=date(2024, 1, 1), data_fim=date(2024, 1, 31))


def snapshot(id, day, status, valor_total, valor_efetivado=None, cliente_id=1):
    return OrderSnapshot(
        id=id,
        data=date(2024, 1, day),
        status=status,
        valor_total=Decimal(valor_total),
        valor_efetivado=Decimal(valor_efetivado) if valor_efetivado is not None else None,
        cliente_id=cliente_id,
    )


def test_cancelled_orders_do_not_move_the_balance():
    orders = [
        snapshot(1, 5, "EFETIVADO", "80", "80"),
        snapshot(2, 6, "CANCELADO", "50"),
    ]
    entries = build_extrato(orders, JAN)

    assert [(e.valor_movimento, e.saldo_acumulado) for e in entries] == [
        (Decimal("80"), Decimal("80")),
        (Decimal("0"), Decimal("80")),
    ]
    assert entries[0].data_baixa == date(2024, 1, 5)
    assert entries[1].data_baixa is None


def test_summary():
    orders = [
        snapshot(1, 5, "EFETIVADO", "80", "75"),
        snapshot(2, 6, "CANCELADO", "50"),
        snapshot(3, 7, "EM_ESPERA", "20"),
    ]
    resumo = summarize(build_extrato(orders, JAN))

    assert resumo.total_vendas == Decimal("150")
    assert resumo.total_efetivado == Decimal("75")
    assert resumo.saldo_periodo == Decimal("95")


def test_empty_period_summary_is_zero():
    resumo = summarize([])

    assert resumo.saldo_periodo == Decimal("0")
    assert resumo.total_vendas == Decimal("0")


def test_missing_dates_give_no_entries():
    orders = [snapshot(1, 5, "EM_ESPERA", "10")]

    assert build_extrato(orders, LedgerFilter(data_inicio=date(2024, 1, 1))) == []
    assert build_extrato(orders, LedgerFilter()) == []


def test_period_bounds_are_inclusive_and_filters_apply():
    orders = [
        snapshot(1, 1, "EM_ESPERA", "10"),
        snapshot(2, 31, "EFETIVADO", "20", cliente_id=2),
        OrderSnapshot(id=3, data=date(2024, 2, 1), status="EM_ESPERA", valor_total=Decimal("5")),
    ]

    assert [e.pedido.id for e in build_extrato(orders, JAN)] == [1, 2]
    only_client_2 = LedgerFilter(data_inicio=JAN.data_inicio, data_fim=JAN.data_fim, cliente_id=2)
    assert [e.pedido.id for e in build_extrato(orders, only_client_2)] == [2]
    only_effective = LedgerFilter(data_inicio=JAN.data_inicio, data_fim=JAN.data_fim, status=OrderStatus.EFETIVADO)
    assert [e.pedido.id for e in build_extrato(orders, only_effective)] == [2]


def test_same_day_orders_keep_input_order():
    orders = [
        snapshot(9, 10, "EM_ESPERA", "1"),
        snapshot(3, 2, "EM_ESPERA", "1"),
        snapshot(5, 10, "EM_ESPERA", "1"),
    ]

    assert [e.pedido.id for e in build_extrato(orders, JAN)] == [3, 9, 5]


def test_extrato_is_idempotent_and_leaves_input_untouched():
    orders = [
        snapshot(2, 6, "CANCELADO", "50"),
        snapshot(1, 5, "EFETIVADO", "80", "80"),
    ]
    before = list(orders)

    assert build_extrato(orders, JAN) == build_extrato(orders, JAN)
    assert orders == before


def test_movement_prefers_valor_efetivado():
    assert movement_value(snapshot(1, 1, "EFETIVADO", "80", "70")) == Decimal("70")
    assert movement_value(snapshot(1, 1, "EM_ESPERA", "80")) == Decimal("80")
    assert movement_value(snapshot(1, 1, "CANCELADO", "80", "70")) == Decimal("0")
