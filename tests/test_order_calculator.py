from decimal import Decimal
from itertools import permutations

import pytest

from app.application.services.order_calculator import compute_totals, exceeds_places, to_decimal
from app.core.exceptions import ValidationException


def item(produto_id=1, quantidade="1", valor_unitario="10", comissao=None, embalagem=None):
    return {
        "produto_id": produto_id,
        "quantidade": quantidade,
        "valor_unitario": valor_unitario,
        "comissao": comissao,
        "embalagem": embalagem,
    }


def test_total_is_sum_of_quantity_times_price():
    totals = compute_totals([item(quantidade="3", valor_unitario="15.5")])

    assert totals.valor_total == Decimal("46.5")
    assert totals.items[0].subtotal == Decimal("46.5")


def test_total_does_not_depend_on_item_order():
    items = [
        item(1, "3", "15.5"),
        item(2, "0.333", "7.77"),
        item(3, "12", "0.01"),
    ]
    totals = {compute_totals(list(p)).valor_total for p in permutations(items)}

    assert totals == {Decimal("46.5") + Decimal("0.333") * Decimal("7.77") + Decimal("0.12")}


def test_float_input_is_summed_exactly():
    totals = compute_totals([item(i, 1, 0.1) for i in range(1, 4)])

    assert totals.valor_total == Decimal("0.3")


def test_empty_item_list_is_rejected():
    with pytest.raises(ValidationException) as exc:
        compute_totals([])

    assert exc.value.status_code == 400
    assert "ao menos um item" in exc.value.message


def test_every_invalid_item_is_reported_at_once():
    with pytest.raises(ValidationException) as exc:
        compute_totals(
            [
                item(0, "1", "10"),
                item(2, "0", "10"),
                item(3, "1", "-1"),
                item(4, "1", None),
            ]
        )

    errors = exc.value.details["errors"]
    assert len(errors) == 4
    assert errors[0].startswith("item 1")
    assert errors[3].startswith("item 4")


def test_zero_unit_price_is_allowed():
    totals = compute_totals([item(valor_unitario="0")])

    assert totals.valor_total == Decimal("0")


def test_unknown_product_is_rejected():
    with pytest.raises(ValidationException) as exc:
        compute_totals([item(99)], product_exists=lambda produto_id: produto_id != 99)

    assert "produto 99 não encontrado" in exc.value.message


def test_missing_commission_defaults_to_zero_and_embalagem_is_trimmed():
    totals = compute_totals([item(embalagem="  CX  ")])

    assert totals.items[0].comissao == Decimal("0")
    assert totals.items[0].embalagem == "CX"


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, None),
        ("  ", None),
        ("12.50", Decimal("12.50")),
        (15.5, Decimal("15.5")),
        (3, Decimal("3")),
    ],
)
def test_to_decimal(raw, expected):
    assert to_decimal(raw) == expected


def test_to_decimal_marks_garbage_as_nan():
    assert to_decimal("abc").is_nan()


def test_values_beyond_stored_places_are_rejected():
    with pytest.raises(ValidationException) as exc:
        compute_totals(
            [
                item(1, "1.2345", "2"),
                item(2, "3", "0.33333"),
                item(3, "1", "1", comissao="0.12345"),
            ]
        )

    assert exc.value.details["errors"] == [
        "item 1: quantidade aceita no máximo 3 casas decimais",
        "item 2: valor_unitario aceita no máximo 4 casas decimais",
        "item 3: comissao inválida",
    ]


def test_total_is_exact_at_the_finest_stored_places():
    totals = compute_totals([item(1, "1.234", "0.3333"), item(2, "1.2000", "2.50000")])

    assert totals.items[0].subtotal == Decimal("0.4112922")
    assert totals.valor_total == Decimal("0.4112922") + Decimal("3")


@pytest.mark.parametrize(
    "raw, places, expected",
    [
        ("1.234", 3, False),
        ("1.2345", 3, True),
        ("1.2000", 1, False),
        ("100", 0, False),
        ("0.00001", 4, True),
    ],
)
def test_exceeds_places(raw, places, expected):
    assert exceeds_places(Decimal(raw), places) is expected
