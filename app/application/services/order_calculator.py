"""Order item calculator — validates an item set and computes its totals.

Every rule is checked for every item and all problems are reported in a
single ValidationException, so an item-set replacement is either applied as
a whole or not at all. Arithmetic is done with Decimal and nothing is rounded
here, so inputs are limited to the decimal places the item columns store
(quantidade 3, valores 4) and every total is exact at TOTAL_PLACES.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, List, Optional, Sequence

from app.core.exceptions import ValidationException

ZERO = Decimal("0")

QUANTITY_PLACES = 3
PRICE_PLACES = 4
TOTAL_PLACES = QUANTITY_PLACES + PRICE_PLACES


@dataclass(frozen=True)
class ValidatedItem:
    produto_id: int
    quantidade: Decimal
    valor_unitario: Decimal
    comissao: Decimal = ZERO
    embalagem: Optional[str] = None

    @property
    def subtotal(self) -> Decimal:
        return self.quantidade * self.valor_unitario


@dataclass(frozen=True)
class OrderTotals:
    items: List[ValidatedItem]
    valor_total: Decimal


def to_decimal(value: Any) -> Optional[Decimal]:
    """Coerce numbers and numeric strings to Decimal; None/blank stay None.

    Floats go through str() so 15.5 becomes Decimal("15.5") and not its
    binary expansion. Unparseable input yields Decimal("NaN").
    """
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        return Decimal("NaN")
    if isinstance(value, str) and not value.strip():
        return None
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal("NaN")


def exceeds_places(value: Decimal, places: int) -> bool:
    """True when a finite ``value`` has more significant decimals than ``places``.

    Trailing zeros do not count: Decimal("1.2000") has one decimal place.
    """
    return -value.normalize().as_tuple().exponent > places


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def _as_product_id(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        as_decimal = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not as_decimal.is_finite() or as_decimal != as_decimal.to_integral_value():
        return None
    return int(as_decimal)


def compute_totals(
    items: Optional[Sequence[Any]],
    product_exists: Optional[Callable[[int], bool]] = None,
) -> OrderTotals:
    """Validate ``items`` and return them with the order total.

    ``items`` may hold dicts or objects exposing produto_id, quantidade,
    valor_unitario, comissao and embalagem. ``product_exists`` is asked about
    each distinct positive produto_id; omit it to skip the lookup.
    """
    if not items:
        raise ValidationException(
            "O pedido deve ter ao menos um item",
            details={"errors": ["itens: lista vazia"]},
        )

    errors: List[str] = []
    validated: List[ValidatedItem] = []
    checked_products: dict = {}

    for index, item in enumerate(items, start=1):
        item_errors: List[str] = []

        produto_id = _as_product_id(_field(item, "produto_id"))
        if produto_id is None or produto_id <= 0:
            item_errors.append(f"item {index}: produto_id inválido")
        elif product_exists is not None:
            if produto_id not in checked_products:
                checked_products[produto_id] = bool(product_exists(produto_id))
            if not checked_products[produto_id]:
                item_errors.append(f"item {index}: produto {produto_id} não encontrado")

        quantidade = to_decimal(_field(item, "quantidade"))
        if quantidade is None or not quantidade.is_finite() or quantidade <= ZERO:
            item_errors.append(f"item {index}: quantidade deve ser maior que zero")
        elif exceeds_places(quantidade, QUANTITY_PLACES):
            item_errors.append(f"item {index}: quantidade aceita no máximo {QUANTITY_PLACES} casas decimais")

        valor_unitario = to_decimal(_field(item, "valor_unitario"))
        if valor_unitario is None:
            item_errors.append(f"item {index}: valor_unitario é obrigatório")
        elif not valor_unitario.is_finite() or valor_unitario < ZERO:
            item_errors.append(f"item {index}: valor_unitario não pode ser negativo")
        elif exceeds_places(valor_unitario, PRICE_PLACES):
            item_errors.append(f"item {index}: valor_unitario aceita no máximo {PRICE_PLACES} casas decimais")

        comissao = to_decimal(_field(item, "comissao"))
        if comissao is None:
            comissao = ZERO
        elif not comissao.is_finite() or exceeds_places(comissao, PRICE_PLACES):
            item_errors.append(f"item {index}: comissao inválida")

        if item_errors:
            errors.extend(item_errors)
            continue

        embalagem = _field(item, "embalagem")
        validated.append(
            ValidatedItem(
                produto_id=produto_id,
                quantidade=quantidade,
                valor_unitario=valor_unitario,
                comissao=comissao,
                embalagem=(str(embalagem).strip() or None) if embalagem is not None else None,
            )
        )

    if errors:
        raise ValidationException(
            "Itens inválidos: " + "; ".join(errors),
            details={"errors": errors},
        )

    valor_total = sum((item.subtotal for item in validated), ZERO)
    return OrderTotals(items=validated, valor_total=valor_total)
