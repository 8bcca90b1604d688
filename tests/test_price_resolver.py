from decimal import Decimal
from types import SimpleNamespace

from app.application.services.pricing import ORIGEM_PRODUTO, ORIGEM_VINCULO, PriceResolver


class FakeOverrides:
    def __init__(self, prices):
        self.prices = prices

    def get_by_pair(self, cliente_id, produto_id):
        price = self.prices.get((cliente_id, produto_id))
        if price is None:
            return None
        return SimpleNamespace(cliente_id=cliente_id, produto_id=produto_id, valor_unitario=price)


class FakeProducts:
    def __init__(self, prices):
        self.prices = prices

    def get_by_id(self, produto_id):
        if produto_id not in self.prices:
            return None
        return SimpleNamespace(id=produto_id, preco_base=self.prices[produto_id])


def resolver():
    return PriceResolver(
        FakeOverrides({(1, 10): Decimal("12.00")}),
        FakeProducts({10: Decimal("10.00"), 20: Decimal("4.00"), 30: None}),
    )


def test_override_beats_base_price():
    resolution = resolver().lookup(1, 10)

    assert resolution.valor_unitario == Decimal("12.00")
    assert resolution.origem == ORIGEM_VINCULO


def test_base_price_used_for_other_clients():
    resolution = resolver().lookup(2, 10)

    assert resolution.valor_unitario == Decimal("10.00")
    assert resolution.origem == ORIGEM_PRODUTO


def test_no_price_is_a_valid_outcome():
    assert resolver().resolve(1, 30) is None
    assert not resolver().lookup(1, 99).resolved
