"""Integration tests for the ListProducts use case."""

from petshop.application.list_products import ListProductsHandler
from petshop.domain.model.caller import Caller, Role
from petshop.domain.model.product import Product
from tests.fakes import FakeProductRepository


def _repo() -> FakeProductRepository:
    return FakeProductRepository([
        Product(id=1, ref="REPT20240301100000000", name="Bearded dragon", is_visible=True),
        Product(id=2, ref="AQUA20240301100000001", name="Old aquarium", is_visible=False),
    ])


class TestListProducts:

    def test_visitors_see_visible_products(self):
        names = [p.name for p in ListProductsHandler(_repo()).handle()]
        assert names == ["Bearded dragon"]

    def test_customers_see_visible_products(self):
        names = [p.name for p in ListProductsHandler(_repo()).handle(Caller.of(7, Role.USER))]
        assert names == ["Bearded dragon"]

    def test_admin_sees_hidden_products(self):
        products = ListProductsHandler(_repo()).handle(Caller.of(1, Role.ADMIN))
        assert [p.id for p in products] == [1, 2]
