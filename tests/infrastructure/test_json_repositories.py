"""Tests for the JSON-file-backed repositories."""

import json
import threading
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from filelock import FileLock

from petshop.domain.exceptions import ConflictError
from petshop.domain.model.order import Order, OrderLine, OrderStatus
from petshop.domain.model.product import Product
from petshop.infrastructure.persistence.json_order_repository import JsonOrderRepository
from petshop.infrastructure.persistence.json_product_repository import JsonProductRepository

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)


def _product(ref: str = "REPT20240301100000000") -> Product:
    return Product(
        ref=ref,
        category="reptiles",
        name="Bearded dragon",
        price=Decimal("149.90"),
        stock=3,
        requires_certification=False,
        dimensions_max=Decimal("60"),
        specification_value=None,
        author_id=1,
        is_visible=True,
    )


class TestJsonProductRepository:

    def test_creates_missing_file(self, tmp_path):
        path = tmp_path / "nested" / "products.json"
        JsonProductRepository(path)
        assert json.loads(path.read_text()) == []

    def test_add_assigns_sequential_ids(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        first, second = _product("A"), _product("B")

        assert repo.add(first)
        assert repo.add(second)
        assert (first.id, second.id) == (1, 2)
        assert repo.count() == 2

    def test_duplicate_ref_rejected(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.add(_product("A"))

        duplicate = _product("A")
        assert repo.add(duplicate) is False
        assert duplicate.id is None
        assert repo.count() == 1

    def test_round_trip_keeps_decimals(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = _product()
        repo.add(product)

        loaded = JsonProductRepository(tmp_path / "products.json").get_by_id(product.id)
        assert loaded == product
        assert loaded.price == Decimal("149.90")

    def test_save_updates_in_place(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = _product()
        repo.add(product)

        product.stock = 0
        repo.save(product)

        assert repo.get_by_id(product.id).stock == 0
        assert repo.count() == 1

    def test_save_refuses_to_duplicate_a_ref(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.add(_product("A"))
        other = _product("B")
        repo.add(other)

        other.ref = "A"
        with pytest.raises(ConflictError, match="already exists"):
            repo.save(other)

    def test_missing_product(self, tmp_path):
        assert JsonProductRepository(tmp_path / "products.json").get_by_id(1) is None

    def test_concurrent_adds_from_separate_handles_all_persist(self, tmp_path):
        path = tmp_path / "products.json"
        JsonProductRepository(path)

        def add_batch(prefix):
            repo = JsonProductRepository(path)
            for n in range(15):
                assert repo.add(_product(f"{prefix}{n}"))

        workers = [threading.Thread(target=add_batch, args=(p,)) for p in "ABC"]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()

        stored = JsonProductRepository(path).list_all()
        assert len(stored) == 45
        assert len({p.id for p in stored}) == 45

    def test_add_waits_for_the_file_lock(self, tmp_path):
        path = tmp_path / "products.json"
        repo = JsonProductRepository(path)
        done = threading.Event()

        def add():
            repo.add(_product("A"))
            done.set()

        with FileLock(str(path) + ".lock"):
            worker = threading.Thread(target=add)
            worker.start()
            assert not done.wait(0.2)
            assert repo.count() == 0
        worker.join()
        assert repo.count() == 1


class TestJsonOrderRepository:

    def _repo(self, tmp_path) -> JsonOrderRepository:
        repo = JsonOrderRepository(tmp_path / "orders.json")
        repo.save(Order(id=None, customer_id=None, last_changed_at=NOW - timedelta(days=3)))
        repo.save(Order(
            id=None,
            customer_id=7,
            status=OrderStatus.OPEN,
            last_changed_at=NOW,
            lines=[OrderLine(product_id=1, product_name="Terrarium", quantity=2, unit_price=Decimal("89.00"))],
        ))
        repo.save(Order(id=None, customer_id=7, status=OrderStatus.CART, last_changed_at=NOW))
        return repo

    def test_save_assigns_ids(self, tmp_path):
        repo = self._repo(tmp_path)
        assert [o.id for o in repo.find_all()] == [1, 2, 3]

    def test_round_trip_with_lines(self, tmp_path):
        order = self._repo(tmp_path).get_by_id(2)
        assert order.customer_id == 7
        assert order.status == OrderStatus.OPEN
        assert order.last_changed_at == NOW
        assert order.lines[0].unit_price == Decimal("89.00")
        assert order.total == Decimal("178.00")

    def test_find_all_filters(self, tmp_path):
        repo = self._repo(tmp_path)
        assert [o.id for o in repo.find_all(status=OrderStatus.CART)] == [1, 3]
        assert [o.id for o in repo.find_all(customer_id=7)] == [2, 3]
        assert [o.id for o in repo.find_all(status=OrderStatus.CART, customer_id=7)] == [3]

    def test_remove_unclaimed_cart(self, tmp_path):
        repo = self._repo(tmp_path)
        assert repo.remove_if_unclaimed_cart(1) is True
        assert repo.get_by_id(1) is None

    def test_claimed_cart_not_removed(self, tmp_path):
        repo = self._repo(tmp_path)
        assert repo.remove_if_unclaimed_cart(3) is False
        assert repo.get_by_id(3) is not None

    def test_open_order_not_removed(self, tmp_path):
        repo = self._repo(tmp_path)
        assert repo.remove_if_unclaimed_cart(2) is False

    def test_missing_order_not_removed(self, tmp_path):
        assert self._repo(tmp_path).remove_if_unclaimed_cart(42) is False

    @pytest.mark.parametrize("stamp", ["2024-03-01T10:00:00", "2024-03-01 10:00:00", "2024-03-01T10:00:00Z"])
    def test_timestamps_without_offset_read_as_utc(self, tmp_path, stamp):
        path = tmp_path / "orders.json"
        path.write_text(json.dumps([
            {"id": 1, "customer_id": None, "status": "cart", "last_changed_at": stamp, "lines": []},
        ]))

        order = JsonOrderRepository(path).get_by_id(1)

        assert order.last_changed_at == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
        assert order.idle_days(NOW) == 9

    def test_remove_waits_for_the_file_lock(self, tmp_path):
        repo = self._repo(tmp_path)
        outcome = []

        with FileLock(str(tmp_path / "orders.json") + ".lock"):
            worker = threading.Thread(target=lambda: outcome.append(repo.remove_if_unclaimed_cart(1)))
            worker.start()
            worker.join(0.2)
            assert outcome == []
            assert repo.get_by_id(1) is not None
        worker.join()

        assert outcome == [True]
        assert repo.get_by_id(1) is None
