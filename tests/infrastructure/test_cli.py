"""End-to-end tests for the click CLI against JSON files in a temp dir."""

import json
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from click.testing import CliRunner

from petshop.domain.model.order import Order, OrderLine, OrderStatus
from petshop.infrastructure.cli.main import cli
from petshop.infrastructure.persistence.json_order_repository import JsonOrderRepository

ADMIN = ["--user-id", "1", "--role", "user", "--role", "admin"]
ALICE = ["--user-id", "7", "--role", "user"]

PRODUCT_OPTIONS = [
    "--category", "reptiles",
    "--type", "animal",
    "--name", "Bearded dragon",
    "--description", "A calm and friendly lizard from Australia.",
    "--price", "149.90",
    "--stock", "3",
    "--species", "Pogona vitticeps",
    "--requires-certification", "no",
    "--dimensions-max", "60",
    "--dimensions-unit", "cm",
    "--specification", "weight",
    "--specification-unit", "kg",
]


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()
    env = {
        "PETSHOP_DATA_DIR": str(tmp_path),
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "CRITICAL",
    }

    def _run(*args):
        result = runner.invoke(cli, list(args), env=env)
        envelope = json.loads(result.stdout) if result.stdout.strip() else None
        return result, envelope

    return _run


@pytest.fixture
def orders(tmp_path):
    now = datetime.now(timezone.utc)
    repo = JsonOrderRepository(tmp_path / "orders.json")
    repo.save(Order(id=None, customer_id=None, status=OrderStatus.CART, last_changed_at=now - timedelta(days=5)))
    repo.save(Order(
        id=None,
        customer_id=7,
        status=OrderStatus.OPEN,
        last_changed_at=now,
        lines=[OrderLine(product_id=1, product_name="Terrarium", quantity=1, unit_price=Decimal("89.00"))],
    ))
    repo.save(Order(id=None, customer_id=8, status=OrderStatus.PENDING, last_changed_at=now))
    return repo


class TestProductCommands:

    def test_create(self, run):
        result, envelope = run(*ADMIN, "product", "create", *PRODUCT_OPTIONS)

        assert result.exit_code == 0
        assert envelope["success"] is True
        product = envelope["results"]["product"]
        assert product["ref"].startswith("REPT")
        assert product["ref"].endswith("000")
        assert product["author_id"] == 1
        assert product["price"] == "149.90"

    def test_create_reports_violations(self, run):
        options = [o for o in PRODUCT_OPTIONS]
        options[options.index("--price") + 1] = "free"
        result, envelope = run(*ADMIN, "product", "create", *options, "--gender", "x")

        assert result.exit_code == 1
        assert envelope["success"] is False
        assert envelope["results"]["errors"] == ["InvalidPrice", "InvalidGender"]
        assert envelope["results"]["product"]["name"] == "Bearded dragon"

    def test_create_requires_admin(self, run):
        result, envelope = run(*ALICE, "product", "create", *PRODUCT_OPTIONS)
        assert result.exit_code == 1
        assert envelope["success"] is False
        assert "administrators" in envelope["message"]

    def test_update_then_list(self, run):
        run(*ADMIN, "product", "create", *PRODUCT_OPTIONS)

        result, envelope = run(*ADMIN, "product", "update", "--id", "1", "--stock", "0")
        assert result.exit_code == 0
        assert envelope["results"]["product"]["stock"] == 0
        assert envelope["results"]["product"]["name"] == "Bearded dragon"

        _, listing = run("product", "list")
        assert listing["results"]["count"] == 1

    def test_update_unknown_product(self, run):
        result, envelope = run(*ADMIN, "product", "update", "--id", "5", "--stock", "1")
        assert result.exit_code == 1
        assert "not found" in envelope["message"]


class TestOrderCommands:

    def test_list_requires_login(self, run, orders):
        result, envelope = run("order", "list")
        assert result.exit_code == 1
        assert envelope["success"] is False

    def test_user_lists_own_orders(self, run, orders):
        result, envelope = run(*ALICE, "order", "list")
        assert result.exit_code == 0
        assert envelope["results"]["count"] == 1
        assert envelope["results"]["status"] == "all"
        assert envelope["results"]["orders"][0]["lines"][0]["product_name"] == "Terrarium"

    def test_empty_listing(self, run, orders):
        result, envelope = run(*ALICE, "order", "list", "--status", "closed")
        assert result.exit_code == 0
        assert envelope == {"success": False, "message": "No orders found.", "results": {}}

    def test_admin_filters_by_status(self, run, orders):
        _, envelope = run(*ADMIN, "order", "list", "--status", "pending")
        assert [o["id"] for o in envelope["results"]["orders"]] == [3]

    def test_show_other_customers_order_forbidden(self, run, orders):
        result, envelope = run(*ALICE, "order", "show", "--id", "3")
        assert result.exit_code == 1
        assert envelope["success"] is False

    def test_show_own_order(self, run, orders):
        _, envelope = run(*ALICE, "order", "show", "--id", "2")
        assert envelope["results"]["order"]["total"] == "89.00"

    def test_reap(self, run, orders):
        result, envelope = run(*ADMIN, "order", "reap")
        assert result.exit_code == 0
        assert envelope["results"] == {"reclaimed_count": 1}
        assert orders.get_by_id(1) is None

    def test_reap_requires_admin(self, run, orders):
        result, _ = run(*ALICE, "order", "reap")
        assert result.exit_code == 1
        assert orders.get_by_id(1) is not None

    def test_reap_orders_stored_without_timezone(self, run, tmp_path):
        (tmp_path / "orders.json").write_text(json.dumps([
            {"id": 1, "customer_id": None, "status": "cart", "last_changed_at": "2024-03-01T10:00:00", "lines": []},
            {"id": 2, "customer_id": 7, "status": "cart", "last_changed_at": "2024-03-01T10:00:00Z", "lines": []},
        ]))

        result, envelope = run(*ADMIN, "order", "reap")

        assert result.exit_code == 0
        assert envelope["results"] == {"reclaimed_count": 1}
