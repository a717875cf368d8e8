"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from filelock import FileLock

from petshop.domain.model.order import Order, OrderLine, OrderStatus
from petshop.domain.repository.order_repository import OrderRepository


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = FileLock(str(file_path) + ".lock")
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def find_all(
        self,
        status: OrderStatus | None = None,
        customer_id: int | None = None,
    ) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if (status is None or raw["status"] == status.value)
            and (customer_id is None or raw["customer_id"] == customer_id)
        ]

    def save(self, order: Order) -> None:
        with self._lock:
            orders = self._load_raw()

            if order.id is None:
                order.id = max((o["id"] for o in orders), default=0) + 1

            # Upsert: replace if exists, otherwise append
            replaced = False
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    orders[i] = self._to_raw(order)
                    replaced = True
                    break
            if not replaced:
                orders.append(self._to_raw(order))

            self._persist_raw(orders)

    def remove_if_unclaimed_cart(self, order_id: int) -> bool:
        with self._lock:
            orders = self._load_raw()
            for i, raw in enumerate(orders):
                if raw["id"] != order_id:
                    continue
                if raw["status"] != OrderStatus.CART.value or raw["customer_id"] is not None:
                    return False
                del orders[i]
                self._persist_raw(orders)
                return True
            return False

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "status": order.status.value,
            "last_changed_at": order.last_changed_at.isoformat(),
            "lines": [
                {
                    "product_id": line.product_id,
                    "product_name": line.product_name,
                    "quantity": line.quantity,
                    "unit_price": str(line.unit_price),
                }
                for line in order.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        lines = [
            OrderLine(
                product_id=line["product_id"],
                product_name=line["product_name"],
                quantity=line["quantity"],
                unit_price=Decimal(line["unit_price"]),
            )
            for line in raw.get("lines", [])
        ]
        return Order(
            id=raw["id"],
            customer_id=raw.get("customer_id"),
            status=OrderStatus(raw["status"]),
            last_changed_at=_parse_timestamp(raw["last_changed_at"]),
            lines=lines,
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        # Callers hold self._lock; readers only ever see a whole file.
        staging = self._file_path.with_name(self._file_path.name + ".tmp")
        staging.write_text(json.dumps(orders, indent=2) + "\n", encoding="utf-8")
        os.replace(staging, self._file_path)

    def _ensure_file(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock:
            if not self._file_path.exists():
                self._persist_raw([])


def _parse_timestamp(text: str) -> datetime:
    """Read an ISO-8601 timestamp; one without an offset is taken as UTC."""
    stamp = datetime.fromisoformat(text.strip().replace("Z", "+00:00"))
    if stamp.tzinfo is None:
        return stamp.replace(tzinfo=timezone.utc)
    return stamp
