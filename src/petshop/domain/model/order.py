"""Order aggregate.

An Order owns its line items.  Orders start life as a cart (created
elsewhere on the customer's first interaction); this core only reads
them, and deletes anonymous carts once they go stale.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum


class OrderStatus(Enum):
    CART = "cart"
    OPEN = "open"
    PENDING = "pending"
    CLOSED = "closed"
    CANCELLED = "cancelled"

    @staticmethod
    def parse(text: str | None) -> OrderStatus | None:
        """Return the status named by *text*, or None if unrecognized."""
        if text is None:
            return None
        try:
            return OrderStatus(text.strip().lower())
        except ValueError:
            return None


@dataclass
class OrderLine:
    """A product line with the unit price captured when it was added."""

    product_id: int
    product_name: str
    quantity: int
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass
class Order:
    """Aggregate root for carts and purchase orders.

    ``customer_id`` is None for a guest cart.
    """

    id: int | None
    customer_id: int | None
    status: OrderStatus = OrderStatus.CART
    last_changed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    lines: list[OrderLine] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal("0.00"))

    @property
    def is_anonymous(self) -> bool:
        return self.customer_id is None

    @property
    def is_unclaimed_cart(self) -> bool:
        return self.status == OrderStatus.CART and self.is_anonymous

    def is_owned_by(self, user_id: int) -> bool:
        return self.customer_id is not None and self.customer_id == user_id

    def idle_days(self, now: datetime) -> int:
        """Whole days elapsed since the last change (partial days round down)."""
        return (now - self.last_changed_at).days
