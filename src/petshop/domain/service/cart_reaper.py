"""Domain service: Cart Reaper.

Reclaims anonymous carts nobody has touched for longer than the
retention window.  The reaper does not check who is asking; callers
gate it with ``access_policy.can_reap_carts`` first.
"""

from __future__ import annotations

from datetime import datetime

import structlog

from petshop.domain.model.order import OrderStatus
from petshop.domain.repository.order_repository import OrderRepository

DEFAULT_RETENTION_DAYS = 2

logger = structlog.get_logger(__name__)


class CartReaper:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def reap(self, now: datetime, retention_days: int = DEFAULT_RETENTION_DAYS) -> int:
        """Delete stale anonymous carts and return how many were removed.

        A cart is stale when more than ``retention_days`` whole days have
        passed since its last change; exactly ``retention_days`` is kept.
        """
        reclaimed = 0
        for order in self._order_repo.find_all(status=OrderStatus.CART):
            if not order.is_anonymous:
                continue
            idle = order.idle_days(now)
            if idle <= retention_days:
                continue
            if self._order_repo.remove_if_unclaimed_cart(order.id):
                reclaimed += 1
                logger.debug("Cart reclaimed", order_id=order.id, idle_days=idle)
            else:
                logger.info("Cart claimed before removal, skipped", order_id=order.id)
        return reclaimed
