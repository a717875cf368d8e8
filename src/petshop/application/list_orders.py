"""Application service: List Orders use case (query).

Administrators see every order; everybody else sees only their own.
An optional status narrows the result.  An empty result is a normal
outcome, and so is a status nobody recognizes.
"""

from __future__ import annotations

import structlog

from petshop.application.dto import OrderListDTO, order_to_dto
from petshop.domain.model.caller import Caller
from petshop.domain.model.order import OrderStatus
from petshop.domain.repository.order_repository import OrderRepository
from petshop.domain.service.access_policy import can_list_all_orders, require_caller

ALL_STATUSES = "all"

logger = structlog.get_logger(__name__)


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, caller: Caller | None, status: str | None = None) -> OrderListDTO:
        caller = require_caller(caller)

        if status is None or not status.strip():
            applied_filter = ALL_STATUSES
            wanted = None
        else:
            applied_filter = status.strip().lower()
            wanted = OrderStatus.parse(status)
            if wanted is None:
                logger.info("Unknown order status filter", status=status)
                return OrderListDTO(count=0, applied_filter=applied_filter, orders=[])

        owner = None if can_list_all_orders(caller) else caller.user_id
        orders = self._order_repo.find_all(status=wanted, customer_id=owner)

        return OrderListDTO(
            count=len(orders),
            applied_filter=applied_filter,
            orders=[order_to_dto(order) for order in orders],
        )
