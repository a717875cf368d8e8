"""Application service: Show Order use case (query)."""

from __future__ import annotations

import structlog

from petshop.application.dto import OrderDTO, order_to_dto
from petshop.domain.exceptions import EntityNotFoundError, ForbiddenError
from petshop.domain.model.caller import Caller
from petshop.domain.repository.order_repository import OrderRepository
from petshop.domain.service.access_policy import (
    can_list_all_orders,
    can_view_order,
    require_caller,
)

logger = structlog.get_logger(__name__)


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, caller: Caller | None, order_id: int) -> OrderDTO:
        """Return an order with its lines.

        A non-admin asking for an order that is not theirs is refused
        whether or not the order exists, so order IDs are not disclosed.
        """
        caller = require_caller(caller)
        order = self._order_repo.get_by_id(order_id)

        if order is None:
            if can_list_all_orders(caller):
                raise EntityNotFoundError(f"Order #{order_id} not found")
            logger.warning("Order access denied", order_id=order_id, user_id=caller.user_id)
            raise ForbiddenError("You are not allowed to access this order")

        if not can_view_order(caller, order):
            logger.warning("Order access denied", order_id=order_id, user_id=caller.user_id)
            raise ForbiddenError("You are not allowed to access this order")

        return order_to_dto(order)
