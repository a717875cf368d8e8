"""Application service: Reap Carts use case.

Checks the caller may purge carts, then hands over to the CartReaper
domain service.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from petshop.application.dto import ReapResultDTO
from petshop.domain.exceptions import ForbiddenError, ValidationError
from petshop.domain.model.caller import Caller
from petshop.domain.repository.order_repository import OrderRepository
from petshop.domain.service.access_policy import can_reap_carts, require_caller
from petshop.domain.service.cart_reaper import DEFAULT_RETENTION_DAYS, CartReaper

logger = structlog.get_logger(__name__)


class ReapCartsHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        retention_days: int = DEFAULT_RETENTION_DAYS,
    ) -> None:
        if retention_days < 0:
            raise ValueError(f"Retention must be zero or more days, got {retention_days}")
        self._order_repo = order_repo
        self._retention_days = retention_days

    def handle(
        self,
        caller: Caller | None,
        now: datetime | None = None,
        retention_days: int | None = None,
    ) -> ReapResultDTO:
        caller = require_caller(caller)
        if not can_reap_carts(caller):
            raise ForbiddenError("Only administrators may purge carts")

        now = now or datetime.now(timezone.utc)
        days = self._retention_days if retention_days is None else retention_days
        if days < 0:
            raise ValidationError(f"Retention must be zero or more days, got {days}")

        reclaimed = CartReaper(self._order_repo).reap(now, retention_days=days)
        logger.info("Stale carts reclaimed", count=reclaimed, retention_days=days)
        return ReapResultDTO(reclaimed_count=reclaimed)
