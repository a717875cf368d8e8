"""Application service: Update Product use case.

A partial update: only the fields present in the payload are validated
and written, every other attribute keeps its stored value.  Sending the
same payload twice leaves the product in the same state.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

import structlog

from petshop.application.dto import ProductDTO, product_to_dto
from petshop.domain.exceptions import (
    EntityNotFoundError,
    ForbiddenError,
    ProductValidationError,
)
from petshop.domain.model.caller import Caller
from petshop.domain.repository.product_repository import ProductRepository
from petshop.domain.service.access_policy import can_mutate_product, require_caller
from petshop.domain.validation.attribute_validator import validate_fields
from petshop.domain.validation.rules import product_rules

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        caller: Caller | None,
        product_id: int,
        fields: Mapping[str, Any],
        now: datetime | None = None,
    ) -> ProductDTO:
        caller = require_caller(caller)
        if not can_mutate_product(caller):
            logger.warning("Product update denied", user_id=caller.user_id, product_id=product_id)
            raise ForbiddenError("Only administrators may update products")

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        now = now or datetime.now(timezone.utc)
        rules = product_rules(now.year, for_update=True)
        values, violations = validate_fields(fields, rules, partial=True)

        if violations:
            logger.info(
                "Product update rejected",
                product_id=product_id,
                errors=[v.kind.value for v in violations],
            )
            raise ProductValidationError(
                "Unable to update product", violations, product_to_dto(product)
            )

        product.apply(values)
        self._product_repo.save(product)

        logger.info("Product updated", product_id=product.id, fields=sorted(values))
        return product_to_dto(product)
