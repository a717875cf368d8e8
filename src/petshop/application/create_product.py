"""Application service: Create Product use case.

Validates the whole payload against the product rule table, stamps the
system-assigned attributes and inserts the product.  The reference is
derived from the live product count; when the repository reports that
reference as taken (another create got there first) the count is read
again and a new reference generated, a bounded number of times.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

import structlog

from petshop.application.dto import ProductDTO, product_to_dto
from petshop.domain.exceptions import ForbiddenError, ProductValidationError
from petshop.domain.model.caller import Caller
from petshop.domain.model.product import Product
from petshop.domain.model.value_objects import FieldViolation, ViolationKind
from petshop.domain.repository.product_repository import ProductRepository
from petshop.domain.service.access_policy import can_mutate_product, require_caller
from petshop.domain.service.reference_generator import generate
from petshop.domain.validation.attribute_validator import validate_fields
from petshop.domain.validation.rules import product_rules

MAX_REFERENCE_ATTEMPTS = 5

logger = structlog.get_logger(__name__)


class CreateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        caller: Caller | None,
        fields: Mapping[str, Any],
        now: datetime | None = None,
    ) -> ProductDTO:
        """Create a catalog entry.

        Steps:
        1. Refuse anyone but an administrator, before any validation.
        2. Validate every field, collecting all violations.
        3. Generate the reference and insert, retrying on a duplicate.
        """
        caller = require_caller(caller)
        if not can_mutate_product(caller):
            logger.warning("Product creation denied", user_id=caller.user_id)
            raise ForbiddenError("Only administrators may create products")

        now = now or datetime.now(timezone.utc)
        values, violations = validate_fields(fields, product_rules(now.year))

        product = Product()
        product.apply(values)

        if violations:
            logger.info(
                "Product payload rejected",
                errors=[v.kind.value for v in violations],
            )
            raise ProductValidationError(
                "Unable to create product", violations, product_to_dto(product)
            )

        self._insert_with_unique_ref(product, caller, now)

        logger.info("Product created", product_id=product.id, ref=product.ref)
        return product_to_dto(product)

    def _insert_with_unique_ref(self, product: Product, caller: Caller, now: datetime) -> None:
        sequence: int | None = None

        for attempt in range(1, MAX_REFERENCE_ATTEMPTS + 1):
            observed = self._product_repo.count()
            # Never hand out the same sequence twice, even if the count
            # has not moved since the previous attempt.
            sequence = observed if sequence is None else max(observed, sequence + 1)
            product.publish(generate(product.category, now, sequence), caller.user_id)

            if self._product_repo.add(product):
                return

            logger.warning("Duplicate product reference", ref=product.ref, attempt=attempt)

        raise ProductValidationError(
            "Unable to create product",
            [FieldViolation("ref", ViolationKind.DUPLICATE_REFERENCE)],
            product_to_dto(product),
        )
