"""Application service: List Products use case (query)."""

from __future__ import annotations

from petshop.application.dto import ProductDTO, product_to_dto
from petshop.domain.model.caller import Caller
from petshop.domain.repository.product_repository import ProductRepository
from petshop.domain.service.access_policy import can_mutate_product


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, caller: Caller | None = None) -> list[ProductDTO]:
        """Return the catalog; hidden products only show to administrators."""
        show_hidden = caller is not None and can_mutate_product(caller)
        return [
            product_to_dto(product)
            for product in self._product_repo.list_all()
            if product.is_visible or show_hidden
        ]
