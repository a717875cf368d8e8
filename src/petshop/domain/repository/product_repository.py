"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from petshop.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of products in the catalog."""

    @abstractmethod
    def add(self, product: Product) -> bool:
        """Insert a new product and assign its ID.

        Returns False, leaving the catalog untouched, when another
        product already holds ``product.ref``.
        """

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist changes to an existing product."""
