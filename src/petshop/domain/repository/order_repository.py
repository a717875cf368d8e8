"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from petshop.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order (with its lines) by its ID, or None if not found."""

    @abstractmethod
    def find_all(
        self,
        status: OrderStatus | None = None,
        customer_id: int | None = None,
    ) -> list[Order]:
        """Return orders matching every criterion given; None means any."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order."""

    @abstractmethod
    def remove_if_unclaimed_cart(self, order_id: int) -> bool:
        """Delete the order only if it is still an anonymous cart.

        Compare-and-delete: the check and the removal happen as one
        step, so a cart claimed by a customer in the meantime survives.
        Returns True if a row was removed.
        """
