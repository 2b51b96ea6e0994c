"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from printops.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_by_status(self, status: OrderStatus | None = None) -> list[Order]:
        """Return orders in *status* (every order when None), oldest first."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order.

        Raises ConflictError when the stored record changed since *order*
        was loaded (its ``version`` no longer matches).
        """

    @abstractmethod
    def swap_status(
        self,
        order_ids: list[str],
        expected: OrderStatus,
        target: OrderStatus,
    ) -> list[str]:
        """Atomically move every order in *order_ids* from *expected* to *target*.

        Either all orders move or none do. Returns the ids that are missing
        or not in *expected* (empty list on success). Implementations must
        hold a single-writer lock for the whole check-and-set.
        """
