"""Domain service: Batch Eligibility.

Coordinates the cross-aggregate rule that a batch may only be built from
ACTIVE orders and that all of them change status together.

The two-phase approach (validate-then-mutate) ensures no order is ever
left in a partially-batched state:

  Phase 1: load and validate: every id exists and is ACTIVE. Fails
            before any mutation, naming every offending id.
  Phase 2: compare-and-set: the repository re-checks ACTIVE and moves
            the whole set in one step, so an order cancelled between
            selection and submission is still caught.
"""

from __future__ import annotations

from printops.domain.exceptions import BatchValidationError, ValidationError
from printops.domain.model.order import Order, OrderStatus
from printops.domain.repository.order_repository import OrderRepository


class BatchEligibilityService:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def load_active(self, order_ids: list[str]) -> list[Order]:
        """Phase 1: return the orders, in selection order, if all are ACTIVE."""
        if not order_ids:
            raise ValidationError("Select at least one order", fields=("order_ids",))
        duplicates = sorted({oid for oid in order_ids if order_ids.count(oid) > 1})
        if duplicates:
            raise ValidationError(
                f"Orders selected more than once: {', '.join(duplicates)}",
                fields=("order_ids",),
            )

        orders: list[Order] = []
        offending: list[str] = []
        for order_id in order_ids:
            order = self._order_repo.get_by_id(order_id)
            if order is None or order.status != OrderStatus.ACTIVE:
                offending.append(order_id)
            else:
                orders.append(order)

        if offending:
            raise BatchValidationError(offending)
        return orders

    def commit(self, order_ids: list[str], target: OrderStatus) -> None:
        """Phase 2: move every order ACTIVE -> *target*, or none of them."""
        offending = self._order_repo.swap_status(order_ids, OrderStatus.ACTIVE, target)
        if offending:
            raise BatchValidationError(offending, reason="no longer ACTIVE")

    def revert(self, order_ids: list[str], target: OrderStatus) -> None:
        """Undo ``commit`` when the batch record could not be stored."""
        self._order_repo.swap_status(order_ids, target, OrderStatus.ACTIVE)
