"""Application service: List Orders use case (query)."""

from __future__ import annotations

from printops.application.dto import OrderDTO
from printops.domain.exceptions import ValidationError
from printops.domain.model.order import OrderStatus
from printops.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, status: str | None = None) -> list[OrderDTO]:
        wanted = None
        if status:
            try:
                wanted = OrderStatus(status.upper())
            except ValueError as exc:
                raise ValidationError(f"Unknown status: {status}", fields=("status",)) from exc
        return [OrderDTO.from_domain(o) for o in self._order_repo.list_by_status(wanted)]
