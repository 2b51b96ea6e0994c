"""Application service: Soft-delete Order use case (CANCELLED -> DELETED).

The record is kept with status DELETED; nothing is physically removed.
"""

from __future__ import annotations

import logging

from printops.domain.exceptions import NotFoundError
from printops.domain.model.session import Role, Session
from printops.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class DeleteOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, session: Session, order_id: str) -> None:
        session.require("delete orders", Role.ADMIN)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order #{order_id} not found")

        order.soft_delete()
        self._order_repo.save(order)
        logger.info("Order %s marked DELETED by %s", order_id, session.user_id)
