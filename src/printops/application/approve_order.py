"""Application service: Approve Order use case (PENDING -> ACTIVE)."""

from __future__ import annotations

import logging

from printops.domain.exceptions import NotFoundError
from printops.domain.model.session import Role, Session
from printops.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class ApproveOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, session: Session, order_id: str) -> None:
        session.require("approve orders", Role.ADMIN)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order #{order_id} not found")

        order.approve()
        self._order_repo.save(order)
        logger.info("Order %s approved by %s", order_id, session.user_id)
