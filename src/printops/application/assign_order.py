"""Application service: Assign Order use case.

An order can be assigned to a staff member once; re-assignment is a
conflict.
"""

from __future__ import annotations

import logging

from printops.domain.exceptions import NotFoundError
from printops.domain.model.session import Role, Session
from printops.domain.repository.order_repository import OrderRepository
from printops.domain.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)


class AssignOrderHandler:

    def __init__(self, order_repo: OrderRepository, user_repo: UserRepository) -> None:
        self._order_repo = order_repo
        self._user_repo = user_repo

    def handle(self, session: Session, order_id: str, staff_id: str) -> None:
        session.require("assign orders", Role.ADMIN)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order #{order_id} not found")

        staff = self._user_repo.get_by_id(staff_id)
        if staff is None or not staff.is_staff:
            raise NotFoundError(f"Staff member '{staff_id}' not found")

        order.assign(staff.id)
        self._order_repo.save(order)
        logger.info("Order %s assigned to %s by %s", order_id, staff.id, session.user_id)
