"""Application service: Update Order Quantity use case.

Re-prices the order against the current catalog and forces it back to
ACTIVE, so an order that already went out on a batch can be automated
again with the new quantity.
"""

from __future__ import annotations

import logging

from printops.domain.exceptions import NotFoundError, ValidationError
from printops.domain.model.session import Role, Session
from printops.domain.model.value_objects import Quantity
from printops.domain.repository.order_repository import OrderRepository
from printops.domain.repository.product_repository import ProductRepository
from printops.domain.service.pricing_engine import PricingEngine

logger = logging.getLogger(__name__)


class UpdateOrderQuantityHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        pricing: PricingEngine,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._pricing = pricing

    def handle(self, session: Session, order_id: str, new_quantity: int) -> None:
        session.require("update orders", Role.ADMIN)

        # Reject before touching anything
        quantity = Quantity(new_quantity)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order #{order_id} not found")

        product = self._product_repo.get_by_id(order.details.product_id)
        if product is None:
            raise ValidationError(
                f"Product '{order.details.product_name}' is no longer in the catalog",
                fields=("product_name",),
            )

        quote = self._pricing.quote_details(product, order.details, quantity)
        previous = order.status
        order.update_quantity(quantity, quote.total)
        self._order_repo.save(order)
        logger.info(
            "Order %s quantity set to %d (%s -> ACTIVE), new price %s",
            order_id, quantity.value, previous.value, quote.total,
        )
