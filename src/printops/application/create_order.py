"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model:
product lookup, order-form validation, pricing, persistence.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from printops.application.dto import OrderDTO, OrderInput
from printops.domain.exceptions import NotFoundError, ValidationError
from printops.domain.model.order import Order
from printops.domain.model.session import Role, Session
from printops.domain.repository.order_repository import OrderRepository
from printops.domain.repository.product_repository import ProductRepository
from printops.domain.service.order_form import OrderFormSchema
from printops.domain.service.pricing_engine import PricingEngine

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        pricing: PricingEngine,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._pricing = pricing
        self._today = today

    def handle(self, session: Session, order_input: OrderInput) -> OrderDTO:
        """Create a new print order in PENDING.

        Steps:
        1. Resolve the product by name (fail if not found).
        2. Walk the product's order-form schema; single-option finishings
           are selected here, and every missing/invalid field is reported.
        3. Price the order from the resolved catalog options.
        4. Persist and return a DTO.
        """
        session.require("create orders", Role.CLIENT, Role.STAFF, Role.ADMIN)

        if not order_input.product_name or not order_input.product_name.strip():
            raise ValidationError("Product name is required", fields=("product_name",))

        product = self._product_repo.get_by_name(order_input.product_name.strip())
        if product is None:
            raise NotFoundError(f"Product not found: '{order_input.product_name}'")

        resolved = OrderFormSchema(product).resolve(order_input.as_form(), self._today())
        quote = self._pricing.quote(
            product,
            resolved.details.dimensions,
            resolved.paper,
            resolved.details.printing_side,
            resolved.cost_items,
            resolved.details.quantity,
        )

        order = Order.create(
            details=resolved.details,
            raised_by=session.user_id,
            net_amount=quote.total,
        )
        self._order_repo.save(order)
        logger.info(
            "Order %s created by %s for %s x%d at %s",
            order.id, session.user_id, product.name,
            resolved.details.quantity.value, quote.total,
        )
        return OrderDTO.from_domain(order)
