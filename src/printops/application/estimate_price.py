"""Application service: Estimate Price use case (query).

Prices a filled-in order form without creating anything.
"""

from __future__ import annotations

from datetime import date

from printops.application.dto import OrderInput
from printops.domain.exceptions import NotFoundError
from printops.domain.repository.product_repository import ProductRepository
from printops.domain.service.order_form import OrderFormSchema
from printops.domain.service.pricing_engine import PriceQuote, PricingEngine


class EstimatePriceHandler:

    def __init__(self, product_repo: ProductRepository, pricing: PricingEngine) -> None:
        self._product_repo = product_repo
        self._pricing = pricing

    def handle(self, order_input: OrderInput) -> PriceQuote:
        product = self._product_repo.get_by_name(order_input.product_name)
        if product is None:
            raise NotFoundError(f"Product not found: '{order_input.product_name}'")

        resolved = OrderFormSchema(product).resolve(order_input.as_form(), date.today())
        return self._pricing.quote(
            product,
            resolved.details.dimensions,
            resolved.paper,
            resolved.details.printing_side,
            resolved.cost_items,
            resolved.details.quantity,
        )
