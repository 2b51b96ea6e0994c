"""Domain service: Pricing Engine.

Derives an order's price from the product and the catalog options the
client picked:

    price = quantity * (base + paper + size_area + side + sum(finishings))

Every component except quantity is a per-unit amount. The engine only
reads catalog objects and keeps no state, so the same inputs always give
the same amount.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from printops.domain.exceptions import ValidationError
from printops.domain.model.catalog import CostItem, PaperConfig
from printops.domain.model.order import OrderDetails, PrintingSide
from printops.domain.model.product import Product
from printops.domain.model.value_objects import Dimensions, Money, Quantity


@dataclass(frozen=True)
class PriceQuote:
    """Per-unit components plus the rounded total."""

    base: Decimal
    paper: Decimal
    size_area: Decimal
    side: Decimal
    finishings: Decimal
    quantity: int
    total: Money

    @property
    def unit_price(self) -> Decimal:
        return self.base + self.paper + self.size_area + self.side + self.finishings


class PricingEngine:

    def __init__(self, currency: str = "USD") -> None:
        self._currency = currency

    def quote(
        self,
        product: Product,
        dimensions: Dimensions,
        paper: PaperConfig,
        printing_side: PrintingSide,
        cost_items: list[CostItem],
        quantity: Quantity,
    ) -> PriceQuote:
        size_area = dimensions.area_sq_m * product.size_cost_per_sq_m
        side = product.double_side_cost if printing_side == PrintingSide.DOUBLE else Decimal("0")
        finishings = sum((ci.associated_cost for ci in cost_items), Decimal("0"))

        unit = product.base_price + paper.associated_cost + size_area + side + finishings
        total = (Money(unit, self._currency) * quantity.value).rounded()

        return PriceQuote(
            base=product.base_price,
            paper=paper.associated_cost,
            size_area=size_area,
            side=side,
            finishings=finishings,
            quantity=quantity.value,
            total=total,
        )

    def quote_details(
        self,
        product: Product,
        details: OrderDetails,
        quantity: Quantity | None = None,
    ) -> PriceQuote:
        """Price stored order details against the product as it is now.

        Raises ValidationError when the paper or a finishing option no
        longer belongs to the product.
        """
        paper = product.find_paper(details.paper_config_id)
        if paper is None:
            raise ValidationError(
                f"Paper '{details.paper_config_id}' is no longer offered for "
                f"'{product.name}'",
                fields=("paper_config",),
            )

        cost_items: list[CostItem] = []
        gone: list[str] = []
        for cost_type, value in details.finishings.items():
            item = product.find_cost_item(cost_type, value)
            if item is None:
                gone.append(cost_type.field_name)
            else:
                cost_items.append(item)
        if gone:
            raise ValidationError(
                f"Finishing options no longer offered for '{product.name}': "
                f"{', '.join(gone)}",
                fields=gone,
            )

        return self.quote(
            product,
            details.dimensions,
            paper,
            details.printing_side,
            cost_items,
            quantity or details.quantity,
        )
