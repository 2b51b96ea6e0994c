"""Domain service: the order form a Product requires.

Which fields an order must fill depends on the product: every cost-item
type the product defines becomes a required finishing field. When a type
has exactly one option, that option is selected automatically. The same
schema drives both form pre-fill and server-side validation, so the two
cannot disagree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from printops.domain.exceptions import ValidationError
from printops.domain.model.catalog import CostItem, CostItemType, PaperConfig
from printops.domain.model.order import Delivery, OrderDetails, PrintingSide
from printops.domain.model.product import Product
from printops.domain.model.value_objects import Dimensions, Quantity

BASE_FIELDS = (
    "product_name",
    "width",
    "height",
    "quantity",
    "paper_config",
    "printing_side",
    "additional_note",
    "quality",
)


@dataclass(frozen=True)
class FormField:
    name: str
    options: tuple[str, ...] = ()
    default: str | None = None


@dataclass(frozen=True)
class ResolvedOrder:
    """Validated details plus the catalog objects needed to price them."""

    details: OrderDetails
    paper: PaperConfig
    cost_items: list[CostItem] = field(default_factory=list)


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class OrderFormSchema:
    """Required fields of the order form for one product."""

    def __init__(self, product: Product) -> None:
        self._product = product

    @property
    def fields(self) -> list[FormField]:
        result = [FormField(name) for name in BASE_FIELDS]
        for cost_type in self._product.finishing_types:
            options = tuple(ci.value for ci in self._product.options_for(cost_type))
            default = options[0] if len(options) == 1 else None
            result.append(FormField(cost_type.field_name, options, default))
        return result

    def prefill(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Apply the single-option rule and size defaults to *values*."""
        filled = dict(values)
        for form_field in self.fields:
            if form_field.default is not None and _blank(filled.get(form_field.name)):
                filled[form_field.name] = form_field.default

        size_id = filled.get("size_id")
        if not _blank(size_id):
            size = self._product.find_size(str(size_id))
            if size is not None:
                if _blank(filled.get("width")):
                    filled["width"] = size.width
                if _blank(filled.get("height")):
                    filled["height"] = size.height
        return filled

    def resolve(self, values: Mapping[str, Any], today: date) -> ResolvedOrder:
        """Validate a submitted form and build the order details.

        All problems are collected first and raised as one ValidationError
        whose ``fields`` name every missing or invalid field.
        """
        values = self.prefill(values)

        missing = [f.name for f in self.fields if _blank(values.get(f.name))]
        if missing:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing)}", fields=missing
            )

        invalid: list[str] = []
        product = self._product

        quantity = self._quantity(values["quantity"], invalid)
        dimensions = self._dimensions(values["width"], values["height"], invalid)
        quality = self._positive_decimal(values["quality"], "quality", invalid)

        try:
            side = PrintingSide(str(values["printing_side"]).upper())
        except ValueError:
            side = None
            invalid.append("printing_side")

        paper = product.find_paper(str(values["paper_config"]))
        if paper is None:
            invalid.append("paper_config")

        size_id = values.get("size_id")
        if not _blank(size_id) and product.find_size(str(size_id)) is None:
            invalid.append("size_id")

        finishings: dict[CostItemType, str] = {}
        cost_items: list[CostItem] = []
        for cost_type in CostItemType:
            value = values.get(cost_type.field_name)
            if _blank(value):
                continue
            item = product.find_cost_item(cost_type, str(value))
            if item is None:
                invalid.append(cost_type.field_name)
                continue
            finishings[cost_type] = item.value
            cost_items.append(item)

        delivery = self._delivery(values, today, invalid)

        if invalid:
            raise ValidationError(
                f"Invalid fields for '{product.name}': {', '.join(invalid)}",
                fields=invalid,
            )

        details = OrderDetails(
            product_id=product.id,
            product_name=product.name,
            dimensions=dimensions,
            quantity=quantity,
            paper_config_id=paper.id,
            printing_side=side,
            quality=quality,
            additional_note=str(values["additional_note"]).strip(),
            file_url=str(values.get("file_url") or ""),
            size_id=None if _blank(size_id) else str(size_id),
            finishings=finishings,
            delivery=delivery,
        )
        return ResolvedOrder(details=details, paper=paper, cost_items=cost_items)

    # --- Field parsers --------------------------------------------------------

    @staticmethod
    def _quantity(raw: Any, invalid: list[str]) -> Quantity | None:
        try:
            value = Decimal(str(raw))
        except (InvalidOperation, ValueError):
            invalid.append("quantity")
            return None
        # 2.7 copies is an error, not 2
        if not value.is_finite() or value != value.to_integral_value():
            invalid.append("quantity")
            return None
        try:
            return Quantity(int(value))
        except ValidationError:
            invalid.append("quantity")
            return None

    @staticmethod
    def _dimensions(width: Any, height: Any, invalid: list[str]) -> Dimensions | None:
        try:
            return Dimensions.of(width, height)
        except ValidationError as exc:
            invalid.extend(exc.fields)
            return None

    @staticmethod
    def _positive_decimal(raw: Any, name: str, invalid: list[str]) -> Decimal | None:
        try:
            value = Decimal(str(raw))
        except (InvalidOperation, ValueError):
            invalid.append(name)
            return None
        if not value.is_finite() or value <= 0:
            invalid.append(name)
            return None
        return value

    @staticmethod
    def _delivery(values: Mapping[str, Any], today: date, invalid: list[str]) -> Delivery | None:
        address = values.get("delivery_address")
        when = values.get("delivery_date")
        if _blank(address) and _blank(when):
            return None
        if _blank(address):
            invalid.append("delivery_address")
        if _blank(when):
            invalid.append("delivery_date")
            return None
        if isinstance(when, str):
            try:
                when = date.fromisoformat(when)
            except ValueError:
                invalid.append("delivery_date")
                return None
        if when <= today:
            invalid.append("delivery_date")
            return None
        if _blank(address):
            return None
        return Delivery(
            address=str(address).strip(),
            delivery_date=when,
            courier=str(values.get("courier") or ""),
        )
