"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from printops.domain.exceptions import ValidationError
from printops.domain.model.batch import AutomationBatch, ManualAutomationBatch
from printops.domain.model.catalog import CostItemType
from printops.domain.model.order import Order


@dataclass(frozen=True)
class OrderInput:
    """Input: the order form as the client filled it in.

    ``finishings`` maps a cost-item type name (e.g. "LAMINATION") to the
    chosen option. Blank finishings may be auto-selected.
    """

    product_name: str
    quantity: Any = None
    paper_config: str | None = None
    printing_side: str | None = None
    quality: Any = None
    width: Any = None
    height: Any = None
    size_id: str | None = None
    additional_note: str = ""
    file_url: str = ""
    finishings: dict[str, str] = field(default_factory=dict)
    delivery_address: str | None = None
    delivery_date: str | None = None
    courier: str | None = None

    def as_form(self) -> dict[str, Any]:
        """Flatten into the field names the order-form schema walks.

        Raises ValidationError for a finishing type the catalog does not know.
        """
        known = {t.value for t in CostItemType}
        unknown = sorted(name for name in self.finishings if name.upper() not in known)
        if unknown:
            raise ValidationError(
                f"Unknown finishing types: {', '.join(unknown)}", fields=("finishings",)
            )

        form: dict[str, Any] = {
            "product_name": self.product_name,
            "quantity": self.quantity,
            "paper_config": self.paper_config,
            "printing_side": self.printing_side,
            "quality": self.quality,
            "width": self.width,
            "height": self.height,
            "size_id": self.size_id,
            "additional_note": self.additional_note,
            "file_url": self.file_url,
            "delivery_address": self.delivery_address,
            "delivery_date": self.delivery_date,
            "courier": self.courier,
        }
        for type_name, value in self.finishings.items():
            form[f"{type_name.lower()}_type"] = value
        return form


@dataclass(frozen=True)
class OrderDTO:
    """Output: an order as displayed to the user."""

    id: str
    product_name: str
    size: str
    quantity: int
    paper_config: str
    printing_side: str
    finishings: dict[str, str]
    status: str
    raised_by: str
    raised_to: str | None
    net_amount: str  # formatted, e.g. "2800.00 USD"
    created_at: str

    @staticmethod
    def from_domain(order: Order) -> OrderDTO:
        details = order.details
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            product_name=details.product_name,
            size=str(details.dimensions),
            quantity=details.quantity.value,
            paper_config=details.paper_config_id,
            printing_side=details.printing_side.value,
            finishings={t.value: v for t, v in details.finishings.items()},
            status=order.status.value,
            raised_by=order.raised_by,
            raised_to=order.raised_to,
            net_amount=str(order.net_amount),
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )


@dataclass(frozen=True)
class BatchDTO:
    """Output: a batch of either kind."""

    id: str
    kind: str
    name: str
    description: str
    order_ids: list[str]
    created_at: str
    sheet_id: str | None = None
    algorithm: str | None = None
    efficiency: str | None = None  # e.g. "87.50%"
    layout_type: str | None = None
    file_url: str | None = None

    @staticmethod
    def from_domain(batch: AutomationBatch | ManualAutomationBatch) -> BatchDTO:
        common = dict(
            id=batch.id,
            kind=batch.kind.value,
            name=batch.name,
            description=batch.description,
            order_ids=list(batch.order_ids),
            created_at=batch.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )
        if isinstance(batch, ManualAutomationBatch):
            return BatchDTO(**common, file_url=batch.file_url)
        return BatchDTO(
            **common,
            sheet_id=batch.sheet_id,
            algorithm=batch.algorithm.value,
            efficiency=f"{batch.layout.efficiency:.2f}%",
            layout_type=batch.layout.type,
        )


@dataclass(frozen=True)
class UploadedFileDTO:
    """Output: where an uploaded file went, plus image metadata if any."""

    file_url: str
    size: int
    width: int | None = None
    height: int | None = None
    format: str | None = None
    density: int | None = None
