"""Order aggregate, the core of the domain.

The Order owns its print details and its position in the lifecycle.
Every status change goes through ``transition_to`` so the table of legal
edges below is the single source of truth for the state machine.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum

from printops.domain.exceptions import ConflictError, InvalidTransitionError, ValidationError
from printops.domain.model.catalog import CostItemType
from printops.domain.model.value_objects import Dimensions, Money, Quantity


class OrderStatus(Enum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    AUTOMATED = "AUTOMATED"
    MANUALLY_AUTOMATED = "MANUALLY_AUTOMATED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    DELETED = "DELETED"


class PrintingSide(Enum):
    SINGLE = "SINGLE"
    DOUBLE = "DOUBLE"


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------
TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.ACTIVE, OrderStatus.CANCELLED}),
    OrderStatus.ACTIVE: frozenset(
        {OrderStatus.AUTOMATED, OrderStatus.MANUALLY_AUTOMATED, OrderStatus.CANCELLED}
    ),
    OrderStatus.AUTOMATED: frozenset({OrderStatus.COMPLETED}),
    OrderStatus.MANUALLY_AUTOMATED: frozenset({OrderStatus.COMPLETED}),
    OrderStatus.CANCELLED: frozenset({OrderStatus.DELETED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.DELETED: frozenset(),
}

# Statuses a quantity update may re-open to ACTIVE.
REOPENABLE = frozenset(
    {
        OrderStatus.PENDING,
        OrderStatus.ACTIVE,
        OrderStatus.AUTOMATED,
        OrderStatus.MANUALLY_AUTOMATED,
    }
)


@dataclass(frozen=True)
class Delivery:
    address: str
    delivery_date: date
    courier: str = ""


@dataclass(frozen=True)
class OrderDetails:
    """What the client asked to have printed.

    ``finishings`` maps a cost-item type to the chosen option value.
    """

    product_id: str
    product_name: str
    dimensions: Dimensions
    quantity: Quantity
    paper_config_id: str
    printing_side: PrintingSide
    quality: Decimal
    additional_note: str = ""
    file_url: str = ""
    size_id: str | None = None
    finishings: dict[CostItemType, str] = field(default_factory=dict)
    delivery: Delivery | None = None


@dataclass
class Order:
    """Aggregate root for print orders.

    Use the ``Order.create()`` factory for new orders. The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    orders without re-validating.
    """

    id: str | None
    details: OrderDetails
    raised_by: str
    net_amount: Money
    status: OrderStatus = OrderStatus.PENDING
    raised_to: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    # Bumped on every write; a save from a stale read is a conflict.
    version: int = 0

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(details: OrderDetails, raised_by: str, net_amount: Money) -> Order:
        """Create a PENDING order. Catalog checks happen before this call."""
        if not raised_by or not raised_by.strip():
            raise ValidationError("Order must be raised by a client", fields=("raisedBy",))
        if details.quality <= 0:
            raise ValidationError("Quality must be positive", fields=("quality",))
        return Order(
            id=None,
            details=details,
            raised_by=raised_by.strip(),
            net_amount=net_amount,
        )

    # --- State transitions ----------------------------------------------------

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in TRANSITIONS[self.status]

    def transition_to(self, target: OrderStatus) -> None:
        if not self.can_transition_to(target):
            raise InvalidTransitionError(self.id, self.status.value, target.value)
        self.status = target
        self._touch()

    def approve(self) -> None:
        """PENDING -> ACTIVE."""
        if self.status != OrderStatus.PENDING:
            raise InvalidTransitionError(
                self.id, self.status.value, OrderStatus.ACTIVE.value
            )
        self.transition_to(OrderStatus.ACTIVE)

    def cancel(self) -> None:
        """PENDING|ACTIVE -> CANCELLED."""
        self.transition_to(OrderStatus.CANCELLED)

    def soft_delete(self) -> None:
        """CANCELLED -> DELETED. Terminal."""
        self.transition_to(OrderStatus.DELETED)

    def complete(self) -> None:
        """AUTOMATED|MANUALLY_AUTOMATED -> COMPLETED. Terminal."""
        self.transition_to(OrderStatus.COMPLETED)

    def update_quantity(self, quantity: Quantity, net_amount: Money) -> None:
        """Change the quantity, take the re-computed price, and re-open as ACTIVE.

        An order already placed on a batch goes back to ACTIVE so it can be
        automated again.
        """
        if self.status not in REOPENABLE:
            raise InvalidTransitionError(
                self.id, self.status.value, OrderStatus.ACTIVE.value
            )
        self.details = replace(self.details, quantity=quantity)
        self.net_amount = net_amount
        self.status = OrderStatus.ACTIVE
        self._touch()

    # --- Assignment -----------------------------------------------------------

    def assign(self, staff_id: str) -> None:
        if self.raised_to is not None:
            raise ConflictError(
                f"Order #{self.id} is already assigned to {self.raised_to}"
            )
        self.raised_to = staff_id
        self._touch()

    # --- Internal helpers -----------------------------------------------------

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
