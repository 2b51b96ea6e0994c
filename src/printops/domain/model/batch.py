"""Automation batches: named groups of orders sent to fulfilment together.

Both kinds are created once and never edited; the only later operation
is deletion of the record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from printops.domain.model.value_objects import Margins


class AlgorithmType(Enum):
    BOTTOM_LEFT_FILL = "BOTTOM_LEFT_FILL"
    SHELF = "SHELF"
    MAX_RECTS = "MAX_RECTS"
    GANG = "GANG"


class BatchKind(Enum):
    ALGORITHMIC = "ALGORITHMIC"
    MANUAL = "MANUAL"


@dataclass(frozen=True)
class Placement:
    order_id: str
    x: Decimal
    y: Decimal
    rotated: bool = False


@dataclass(frozen=True)
class LayoutResult:
    """What the packing optimizer returns for a batch."""

    efficiency: Decimal  # percent of sheet area used
    type: str
    placements: tuple[Placement, ...] = ()


@dataclass
class AutomationBatch:
    id: str | None
    name: str
    description: str
    order_ids: list[str]
    sheet_id: str
    bleed: Decimal
    rotations_allowed: bool
    algorithm: AlgorithmType
    margins: Margins
    layout: LayoutResult
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    kind = BatchKind.ALGORITHMIC


@dataclass
class ManualAutomationBatch:
    id: str | None
    name: str
    description: str
    order_ids: list[str]
    file_url: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    kind = BatchKind.MANUAL


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_MANUAL_FILE_BYTES = 1024 * 1024
