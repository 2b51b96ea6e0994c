"""Port to the external nesting/packing optimizer.

The optimizer is a black box: it receives the sheet, layout constraints
and one job per order, and returns a layout with an efficiency figure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from printops.domain.model.batch import AlgorithmType, LayoutResult
from printops.domain.model.catalog import Sheet
from printops.domain.model.value_objects import Margins


@dataclass(frozen=True)
class PackingJob:
    order_id: str
    width: Decimal
    height: Decimal
    quantity: int


@dataclass(frozen=True)
class PackingRequest:
    sheet: Sheet
    jobs: tuple[PackingJob, ...]
    algorithm: AlgorithmType
    margins: Margins
    bleed: Decimal
    rotations_allowed: bool


class PackingOptimizer(ABC):

    @abstractmethod
    def optimize(self, request: PackingRequest, timeout: float) -> LayoutResult:
        """Lay the jobs out on the sheet.

        Must raise AutomationFailedError on any failure, including the
        call not completing within *timeout* seconds.
        """
