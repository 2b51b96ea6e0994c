"""Product aggregate.

Products live independently of orders. An order validates its size, paper
and finishing selections against the product once, at creation time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from printops.domain.model.catalog import CostItem, CostItemType, PageSize, PaperConfig


@dataclass
class Product:
    """A product in the catalog.

    ``base_price`` and ``double_side_cost`` are per printed unit;
    ``size_cost_per_sq_m`` is applied to the unit's area.
    """

    id: str
    name: str
    description: str = ""
    available_sizes: list[PageSize] = field(default_factory=list)
    available_papers: list[PaperConfig] = field(default_factory=list)
    cost_items: list[CostItem] = field(default_factory=list)
    base_price: Decimal = Decimal("0")
    size_cost_per_sq_m: Decimal = Decimal("0")
    double_side_cost: Decimal = Decimal("0.50")

    # --- Lookups --------------------------------------------------------------

    def find_size(self, size_id: str) -> PageSize | None:
        return next((s for s in self.available_sizes if s.id == size_id), None)

    def find_paper(self, paper_id: str) -> PaperConfig | None:
        """Match by id, or by the ``TYPE-GSM`` label used on order forms."""
        for paper in self.available_papers:
            if paper.id == paper_id or paper.label.lower() == paper_id.lower():
                return paper
        return None

    def options_for(self, cost_type: CostItemType) -> list[CostItem]:
        return [ci for ci in self.cost_items if ci.type == cost_type]

    def find_cost_item(self, cost_type: CostItemType, value: str) -> CostItem | None:
        for item in self.options_for(cost_type):
            if item.value.lower() == value.lower():
                return item
        return None

    @property
    def finishing_types(self) -> list[CostItemType]:
        """Cost-item types this product defines, in enum order."""
        present = {ci.type for ci in self.cost_items}
        return [t for t in CostItemType if t in present]
