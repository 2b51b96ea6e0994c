"""JSON-file-backed implementation of ProductRepository.

The catalog file holds the shared attribute lists and products that
reference them by id::

    {"sizes": [...], "papers": [...], "cost_items": [...],
     "sheets": [...], "products": [{"size_ids": [...], ...}]}
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from printops.domain.model.catalog import (
    Applicability,
    CostItem,
    CostItemType,
    PageSize,
    PaperConfig,
    Sheet,
)
from printops.domain.model.product import Product
from printops.domain.repository.product_repository import ProductRepository

_EMPTY_CATALOG = {"sizes": [], "papers": [], "cost_items": [], "sheets": [], "products": []}


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return next((p for p in self.list_all() if p.id == product_id), None)

    def get_by_name(self, name: str) -> Product | None:
        for product in self.list_all():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        raw = self._load_raw()
        sizes = {s.id: s for s in map(self._size, raw.get("sizes", []))}
        papers = {p.id: p for p in map(self._paper, raw.get("papers", []))}
        cost_items = {c.id: c for c in map(self._cost_item, raw.get("cost_items", []))}
        return [
            Product(
                id=item["id"],
                name=item["name"],
                description=item.get("description", ""),
                available_sizes=[sizes[i] for i in item.get("size_ids", []) if i in sizes],
                available_papers=[papers[i] for i in item.get("paper_ids", []) if i in papers],
                cost_items=[cost_items[i] for i in item.get("cost_item_ids", []) if i in cost_items],
                base_price=Decimal(str(item.get("base_price", "0"))),
                size_cost_per_sq_m=Decimal(str(item.get("size_cost_per_sq_m", "0"))),
                double_side_cost=Decimal(str(item.get("double_side_cost", "0.50"))),
            )
            for item in raw.get("products", [])
        ]

    def list_sizes(self) -> list[PageSize]:
        return [self._size(s) for s in self._load_raw().get("sizes", [])]

    def list_papers(self) -> list[PaperConfig]:
        return [self._paper(p) for p in self._load_raw().get("papers", [])]

    def list_cost_items(self) -> list[CostItem]:
        return [self._cost_item(c) for c in self._load_raw().get("cost_items", [])]

    def list_sheets(self) -> list[Sheet]:
        return [self._sheet(s) for s in self._load_raw().get("sheets", [])]

    def get_sheet(self, sheet_id: str) -> Sheet | None:
        return next((s for s in self.list_sheets() if s.id == sheet_id), None)

    # --- Serialization helpers ------------------------------------------------

    @staticmethod
    def _size(raw: dict) -> PageSize:
        return PageSize(
            id=raw["id"],
            name=raw["name"],
            width=Decimal(str(raw["width"])),
            height=Decimal(str(raw["height"])),
            applicability=Applicability(raw.get("applicability", "GENERAL")),
            associated_cost=Decimal(str(raw.get("associated_cost", "0"))),
        )

    @staticmethod
    def _paper(raw: dict) -> PaperConfig:
        return PaperConfig(
            id=raw["id"],
            type=raw["type"].upper(),
            gsm=int(raw["gsm"]),
            applicability=Applicability(raw.get("applicability", "GENERAL")),
            associated_cost=Decimal(str(raw.get("associated_cost", "0"))),
        )

    @staticmethod
    def _cost_item(raw: dict) -> CostItem:
        return CostItem(
            id=raw["id"],
            type=CostItemType(raw["type"].upper()),
            value=raw["value"],
            applicability=Applicability(raw.get("applicability", "GENERAL")),
            associated_cost=Decimal(str(raw.get("associated_cost", "0"))),
        )

    @staticmethod
    def _sheet(raw: dict) -> Sheet:
        return Sheet(
            id=raw["id"],
            name=raw["name"],
            width=Decimal(str(raw["width"])),
            height=Decimal(str(raw["height"])),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                json.dumps(_EMPTY_CATALOG, indent=2) + "\n", encoding="utf-8"
            )
