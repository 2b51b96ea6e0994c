"""Abstract repository for the product catalog.

Defined in the domain layer so the domain never depends on
infrastructure. The catalog is read-only to the order core.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from printops.domain.model.catalog import CostItem, PageSize, PaperConfig, Sheet
from printops.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by name (case-insensitive), or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def list_sizes(self) -> list[PageSize]:
        """Return every page size defined in the catalog."""

    @abstractmethod
    def list_papers(self) -> list[PaperConfig]:
        """Return every paper configuration defined in the catalog."""

    @abstractmethod
    def list_cost_items(self) -> list[CostItem]:
        """Return every cost item defined in the catalog."""

    @abstractmethod
    def list_sheets(self) -> list[Sheet]:
        """Return every sheet available for packing."""

    @abstractmethod
    def get_sheet(self, sheet_id: str) -> Sheet | None:
        """Return a sheet by ID, or None if not found."""
