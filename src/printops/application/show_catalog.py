"""Application service: catalog and user queries."""

from __future__ import annotations

from dataclasses import dataclass

from printops.domain.exceptions import NotFoundError, ValidationError
from printops.domain.model.catalog import Applicability, CostItemType
from printops.domain.model.session import User
from printops.domain.repository.product_repository import ProductRepository
from printops.domain.repository.user_repository import UserRepository
from printops.domain.service.order_form import FormField, OrderFormSchema


@dataclass(frozen=True)
class CatalogEnumsDTO:
    applicability: list[str]
    cost_item_types: list[str]


class ShowCatalogHandler:

    KINDS = ("products", "sizes", "papers", "cost-items", "sheets")

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, kind: str) -> list:
        listing = {
            "products": self._product_repo.list_all,
            "sizes": self._product_repo.list_sizes,
            "papers": self._product_repo.list_papers,
            "cost-items": self._product_repo.list_cost_items,
            "sheets": self._product_repo.list_sheets,
        }.get(kind)
        if listing is None:
            raise ValidationError(f"Unknown catalog listing: {kind}", fields=("kind",))
        return listing()

    @staticmethod
    def enums() -> CatalogEnumsDTO:
        return CatalogEnumsDTO(
            applicability=[a.value for a in Applicability],
            cost_item_types=[t.value for t in CostItemType],
        )


class DescribeOrderFormHandler:
    """Which fields the order form needs for a product, with auto-selections."""

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_name: str) -> list[FormField]:
        product = self._product_repo.get_by_name(product_name)
        if product is None:
            raise NotFoundError(f"Product not found: '{product_name}'")
        return OrderFormSchema(product).fields


class ListStaffHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self) -> list[User]:
        return self._user_repo.list_staff()
