"""Catalog attributes a Product is built from.

These are read-only to the order core: the catalog is maintained elsewhere
and the domain only looks values up and prices against them.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class Applicability(Enum):
    """Product category a catalog attribute pertains to."""

    GENERAL = "GENERAL"
    CARD = "CARD"
    BROCHURE = "BROCHURE"
    STATIONERY = "STATIONERY"
    POSTER = "POSTER"
    LARGE_FORMAT = "LARGE_FORMAT"
    PACKAGING = "PACKAGING"


class CostItemType(Enum):
    FOLDING = "FOLDING"
    LAMINATION = "LAMINATION"
    UV = "UV"
    FOIL = "FOIL"
    DIE = "DIE"
    TEXTURE = "TEXTURE"

    @property
    def field_name(self) -> str:
        """Name of the order-form field holding this finishing option."""
        return f"{self.value.lower()}_type"


@dataclass(frozen=True)
class PageSize:
    id: str
    name: str
    width: Decimal
    height: Decimal
    applicability: Applicability = Applicability.GENERAL
    associated_cost: Decimal = Decimal("0")


@dataclass(frozen=True)
class PaperConfig:
    """A paper stock; ``associated_cost`` is charged per printed unit."""

    id: str
    type: str
    gsm: int
    applicability: Applicability = Applicability.GENERAL
    associated_cost: Decimal = Decimal("0")

    @property
    def label(self) -> str:
        return f"{self.type}-{self.gsm}"


@dataclass(frozen=True)
class CostItem:
    """One priced finishing option, e.g. LAMINATION/"matte"."""

    id: str
    type: CostItemType
    value: str
    applicability: Applicability = Applicability.GENERAL
    associated_cost: Decimal = Decimal("0")


@dataclass(frozen=True)
class Sheet:
    """Physical stock the packing optimizer lays jobs out on."""

    id: str
    name: str
    width: Decimal
    height: Decimal
