"""Catalog, session and order builders shared by the tests."""

from __future__ import annotations

from decimal import Decimal

from printops.application.approve_order import ApproveOrderHandler
from printops.application.create_order import CreateOrderHandler
from printops.application.dto import OrderInput
from printops.domain.model.catalog import (
    Applicability,
    CostItem,
    CostItemType,
    PageSize,
    PaperConfig,
    Sheet,
)
from printops.domain.model.product import Product
from printops.domain.model.session import Role, Session, User
from printops.domain.service.pricing_engine import PricingEngine

ADMIN = Session(user_id="u-admin", role=Role.ADMIN, username="admin")
STAFF = Session(user_id="u-staff", role=Role.STAFF, username="press-desk")
CLIENT = Session(user_id="u-client", role=Role.CLIENT, username="acme")

USERS = [
    User("u-admin", "admin", Role.ADMIN),
    User("u-staff", "press-desk", Role.STAFF),
    User("u-client", "acme", Role.CLIENT),
]

SRA3 = Sheet(id="sh-sra3", name="SRA3", width=Decimal("320"), height=Decimal("450"))

CARD_SIZE = PageSize("sz-bc", "Business Card", Decimal("90"), Decimal("55"), Applicability.CARD)
ART_300 = PaperConfig("pp-art300", "ART", 300, Applicability.CARD, Decimal("0.30"))
ART_350 = PaperConfig("pp-art350", "ART", 350, Applicability.CARD, Decimal("0.40"))
MATTE = CostItem("ci-matte", CostItemType.LAMINATION, "matte", Applicability.CARD, Decimal("0.15"))
GLOSS = CostItem("ci-gloss", CostItemType.LAMINATION, "gloss", Applicability.CARD, Decimal("0.12"))
SPOT_UV = CostItem("ci-uv", CostItemType.UV, "spot", Applicability.CARD, Decimal("0.25"))


def business_card() -> Product:
    """Two lamination options (must choose) and a single UV option (auto)."""
    return Product(
        id="p-bc",
        name="Business Card",
        description="90x55 cards",
        available_sizes=[CARD_SIZE],
        available_papers=[ART_300, ART_350],
        cost_items=[MATTE, GLOSS, SPOT_UV],
        base_price=Decimal("2.5"),
        size_cost_per_sq_m=Decimal("0"),
        double_side_cost=Decimal("0.5"),
    )


def poster() -> Product:
    """No finishings; priced by area."""
    return Product(
        id="p-poster",
        name="Poster",
        available_sizes=[],
        available_papers=[PaperConfig("pp-gloss", "GLOSS", 170, Applicability.POSTER, Decimal("1"))],
        base_price=Decimal("4"),
        size_cost_per_sq_m=Decimal("2"),
        double_side_cost=Decimal("1.5"),
    )


def card_input(**overrides) -> OrderInput:
    """A valid Business Card order: 1000 x (2.5 + 0.3 + 0.15 + 0.25) = 3200."""
    values = dict(
        product_name="Business Card",
        quantity=1000,
        paper_config="pp-art300",
        printing_side="SINGLE",
        quality=300,
        size_id="sz-bc",
        additional_note="Trim tight",
        finishings={"LAMINATION": "matte"},
    )
    values.update(overrides)
    return OrderInput(**values)


def create_order(order_repo, product_repo, session: Session = CLIENT, **overrides) -> str:
    handler = CreateOrderHandler(order_repo, product_repo, PricingEngine())
    return handler.handle(session, card_input(**overrides)).id


def create_active_order(order_repo, product_repo, **overrides) -> str:
    order_id = create_order(order_repo, product_repo, **overrides)
    ApproveOrderHandler(order_repo).handle(ADMIN, order_id)
    return order_id
