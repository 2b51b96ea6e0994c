"""Integration tests for the CreateOrder use case.

Uses in-memory fake repositories, no file I/O.
"""

from datetime import date

import pytest

from printops.application.create_order import CreateOrderHandler
from printops.application.estimate_price import EstimatePriceHandler
from printops.domain.exceptions import NotFoundError, ValidationError
from printops.domain.model.catalog import CostItemType
from printops.domain.model.order import OrderStatus
from printops.domain.model.product import Product
from printops.domain.service.pricing_engine import PricingEngine
from tests.builders import ADMIN, CLIENT, business_card, card_input, poster
from tests.fakes import FakeOrderRepository, FakeProductRepository


def _setup(
    products: list[Product] | None = None,
) -> tuple[CreateOrderHandler, FakeOrderRepository, FakeProductRepository]:
    """Build handler with fake repos, optionally pre-loaded with products."""
    if products is None:
        products = [business_card(), poster()]
    order_repo = FakeOrderRepository()
    product_repo = FakeProductRepository(products)
    handler = CreateOrderHandler(
        order_repo, product_repo, PricingEngine(), today=lambda: date(2026, 3, 1)
    )
    return handler, order_repo, product_repo


class TestCreateOrderHappyPath:

    def test_creates_pending_order_with_price(self):
        handler, _, _ = _setup()
        dto = handler.handle(CLIENT, card_input())
        assert dto.status == "PENDING"
        assert dto.net_amount == "3200.00 USD"
        assert dto.raised_by == "u-client"
        assert dto.raised_to is None
        assert dto.size == "90x55mm"

    def test_single_option_finishing_auto_selected(self):
        handler, order_repo, _ = _setup()
        dto = handler.handle(CLIENT, card_input())
        saved = order_repo.get_by_id(dto.id)
        assert saved.details.finishings[CostItemType.UV] == "spot"
        assert dto.finishings == {"LAMINATION": "matte", "UV": "spot"}

    def test_double_sided_price(self):
        handler, _, _ = _setup()
        dto = handler.handle(CLIENT, card_input(printing_side="DOUBLE"))
        assert dto.net_amount == "3700.00 USD"

    def test_sequential_ids(self):
        handler, _, _ = _setup()
        first = handler.handle(CLIENT, card_input())
        second = handler.handle(ADMIN, card_input())
        assert (first.id, second.id) == ("1", "2")

    def test_product_name_is_case_insensitive(self):
        handler, _, _ = _setup()
        dto = handler.handle(CLIENT, card_input(product_name="business card"))
        assert dto.product_name == "Business Card"

    def test_persists_order(self):
        handler, order_repo, _ = _setup()
        dto = handler.handle(CLIENT, card_input())
        saved = order_repo.get_by_id(dto.id)
        assert saved is not None
        assert saved.status == OrderStatus.PENDING


class TestCreateOrderValidation:

    def test_unknown_product(self):
        handler, _, _ = _setup()
        with pytest.raises(NotFoundError, match="Product not found"):
            handler.handle(CLIENT, card_input(product_name="Banner"))

    def test_blank_product_name(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="Product name is required"):
            handler.handle(CLIENT, card_input(product_name="  "))

    def test_missing_required_finishing(self):
        handler, order_repo, _ = _setup()
        with pytest.raises(ValidationError) as exc_info:
            handler.handle(CLIENT, card_input(finishings={}))
        assert exc_info.value.fields == ("lamination_type",)
        assert order_repo.list_by_status() == []

    def test_option_not_offered_by_product(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="lamination_type"):
            handler.handle(CLIENT, card_input(finishings={"LAMINATION": "velvet"}))

    def test_zero_quantity(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError) as exc_info:
            handler.handle(CLIENT, card_input(quantity=0))
        assert exc_info.value.fields == ("quantity",)

    @pytest.mark.parametrize("quantity", [2.7, "1000.5", "inf", "NaN"])
    def test_fractional_or_non_finite_quantity(self, quantity):
        handler, order_repo, _ = _setup()
        with pytest.raises(ValidationError) as exc_info:
            handler.handle(CLIENT, card_input(quantity=quantity))
        assert exc_info.value.fields == ("quantity",)
        assert order_repo.list_by_status() == []

    def test_whole_number_quantity_given_as_decimal_text(self):
        handler, _, _ = _setup()
        dto = handler.handle(CLIENT, card_input(quantity="1000.0"))
        assert dto.quantity == 1000

    @pytest.mark.parametrize("quality", ["nan", "Infinity"])
    def test_non_finite_quality(self, quality):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError) as exc_info:
            handler.handle(CLIENT, card_input(quality=quality))
        assert exc_info.value.fields == ("quality",)

    def test_infinite_custom_width(self):
        handler, order_repo, _ = _setup()
        with pytest.raises(ValidationError) as exc_info:
            handler.handle(CLIENT, card_input(size_id=None, width=float("inf"), height=55))
        assert "width" in exc_info.value.fields
        assert order_repo.list_by_status() == []

    def test_unknown_finishing_type(self):
        handler, order_repo, _ = _setup()
        with pytest.raises(ValidationError, match="GLITTER") as exc_info:
            handler.handle(
                CLIENT, card_input(finishings={"LAMINATION": "matte", "GLITTER": "gold"})
            )
        assert exc_info.value.fields == ("finishings",)
        assert order_repo.list_by_status() == []

    def test_delivery_date_in_past(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="delivery_date"):
            handler.handle(
                CLIENT,
                card_input(delivery_address="1 Print St", delivery_date="2026-02-28"),
            )


class TestEstimatePrice:

    def test_estimate_does_not_create_order(self):
        _, order_repo, product_repo = _setup()
        quote = EstimatePriceHandler(product_repo, PricingEngine()).handle(card_input())
        assert str(quote.total) == "3200.00 USD"
        assert order_repo.list_by_status() == []
