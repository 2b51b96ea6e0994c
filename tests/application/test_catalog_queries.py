"""Tests for catalog, order-form and staff queries."""

import pytest

from printops.application.show_catalog import (
    DescribeOrderFormHandler,
    ListStaffHandler,
    ShowCatalogHandler,
)
from printops.domain.exceptions import NotFoundError, ValidationError
from tests.builders import SRA3, USERS, business_card, poster
from tests.fakes import FakeProductRepository, FakeUserRepository


def _product_repo():
    return FakeProductRepository([business_card(), poster()], [SRA3])


class TestShowCatalog:

    def test_lists_each_kind(self):
        handler = ShowCatalogHandler(_product_repo())
        assert [p.name for p in handler.handle("products")] == ["Business Card", "Poster"]
        assert [s.id for s in handler.handle("sheets")] == ["sh-sra3"]
        assert len(handler.handle("cost-items")) == 3

    def test_unknown_kind(self):
        with pytest.raises(ValidationError, match="Unknown catalog listing"):
            ShowCatalogHandler(_product_repo()).handle("inks")

    def test_enums(self):
        enums = ShowCatalogHandler.enums()
        assert "LAMINATION" in enums.cost_item_types
        assert "LARGE_FORMAT" in enums.applicability


class TestDescribeOrderForm:

    def test_fields_for_product(self):
        fields = DescribeOrderFormHandler(_product_repo()).handle("Business Card")
        uv = next(f for f in fields if f.name == "uv_type")
        assert uv.default == "spot"

    def test_unknown_product(self):
        with pytest.raises(NotFoundError):
            DescribeOrderFormHandler(_product_repo()).handle("Banner")


def test_list_staff_excludes_clients():
    staff = ListStaffHandler(FakeUserRepository(USERS)).handle()
    assert {u.id for u in staff} == {"u-admin", "u-staff"}
