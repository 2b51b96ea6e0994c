"""Integration tests for the order lifecycle use cases.

Approve, assign, cancel, soft delete, complete and quantity updates,
including who may call each one.
"""

from decimal import Decimal

import pytest

from printops.application.approve_order import ApproveOrderHandler
from printops.application.assign_order import AssignOrderHandler
from printops.application.cancel_order import CancelOrderHandler
from printops.application.complete_order import CompleteOrderHandler
from printops.application.delete_order import DeleteOrderHandler
from printops.application.list_orders import ListOrdersHandler
from printops.application.show_order import ShowOrderHandler
from printops.application.update_order_quantity import UpdateOrderQuantityHandler
from printops.domain.exceptions import (
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from printops.domain.model.order import OrderStatus
from printops.domain.model.value_objects import Money
from printops.domain.service.pricing_engine import PricingEngine
from tests.builders import (
    ADMIN,
    CLIENT,
    STAFF,
    USERS,
    business_card,
    create_active_order,
    create_order,
)
from tests.fakes import FakeOrderRepository, FakeProductRepository, FakeUserRepository


def _setup():
    order_repo = FakeOrderRepository()
    product_repo = FakeProductRepository([business_card()])
    return order_repo, product_repo


def _status(order_repo, order_id) -> OrderStatus:
    return order_repo.get_by_id(order_id).status


class TestApprove:

    def test_pending_becomes_active(self):
        order_repo, product_repo = _setup()
        order_id = create_order(order_repo, product_repo)

        ApproveOrderHandler(order_repo).handle(ADMIN, order_id)

        assert _status(order_repo, order_id) == OrderStatus.ACTIVE

    def test_approving_twice_rejected(self):
        order_repo, product_repo = _setup()
        order_id = create_active_order(order_repo, product_repo)
        with pytest.raises(InvalidTransitionError):
            ApproveOrderHandler(order_repo).handle(ADMIN, order_id)

    @pytest.mark.parametrize("session", [STAFF, CLIENT])
    def test_only_admin_may_approve(self, session):
        order_repo, product_repo = _setup()
        order_id = create_order(order_repo, product_repo)
        with pytest.raises(PermissionDeniedError):
            ApproveOrderHandler(order_repo).handle(session, order_id)
        assert _status(order_repo, order_id) == OrderStatus.PENDING

    def test_unknown_order(self):
        order_repo, _ = _setup()
        with pytest.raises(NotFoundError, match="#42"):
            ApproveOrderHandler(order_repo).handle(ADMIN, "42")


class TestAssign:

    def _handler(self, order_repo):
        return AssignOrderHandler(order_repo, FakeUserRepository(USERS))

    def test_assign_to_staff(self):
        order_repo, product_repo = _setup()
        order_id = create_order(order_repo, product_repo)

        self._handler(order_repo).handle(ADMIN, order_id, "u-staff")

        assert order_repo.get_by_id(order_id).raised_to == "u-staff"

    def test_second_assignment_conflicts(self):
        order_repo, product_repo = _setup()
        order_id = create_order(order_repo, product_repo)
        handler = self._handler(order_repo)
        handler.handle(ADMIN, order_id, "u-staff")

        with pytest.raises(ConflictError):
            handler.handle(ADMIN, order_id, "u-admin")
        assert order_repo.get_by_id(order_id).raised_to == "u-staff"

    def test_client_is_not_staff(self):
        order_repo, product_repo = _setup()
        order_id = create_order(order_repo, product_repo)
        with pytest.raises(NotFoundError, match="u-client"):
            self._handler(order_repo).handle(ADMIN, order_id, "u-client")


class TestCancelAndDelete:

    def test_cancel_active(self):
        order_repo, product_repo = _setup()
        order_id = create_active_order(order_repo, product_repo)

        CancelOrderHandler(order_repo).handle(ADMIN, order_id)

        assert _status(order_repo, order_id) == OrderStatus.CANCELLED

    def test_delete_requires_cancel_first(self):
        order_repo, product_repo = _setup()
        order_id = create_active_order(order_repo, product_repo)
        with pytest.raises(InvalidTransitionError):
            DeleteOrderHandler(order_repo).handle(ADMIN, order_id)

    def test_soft_delete_keeps_record(self):
        order_repo, product_repo = _setup()
        order_id = create_order(order_repo, product_repo)
        CancelOrderHandler(order_repo).handle(ADMIN, order_id)

        DeleteOrderHandler(order_repo).handle(ADMIN, order_id)

        assert ShowOrderHandler(order_repo).handle(order_id).status == "DELETED"

    def test_staff_cannot_cancel(self):
        order_repo, product_repo = _setup()
        order_id = create_order(order_repo, product_repo)
        with pytest.raises(PermissionDeniedError, match="STAFF"):
            CancelOrderHandler(order_repo).handle(STAFF, order_id)


class TestComplete:

    def test_staff_completes_automated_order(self):
        order_repo, product_repo = _setup()
        order_id = create_active_order(order_repo, product_repo)
        order_repo.swap_status([order_id], OrderStatus.ACTIVE, OrderStatus.AUTOMATED)

        CompleteOrderHandler(order_repo).handle(STAFF, order_id)

        assert _status(order_repo, order_id) == OrderStatus.COMPLETED

    def test_active_order_cannot_complete(self):
        order_repo, product_repo = _setup()
        order_id = create_active_order(order_repo, product_repo)
        with pytest.raises(InvalidTransitionError):
            CompleteOrderHandler(order_repo).handle(ADMIN, order_id)


class TestUpdateQuantity:

    def _handler(self, order_repo, product_repo):
        return UpdateOrderQuantityHandler(order_repo, product_repo, PricingEngine())

    def test_reprices_and_reopens_automated_order(self):
        order_repo, product_repo = _setup()
        order_id = create_active_order(order_repo, product_repo)
        order_repo.swap_status([order_id], OrderStatus.ACTIVE, OrderStatus.AUTOMATED)

        self._handler(order_repo, product_repo).handle(ADMIN, order_id, 500)

        order = order_repo.get_by_id(order_id)
        assert order.status == OrderStatus.ACTIVE
        assert order.details.quantity.value == 500
        assert order.net_amount == Money.of("1600.00")

    def test_price_follows_current_catalog(self):
        order_repo, product_repo = _setup()
        order_id = create_active_order(order_repo, product_repo)
        product_repo.get_by_id("p-bc").base_price = Decimal("3.5")

        self._handler(order_repo, product_repo).handle(ADMIN, order_id, 1000)

        assert order_repo.get_by_id(order_id).net_amount == Money.of("4200.00")

    @pytest.mark.parametrize("quantity", [0, -5])
    def test_invalid_quantity_changes_nothing(self, quantity):
        order_repo, product_repo = _setup()
        order_id = create_order(order_repo, product_repo)
        with pytest.raises(ValidationError):
            self._handler(order_repo, product_repo).handle(ADMIN, order_id, quantity)
        order = order_repo.get_by_id(order_id)
        assert order.status == OrderStatus.PENDING
        assert order.details.quantity.value == 1000

    def test_cancelled_order_cannot_be_reopened(self):
        order_repo, product_repo = _setup()
        order_id = create_order(order_repo, product_repo)
        CancelOrderHandler(order_repo).handle(ADMIN, order_id)
        with pytest.raises(InvalidTransitionError):
            self._handler(order_repo, product_repo).handle(ADMIN, order_id, 10)

    def test_finishing_withdrawn_from_catalog(self):
        order_repo, product_repo = _setup()
        order_id = create_active_order(order_repo, product_repo)
        product = product_repo.get_by_id("p-bc")
        product.cost_items = [ci for ci in product.cost_items if ci.value != "matte"]

        with pytest.raises(ValidationError, match="no longer offered"):
            self._handler(order_repo, product_repo).handle(ADMIN, order_id, 10)
        assert order_repo.get_by_id(order_id).details.quantity.value == 1000

    def test_client_cannot_update(self):
        order_repo, product_repo = _setup()
        order_id = create_order(order_repo, product_repo)
        with pytest.raises(PermissionDeniedError):
            self._handler(order_repo, product_repo).handle(CLIENT, order_id, 10)


class TestListOrders:

    def test_filter_by_status(self):
        order_repo, product_repo = _setup()
        create_order(order_repo, product_repo)
        active = create_active_order(order_repo, product_repo)

        dtos = ListOrdersHandler(order_repo).handle("active")

        assert [d.id for d in dtos] == [active]

    def test_unknown_status(self):
        order_repo, _ = _setup()
        with pytest.raises(ValidationError, match="Unknown status"):
            ListOrdersHandler(order_repo).handle("SHIPPED")


class _BatchedAfterRead(FakeOrderRepository):
    """Moves an order to AUTOMATED right after a handler has read it."""

    def __init__(self) -> None:
        super().__init__()
        self.armed = False

    def get_by_id(self, order_id):
        order = super().get_by_id(order_id)
        if self.armed:
            self.armed = False
            self.swap_status([order_id], OrderStatus.ACTIVE, OrderStatus.AUTOMATED)
        return order


class TestConcurrentWrites:

    def test_cancel_does_not_overwrite_a_batch_taken_meanwhile(self):
        order_repo = _BatchedAfterRead()
        order_id = create_active_order(order_repo, FakeProductRepository([business_card()]))
        order_repo.armed = True

        with pytest.raises(ConflictError):
            CancelOrderHandler(order_repo).handle(ADMIN, order_id)

        assert _status(order_repo, order_id) == OrderStatus.AUTOMATED

    def test_stale_save_rejected(self):
        order_repo, product_repo = _setup()
        order_id = create_order(order_repo, product_repo)
        first, second = order_repo.get_by_id(order_id), order_repo.get_by_id(order_id)
        first.approve()
        order_repo.save(first)

        second.cancel()
        with pytest.raises(ConflictError):
            order_repo.save(second)
        assert _status(order_repo, order_id) == OrderStatus.ACTIVE
