"""Integration tests for the UpdateOrderStatus use case."""

import pytest

from checkout.application.dto import CartItemSpec
from checkout.application.place_order import PlaceOrderHandler
from checkout.application.show_order import ShowOrderHandler
from checkout.application.update_order_status import UpdateOrderStatusHandler
from checkout.domain.exceptions import OrderNotFoundError, ValidationError
from checkout.domain.model.order import CustomerInfo, OrderStatus
from checkout.domain.model.product import Product
from checkout.domain.model.value_objects import Money
from tests.fakes import FakeDatabase

CUSTOMER = CustomerInfo("Alice", "alice@example.com", "555", "1 Main St", "12345", "Springfield", "IL")


def _setup_with_order() -> tuple[FakeDatabase, str]:
    db = FakeDatabase([
        Product(id="p1", name="Widget", category="Tools", price=Money.of("15"), stock=10),
    ])
    result = PlaceOrderHandler(db.uow_factory).handle(CUSTOMER, [CartItemSpec("p1", 1)])
    return db, result.value.id


class TestUpdateOrderStatus:

    def test_round_trip(self):
        db, order_id = _setup_with_order()
        UpdateOrderStatusHandler(db.uow_factory).handle(order_id, "confirmed")

        dto = ShowOrderHandler(db.uow_factory).handle(order_id)
        assert dto.status == "confirmed"

    def test_permissive_by_default(self):
        db, order_id = _setup_with_order()
        handler = UpdateOrderStatusHandler(db.uow_factory)
        handler.handle(order_id, "delivered")
        dto = handler.handle(order_id, "pending")
        assert dto.status == "pending"

    def test_only_status_changes(self):
        db, order_id = _setup_with_order()
        before = ShowOrderHandler(db.uow_factory).handle(order_id)
        after = UpdateOrderStatusHandler(db.uow_factory).handle(order_id, "shipped")
        assert after.items == before.items
        assert after.total_amount == before.total_amount
        assert after.created_at == before.created_at
        assert db.stock_of("p1") == 9

    def test_unknown_order_leaves_no_trace(self):
        db, _ = _setup_with_order()
        commits = db.commits
        with pytest.raises(OrderNotFoundError, match="Order nope not found"):
            UpdateOrderStatusHandler(db.uow_factory).handle("nope", "confirmed")
        assert db.commits == commits
        assert "nope" not in db.orders

    def test_unknown_status_rejected(self):
        db, order_id = _setup_with_order()
        with pytest.raises(ValidationError, match="Invalid order status"):
            UpdateOrderStatusHandler(db.uow_factory).handle(order_id, "lost")
        assert db.orders[order_id].status is OrderStatus.PENDING


class TestUpdateOrderStatusStrict:

    def test_allowed_transition(self):
        db, order_id = _setup_with_order()
        dto = UpdateOrderStatusHandler(db.uow_factory, strict=True).handle(order_id, "confirmed")
        assert dto.status == "confirmed"

    def test_disallowed_transition_writes_nothing(self):
        db, order_id = _setup_with_order()
        commits = db.commits
        with pytest.raises(ValidationError, match="Cannot move order"):
            UpdateOrderStatusHandler(db.uow_factory, strict=True).handle(order_id, "delivered")
        assert db.commits == commits
        assert db.orders[order_id].status is OrderStatus.PENDING
