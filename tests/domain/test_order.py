"""Unit tests for the Order aggregate and its status rules."""

import pytest

from checkout.domain.exceptions import ValidationError
from checkout.domain.model.order import CustomerInfo, Order, OrderLineItem, OrderStatus
from checkout.domain.model.value_objects import Money, Quantity

CUSTOMER = CustomerInfo(
    name="Alice",
    email="alice@example.com",
    contact="555-0100",
    address="1 Main St",
    zip_code="12345",
    city="Springfield",
    state="IL",
)


def _make_item(name: str = "Widget", qty: int = 1, price: str = "15.00") -> OrderLineItem:
    """Helper to build a valid line item."""
    return OrderLineItem(
        product_id="1",
        product_name=name,
        quantity=Quantity(qty),
        unit_price=Money.of(price),
    )


class TestOrderPlace:

    def test_happy_path(self):
        order = Order.place(CUSTOMER, [_make_item(qty=2, price="10.00")])
        assert order.customer == CUSTOMER
        assert order.status == OrderStatus.PENDING
        assert len(order.items) == 1
        assert order.total_amount == Money.of("20.00")
        assert order.id

    def test_total_is_sum_of_line_items(self):
        order = Order.place(CUSTOMER, [
            _make_item("Widget", qty=2, price="100"),
            _make_item("Gadget", qty=1, price="50"),
        ])
        assert order.total_amount == Money.of("250")

    def test_items_keep_cart_order(self):
        order = Order.place(CUSTOMER, [_make_item("B"), _make_item("A")])
        assert [i.product_name for i in order.items] == ["B", "A"]

    def test_empty_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.place(CUSTOMER, [])

    def test_line_items_get_ids(self):
        order = Order.place(CUSTOMER, [_make_item(), _make_item()])
        assert order.items[0].id != order.items[1].id


class TestOrderStatusParse:

    def test_parse_is_case_insensitive(self):
        assert OrderStatus.parse(" Confirmed ") is OrderStatus.CONFIRMED

    def test_unknown_rejected(self):
        with pytest.raises(ValidationError, match="Invalid order status"):
            OrderStatus.parse("lost")

    def test_terminal_states(self):
        assert OrderStatus.DELIVERED.is_terminal
        assert OrderStatus.CANCELLED.is_terminal
        assert not OrderStatus.SHIPPED.is_terminal


class TestOrderSetStatus:

    def test_permissive_by_default(self):
        order = Order.place(CUSTOMER, [_make_item()])
        order.set_status(OrderStatus.DELIVERED)
        order.set_status(OrderStatus.PENDING)
        assert order.status == OrderStatus.PENDING

    def test_set_status_bumps_updated_at(self):
        order = Order.place(CUSTOMER, [_make_item()])
        before = order.updated_at
        order.set_status(OrderStatus.CONFIRMED)
        assert order.updated_at >= before

    def test_strict_allows_forward_move(self):
        order = Order.place(CUSTOMER, [_make_item()])
        order.set_status(OrderStatus.CONFIRMED, strict=True)
        order.set_status(OrderStatus.SHIPPED, strict=True)
        order.set_status(OrderStatus.DELIVERED, strict=True)
        assert order.status == OrderStatus.DELIVERED

    def test_strict_allows_cancel_from_non_terminal(self):
        order = Order.place(CUSTOMER, [_make_item()])
        order.set_status(OrderStatus.SHIPPED)
        order.set_status(OrderStatus.CANCELLED, strict=True)
        assert order.status == OrderStatus.CANCELLED

    def test_strict_rejects_skip(self):
        order = Order.place(CUSTOMER, [_make_item()])
        with pytest.raises(ValidationError, match="from pending to shipped"):
            order.set_status(OrderStatus.SHIPPED, strict=True)
        assert order.status == OrderStatus.PENDING

    def test_strict_rejects_leaving_terminal(self):
        order = Order.place(CUSTOMER, [_make_item()])
        order.set_status(OrderStatus.CANCELLED)
        assert not order.can_transition_to(OrderStatus.PENDING)
        with pytest.raises(ValidationError):
            order.set_status(OrderStatus.PENDING, strict=True)
