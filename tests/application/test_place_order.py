"""Integration tests for the PlaceOrder use case.

Uses the in-memory fake database, no file I/O.
"""

import pytest

from checkout.application.dto import CartItemSpec, OrderSummaryDTO
from checkout.application.place_order import PlaceOrderHandler
from checkout.application.show_order import ShowOrderHandler
from checkout.domain.exceptions import ValidationError
from checkout.domain.model.order import CustomerInfo
from checkout.domain.model.placement import PlacementErrorKind
from checkout.domain.model.product import Product
from checkout.domain.model.value_objects import Money
from tests.fakes import FakeDatabase

CUSTOMER = CustomerInfo(
    name="Customer",
    email="customer@example.com",
    contact="1234567890",
    address="123 Address",
    zip_code="12345",
    city="City",
    state="State",
)


def _setup(products: list[Product] | None = None) -> tuple[PlaceOrderHandler, FakeDatabase]:
    """Build handler over a fake database, optionally pre-loaded with products."""
    if products is None:
        products = [
            Product(id="product-1", name="Product 1", category="Tools", price=Money.of("100"), stock=10),
            Product(id="product-2", name="Product 2", category="Tools", price=Money.of("50"), stock=5),
            Product(id="product-3", name="Product 3", category="Books", price=Money.of("20"), stock=0),
        ]
    db = FakeDatabase(products)
    return PlaceOrderHandler(db.uow_factory), db


class TestPlaceOrderHappyPath:

    def test_returns_summary_with_computed_total(self):
        handler, _ = _setup()
        result = handler.handle(CUSTOMER, [
            CartItemSpec("product-1", 2),
            CartItemSpec("product-2", 1),
        ])
        assert result.ok
        assert isinstance(result.value, OrderSummaryDTO)
        assert result.value.total_amount == "250.00"
        assert result.value.status == "pending"

    def test_stock_conservation(self):
        handler, db = _setup()
        handler.handle(CUSTOMER, [CartItemSpec("product-1", 3), CartItemSpec("product-2", 5)])
        assert db.stock_of("product-1") == 7
        assert db.stock_of("product-2") == 0
        assert db.stock_of("product-3") == 0

    def test_persists_order_and_items_in_one_commit(self):
        handler, db = _setup()
        result = handler.handle(CUSTOMER, [CartItemSpec("product-1", 1), CartItemSpec("product-2", 2)])
        assert db.commits == 1
        saved = db.orders[result.value.id]
        assert [i.product_id for i in saved.items] == ["product-1", "product-2"]
        assert saved.customer == CUSTOMER

    def test_repeated_product_decrements_sequentially(self):
        product = Product(id="p1", name="Widget", category="Tools", price=Money.of("10"), stock=6)
        handler, db = _setup([product])
        result = handler.handle(CUSTOMER, [CartItemSpec("p1", 2), CartItemSpec("p1", 3)])
        assert result.ok
        assert db.stock_of("p1") == 1
        assert result.value.total_amount == "50.00"

    def test_resubmitting_same_cart_is_a_new_order(self):
        handler, db = _setup()
        first = handler.handle(CUSTOMER, [CartItemSpec("product-1", 1)])
        second = handler.handle(CUSTOMER, [CartItemSpec("product-1", 1)])
        assert first.value.id != second.value.id
        assert db.stock_of("product-1") == 8


class TestPlaceOrderPriceLock:

    def test_price_snapshot_survives_price_change(self):
        handler, db = _setup()
        result = handler.handle(CUSTOMER, [CartItemSpec("product-1", 1)])

        db.products["product-1"].update_price(Money.of("999.99"))

        dto = ShowOrderHandler(db.uow_factory).handle(result.value.id)
        assert dto.total_amount == "$100.00"
        assert dto.items[0].unit_price == "$100.00"


class TestPlaceOrderRejections:

    @pytest.mark.parametrize("cart", [[], None])
    def test_empty_cart_does_not_touch_storage(self, cart):
        handler, db = _setup()
        result = handler.handle(CUSTOMER, cart)
        assert result.error.kind is PlacementErrorKind.EMPTY_CART
        assert db.units_opened == 0

    def test_missing_product_rolls_back_earlier_entries(self):
        handler, db = _setup()
        result = handler.handle(CUSTOMER, [CartItemSpec("product-1", 2), CartItemSpec("missing", 1)])
        assert result.error.kind is PlacementErrorKind.PRODUCT_NOT_FOUND
        assert result.error.message == "Product missing not found"
        assert db.stock_of("product-1") == 10
        assert db.orders == {}
        assert db.commits == 0

    def test_zero_stock_is_out_of_stock(self):
        handler, _ = _setup()
        result = handler.handle(CUSTOMER, [CartItemSpec("product-3", 1)])
        assert result.error.kind is PlacementErrorKind.OUT_OF_STOCK
        assert result.error.message == "Out of stock for product Product 3"

    def test_low_stock_is_insufficient(self):
        product = Product(id="p1", name="Widget", category="Tools", price=Money.of("10"), stock=1)
        handler, _ = _setup([product])
        result = handler.handle(CUSTOMER, [CartItemSpec("p1", 2)])
        assert result.error.kind is PlacementErrorKind.INSUFFICIENT_STOCK
        assert result.error.message == "Insufficient stock for product Widget"

    def test_repeated_product_exceeding_remaining_stock(self):
        product = Product(id="p1", name="Widget", category="Tools", price=Money.of("10"), stock=4)
        handler, db = _setup([product])
        result = handler.handle(CUSTOMER, [CartItemSpec("p1", 2), CartItemSpec("p1", 3)])
        assert result.error.kind is PlacementErrorKind.INSUFFICIENT_STOCK
        assert db.stock_of("p1") == 4

    def test_inactive_product_cannot_be_ordered(self):
        product = Product(
            id="p1", name="Widget", category="Tools", price=Money.of("10"), stock=4, is_active=False,
        )
        handler, db = _setup([product])
        result = handler.handle(CUSTOMER, [CartItemSpec("p1", 1)])
        assert result.error.kind is PlacementErrorKind.PRODUCT_NOT_FOUND
        assert db.stock_of("p1") == 4

    def test_non_positive_quantity_rejected_before_storage(self):
        handler, db = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            handler.handle(CUSTOMER, [CartItemSpec("product-1", 0)])
        assert db.units_opened == 0


class TestPlaceOrderStorageFailure:

    def test_commit_failure_is_opaque_and_persists_nothing(self):
        handler, db = _setup()
        db.fail_on_commit = True
        result = handler.handle(CUSTOMER, [CartItemSpec("product-1", 2)])
        assert result.error.kind is PlacementErrorKind.STORAGE_FAILURE
        assert result.error.message == "Order could not be placed"
        assert db.stock_of("product-1") == 10
        assert db.orders == {}
