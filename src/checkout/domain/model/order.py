"""Order aggregate: an order header that owns its line items.

Orders are created exactly once, by the placement transaction, together
with their line items.  After that only ``status`` changes.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from checkout.domain.exceptions import ValidationError
from checkout.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)

    @staticmethod
    def parse(raw: str) -> OrderStatus:
        try:
            return OrderStatus(raw.strip().lower())
        except (ValueError, AttributeError) as exc:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Invalid order status {raw!r} (expected one of: {allowed})"
            ) from exc


# pending -> confirmed -> shipped -> delivered, cancelled from any non-terminal
TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class CustomerInfo:
    """Contact and shipping details, opaque to the core."""

    name: str
    email: str
    contact: str
    address: str
    zip_code: str
    city: str
    state: str


@dataclass(frozen=True)
class OrderLineItem:
    """Captures one product, its quantity and its price at placement time.

    Line items reference a product but do not own it.  ``unit_price`` is
    a snapshot, so later price changes never reach an existing order.
    """

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at placement time
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for a placed order.

    Use ``Order.place()`` for new orders; it computes the total from the
    line items.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: str
    customer: CustomerInfo
    items: tuple[OrderLineItem, ...]
    total_amount: Money
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(customer: CustomerInfo, items: list[OrderLineItem]) -> Order:
        """Create a new pending order; the total is always computed here."""
        if not items:
            raise ValidationError("Order must contain at least one item")

        total = Money.total(
            (item.line_total for item in items),
            currency=items[0].unit_price.currency,
        )

        now = datetime.now(timezone.utc)
        return Order(
            id=str(uuid.uuid4()),
            customer=customer,
            items=tuple(items),
            total_amount=total,
            created_at=now,
            updated_at=now,
        )

    # --- State transitions ----------------------------------------------------

    def can_transition_to(self, new_status: OrderStatus) -> bool:
        return new_status in TRANSITIONS[self.status]

    def set_status(self, new_status: OrderStatus, strict: bool = False) -> None:
        """Overwrite the status.

        Any status may be set from any other unless *strict* is given, in
        which case only the moves in ``TRANSITIONS`` are allowed.
        """
        if strict and not self.can_transition_to(new_status):
            raise ValidationError(
                f"Cannot move order from {self.status.value} to {new_status.value}"
            )
        self.status = new_status
        self.updated_at = datetime.now(timezone.utc)
