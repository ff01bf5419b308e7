"""JSON-document-backed implementation of OrderRepository.

Line items are stored inline with their order, so an order and its items
are always written (and rolled back) together.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from checkout.domain.model.order import CustomerInfo, Order, OrderLineItem, OrderStatus
from checkout.domain.model.query import (
    ORDER_SORT_KEYS,
    OrderFilter,
    Page,
    PageRequest,
    SortSpec,
    paginate,
)
from checkout.domain.model.value_objects import Money, Quantity
from checkout.domain.repository.order_repository import OrderRepository
from checkout.infrastructure.persistence.json_store import decoding


class JsonOrderRepository(OrderRepository):

    def __init__(self, records: dict[str, dict]) -> None:
        self._records = records

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        raw = self._records.get(order_id)
        return self._decode(order_id, raw) if raw is not None else None

    def find(self, criteria: OrderFilter, page: PageRequest, sort: SortSpec) -> Page[Order]:
        orders = [self._decode(oid, raw) for oid, raw in self._records.items()]
        return paginate(orders, criteria.matches, sort, ORDER_SORT_KEYS, page)

    def save(self, order: Order) -> None:
        self._records[order.id] = self._to_raw(order)

    # --- Serialization --------------------------------------------------------

    def _decode(self, order_id: str, raw: dict) -> Order:
        with decoding("order", order_id):
            return self._to_domain(raw)

    @staticmethod
    def _to_raw(order: Order) -> dict:
        customer = order.customer
        return {
            "id": order.id,
            "name": customer.name,
            "email": customer.email,
            "contact": customer.contact,
            "address": customer.address,
            "zip_code": customer.zip_code,
            "city": customer.city,
            "state": customer.state,
            "total_amount": str(order.total_amount.amount),
            "currency": order.total_amount.currency,
            "status": order.status.value,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "items": [
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = tuple(
            OrderLineItem(
                id=i["id"],
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
            )
            for i in raw["items"]
        )
        return Order(
            id=raw["id"],
            customer=CustomerInfo(
                name=raw["name"],
                email=raw["email"],
                contact=raw["contact"],
                address=raw["address"],
                zip_code=raw["zip_code"],
                city=raw["city"],
                state=raw["state"],
            ),
            items=items,
            total_amount=Money(Decimal(raw["total_amount"]), raw.get("currency", "USD")),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
