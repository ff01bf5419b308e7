"""Domain service: Order Placement.

Turns a cart into a priced Order while taking stock from the Inventory
Ledger.  It coordinates two aggregates (Product and Order), so it lives
in the domain layer rather than on either of them.

The service works against the repositories of ONE unit of work.  It
never commits: on failure it returns a PlacementError before anything is
saved, and the caller simply does not commit.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from checkout.domain.model.order import CustomerInfo, Order, OrderLineItem
from checkout.domain.model.placement import PlacementError, PlacementErrorKind
from checkout.domain.model.product import Product
from checkout.domain.model.value_objects import Quantity
from checkout.domain.repository.order_repository import OrderRepository
from checkout.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class OrderPlacementService:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo

    def place(
        self,
        customer: CustomerInfo,
        cart: Sequence[tuple[str, Quantity]],
    ) -> Order | PlacementError:
        """Validate *cart*, take stock and stage the new order.

        Entries are processed strictly in cart order.  A product that
        appears twice is checked the second time against the stock left
        after the first entry, not against the aggregated quantity.
        """
        if not cart:
            return PlacementError(PlacementErrorKind.EMPTY_CART)

        # One Product instance per ID, so decrements are seen by later entries.
        working_set: dict[str, Product] = {}
        line_items: list[OrderLineItem] = []

        for product_id, quantity in cart:
            product = working_set.get(product_id)
            if product is None:
                product = self._product_repo.get_by_id(product_id)
                if product is None:
                    return PlacementError(PlacementErrorKind.PRODUCT_NOT_FOUND, product_id)
                working_set[product_id] = product

            problem = product.check_availability(quantity)
            if problem is not None:
                logger.debug(
                    "Cart entry rejected",
                    product_id=product_id,
                    requested=quantity.value,
                    stock=product.stock,
                    kind=problem.value,
                )
                return PlacementError(problem, product.name)

            line_items.append(
                OrderLineItem(
                    product_id=product.id,
                    product_name=product.name,
                    quantity=quantity,
                    unit_price=product.price,  # <-- price snapshot
                )
            )
            product.take_stock(quantity)

        order = Order.place(customer, line_items)

        for product in working_set.values():
            self._product_repo.save(product)
        self._order_repo.save(order)

        return order
