"""Application service: Place Order use case.

Runs the placement domain service inside a single unit of work and
commits only when every cart entry was accepted.  This is the only
place that decides whether a placement becomes durable.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from checkout.application.dto import CartItemSpec, OrderSummaryDTO
from checkout.domain.exceptions import StorageFailure
from checkout.domain.model.order import CustomerInfo
from checkout.domain.model.placement import (
    PlacementError,
    PlacementErrorKind,
    PlacementResult,
)
from checkout.domain.model.value_objects import Quantity
from checkout.domain.repository.unit_of_work import UnitOfWorkFactory
from checkout.domain.service.order_placement_service import OrderPlacementService

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        customer: CustomerInfo,
        cart: Sequence[CartItemSpec] | None,
    ) -> PlacementResult[OrderSummaryDTO]:
        """Place an order for *cart*.

        Steps:
        1. Reject an empty cart without touching storage.
        2. Validate quantities (ValidationError, also before storage).
        3. Validate stock, take it and stage the order in one unit of work.
        4. Commit, or let the unit of work roll back on any failure.
        """
        if not cart:
            logger.warning("Order rejected", kind=PlacementErrorKind.EMPTY_CART.value)
            return PlacementResult.failure(PlacementErrorKind.EMPTY_CART)

        entries = [(spec.product_id, Quantity(spec.quantity)) for spec in cart]

        try:
            with self._uow_factory() as uow:
                outcome = OrderPlacementService(uow.products, uow.orders).place(
                    customer, entries
                )
                if isinstance(outcome, PlacementError):
                    logger.warning(
                        "Order rejected",
                        kind=outcome.kind.value,
                        subject=outcome.subject,
                        customer_email=customer.email,
                    )
                    return PlacementResult(error=outcome)
                uow.commit()
        except StorageFailure:
            logger.exception("Order placement failed in storage", customer_email=customer.email)
            return PlacementResult.failure(PlacementErrorKind.STORAGE_FAILURE)

        logger.info(
            "Order placed",
            order_id=outcome.id,
            total_amount=str(outcome.total_amount.amount),
            line_items=len(outcome.items),
        )
        return PlacementResult.success(
            OrderSummaryDTO(
                id=outcome.id,
                total_amount=f"{outcome.total_amount.amount:.2f}",
                status=outcome.status.value,
            )
        )
