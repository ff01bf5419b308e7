"""Application service: Update Order Status use case.

Permissive by default: any of the five statuses may be set from any
other.  With ``strict=True`` the aggregate's transition table applies.
"""

from __future__ import annotations

import structlog

from checkout.application.dto import OrderDTO
from checkout.domain.exceptions import OrderNotFoundError
from checkout.domain.model.order import OrderStatus
from checkout.domain.repository.unit_of_work import UnitOfWorkFactory

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory, strict: bool = False) -> None:
        self._uow_factory = uow_factory
        self._strict = strict

    def handle(self, order_id: str, new_status: str) -> OrderDTO:
        status = OrderStatus.parse(new_status)

        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)

            previous = order.status
            order.set_status(status, strict=self._strict)
            uow.orders.save(order)
            uow.commit()

        logger.info(
            "Order status updated",
            order_id=order_id,
            previous=previous.value,
            status=status.value,
        )
        return OrderDTO.from_order(order)
