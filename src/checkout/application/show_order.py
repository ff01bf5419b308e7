"""Application service: Show Order use case (query)."""

from __future__ import annotations

from checkout.application.dto import OrderDTO
from checkout.domain.exceptions import OrderNotFoundError
from checkout.domain.repository.unit_of_work import UnitOfWorkFactory


class ShowOrderHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, order_id: str) -> OrderDTO:
        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return OrderDTO.from_order(order)
