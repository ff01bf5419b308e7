"""Application service: List Orders use case (query)."""

from __future__ import annotations

from checkout.application.dto import OrderDTO, PageDTO
from checkout.domain.model.query import OrderFilter, PageRequest, SortSpec
from checkout.domain.repository.unit_of_work import UnitOfWorkFactory


class ListOrdersHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        criteria: OrderFilter | None = None,
        page: PageRequest | None = None,
        sort: SortSpec | None = None,
    ) -> PageDTO[OrderDTO]:
        with self._uow_factory() as uow:
            result = uow.orders.find(
                criteria or OrderFilter(),
                page or PageRequest(),
                sort or SortSpec(),
            )
        return PageDTO.of(result, tuple(OrderDTO.from_order(o) for o in result.items))
