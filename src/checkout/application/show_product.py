"""Application service: Show Product use case (query)."""

from __future__ import annotations

from checkout.application.dto import ProductDTO
from checkout.domain.exceptions import ProductNotFoundError
from checkout.domain.repository.unit_of_work import UnitOfWorkFactory


class ShowProductHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, product_id: str) -> ProductDTO:
        with self._uow_factory() as uow:
            product = uow.products.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return ProductDTO.from_product(product)
