"""Application service: List Products use case (query).

Only active products are ever listed.
"""

from __future__ import annotations

from checkout.application.dto import PageDTO, ProductDTO
from checkout.domain.model.query import PageRequest, ProductFilter, SortSpec
from checkout.domain.repository.unit_of_work import UnitOfWorkFactory


class ListProductsHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        criteria: ProductFilter | None = None,
        page: PageRequest | None = None,
        sort: SortSpec | None = None,
    ) -> PageDTO[ProductDTO]:
        with self._uow_factory() as uow:
            result = uow.products.find(
                criteria or ProductFilter(),
                page or PageRequest(),
                sort or SortSpec(),
            )
        return PageDTO.of(result, tuple(ProductDTO.from_product(p) for p in result.items))
