"""Application service: Deactivate Product use case.

Soft delete.  The product row stays (existing line items still point at
it) but it disappears from the catalog and can no longer be ordered.
"""

from __future__ import annotations

import structlog

from checkout.domain.exceptions import ProductNotFoundError
from checkout.domain.repository.unit_of_work import UnitOfWorkFactory

logger = structlog.get_logger(__name__)


class DeactivateProductHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, product_id: str) -> None:
        with self._uow_factory() as uow:
            product = uow.products.get_by_id(product_id, include_inactive=True)
            if product is None:
                raise ProductNotFoundError(product_id)

            product.deactivate()
            uow.products.save(product)
            uow.commit()

        logger.info("Product deactivated", product_id=product_id)
