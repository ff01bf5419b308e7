"""Application service: Update Product use case.

Descriptive fields, the price and (as a restock) the stock level can
change here.  This is the only writer of stock besides order placement.
"""

from __future__ import annotations

import structlog

from checkout.application.dto import ProductDTO
from checkout.domain.exceptions import ProductNotFoundError
from checkout.domain.model.value_objects import Money
from checkout.domain.repository.unit_of_work import UnitOfWorkFactory

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        category: str | None = None,
        price: str | None = None,
        description: str | None = None,
        image_url: str | None = None,
        stock: int | None = None,
    ) -> ProductDTO:
        """Update a product's details, price and/or stock level.

        This does NOT affect any existing orders; they captured a
        price snapshot at placement time.
        """
        with self._uow_factory() as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)

            product.update_details(
                name=name,
                category=category,
                description=description,
                image_url=image_url,
            )
            if price is not None:
                product.update_price(Money.of(price))
            previous_stock = product.stock
            if stock is not None:
                product.set_stock(stock)

            uow.products.save(product)
            uow.commit()

        if stock is not None:
            logger.info(
                "Product restocked",
                product_id=product_id,
                previous=previous_stock,
                stock=product.stock,
            )
        return ProductDTO.from_product(product)
