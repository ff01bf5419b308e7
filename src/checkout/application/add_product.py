"""Application service: Add Product use case."""

from __future__ import annotations

import structlog

from checkout.application.dto import ProductDTO
from checkout.domain.model.product import Product
from checkout.domain.model.value_objects import Money
from checkout.domain.repository.unit_of_work import UnitOfWorkFactory

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        name: str,
        category: str,
        price: str,
        stock: int,
        description: str = "",
        image_url: str | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog with its opening stock."""
        product = Product.create(
            name=name,
            category=category,
            price=Money.of(price),
            stock=stock,
            description=description,
            image_url=image_url,
        )

        with self._uow_factory() as uow:
            uow.products.save(product)
            uow.commit()

        logger.info("Product added", product_id=product.id, name=product.name, stock=product.stock)
        return ProductDTO.from_product(product)
