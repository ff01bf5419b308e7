"""Application service: Seed Catalog use case.

Loads a fixed set of sample products for demos and local development.
Each sample gets an ID derived from its name, so seeding twice adds
nothing the second time.
"""

from __future__ import annotations

import uuid

import structlog

from checkout.domain.model.product import Product
from checkout.domain.model.value_objects import Money
from checkout.domain.repository.unit_of_work import UnitOfWorkFactory

logger = structlog.get_logger(__name__)

_SEED_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "checkout-engine/sample-products")

# (name, category, price, stock, description, active)
SAMPLE_PRODUCTS = (
    (
        'MacBook Pro 16"', "Electronics", "2499.99", 10,
        "Apple MacBook Pro 16-inch with M2 Pro chip, 16GB RAM, 512GB SSD.",
        True,
    ),
    (
        "iPhone 15 Pro", "Electronics", "999.99", 25,
        "iPhone 15 Pro with A17 Pro chip, 128GB storage and 3x optical zoom.",
        True,
    ),
    (
        "The Complete Guide to Node.js", "Books", "49.99", 50,
        "Node.js development from fundamentals to Express, databases and deployment.",
        True,
    ),
    (
        "Wireless Bluetooth Headphones", "Electronics", "199.99", 30,
        "Wireless headphones with active noise cancellation and 30-hour battery life.",
        True,
    ),
    (
        "JavaScript: The Definitive Guide", "Books", "59.99", 20,
        "Reference and guide to JavaScript, covering ES2020 and beyond.",
        True,
    ),
    (
        "Gaming Mechanical Keyboard", "Electronics", "149.99", 15,
        "RGB backlit mechanical keyboard with blue switches and aluminum frame.",
        True,
    ),
    (
        "Discontinued Product", "Electronics", "99.99", 0,
        "This product is no longer available.",
        False,
    ),
)


def sample_product_id(name: str) -> str:
    return str(uuid.uuid5(_SEED_NAMESPACE, name))


class SeedCatalogHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> int:
        """Add every sample product not already stored; return how many were added."""
        added = 0
        with self._uow_factory() as uow:
            for name, category, price, stock, description, active in SAMPLE_PRODUCTS:
                product_id = sample_product_id(name)
                if uow.products.get_by_id(product_id, include_inactive=True) is not None:
                    continue
                product = Product.create(
                    name=name,
                    category=category,
                    price=Money.of(price),
                    stock=stock,
                    description=description,
                    product_id=product_id,
                )
                if not active:
                    product.deactivate()
                uow.products.save(product)
                added += 1
            uow.commit()

        logger.info("Catalog seeded", added=added, samples=len(SAMPLE_PRODUCTS))
        return added
