"""JSON-document-backed implementation of ProductRepository.

Operates on the ``products`` section of a unit of work's working copy;
nothing reaches disk until the unit of work commits.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from checkout.domain.model.product import Product
from checkout.domain.model.query import (
    PRODUCT_SORT_KEYS,
    Page,
    PageRequest,
    ProductFilter,
    SortSpec,
    paginate,
)
from checkout.domain.model.value_objects import Money
from checkout.domain.repository.product_repository import ProductRepository
from checkout.infrastructure.persistence.json_store import decoding


class JsonProductRepository(ProductRepository):

    def __init__(self, records: dict[str, dict]) -> None:
        self._records = records

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str, include_inactive: bool = False) -> Product | None:
        raw = self._records.get(product_id)
        if raw is None:
            return None
        product = self._decode(product_id, raw)
        if not product.is_active and not include_inactive:
            return None
        return product

    def find(self, criteria: ProductFilter, page: PageRequest, sort: SortSpec) -> Page[Product]:
        products = [self._decode(pid, raw) for pid, raw in self._records.items()]
        return paginate(products, criteria.matches, sort, PRODUCT_SORT_KEYS, page)

    def save(self, product: Product) -> None:
        self._records[product.id] = self._to_raw(product)

    # --- Serialization --------------------------------------------------------

    def _decode(self, product_id: str, raw: dict) -> Product:
        with decoding("product", product_id):
            return self._to_domain(raw)

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "category": product.category,
            "description": product.description,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock": product.stock,
            "image_url": product.image_url,
            "is_active": product.is_active,
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            category=raw["category"],
            description=raw.get("description", ""),
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            stock=raw["stock"],
            image_url=raw.get("image_url"),
            is_active=raw.get("is_active", True),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
