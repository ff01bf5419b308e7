"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer and are always reached through a unit of work.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from checkout.domain.model.product import Product
from checkout.domain.model.query import Page, PageRequest, ProductFilter, SortSpec


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str, include_inactive: bool = False) -> Product | None:
        """Return a product by its ID, or None.

        Inactive products are treated as missing unless *include_inactive*.
        Checkout and catalog reads share this active-only lookup.
        """

    @abstractmethod
    def find(self, criteria: ProductFilter, page: PageRequest, sort: SortSpec) -> Page[Product]:
        """Return one page of active products matching *criteria*."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""
