"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from checkout.domain.model.order import Order
from checkout.domain.model.query import OrderFilter, Page, PageRequest, SortSpec


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def find(self, criteria: OrderFilter, page: PageRequest, sort: SortSpec) -> Page[Order]:
        """Return one page of orders matching *criteria*."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order together with its line items."""
