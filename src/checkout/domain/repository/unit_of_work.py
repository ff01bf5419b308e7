"""Abstract unit of work: the explicit transaction handle.

Every use case opens its own unit of work, reads and writes through the
repositories it exposes, and calls ``commit()`` to make the changes
durable.  Leaving the ``with`` block without committing (including on an
exception) rolls everything back.

The store behind a unit of work is responsible for isolation: two units
of work that touch the same products must not both commit over stale
stock.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from checkout.domain.repository.order_repository import OrderRepository
from checkout.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):

    products: ProductRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        self._committed = False
        self._begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if not self._committed:
                self.rollback()
        finally:
            self._end()

    def commit(self) -> None:
        """Make every change in this unit of work durable, atomically.

        Raises StorageFailure if the store cannot persist the changes;
        in that case nothing is persisted.
        """
        self._commit()
        self._committed = True

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted change."""

    @abstractmethod
    def _begin(self) -> None:
        """Acquire isolation and load the working set."""

    @abstractmethod
    def _commit(self) -> None:
        ...

    def _end(self) -> None:
        """Release whatever ``_begin`` acquired."""


UnitOfWorkFactory = Callable[[], UnitOfWork]
