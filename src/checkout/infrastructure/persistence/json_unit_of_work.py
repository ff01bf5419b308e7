"""Unit of work over a JsonDocumentStore.

On enter: take the store's thread and file locks and load a private
working copy.
On commit: write the working copy back in one atomic replace.
On exit: drop the working copy and release both locks.
"""

from __future__ import annotations

from contextlib import ExitStack

from checkout.domain.repository.unit_of_work import UnitOfWork
from checkout.infrastructure.persistence.json_order_repository import JsonOrderRepository
from checkout.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from checkout.infrastructure.persistence.json_store import JsonDocumentStore


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store
        self._document: dict[str, dict[str, dict]] | None = None
        self._held = ExitStack()

    def _begin(self) -> None:
        with ExitStack() as stack:
            stack.enter_context(self._store.exclusive())
            self._document = self._store.read()
            # Keep the locks past this block; _end releases them.
            self._held = stack.pop_all()
        self.products = JsonProductRepository(self._document["products"])
        self.orders = JsonOrderRepository(self._document["orders"])

    def _commit(self) -> None:
        if self._document is None:
            raise RuntimeError("Unit of work is not active")
        self._store.write(self._document)

    def rollback(self) -> None:
        self._document = None

    def _end(self) -> None:
        self._document = None
        self._held.close()
