"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from checkout.domain.repository.unit_of_work import UnitOfWorkFactory
from checkout.infrastructure.config import Settings, get_settings
from checkout.infrastructure.persistence.json_store import JsonDocumentStore
from checkout.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


def unit_of_work_factory(settings: Settings | None = None) -> UnitOfWorkFactory:
    settings = settings or get_settings()
    store = JsonDocumentStore(settings.store_path, lock_timeout=settings.lock_timeout)
    return lambda: JsonUnitOfWork(store)
