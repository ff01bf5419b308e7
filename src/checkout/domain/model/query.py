"""Typed filter, sort and paging specifications for list queries.

Each filter field maps to exactly one predicate; repositories evaluate
them through ``matches()`` so every storage backend filters the same way.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from checkout.domain.exceptions import ValidationError
from checkout.domain.model.order import Order, OrderStatus
from checkout.domain.model.product import Product

T = TypeVar("T")

MAX_PAGE_SIZE = 100


def _contains(needle: str | None, haystack: str) -> bool:
    return needle is None or needle.lower() in haystack.lower()


@dataclass(frozen=True)
class OrderFilter:
    id_contains: str | None = None
    name_contains: str | None = None
    email_contains: str | None = None
    status: OrderStatus | None = None

    def matches(self, order: Order) -> bool:
        return (
            _contains(self.id_contains, order.id)
            and _contains(self.name_contains, order.customer.name)
            and _contains(self.email_contains, order.customer.email)
            and (self.status is None or order.status is self.status)
        )


@dataclass(frozen=True)
class ProductFilter:
    """Filter for catalog listings; inactive products never match."""

    ids: frozenset[str] | None = None
    name_contains: str | None = None
    category: str | None = None

    def matches(self, product: Product) -> bool:
        return (
            product.is_active
            and (self.ids is None or product.id in self.ids)
            and _contains(self.name_contains, product.name)
            and (self.category is None or product.category == self.category)
        )


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = 10

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError("Page must be 1 or greater")
        if not 1 <= self.limit <= MAX_PAGE_SIZE:
            raise ValidationError(f"Page size must be between 1 and {MAX_PAGE_SIZE}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


# Sortable fields per entity, mapped to the key used for ordering.
ORDER_SORT_KEYS: dict[str, Callable[[Order], object]] = {
    "created_at": lambda o: o.created_at,
    "updated_at": lambda o: o.updated_at,
    "total_amount": lambda o: o.total_amount.amount,
    "name": lambda o: o.customer.name.lower(),
    "email": lambda o: o.customer.email.lower(),
    "status": lambda o: o.status.value,
}

PRODUCT_SORT_KEYS: dict[str, Callable[[Product], object]] = {
    "created_at": lambda p: p.created_at,
    "updated_at": lambda p: p.updated_at,
    "name": lambda p: p.name.lower(),
    "price": lambda p: p.price.amount,
    "stock": lambda p: p.stock,
    "category": lambda p: p.category.lower(),
}


@dataclass(frozen=True)
class SortSpec:
    """Sort field and direction; newest first by default."""

    field: str = "created_at"
    descending: bool = True

    def key_for(self, allowed: dict[str, Callable[[T], object]]) -> Callable[[T], object]:
        try:
            return allowed[self.field]
        except KeyError:
            raise ValidationError(
                f"Cannot sort by {self.field!r} (allowed: {', '.join(sorted(allowed))})"
            ) from None


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit)


def paginate(
    rows: list[T],
    predicate: Callable[[T], bool],
    sort: SortSpec,
    sort_keys: dict[str, Callable[[T], object]],
    page: PageRequest,
) -> Page[T]:
    """Filter, sort and slice *rows* in memory."""
    key = sort.key_for(sort_keys)
    matched = sorted(
        (row for row in rows if predicate(row)),
        key=key,
        reverse=sort.descending,
    )
    return Page(
        items=matched[page.offset:page.offset + page.limit],
        page=page.page,
        limit=page.limit,
        total=len(matched),
    )
