"""Outcome types for order placement.

Cart validation failures are ordinary, user-correctable outcomes, so the
placement transaction returns them as values instead of raising. The caller
switches on ``PlacementError.kind`` rather than parsing a message.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class PlacementErrorKind(Enum):
    EMPTY_CART = "empty_cart"
    PRODUCT_NOT_FOUND = "product_not_found"
    OUT_OF_STOCK = "out_of_stock"
    INSUFFICIENT_STOCK = "insufficient_stock"
    STORAGE_FAILURE = "storage_failure"


@dataclass(frozen=True)
class PlacementError:
    """Why a cart could not be turned into an order.

    ``subject`` is the offending product ID (not found) or product name
    (stock errors); it is ``None`` for an empty cart or a storage failure.
    """

    kind: PlacementErrorKind
    subject: str | None = None

    @property
    def is_user_error(self) -> bool:
        return self.kind is not PlacementErrorKind.STORAGE_FAILURE

    @property
    def message(self) -> str:
        if self.kind is PlacementErrorKind.EMPTY_CART:
            return "Shopping cart is empty"
        if self.kind is PlacementErrorKind.PRODUCT_NOT_FOUND:
            return f"Product {self.subject} not found"
        if self.kind is PlacementErrorKind.OUT_OF_STOCK:
            return f"Out of stock for product {self.subject}"
        if self.kind is PlacementErrorKind.INSUFFICIENT_STOCK:
            return f"Insufficient stock for product {self.subject}"
        return "Order could not be placed"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class PlacementResult(Generic[T]):
    """Either a value (on success) or a PlacementError, never both."""

    value: T | None = None
    error: PlacementError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @staticmethod
    def success(value: T) -> PlacementResult[T]:
        return PlacementResult(value=value)

    @staticmethod
    def failure(kind: PlacementErrorKind, subject: str | None = None) -> PlacementResult[T]:
        return PlacementResult(error=PlacementError(kind, subject))
