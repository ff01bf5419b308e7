"""Product aggregate: the Inventory Ledger entry for one catalog item.

Products live independently of orders. Prices and descriptions change
over time.  Order placement only ever takes ``stock`` (quantity-on-hand)
down; the one way back up is an explicit catalog restock.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from checkout.domain.exceptions import ValidationError
from checkout.domain.model.placement import PlacementErrorKind
from checkout.domain.model.value_objects import Money, Quantity


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _check_stock(stock: int) -> None:
    if isinstance(stock, bool) or not isinstance(stock, int):
        raise ValidationError("Product stock must be an integer")
    if stock < 0:
        raise ValidationError("Product stock cannot be negative")


@dataclass
class Product:
    """Aggregate root for a catalog item and its quantity-on-hand.

    Invariants:
    - ``stock`` is never negative
    - ``price`` is never negative (enforced by ``Money``)
    """

    id: str
    name: str
    category: str
    price: Money
    stock: int
    description: str = ""
    image_url: str | None = None
    is_active: bool = True
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        name: str,
        category: str,
        price: Money,
        stock: int,
        description: str = "",
        image_url: str | None = None,
        product_id: str | None = None,
    ) -> Product:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not category or not category.strip():
            raise ValidationError("Product category is required")
        _check_stock(stock)

        return Product(
            id=product_id or str(uuid.uuid4()),
            name=name.strip(),
            category=category.strip(),
            price=price,
            stock=stock,
            description=description,
            image_url=image_url,
        )

    # --- Stock ----------------------------------------------------------------

    def check_availability(self, quantity: Quantity) -> PlacementErrorKind | None:
        """Return the stock problem for *quantity*, or None if it can be taken.

        Zero stock and short stock are reported as different kinds.
        """
        if self.stock == 0:
            return PlacementErrorKind.OUT_OF_STOCK
        if self.stock < quantity.value:
            return PlacementErrorKind.INSUFFICIENT_STOCK
        return None

    def take_stock(self, quantity: Quantity) -> None:
        """Decrement quantity-on-hand. Never lets stock go negative."""
        if quantity.value > self.stock:
            raise ValidationError(
                f"Cannot take {quantity.value} of {self.name} "
                f"(only {self.stock} in stock)"
            )
        self.stock -= quantity.value
        self.updated_at = _utcnow()

    # --- Catalog maintenance --------------------------------------------------

    def update_details(
        self,
        name: str | None = None,
        category: str | None = None,
        description: str | None = None,
        image_url: str | None = None,
    ) -> None:
        if name is not None:
            if not name.strip():
                raise ValidationError("Product name cannot be blank")
            self.name = name.strip()
        if category is not None:
            if not category.strip():
                raise ValidationError("Product category cannot be blank")
            self.category = category.strip()
        if description is not None:
            self.description = description
        if image_url is not None:
            self.image_url = image_url
        self.updated_at = _utcnow()

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because line items
        capture a price snapshot at placement time.
        """
        self.price = new_price
        self.updated_at = _utcnow()

    def set_stock(self, stock: int) -> None:
        """Catalog admin: overwrite quantity-on-hand (e.g. a restock)."""
        _check_stock(stock)
        self.stock = stock
        self.updated_at = _utcnow()

    def deactivate(self) -> None:
        """Soft-delete: hide the product from the catalog and from checkout."""
        if not self.is_active:
            raise ValidationError(f"Product {self.id} is already inactive")
        self.is_active = False
        self.updated_at = _utcnow()
