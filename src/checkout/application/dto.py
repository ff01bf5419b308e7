"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from checkout.domain.model.order import Order
from checkout.domain.model.product import Product
from checkout.domain.model.query import Page

T = TypeVar("T")


@dataclass(frozen=True)
class CartItemSpec:
    """Input: what the customer asked for (product ID + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderSummaryDTO:
    """Output: the response to a successful placement."""

    id: str
    total_amount: str  # plain decimal, e.g. "250.00"
    status: str


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    name: str
    email: str
    contact: str
    address: str
    zip_code: str
    city: str
    state: str
    status: str
    items: tuple[OrderLineItemDTO, ...]
    total_amount: str
    created_at: str
    updated_at: str

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        customer = order.customer
        return OrderDTO(
            id=order.id,
            name=customer.name,
            email=customer.email,
            contact=customer.contact,
            address=customer.address,
            zip_code=customer.zip_code,
            city=customer.city,
            state=customer.state,
            status=order.status.value,
            items=tuple(
                OrderLineItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                )
                for item in order.items
            ),
            total_amount=str(order.total_amount),
            created_at=order.created_at.isoformat(),
            updated_at=order.updated_at.isoformat(),
        )


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    category: str
    description: str
    price: str
    stock: int
    image_url: str | None
    created_at: str

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            category=product.category,
            description=product.description,
            price=str(product.price),
            stock=product.stock,
            image_url=product.image_url,
            created_at=product.created_at.isoformat(),
        )


@dataclass(frozen=True)
class PageDTO(Generic[T]):
    items: tuple[T, ...]
    page: int
    limit: int
    total: int
    pages: int

    @staticmethod
    def of(page: Page, items: tuple[T, ...]) -> PageDTO[T]:
        return PageDTO(
            items=items,
            page=page.page,
            limit=page.limit,
            total=page.total,
            pages=page.pages,
        )
