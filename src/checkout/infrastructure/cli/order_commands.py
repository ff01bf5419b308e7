"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from checkout.application.dto import CartItemSpec, OrderDTO
from checkout.application.list_orders import ListOrdersHandler
from checkout.application.place_order import PlaceOrderHandler
from checkout.application.show_order import ShowOrderHandler
from checkout.application.update_order_status import UpdateOrderStatusHandler
from checkout.domain.exceptions import DomainException
from checkout.domain.model.order import CustomerInfo, OrderStatus
from checkout.domain.model.query import OrderFilter, PageRequest, SortSpec

STATUS_CHOICES = click.Choice([s.value for s in OrderStatus], case_sensitive=False)


def _parse_items(raw: str) -> list[CartItemSpec]:
    """Parse 'id-1:3,id-2:5' into a CartItemSpec list, keeping order."""
    specs: list[CartItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(CartItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


@click.command("place")
@click.option("--name", required=True, help="Customer name.")
@click.option("--email", required=True, help="Customer email.")
@click.option("--contact", required=True, help="Customer phone number.")
@click.option("--address", required=True, help="Shipping street address.")
@click.option("--zip-code", required=True, help="Shipping ZIP / postal code.")
@click.option("--city", required=True, help="Shipping city.")
@click.option("--state", required=True, help="Shipping state.")
@click.option("--items", default="", help="Cart as 'ProductId:Qty,ProductId:Qty'.")
@click.pass_obj
def order_place(obj, name, email, contact, address, zip_code, city, state, items) -> None:
    """Place an order: check stock, take it and record the order."""
    customer = CustomerInfo(
        name=name,
        email=email,
        contact=contact,
        address=address,
        zip_code=zip_code,
        city=city,
        state=state,
    )
    handler = PlaceOrderHandler(obj.uow_factory)

    try:
        result = handler.handle(customer, _parse_items(items))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.ok:
        raise click.ClickException(result.error.message)

    summary = result.value
    click.echo(f"Order {summary.id} placed  (status={summary.status})")
    click.echo(f"Total: ${summary.total_amount}")


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.name} <{dto.email}> {dto.contact}")
    click.echo(f"Ship to:  {dto.address}, {dto.city}, {dto.state} {dto.zip_code}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total_amount:>20}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.pass_obj
def order_show(obj, order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(obj.uow_factory)

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.option("--status", "new_status", required=True, type=STATUS_CHOICES, help="New status.")
@click.pass_obj
def order_status(obj, order_id: str, new_status: str) -> None:
    """Set the status of an order."""
    handler = UpdateOrderStatusHandler(obj.uow_factory, strict=obj.strict_status_transitions)

    try:
        dto = handler.handle(order_id, new_status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} status updated to {dto.status}.")


@click.command("list")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=None, type=int, help="Page size.")
@click.option("--id", "id_contains", default=None, help="Part of the order ID.")
@click.option("--name", "name_contains", default=None, help="Part of the customer name.")
@click.option("--email", "email_contains", default=None, help="Part of the customer email.")
@click.option("--status", default=None, type=STATUS_CHOICES)
@click.option("--sort-field", default="created_at", show_default=True)
@click.option("--sort-order", default="DESC", show_default=True,
              type=click.Choice(["ASC", "DESC"], case_sensitive=False))
@click.pass_obj
def order_list(obj, page, limit, id_contains, name_contains, email_contains,
               status, sort_field, sort_order) -> None:
    """List orders, newest first."""
    handler = ListOrdersHandler(obj.uow_factory)

    try:
        result = handler.handle(
            OrderFilter(
                id_contains=id_contains,
                name_contains=name_contains,
                email_contains=email_contains,
                status=OrderStatus.parse(status) if status else None,
            ),
            PageRequest(page=page, limit=limit or obj.default_page_size),
            SortSpec(field=sort_field, descending=sort_order.upper() == "DESC"),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.items:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<38} {'Customer':<20} {'Status':<10} {'Total':>12}")
    click.echo("-" * 83)
    for dto in result.items:
        click.echo(f"{dto.id:<38} {dto.name:<20} {dto.status:<10} {dto.total_amount:>12}")
    click.echo(f"Page {result.page} of {result.pages}  ({result.total} orders)")
