"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from checkout.application.add_product import AddProductHandler
from checkout.application.deactivate_product import DeactivateProductHandler
from checkout.application.list_products import ListProductsHandler
from checkout.application.seed_catalog import SeedCatalogHandler
from checkout.application.show_product import ShowProductHandler
from checkout.application.update_product import UpdateProductHandler
from checkout.domain.exceptions import DomainException
from checkout.domain.model.query import PageRequest, ProductFilter, SortSpec


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--category", required=True, help="Product category.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", required=True, type=int, help="Opening quantity on hand.")
@click.option("--description", default="", help="Free-text description.")
@click.option("--image-url", default=None, help="Image URL.")
@click.pass_obj
def product_add(obj, name, category, price, stock, description, image_url) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(obj.uow_factory)

    try:
        product = handler.handle(
            name=name,
            category=category,
            price=price,
            stock=stock,
            description=description,
            image_url=image_url,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' added at {product.price} ({product.stock} in stock)")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None)
@click.option("--category", default=None)
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--description", default=None)
@click.option("--image-url", default=None)
@click.option("--stock", default=None, type=int, help="New quantity on hand (restock).")
@click.pass_obj
def product_update(obj, product_id, name, category, price, description, image_url, stock) -> None:
    """Update a product's details, price or stock level."""
    handler = UpdateProductHandler(obj.uow_factory)

    try:
        product = handler.handle(
            product_id=product_id,
            name=name,
            category=category,
            price=price,
            description=description,
            image_url=image_url,
            stock=stock,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product {product.id} updated ({product.name}, {product.price}, {product.stock} in stock)"
    )


@click.command("deactivate")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_deactivate(obj, product_id: str) -> None:
    """Remove a product from the catalog (soft delete)."""
    handler = DeactivateProductHandler(obj.uow_factory)

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deactivated.")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_show(obj, product_id: str) -> None:
    """Show one product."""
    handler = ShowProductHandler(obj.uow_factory)

    try:
        p = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {p.id}")
    click.echo(f"Name:     {p.name}")
    click.echo(f"Category: {p.category}")
    click.echo(f"Price:    {p.price}")
    click.echo(f"Stock:    {p.stock}")
    if p.description:
        click.echo(f"About:    {p.description}")


@click.command("list")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=None, type=int, help="Page size.")
@click.option("--ids", default=None, help="Comma-separated product IDs.")
@click.option("--name", "name_contains", default=None, help="Part of the product name.")
@click.option("--category", default=None)
@click.option("--sort-field", default="created_at", show_default=True)
@click.option("--sort-order", default="DESC", show_default=True,
              type=click.Choice(["ASC", "DESC"], case_sensitive=False))
@click.pass_obj
def product_list(obj, page, limit, ids, name_contains, category, sort_field, sort_order) -> None:
    """List active products in the catalog."""
    handler = ListProductsHandler(obj.uow_factory)

    try:
        result = handler.handle(
            ProductFilter(
                ids=frozenset(i.strip() for i in ids.split(",") if i.strip()) if ids else None,
                name_contains=name_contains,
                category=category,
            ),
            PageRequest(page=page, limit=limit or obj.default_page_size),
            SortSpec(field=sort_field, descending=sort_order.upper() == "DESC"),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.items:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<38} {'Name':<20} {'Category':<12} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 90)
    for p in result.items:
        click.echo(f"{p.id:<38} {p.name:<20} {p.category:<12} {p.price:>10} {p.stock:>6}")
    click.echo(f"Page {result.page} of {result.pages}  ({result.total} products)")


@click.command("seed")
@click.pass_obj
def product_seed(obj) -> None:
    """Load the sample catalog (skips products already present)."""
    handler = SeedCatalogHandler(obj.uow_factory)

    try:
        added = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Seeded {added} sample products.")
