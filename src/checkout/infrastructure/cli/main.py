"""Entry point for the ``checkout`` command line.

Loads settings, configures logging and hands each subcommand a
``CliContext`` wired to the configured data file.
"""

import click

from checkout.infrastructure.bootstrap import unit_of_work_factory
from checkout.infrastructure.cli.order_commands import (
    order_list,
    order_place,
    order_show,
    order_status,
)
from checkout.infrastructure.cli.product_commands import (
    product_add,
    product_deactivate,
    product_list,
    product_seed,
    product_show,
    product_update,
)
from checkout.infrastructure.config import Settings, get_settings
from checkout.infrastructure.logging import configure_logging


class CliContext:
    """Per-invocation wiring handed to every subcommand."""

    def __init__(self, settings: Settings) -> None:
        self.uow_factory = unit_of_work_factory(settings)
        self.strict_status_transitions = settings.strict_status_transitions
        self.default_page_size = settings.default_page_size


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """checkout: catalog and order placement"""
    settings = get_settings()
    configure_logging(settings)
    ctx.obj = CliContext(settings)


@cli.group()
def order() -> None:
    """Place and manage orders."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


# Register subcommands
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_deactivate)
product.add_command(product_list)
product.add_command(product_seed)
product.add_command(product_show)
product.add_command(product_update)
