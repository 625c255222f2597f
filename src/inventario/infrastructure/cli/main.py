import logging

import click

from inventario.config import settings
from inventario.infrastructure.cli.catalog_commands import (
    insumo_add,
    insumo_list,
    product_add,
    product_list,
)
from inventario.infrastructure.cli.loss_commands import (
    loss_delete,
    loss_record,
    loss_summary,
    loss_update,
)
from inventario.infrastructure.cli.order_commands import (
    order_adjust,
    order_availability,
    order_cancel,
    order_create,
    order_show,
)
from inventario.infrastructure.cli.production_commands import production_run
from inventario.infrastructure.cli.recipe_commands import (
    recipe_add,
    recipe_remove,
    recipe_show,
)
from inventario.infrastructure.cli.stock_commands import (
    stock_movements,
    stock_set,
    stock_show,
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log every stock movement.")
def cli(verbose: bool) -> None:
    """Inventario — stock, recipes, orders and production"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@cli.group()
def product() -> None:
    """Manage finished products."""


@cli.group()
def insumo() -> None:
    """Manage raw materials."""


@cli.group()
def stock() -> None:
    """Inspect and correct stock levels."""


@cli.group()
def recipe() -> None:
    """Manage product recipes."""


@cli.group()
def order() -> None:
    """Manage orders and their reservations."""


@cli.group()
def production() -> None:
    """Produce finished goods from raw materials."""


@cli.group()
def loss() -> None:
    """Record write-offs."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
insumo.add_command(insumo_add)
insumo.add_command(insumo_list)
stock.add_command(stock_set)
stock.add_command(stock_show)
stock.add_command(stock_movements)
recipe.add_command(recipe_show)
recipe.add_command(recipe_add)
recipe.add_command(recipe_remove)
order.add_command(order_availability)
order.add_command(order_create)
order.add_command(order_adjust)
order.add_command(order_cancel)
order.add_command(order_show)
production.add_command(production_run)
loss.add_command(loss_record)
loss.add_command(loss_update)
loss.add_command(loss_delete)
loss.add_command(loss_summary)
