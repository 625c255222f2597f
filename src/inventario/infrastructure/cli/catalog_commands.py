"""CLI commands for products and insumos."""

from __future__ import annotations

import click

from inventario.application.add_catalog_item import AddInsumoHandler, AddProductHandler
from inventario.application.mappers import fmt
from inventario.domain.exceptions import DomainException
from inventario.infrastructure.bootstrap import build_services


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", default="0", help="Sale price (e.g. 15.00).")
@click.option("--cost", default="0", help="Unit cost, used to value losses.")
@click.option("--min-stock", default="0", help="Reorder threshold.")
def product_add(name: str, price: str, cost: str, min_stock: str) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=build_services().products)

    try:
        product = handler.handle(name=name, precio=price, costo=cost, stock_minimo=min_stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.precio}")


@click.command("list")
def product_list() -> None:
    """List all products."""
    products = build_services().products.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Stock':>10}")
    click.echo("-" * 49)
    for p in products:
        flag = "" if p.activo else " (inactive)"
        click.echo(f"{p.id:<6} {p.name:<20} {str(p.precio):>10} {fmt(p.stock):>10}{flag}")


@click.command("add")
@click.option("--name", required=True, help="Insumo name.")
@click.option("--unit", default="unidad", help="Unit of measure (kg, l, unidad...).")
@click.option("--min-stock", default="0", help="Reorder threshold.")
def insumo_add(name: str, unit: str, min_stock: str) -> None:
    """Add a new raw material."""
    handler = AddInsumoHandler(insumo_repo=build_services().insumos)

    try:
        insumo = handler.handle(name=name, unidad_medida=unit, stock_minimo=min_stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Insumo #{insumo.id} '{insumo.name}' added ({insumo.unidad_medida})")


@click.command("list")
def insumo_list() -> None:
    """List all raw materials."""
    insumos = build_services().insumos.list_all()

    if not insumos:
        click.echo("No insumos found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Unit':<8} {'Stock':>10}")
    click.echo("-" * 47)
    for i in insumos:
        click.echo(f"{i.id:<6} {i.name:<20} {i.unidad_medida:<8} {fmt(i.stock):>10}")
