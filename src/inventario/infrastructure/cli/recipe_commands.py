"""CLI commands for recipes."""

from __future__ import annotations

import click

from inventario.application.manage_recipe import RecipeService
from inventario.domain.exceptions import DomainException
from inventario.infrastructure.bootstrap import build_services


def _recipe_service() -> RecipeService:
    services = build_services()
    return RecipeService(
        recipe_repo=services.recipes,
        product_repo=services.products,
        insumo_repo=services.insumos,
        catalog=services.catalog,
    )


@click.command("show")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
def recipe_show(product_id: int) -> None:
    """Show a product's recipe and how many units raw stock allows."""
    try:
        dto = _recipe_service().show(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Recipe of #{dto.product_id} {dto.product_name}")
    if not dto.lines:
        click.echo("  (no recipe defined)")
        return
    click.echo(f"  {'Line':<5} {'Insumo':<20} {'Per unit':>9} {'Stock':>9}  Mandatory")
    click.echo(f"  {'-'*58}")
    for line in dto.lines:
        click.echo(
            f"  {line.id:<5} {line.insumo_name:<20} {line.cantidad_por_unidad:>9} "
            f"{line.stock:>9}  {'yes' if line.obligatorio else 'no'}"
        )
    click.echo(f"  Producible units: {dto.producible_units}")


@click.command("add")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option("--insumo", "insumo_id", required=True, type=int, help="Insumo ID.")
@click.option("--per-unit", required=True, help="Insumo quantity per finished unit.")
@click.option("--optional", is_flag=True, default=False, help="Consume best-effort only.")
def recipe_add(product_id: int, insumo_id: int, per_unit: str, optional: bool) -> None:
    """Add an insumo to a product's recipe."""
    try:
        line = _recipe_service().add_insumo(
            product_id, insumo_id, per_unit, obligatorio=not optional
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Recipe line #{line.id} added to product #{product_id}")


@click.command("remove")
@click.option("--line", "line_id", required=True, type=int, help="Recipe line ID.")
def recipe_remove(line_id: int) -> None:
    """Remove a line from a recipe."""
    try:
        _recipe_service().remove_line(line_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Recipe line #{line_id} removed")
