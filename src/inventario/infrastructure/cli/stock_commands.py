"""CLI commands for stock levels and ledger history."""

from __future__ import annotations

import click

from inventario.application.set_stock import SetStockHandler
from inventario.application.show_stock import ShowMovementsHandler, ShowStockHandler
from inventario.domain.exceptions import DomainException
from inventario.domain.model.movement import ResourceKind
from inventario.infrastructure.bootstrap import build_services

_KIND = click.Choice([k.value for k in ResourceKind])


@click.command("set")
@click.option("--kind", required=True, type=_KIND, help="producto or insumo.")
@click.option("--id", "resource_id", required=True, type=int, help="Product or insumo ID.")
@click.option("--quantity", required=True, help="New stock level.")
@click.option("--reason", default="", help="Reason for the correction.")
def stock_set(kind: str, resource_id: int, quantity: str, reason: str) -> None:
    """Set the stock level of a product or insumo."""
    services = build_services()
    handler = SetStockHandler(
        ledger=services.ledger,
        product_repo=services.products,
        insumo_repo=services.insumos,
    )

    try:
        handler.handle(ResourceKind(kind), resource_id, quantity, motivo=reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock of {kind} #{resource_id} set to {quantity}")


@click.command("show")
@click.option("--low", is_flag=True, default=False, help="Only items at or below minimum stock.")
def stock_show(low: bool) -> None:
    """Show current stock levels."""
    services = build_services()
    lines = ShowStockHandler(services.products, services.insumos).handle(low_only=low)

    if not lines:
        click.echo("No stock records found.")
        return

    click.echo(f"{'Kind':<9} {'ID':<5} {'Name':<20} {'Stock':>10} {'Minimum':>10}")
    click.echo("-" * 58)
    for line in lines:
        mark = "  LOW" if line.low_stock else ""
        click.echo(
            f"{line.kind:<9} {line.id:<5} {line.name:<20} {line.stock:>10} {line.stock_minimo:>10}{mark}"
        )


@click.command("movements")
@click.option("--kind", required=True, type=_KIND, help="producto or insumo.")
@click.option("--id", "resource_id", required=True, type=int, help="Product or insumo ID.")
def stock_movements(kind: str, resource_id: int) -> None:
    """Show the ledger history of a product or insumo."""
    handler = ShowMovementsHandler(build_services().ledger)

    try:
        movements = handler.handle(ResourceKind(kind), resource_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not movements:
        click.echo("No movements recorded.")
        return

    click.echo(f"{'Date':<17} {'Type':<9} {'Qty':>9} {'Reference':<16} Notes")
    click.echo("-" * 70)
    for m in movements:
        click.echo(
            f"{m.fecha:<17} {m.tipo:<9} {m.signed:>9} {m.reference or '-':<16} {m.notas or ''}"
        )
