"""CLI commands for production runs."""

from __future__ import annotations

import click

from inventario.application.produce import ProduceHandler
from inventario.domain.exceptions import DomainException
from inventario.infrastructure.bootstrap import build_services


@click.command("run")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, help="Units to produce.")
@click.option("--user", "usuario_id", default=None, help="Operator ID.")
@click.option("--notes", default=None, help="Free-text notes.")
def production_run(product_id: int, quantity: str, usuario_id: str | None, notes: str | None) -> None:
    """Consume insumos and add finished units to stock."""
    handler = ProduceHandler(build_services().production)

    try:
        dto = handler.handle(product_id, quantity, usuario_id=usuario_id, notas=notes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dto.ok:
        for m in dto.missing:
            click.echo(f"  missing {m.nombre}: need {m.requerido}, have {m.stock}", err=True)
        raise click.ClickException(dto.error or "Production failed")

    click.echo(f"Production #{dto.production_id}: {quantity} unit(s) of product #{product_id}")
