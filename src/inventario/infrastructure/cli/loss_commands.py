"""CLI commands for write-offs."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from inventario.application.manage_losses import LossHandler
from inventario.domain.exceptions import DomainException
from inventario.domain.model.loss import LossKind
from inventario.infrastructure.bootstrap import build_services


def _handler() -> LossHandler:
    return LossHandler(build_services().loss_ledger)


def _utc(value: datetime | None) -> datetime | None:
    return value.replace(tzinfo=timezone.utc) if value is not None else None


@click.command("record")
@click.option("--kind", required=True, type=click.Choice([k.value for k in LossKind]))
@click.option("--id", "resource_id", required=True, type=int, help="Product or insumo ID.")
@click.option("--quantity", required=True, help="Quantity lost.")
@click.option("--unit-value", default=None, help="Value per unit (defaults to product cost).")
@click.option("--reason", default=None, help="Reason for the loss.")
@click.option("--user", "usuario_id", default=None, help="Operator ID.")
def loss_record(
    kind: str,
    resource_id: int,
    quantity: str,
    unit_value: str | None,
    reason: str | None,
    usuario_id: str | None,
) -> None:
    """Record a loss and take it out of stock."""
    try:
        dto = _handler().record(
            kind,
            resource_id,
            quantity,
            valor_unitario=unit_value,
            motivo=reason,
            usuario_id=usuario_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Loss #{dto.id} recorded: {dto.cantidad} x {dto.valor_unitario} = {dto.valor_total}")


@click.command("update")
@click.option("--id", "loss_id", required=True, type=int, help="Loss ID.")
@click.option("--quantity", default=None, help="Corrected quantity.")
@click.option("--unit-value", default=None, help="Corrected value per unit.")
@click.option("--reason", default=None, help="Corrected reason.")
def loss_update(
    loss_id: int, quantity: str | None, unit_value: str | None, reason: str | None
) -> None:
    """Correct a recorded loss; stock moves by the difference."""
    try:
        dto = _handler().update(
            loss_id, cantidad=quantity, valor_unitario=unit_value, motivo=reason
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Loss #{dto.id} updated: {dto.cantidad} x {dto.valor_unitario} = {dto.valor_total}")


@click.command("delete")
@click.option("--id", "loss_id", required=True, type=int, help="Loss ID.")
def loss_delete(loss_id: int) -> None:
    """Delete a loss and return its quantity to stock."""
    try:
        _handler().delete(loss_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Loss #{loss_id} deleted")


@click.command("summary")
@click.option("--from", "desde", type=click.DateTime(), default=None, help="Start date.")
@click.option("--to", "hasta", type=click.DateTime(), default=None, help="End date.")
def loss_summary(desde: datetime | None, hasta: datetime | None) -> None:
    """Summarize losses by kind and list the most costly items."""
    dto = _handler().summary(desde=_utc(desde), hasta=_utc(hasta))

    click.echo(f"Losses: {dto.total_items}   Total value: {dto.valor_total}")
    click.echo(f"  products: {dto.productos[0]} ({dto.productos[1]})")
    click.echo(f"  insumos:  {dto.insumos[0]} ({dto.insumos[1]})")
    if not dto.top:
        return
    click.echo()
    click.echo(f"  {'Kind':<9} {'Name':<20} {'Qty':>8} {'Value':>10} {'Times':>6}")
    click.echo(f"  {'-'*57}")
    for t in dto.top:
        click.echo(
            f"  {t.kind:<9} {t.nombre:<20} {t.cantidad_total:>8} {t.valor_total:>10} {t.frecuencia:>6}"
        )
