"""CLI commands for orders and their reservations."""

from __future__ import annotations

from datetime import date, datetime

import click

from inventario.application.adjust_order import AdjustOrderHandler
from inventario.application.cancel_order import CancelOrderHandler
from inventario.application.check_availability import CheckAvailabilityHandler
from inventario.application.create_order import CreateOrderHandler
from inventario.application.dto import AvailabilityDTO, LineSpec, OrderDTO
from inventario.application.show_order import ShowOrderHandler
from inventario.domain.exceptions import DomainException
from inventario.infrastructure.bootstrap import Services, build_services


def _parse_items(raw: str) -> list[LineSpec]:
    """Parse '1:3,2:0.5' into a LineSpec list."""
    specs: list[LineSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        pid_str, qty_str = pair.split(":", 1)
        try:
            pid = int(pid_str)
        except ValueError:
            raise click.BadParameter(f"Invalid product ID '{pid_str}'.")
        specs.append(LineSpec(product_id=pid, quantity=qty_str.strip()))
    return specs


def _parse_date(raw: str | None) -> date | None:
    if raw is None:
        return None
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(f"Invalid date '{raw}'. Expected YYYY-MM-DD.")


def _show_handler(services: Services) -> ShowOrderHandler:
    return ShowOrderHandler(
        order_repo=services.orders,
        line_repo=services.order_lines,
        status_repo=services.statuses,
        product_repo=services.products,
        engine=services.reservations,
    )


def _echo_availability(dto: AvailabilityDTO) -> None:
    click.echo(
        f"{'ID':<5} {'Product':<20} {'Req':>7} {'Stock':>7} {'Reserve':>8} {'Produce':>8}  OK"
    )
    click.echo("-" * 64)
    for line in dto.lines:
        click.echo(
            f"{line.product_id:<5} {line.product_name:<20} {line.requested:>7} "
            f"{line.product_stock:>7} {line.reserved_from_stock:>8} "
            f"{line.producible_from_insumos:>8}  {'yes' if line.satisfiable else 'NO'}"
        )
        for m in line.missing:
            click.echo(f"      missing {m.nombre}: need {m.requerido}, have {m.stock}")
    click.echo()
    click.echo("Fully available." if dto.all_satisfiable else "Cannot be fully covered.")


def _echo_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    if dto.customer_id is not None:
        click.echo(f"Customer: #{dto.customer_id}")
    click.echo(f"Placed: {dto.fecha_pedido}")
    if dto.fecha_entrega:
        click.echo(f"Delivery: {dto.fecha_entrega}")
    if dto.notas:
        click.echo(f"Notes: {dto.notas}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>7} {'Reserved':>9}")
    click.echo(f"  {'-'*38}")
    for item in dto.items:
        click.echo(f"  {item.product_name:<20} {item.quantity:>7} {item.reserved:>9}")
    if dto.reserved_insumos:
        click.echo()
        click.echo("  Reserved insumos:")
        for insumo_id, qty in dto.reserved_insumos.items():
            click.echo(f"    #{insumo_id:<5} {qty:>9}")


@click.command("availability")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
def order_availability(items: str) -> None:
    """Check whether an order could be covered, without reserving."""
    specs = _parse_items(items)
    services = build_services()
    handler = CheckAvailabilityHandler(services.calculator, services.products)

    try:
        dto = handler.handle(specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_availability(dto)


@click.command("create")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
@click.option("--customer", type=int, default=None, help="Customer ID.")
@click.option("--delivery", default=None, help="Delivery date (YYYY-MM-DD).")
@click.option("--notes", default=None, help="Free-text notes.")
@click.option(
    "--require-full",
    is_flag=True,
    default=False,
    help="Refuse the order unless every line can be covered.",
)
def order_create(
    items: str,
    customer: int | None,
    delivery: str | None,
    notes: str | None,
    require_full: bool,
) -> None:
    """Create an order and reserve stock for it."""
    specs = _parse_items(items)
    services = build_services()
    handler = CreateOrderHandler(
        engine=services.reservations,
        calculator=services.calculator,
        show_handler=_show_handler(services),
    )

    try:
        dto = handler.handle(
            specs,
            customer_id=customer,
            fecha_entrega=_parse_date(delivery),
            notas=notes,
            require_full=require_full,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created")
    _echo_order(dto)


@click.command("adjust")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--items", required=True, help="New items as 'ProductID:Qty,...'.")
def order_adjust(order_id: int, items: str) -> None:
    """Replace an order's lines, moving reservations by the difference."""
    specs = _parse_items(items)
    services = build_services()
    handler = AdjustOrderHandler(services.reservations, _show_handler(services))

    try:
        dto = handler.handle(order_id, specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} adjusted")
    _echo_order(dto)


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
def order_cancel(order_id: int) -> None:
    """Cancel an order and release everything it holds."""
    handler = CancelOrderHandler(build_services().reservations)

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
def order_show(order_id: int) -> None:
    """Show order details and what it currently holds."""
    handler = _show_handler(build_services())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_order(dto)
