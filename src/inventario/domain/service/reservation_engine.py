"""Domain service: Reservation Engine.

Creates orders together with their stock reservations, adjusts the
reserved quantities of in-flight orders and cancels orders by releasing
whatever the ledger says is still held for them.

Reservations are ordinary ledger movements tagged with the order:
``salida`` to reserve and ``entrada`` to release, on both the product and
the insumo ledgers. Nothing here runs inside a transaction: if a step
fails, the steps before it stay applied and the caller must re-read the
ledger before retrying.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from inventario.domain.exceptions import EntityNotFoundError, ValidationError
from inventario.domain.model.availability import (
    AvailabilityLine,
    AvailabilityReport,
    LineRequest,
    PlannedReservation,
)
from inventario.domain.model.movement import (
    ENTRADA,
    SALIDA,
    Reference,
    ReferenceKind,
    ResourceKind,
)
from inventario.domain.model.order import (
    CANCELLED,
    ORDER_CATEGORY,
    PENDING,
    Order,
    OrderLine,
    Status,
)
from inventario.domain.model.value_objects import ZERO, as_quantity, positive_quantity
from inventario.domain.repository.order_repository import (
    OrderLineRepository,
    OrderRepository,
)
from inventario.domain.repository.status_repository import StatusRepository
from inventario.domain.service.availability_calculator import AvailabilityCalculator
from inventario.domain.service.recipe_catalog import RecipeCatalog
from inventario.domain.service.stock_ledger import StockLedger

logger = logging.getLogger("inventario")


@dataclass(frozen=True)
class PlacedOrder:
    order: Order
    lines: list[OrderLine]
    availability: AvailabilityReport


@dataclass(frozen=True)
class OrderReservations:
    """Net quantities currently held for an order, per resource."""

    productos: dict[int, Decimal]
    insumos: dict[int, Decimal]


class ReservationEngine:

    def __init__(
        self,
        calculator: AvailabilityCalculator,
        ledger: StockLedger,
        catalog: RecipeCatalog,
        order_repo: OrderRepository,
        line_repo: OrderLineRepository,
        status_repo: StatusRepository,
    ) -> None:
        self._calculator = calculator
        self._ledger = ledger
        self._catalog = catalog
        self._order_repo = order_repo
        self._line_repo = line_repo
        self._status_repo = status_repo

    # --- Create ---------------------------------------------------------------

    def create_order_with_reservation(
        self,
        lines: list[LineRequest],
        customer_id: int | None = None,
        fecha_entrega: date | None = None,
        notas: str | None = None,
        usuario_id: str | None = None,
    ) -> PlacedOrder:
        """Persist a pending order and reserve what availability allows.

        Partially satisfiable orders are still created; only the planned
        reservation of each line is moved. Check ``all_satisfiable``
        beforehand if partial fulfilment is not acceptable.
        """
        requests = self._validate_lines(lines, allow_empty=False)
        report = self._calculator.calculate(requests, customer_id)

        order = Order(
            id=None,
            estado_id=self._status(PENDING).id,  # type: ignore[arg-type]
            customer_id=customer_id,
            fecha_entrega=fecha_entrega,
            notas=notas,
            usuario_id=usuario_id,
        )
        self._order_repo.save(order)
        order_id: int = order.id  # type: ignore[assignment]

        saved_lines = self._line_repo.add(
            [
                OrderLine(id=None, order_id=order_id, product_id=r.product_id, cantidad=r.quantity)
                for r in requests
            ]
        )

        for line in report.lines:
            self._apply_plan(order_id, line.product_id, line.planned_reservation, usuario_id)

        logger.info(
            "order.created",
            extra={
                "order_id": order_id,
                "lines": len(saved_lines),
                "all_satisfiable": report.all_satisfiable,
            },
        )
        return PlacedOrder(order=order, lines=saved_lines, availability=report)

    # --- Adjust ---------------------------------------------------------------

    def adjust_order(
        self, order_id: int, new_lines: list[LineRequest]
    ) -> dict[int, Decimal]:
        """Move an order to new line quantities, reserving or releasing the deltas.

        A quantity of zero removes the line. Deltas are applied one product
        at a time and the line table is only rewritten after all of them
        succeed; a failure part-way leaves earlier deltas applied and the
        stored lines untouched.

        Returns the applied delta per product.
        """
        order = self._get_order(order_id)
        if order.estado_id == self._status(CANCELLED).id:
            raise ValidationError(f"Order #{order_id} is cancelled and cannot be adjusted")

        requests = self._validate_lines(new_lines, allow_empty=True)
        current = {l.product_id: l.cantidad for l in self._line_repo.list_by_order(order_id)}
        wanted = {r.product_id: r.quantity for r in requests if r.quantity > ZERO}

        deltas: dict[int, Decimal] = {}
        for product_id in [*current, *[p for p in wanted if p not in current]]:
            delta = wanted.get(product_id, ZERO) - current.get(product_id, ZERO)
            if delta != ZERO:
                deltas[product_id] = delta

        for product_id, delta in deltas.items():
            if delta > ZERO:
                self.reserve_for_product(order_id, product_id, delta)
            else:
                self.release_for_product(order_id, product_id, -delta)

        self._line_repo.delete_by_order(order_id)
        self._line_repo.add(
            [
                OrderLine(id=None, order_id=order_id, product_id=pid, cantidad=qty)
                for pid, qty in wanted.items()
            ]
        )

        logger.info(
            "order.adjusted",
            extra={
                "order_id": order_id,
                "deltas": {pid: str(d) for pid, d in deltas.items()},
            },
        )
        return deltas

    def reserve_for_product(
        self, order_id: int, product_id: int, quantity: Decimal | int
    ) -> AvailabilityLine:
        """Reserve ``quantity`` more units of one product for an order.

        Availability is recomputed for just these units, not for the new
        line total.
        """
        qty = positive_quantity(quantity)
        line = self._calculator.calculate_line(product_id, qty)
        self._apply_plan(order_id, product_id, line.planned_reservation)
        return line

    def release_for_product(
        self, order_id: int, product_id: int, quantity: Decimal | int
    ) -> None:
        """Give back ``quantity`` units of one product's reservation.

        The product release is scaled by ``quantity / stored line quantity``
        and floored. The insumo release is ``quantity_per_unit * quantity``
        for every mandatory recipe line, regardless of how much of the
        reduction was originally served from stock. When the order has no
        stored line for the product, everything still held for the product
        and every insumo held by the order is released.
        """
        qty = positive_quantity(quantity)
        reference = self._reference(order_id)
        reserved_product = self._ledger.net_reservation(
            reference, ResourceKind.PRODUCT, product_id
        )
        original = next(
            (l.cantidad for l in self._line_repo.list_by_order(order_id) if l.product_id == product_id),
            None,
        )

        if original is None or original <= ZERO:
            if reserved_product > ZERO:
                self._release(ResourceKind.PRODUCT, product_id, reserved_product, reference)
            for insumo_id, reserved in self._ledger.net_reservations(
                reference, ResourceKind.INSUMO
            ).items():
                if reserved > ZERO:
                    self._release(ResourceKind.INSUMO, insumo_id, reserved, reference)
            return

        proportion = qty / original
        product_release = min(
            reserved_product,
            Decimal(math.floor(reserved_product * proportion)),
        )
        if product_release > ZERO:
            self._release(ResourceKind.PRODUCT, product_id, product_release, reference)

        for entry in self._catalog.mandatory_lines(product_id):
            amount = entry.line.required_for(qty)
            if amount > ZERO:
                self._release(ResourceKind.INSUMO, entry.insumo_id, amount, reference)

    # --- Cancel ---------------------------------------------------------------

    def cancel_order(self, order_id: int) -> Order:
        """Release every net reservation of the order and mark it cancelled.

        Safe to repeat: once nothing is held, no movements are recorded and
        only the status is (re)written.
        """
        order = self._get_order(order_id)
        cancelled = self._status(CANCELLED)
        reference = self._reference(order_id)

        released = 0
        for kind in (ResourceKind.PRODUCT, ResourceKind.INSUMO):
            for resource_id, reserved in self._ledger.net_reservations(reference, kind).items():
                if reserved > ZERO:
                    self._release(kind, resource_id, reserved, reference)
                    released += 1

        order.transition_to(cancelled)
        self._order_repo.save(order)
        logger.info(
            "order.cancelled",
            extra={"order_id": order_id, "released_movements": released},
        )
        return order

    # --- Queries --------------------------------------------------------------

    def reservations(self, order_id: int) -> OrderReservations:
        reference = self._reference(order_id)
        return OrderReservations(
            productos={
                k: v
                for k, v in self._ledger.net_reservations(reference, ResourceKind.PRODUCT).items()
                if v > ZERO
            },
            insumos={
                k: v
                for k, v in self._ledger.net_reservations(reference, ResourceKind.INSUMO).items()
                if v > ZERO
            },
        )

    # --- Internal helpers -----------------------------------------------------

    def _apply_plan(
        self,
        order_id: int,
        product_id: int,
        plan: PlannedReservation,
        usuario_id: str | None = None,
    ) -> None:
        reference = self._reference(order_id)
        if plan.reserve_from_stock > ZERO:
            self._ledger.record(
                ResourceKind.PRODUCT,
                product_id,
                SALIDA,
                plan.reserve_from_stock,
                reference,
                notas="Reserva de producto para pedido",
                usuario_id=usuario_id,
            )
        for reservation in plan.insumos:
            if reservation.cantidad <= ZERO:
                continue
            self._ledger.record(
                ResourceKind.INSUMO,
                reservation.insumo_id,
                SALIDA,
                reservation.cantidad,
                reference,
                notas="Reserva de insumo para pedido",
                usuario_id=usuario_id,
            )

    def _release(
        self,
        kind: ResourceKind,
        resource_id: int,
        quantity: Decimal,
        reference: Reference,
    ) -> None:
        self._ledger.record(
            kind,
            resource_id,
            ENTRADA,
            quantity,
            reference,
            notas="Liberación por ajuste/cancelación de pedido",
        )

    @staticmethod
    def _validate_lines(lines: list[LineRequest], allow_empty: bool) -> list[LineRequest]:
        if not lines and not allow_empty:
            raise ValidationError("Order must contain at least one item")
        seen: set[int] = set()
        validated: list[LineRequest] = []
        for line in lines:
            if line.product_id is None:
                raise ValidationError("Product ID is required for every line")
            if line.product_id in seen:
                raise ValidationError(
                    f"Product #{line.product_id} appears more than once in the order"
                )
            seen.add(line.product_id)
            qty = as_quantity(line.quantity)
            if qty < ZERO:
                raise ValidationError(
                    f"Quantity for product #{line.product_id} cannot be negative"
                )
            validated.append(LineRequest(product_id=line.product_id, quantity=qty))
        return validated

    def _get_order(self, order_id: int) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order

    def _status(self, clave: str) -> Status:
        status = self._status_repo.get_by_clave(ORDER_CATEGORY, clave)
        if status is None:
            raise EntityNotFoundError(
                f"Status '{clave}' not found for category '{ORDER_CATEGORY}'"
            )
        return status

    @staticmethod
    def _reference(order_id: int) -> Reference:
        return Reference(ReferenceKind.ORDER, order_id)
