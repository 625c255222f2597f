"""Application service: Create Order use case.

Checks availability, lets the caller decide whether partial coverage is
acceptable, then hands over to the reservation engine.
"""

from __future__ import annotations

from datetime import date

from inventario.application.dto import LineSpec, OrderDTO
from inventario.application.mappers import to_requests
from inventario.application.show_order import ShowOrderHandler
from inventario.domain.exceptions import ValidationError
from inventario.domain.service.availability_calculator import AvailabilityCalculator
from inventario.domain.service.reservation_engine import ReservationEngine


class CreateOrderHandler:

    def __init__(
        self,
        engine: ReservationEngine,
        calculator: AvailabilityCalculator,
        show_handler: ShowOrderHandler,
    ) -> None:
        self._engine = engine
        self._calculator = calculator
        self._show_handler = show_handler

    def handle(
        self,
        specs: list[LineSpec],
        customer_id: int | None = None,
        fecha_entrega: date | None = None,
        notas: str | None = None,
        require_full: bool = False,
    ) -> OrderDTO:
        """Create an order and reserve stock for it.

        With ``require_full`` the order is refused unless every line can
        be covered from stock plus production.
        """
        requests = to_requests(specs)

        if require_full:
            report = self._calculator.calculate(requests, customer_id)
            if not report.all_satisfiable:
                short = ", ".join(
                    f"#{l.product_id}" for l in report.lines if not l.line_satisfiable
                )
                raise ValidationError(f"Order cannot be fully covered (products {short})")

        placed = self._engine.create_order_with_reservation(
            requests,
            customer_id=customer_id,
            fecha_entrega=fecha_entrega,
            notas=notas,
        )
        return self._show_handler.to_dto(placed.order)
