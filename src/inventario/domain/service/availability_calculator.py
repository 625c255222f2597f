"""Domain service: Availability Calculator.

Answers "can this order be served?" per line, looking first at finished
stock and then at what the raw stock could still produce. It never
writes; for fixed stock and recipes the report is a pure function of the
requested lines.
"""

from __future__ import annotations

from decimal import Decimal

from inventario.domain.exceptions import EntityNotFoundError, ValidationError
from inventario.domain.model.availability import (
    AvailabilityLine,
    AvailabilityReport,
    InsumoReservation,
    LineRequest,
    MissingInsumo,
    PlannedReservation,
)
from inventario.domain.model.value_objects import ZERO, as_quantity
from inventario.domain.repository.product_repository import ProductRepository
from inventario.domain.service.recipe_catalog import RecipeCatalog


class AvailabilityCalculator:

    def __init__(
        self,
        product_repo: ProductRepository,
        catalog: RecipeCatalog,
    ) -> None:
        self._product_repo = product_repo
        self._catalog = catalog

    def calculate(
        self,
        lines: list[LineRequest],
        customer_id: int | None = None,
    ) -> AvailabilityReport:
        """Compute the availability report for a whole order.

        ``customer_id`` is accepted for symmetry with order creation and
        does not influence the result.
        """
        return AvailabilityReport(
            lines=tuple(self.calculate_line(l.product_id, l.quantity) for l in lines)
        )

    def calculate_line(self, product_id: int, requested: Decimal | int) -> AvailabilityLine:
        """Availability for ``requested`` units of a single product.

        1. Take as much as possible from finished stock.
        2. Cover the remainder with whole units producible from raw stock.
        3. Report mandatory insumos that fall short of the *full* remainder.
        4. Plan to reserve mandatory insumos only for the producible part.
        """
        qty = as_quantity(requested)
        if qty < ZERO:
            raise ValidationError("Requested quantity cannot be negative")

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")

        product_stock = product.stock
        reserved_from_stock = min(product_stock, qty)
        remaining = qty - reserved_from_stock

        producible = ZERO
        missing: list[MissingInsumo] = []
        insumo_plan: list[InsumoReservation] = []

        if remaining > ZERO:
            entries = self._catalog.recipe_for(product_id)
            producible = min(remaining, RecipeCatalog.units_from(entries))

            for entry in entries:
                if not entry.obligatorio:
                    continue
                required = entry.line.required_for(remaining)
                if required > entry.stock:
                    missing.append(
                        MissingInsumo(
                            insumo_id=entry.insumo_id,
                            nombre=entry.insumo.name,
                            requerido=required,
                            stock=entry.stock,
                        )
                    )
                to_reserve = entry.line.required_for(producible)
                if to_reserve > ZERO:
                    insumo_plan.append(
                        InsumoReservation(insumo_id=entry.insumo_id, cantidad=to_reserve)
                    )

        return AvailabilityLine(
            product_id=product_id,
            requested=qty,
            product_stock=product_stock,
            reserved_from_stock=reserved_from_stock,
            producible_from_insumos=producible,
            missing_mandatory_insumos=tuple(missing),
            line_satisfiable=qty <= product_stock + producible,
            planned_reservation=PlannedReservation(
                reserve_from_stock=reserved_from_stock,
                insumos=tuple(insumo_plan),
            ),
        )
