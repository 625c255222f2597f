"""Availability report records.

These are plain, fully-typed records describing whether each requested
line can be covered from finished stock plus in-house production, and
which reservation movements that coverage implies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from inventario.domain.model.value_objects import ZERO


@dataclass(frozen=True)
class LineRequest:
    """Input: a product and how many units are wanted."""

    product_id: int
    quantity: Decimal


@dataclass(frozen=True)
class MissingInsumo:
    insumo_id: int
    nombre: str
    requerido: Decimal
    stock: Decimal


@dataclass(frozen=True)
class InsumoReservation:
    insumo_id: int
    cantidad: Decimal


@dataclass(frozen=True)
class PlannedReservation:
    reserve_from_stock: Decimal = ZERO
    insumos: tuple[InsumoReservation, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.reserve_from_stock <= ZERO and not any(
            r.cantidad > ZERO for r in self.insumos
        )


@dataclass(frozen=True)
class AvailabilityLine:
    product_id: int
    requested: Decimal
    product_stock: Decimal
    reserved_from_stock: Decimal
    producible_from_insumos: Decimal
    missing_mandatory_insumos: tuple[MissingInsumo, ...]
    line_satisfiable: bool
    planned_reservation: PlannedReservation

    @property
    def remaining(self) -> Decimal:
        return self.requested - self.reserved_from_stock


@dataclass(frozen=True)
class AvailabilityReport:
    lines: tuple[AvailabilityLine, ...] = field(default_factory=tuple)

    @property
    def all_satisfiable(self) -> bool:
        return all(line.line_satisfiable for line in self.lines)

    def line_for(self, product_id: int) -> AvailabilityLine | None:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None
