"""Recipe (bill of materials) lines."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from inventario.domain.model.insumo import Insumo


@dataclass
class RecipeLine:
    """How much of one insumo a single finished unit needs.

    Mandatory lines block production when short; optional lines are
    consumed best-effort up to the available stock.
    """

    id: int | None
    product_id: int
    insumo_id: int
    cantidad_por_unidad: Decimal
    obligatorio: bool = True

    def required_for(self, units: Decimal) -> Decimal:
        return self.cantidad_por_unidad * units


@dataclass(frozen=True)
class RecipeEntry:
    """A recipe line joined with the current state of its insumo."""

    line: RecipeLine
    insumo: Insumo

    @property
    def insumo_id(self) -> int:
        return self.line.insumo_id

    @property
    def cantidad_por_unidad(self) -> Decimal:
        return self.line.cantidad_por_unidad

    @property
    def obligatorio(self) -> bool:
        return self.line.obligatorio

    @property
    def stock(self) -> Decimal:
        return self.insumo.stock
