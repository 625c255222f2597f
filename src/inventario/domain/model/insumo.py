"""Insumo aggregate — a raw material consumed by production."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from inventario.domain.exceptions import ValidationError
from inventario.domain.model.value_objects import ZERO


@dataclass
class Insumo:
    """Raw material with a stock counter that must never go negative."""

    id: int | None
    name: str
    stock: Decimal = ZERO
    stock_minimo: Decimal = ZERO
    unidad_medida: str = "unidad"
    activo: bool = True

    @staticmethod
    def create(
        name: str,
        unidad_medida: str = "unidad",
        stock_minimo: Decimal = ZERO,
    ) -> Insumo:
        if not name or not name.strip():
            raise ValidationError("Insumo name is required")
        if stock_minimo < ZERO:
            raise ValidationError("Minimum stock cannot be negative")
        return Insumo(
            id=None,
            name=name.strip(),
            stock_minimo=stock_minimo,
            unidad_medida=unidad_medida,
        )

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.stock_minimo

    def deactivate(self) -> None:
        self.activo = False
