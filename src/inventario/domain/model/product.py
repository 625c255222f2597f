"""Product aggregate — a finished, sellable good.

Products are never deleted; they are soft-deactivated. The ``stock``
counter is a cache of the product ledger and is only written by the
stock ledger service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from inventario.domain.exceptions import ValidationError
from inventario.domain.model.value_objects import ZERO, Money


@dataclass
class Product:
    """A finished good with its own stock counter."""

    id: int | None
    name: str
    stock: Decimal = ZERO
    stock_minimo: Decimal = ZERO
    precio: Money = field(default_factory=Money.zero)
    costo: Money = field(default_factory=Money.zero)
    activo: bool = True

    @staticmethod
    def create(
        name: str,
        stock_minimo: Decimal = ZERO,
        precio: Money | None = None,
        costo: Money | None = None,
    ) -> Product:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if stock_minimo < ZERO:
            raise ValidationError("Minimum stock cannot be negative")
        return Product(
            id=None,
            name=name.strip(),
            stock_minimo=stock_minimo,
            precio=precio or Money.zero(),
            costo=costo or Money.zero(),
        )

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.stock_minimo

    def deactivate(self) -> None:
        self.activo = False
