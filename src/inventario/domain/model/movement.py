"""Ledger rows and their reference data.

Two parallel ledgers exist, one per resource kind. Rows are immutable;
the only link between a row and the business entity that caused it is
the ``Reference`` tag.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum


class ResourceKind(Enum):
    PRODUCT = "producto"
    INSUMO = "insumo"


class ReferenceKind(Enum):
    ORDER = "pedido"
    PRODUCTION = "produccion"
    LOSS = "perdida"
    MANUAL = "ajuste_manual"


# Movement type keys
ENTRADA = "entrada"
SALIDA = "salida"
CONSUMO = "consumo"
PERDIDA = "perdida"
AJUSTE = "ajuste"


@dataclass(frozen=True)
class Reference:
    """Tag linking ledger rows to an order, production run or loss."""

    kind: ReferenceKind
    id: int | None = None

    def __str__(self) -> str:
        if self.id is None:
            return self.kind.value
        return f"{self.kind.value}#{self.id}"


@dataclass(frozen=True)
class MovementType:
    """Reference-data row resolved by its semantic key (``clave``)."""

    id: int | None
    kind: ResourceKind
    clave: str
    nombre: str
    incrementa_stock: bool


@dataclass(frozen=True)
class Movement:
    """Immutable ledger entry. ``cantidad`` is always positive."""

    id: int | None
    kind: ResourceKind
    resource_id: int
    tipo: MovementType
    cantidad: Decimal
    reference: Reference | None = None
    notas: str | None = None
    usuario_id: str | None = None
    fecha: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def signed_quantity(self) -> Decimal:
        return self.cantidad if self.tipo.incrementa_stock else -self.cantidad
