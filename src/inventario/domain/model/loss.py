"""Loss (perdida) records — write-offs of products or insumos."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from inventario.domain.exceptions import ValidationError
from inventario.domain.model.movement import ResourceKind
from inventario.domain.model.value_objects import Money


class LossKind(Enum):
    PRODUCT = "producto"
    INSUMO = "insumo"

    @property
    def resource_kind(self) -> ResourceKind:
        return ResourceKind(self.value)


@dataclass
class Loss:
    id: int | None
    kind: LossKind
    cantidad: Decimal
    producto_id: int | None = None
    insumo_id: int | None = None
    valor_unitario: Money = field(default_factory=Money.zero)
    motivo: str | None = None
    usuario_id: str | None = None
    fecha: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def resource_id(self) -> int:
        target = self.producto_id if self.kind is LossKind.PRODUCT else self.insumo_id
        if target is None:
            raise ValidationError(f"Loss of kind {self.kind.value} has no target")
        return target

    @property
    def valor_total(self) -> Money:
        return self.valor_unitario * self.cantidad


@dataclass(frozen=True)
class LossTotals:
    cantidad: int
    valor: Money


@dataclass(frozen=True)
class TopLoss:
    """Losses of one product or insumo, aggregated."""

    kind: LossKind
    id: int
    nombre: str
    cantidad_total: Decimal
    valor_total: Money
    frecuencia: int


@dataclass(frozen=True)
class LossSummary:
    total_items: int
    valor_total: Money
    productos: LossTotals
    insumos: LossTotals
    top: tuple[TopLoss, ...]
