"""Order (pedido) aggregate and its lines.

Lines live in their own table so that an adjustment can replace them
wholesale. Orders are never deleted; cancellation is a status change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal

from inventario.domain.exceptions import ValidationError

ORDER_CATEGORY = "pedido"

PENDING = "pendiente"
IN_PROGRESS = "en_proceso"
DELIVERED = "entregado"
CANCELLED = "cancelado"


@dataclass(frozen=True)
class Status:
    """Lifecycle status reference data, scoped to a category."""

    id: int | None
    categoria: str
    clave: str
    nombre: str


@dataclass
class OrderLine:
    id: int | None
    order_id: int
    product_id: int
    cantidad: Decimal


@dataclass
class Order:
    """Aggregate root for customer orders."""

    id: int | None
    estado_id: int
    customer_id: int | None = None
    fecha_entrega: date | None = None
    notas: str | None = None
    usuario_id: str | None = None
    fecha_pedido: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def transition_to(self, status: Status) -> None:
        if status.categoria != ORDER_CATEGORY:
            raise ValidationError(
                f"Status '{status.clave}' does not belong to category '{ORDER_CATEGORY}'"
            )
        if status.id is None:
            raise ValidationError(f"Status '{status.clave}' has not been persisted")
        self.estado_id = status.id
