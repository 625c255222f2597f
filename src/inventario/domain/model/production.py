"""Production runs and their consumption audit trail."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from inventario.domain.model.availability import MissingInsumo


@dataclass
class Production:
    id: int | None
    product_id: int
    cantidad: Decimal
    usuario_id: str | None = None
    notas: str | None = None
    fecha: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class ProductionInsumo:
    """What one production run actually consumed of one insumo."""

    id: int | None
    production_id: int
    insumo_id: int
    cantidad_consumida: Decimal


@dataclass(frozen=True)
class ProductionResult:
    """Outcome of a production request.

    A shortage of mandatory insumos is reported here rather than raised,
    so callers can show the user exactly what is missing.
    """

    ok: bool
    production_id: int | None = None
    missing: tuple[MissingInsumo, ...] = ()
    error: str | None = None
