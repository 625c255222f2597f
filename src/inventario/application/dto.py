"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world. Quantities and amounts
are pre-formatted strings.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LineSpec:
    """Input: a product ID and how many units are wanted."""

    product_id: int
    quantity: str


@dataclass(frozen=True)
class MissingInsumoDTO:
    insumo_id: int
    nombre: str
    requerido: str
    stock: str


@dataclass(frozen=True)
class AvailabilityLineDTO:
    product_id: int
    product_name: str
    requested: str
    product_stock: str
    reserved_from_stock: str
    producible_from_insumos: str
    satisfiable: bool
    missing: list[MissingInsumoDTO]


@dataclass(frozen=True)
class AvailabilityDTO:
    lines: list[AvailabilityLineDTO]
    all_satisfiable: bool


@dataclass(frozen=True)
class OrderLineDTO:
    product_id: int
    product_name: str
    quantity: str
    reserved: str


@dataclass(frozen=True)
class OrderDTO:
    id: int
    customer_id: int | None
    status: str
    items: list[OrderLineDTO]
    reserved_insumos: dict[int, str]
    fecha_pedido: str
    fecha_entrega: str | None
    notas: str | None


@dataclass(frozen=True)
class StockLineDTO:
    kind: str
    id: int
    name: str
    stock: str
    stock_minimo: str
    low_stock: bool
    activo: bool


@dataclass(frozen=True)
class MovementDTO:
    id: int
    fecha: str
    tipo: str
    cantidad: str
    signed: str
    reference: str | None
    notas: str | None


@dataclass(frozen=True)
class ProductionDTO:
    ok: bool
    production_id: int | None
    missing: list[MissingInsumoDTO]
    error: str | None
