"""Shared domain -> DTO mapping helpers."""

from __future__ import annotations

from decimal import Decimal

from inventario.application.dto import (
    AvailabilityDTO,
    AvailabilityLineDTO,
    LineSpec,
    MissingInsumoDTO,
)
from inventario.domain.model.availability import (
    AvailabilityReport,
    LineRequest,
    MissingInsumo,
)
from inventario.domain.model.value_objects import as_quantity
from inventario.domain.repository.product_repository import ProductRepository


def fmt(quantity: Decimal) -> str:
    """Render a quantity without trailing zeros (``3``, ``1.5``)."""
    text = format(quantity.normalize(), "f")
    return text if text != "-0" else "0"


def to_requests(specs: list[LineSpec]) -> list[LineRequest]:
    return [LineRequest(product_id=s.product_id, quantity=as_quantity(s.quantity)) for s in specs]


def missing_to_dto(missing: tuple[MissingInsumo, ...]) -> list[MissingInsumoDTO]:
    return [
        MissingInsumoDTO(
            insumo_id=m.insumo_id,
            nombre=m.nombre,
            requerido=fmt(m.requerido),
            stock=fmt(m.stock),
        )
        for m in missing
    ]


def availability_to_dto(
    report: AvailabilityReport, product_repo: ProductRepository
) -> AvailabilityDTO:
    lines = []
    for line in report.lines:
        product = product_repo.get_by_id(line.product_id)
        lines.append(
            AvailabilityLineDTO(
                product_id=line.product_id,
                product_name=product.name if product else f"#{line.product_id}",
                requested=fmt(line.requested),
                product_stock=fmt(line.product_stock),
                reserved_from_stock=fmt(line.reserved_from_stock),
                producible_from_insumos=fmt(line.producible_from_insumos),
                satisfiable=line.line_satisfiable,
                missing=missing_to_dto(line.missing_mandatory_insumos),
            )
        )
    return AvailabilityDTO(lines=lines, all_satisfiable=report.all_satisfiable)
