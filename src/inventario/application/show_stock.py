"""Application service: Show Stock use cases (queries)."""

from __future__ import annotations

from inventario.application.dto import MovementDTO, StockLineDTO
from inventario.application.mappers import fmt
from inventario.domain.model.movement import ResourceKind
from inventario.domain.repository.insumo_repository import InsumoRepository
from inventario.domain.repository.product_repository import ProductRepository
from inventario.domain.service.stock_ledger import StockLedger


class ShowStockHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        insumo_repo: InsumoRepository,
    ) -> None:
        self._product_repo = product_repo
        self._insumo_repo = insumo_repo

    def handle(self, low_only: bool = False) -> list[StockLineDTO]:
        lines = [
            StockLineDTO(
                kind=ResourceKind.PRODUCT.value,
                id=p.id,  # type: ignore[arg-type]
                name=p.name,
                stock=fmt(p.stock),
                stock_minimo=fmt(p.stock_minimo),
                low_stock=p.is_low_stock,
                activo=p.activo,
            )
            for p in self._product_repo.list_all()
        ] + [
            StockLineDTO(
                kind=ResourceKind.INSUMO.value,
                id=i.id,  # type: ignore[arg-type]
                name=i.name,
                stock=fmt(i.stock),
                stock_minimo=fmt(i.stock_minimo),
                low_stock=i.is_low_stock,
                activo=i.activo,
            )
            for i in self._insumo_repo.list_all()
        ]
        if low_only:
            lines = [l for l in lines if l.low_stock and l.activo]
        return lines


class ShowMovementsHandler:

    def __init__(self, ledger: StockLedger) -> None:
        self._ledger = ledger

    def handle(self, kind: ResourceKind, resource_id: int) -> list[MovementDTO]:
        return [
            MovementDTO(
                id=m.id,  # type: ignore[arg-type]
                fecha=m.fecha.strftime("%Y-%m-%d %H:%M"),
                tipo=m.tipo.clave,
                cantidad=fmt(m.cantidad),
                signed=fmt(m.signed_quantity),
                reference=str(m.reference) if m.reference else None,
                notas=m.notas,
            )
            for m in self._ledger.history(kind, resource_id)
        ]
