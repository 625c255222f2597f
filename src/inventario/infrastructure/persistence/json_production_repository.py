"""JSON-file-backed implementation of ProductionRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from inventario.domain.model.production import Production, ProductionInsumo
from inventario.domain.repository.production_repository import ProductionRepository
from inventario.infrastructure.persistence.json_table import JsonTable


class JsonProductionRepository(ProductionRepository):

    def __init__(self, production_path: Path, consumption_path: Path) -> None:
        self._productions = JsonTable(production_path)
        self._consumptions = JsonTable(consumption_path)

    def get_by_id(self, production_id: int) -> Production | None:
        raw = self._productions.find(production_id)
        if raw is None:
            return None
        return Production(
            id=raw["id"],
            product_id=raw["product_id"],
            cantidad=Decimal(raw["cantidad"]),
            usuario_id=raw.get("usuario_id"),
            notas=raw.get("notas"),
            fecha=datetime.fromisoformat(raw["fecha"]),
        )

    def save(self, production: Production) -> None:
        production.id = self._productions.upsert(
            {
                "id": production.id,
                "product_id": production.product_id,
                "cantidad": str(production.cantidad),
                "usuario_id": production.usuario_id,
                "notas": production.notas,
                "fecha": production.fecha.isoformat(),
            }
        )

    def add_insumo(self, row: ProductionInsumo) -> ProductionInsumo:
        new_id = self._consumptions.upsert(
            {
                "id": None,
                "production_id": row.production_id,
                "insumo_id": row.insumo_id,
                "cantidad_consumida": str(row.cantidad_consumida),
            }
        )
        return ProductionInsumo(
            id=new_id,
            production_id=row.production_id,
            insumo_id=row.insumo_id,
            cantidad_consumida=row.cantidad_consumida,
        )

    def list_insumos(self, production_id: int) -> list[ProductionInsumo]:
        return [
            ProductionInsumo(
                id=raw["id"],
                production_id=raw["production_id"],
                insumo_id=raw["insumo_id"],
                cantidad_consumida=Decimal(raw["cantidad_consumida"]),
            )
            for raw in self._consumptions.load()
            if raw["production_id"] == production_id
        ]
