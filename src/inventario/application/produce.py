"""Application service: Produce use case."""

from __future__ import annotations

from inventario.application.dto import ProductionDTO
from inventario.application.mappers import missing_to_dto
from inventario.domain.model.value_objects import as_quantity
from inventario.domain.service.production_engine import ProductionEngine


class ProduceHandler:

    def __init__(self, engine: ProductionEngine) -> None:
        self._engine = engine

    def handle(
        self,
        product_id: int,
        quantity: str,
        usuario_id: str | None = None,
        notas: str | None = None,
    ) -> ProductionDTO:
        result = self._engine.produce(
            product_id, as_quantity(quantity), usuario_id=usuario_id, notas=notas
        )
        return ProductionDTO(
            ok=result.ok,
            production_id=result.production_id,
            missing=missing_to_dto(result.missing),
            error=result.error,
        )
