"""Domain service: Production Engine.

Turns raw insumo stock into finished product stock following the
product's recipe. Mandatory insumos must fully cover the run; optional
ones are consumed only as far as their stock goes.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from inventario.domain.exceptions import EntityNotFoundError
from inventario.domain.model.availability import MissingInsumo
from inventario.domain.model.movement import (
    CONSUMO,
    ENTRADA,
    Reference,
    ReferenceKind,
    ResourceKind,
)
from inventario.domain.model.production import (
    Production,
    ProductionInsumo,
    ProductionResult,
)
from inventario.domain.model.value_objects import ZERO, positive_quantity
from inventario.domain.repository.product_repository import ProductRepository
from inventario.domain.repository.production_repository import ProductionRepository
from inventario.domain.service.recipe_catalog import RecipeCatalog
from inventario.domain.service.stock_ledger import StockLedger

logger = logging.getLogger("inventario")


class ProductionEngine:

    def __init__(
        self,
        catalog: RecipeCatalog,
        ledger: StockLedger,
        product_repo: ProductRepository,
        production_repo: ProductionRepository,
    ) -> None:
        self._catalog = catalog
        self._ledger = ledger
        self._product_repo = product_repo
        self._production_repo = production_repo

    def produce(
        self,
        product_id: int,
        quantity: Decimal | int,
        usuario_id: str | None = None,
        notas: str | None = None,
    ) -> ProductionResult:
        """Produce ``quantity`` units of a product.

        Mandatory shortages are checked up front and reported in the
        result with nothing written. Past that point, an insumo update
        that fails raises and leaves earlier consumptions in place.
        """
        qty = positive_quantity(quantity)
        if self._product_repo.get_by_id(product_id) is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")

        entries = self._catalog.recipe_for(product_id)
        if not entries:
            raise EntityNotFoundError(f"Product #{product_id} has no recipe defined")

        requirements = [(entry, entry.line.required_for(qty)) for entry in entries]
        missing = [
            MissingInsumo(
                insumo_id=entry.insumo_id,
                nombre=entry.insumo.name,
                requerido=required,
                stock=entry.stock,
            )
            for entry, required in requirements
            if entry.obligatorio and required > entry.stock
        ]
        if missing:
            logger.warning(
                "production.rejected",
                extra={
                    "product_id": product_id,
                    "qty": str(qty),
                    "missing": [m.insumo_id for m in missing],
                },
            )
            return ProductionResult(
                ok=False,
                missing=tuple(missing),
                error="Insufficient stock of mandatory insumos",
            )

        production = Production(
            id=None,
            product_id=product_id,
            cantidad=qty,
            usuario_id=usuario_id,
            notas=notas,
        )
        self._production_repo.save(production)
        production_id: int = production.id  # type: ignore[assignment]
        reference = Reference(ReferenceKind.PRODUCTION, production_id)

        for entry, required in requirements:
            if entry.obligatorio:
                consume = required
            else:
                consume = min(required, entry.stock)
            if consume <= ZERO:
                continue

            self._ledger.record(
                ResourceKind.INSUMO,
                entry.insumo_id,
                CONSUMO,
                consume,
                reference,
                notas=notas or "Consumo por producción",
                usuario_id=usuario_id,
            )
            self._production_repo.add_insumo(
                ProductionInsumo(
                    id=None,
                    production_id=production_id,
                    insumo_id=entry.insumo_id,
                    cantidad_consumida=consume,
                )
            )

        self._ledger.record(
            ResourceKind.PRODUCT,
            product_id,
            ENTRADA,
            qty,
            reference,
            notas="Producción",
            usuario_id=usuario_id,
        )

        logger.info(
            "production.completed",
            extra={"production_id": production_id, "product_id": product_id, "qty": str(qty)},
        )
        return ProductionResult(ok=True, production_id=production_id)
