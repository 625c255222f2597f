"""Application service: Set Stock use case.

Sets a product or insumo counter to an absolute value. The difference is
recorded as a ledger movement so that stock still equals the sum of its
movements: products use ``entrada``/``salida``, insumos use
``entrada``/``ajuste``.
"""

from __future__ import annotations

from inventario.domain.exceptions import EntityNotFoundError, ValidationError
from inventario.domain.model.movement import (
    AJUSTE,
    ENTRADA,
    SALIDA,
    Reference,
    ReferenceKind,
    ResourceKind,
)
from inventario.domain.model.value_objects import ZERO, as_quantity
from inventario.domain.repository.insumo_repository import InsumoRepository
from inventario.domain.repository.product_repository import ProductRepository
from inventario.domain.service.stock_ledger import StockLedger


class SetStockHandler:

    def __init__(
        self,
        ledger: StockLedger,
        product_repo: ProductRepository,
        insumo_repo: InsumoRepository,
    ) -> None:
        self._ledger = ledger
        self._product_repo = product_repo
        self._insumo_repo = insumo_repo

    def handle(
        self,
        kind: ResourceKind,
        resource_id: int,
        quantity: str,
        motivo: str = "",
    ) -> None:
        """Set the stock of a product or insumo to ``quantity``."""
        target = as_quantity(quantity)
        if target < ZERO:
            raise ValidationError("Stock cannot be negative")

        if kind is ResourceKind.PRODUCT:
            resource = self._product_repo.get_by_id(resource_id)
        else:
            resource = self._insumo_repo.get_by_id(resource_id)
        if resource is None:
            raise EntityNotFoundError(f"{kind.value.capitalize()} #{resource_id} not found")

        difference = target - resource.stock
        if difference == ZERO:
            return

        if difference > ZERO:
            clave = ENTRADA
        else:
            clave = SALIDA if kind is ResourceKind.PRODUCT else AJUSTE

        self._ledger.record(
            kind,
            resource_id,
            clave,
            abs(difference),
            Reference(ReferenceKind.MANUAL),
            notas=motivo or "Ajuste manual de stock",
        )
