"""Domain service: Loss Ledger.

Records write-offs of products and insumos. Every create, update and
delete of a loss is mirrored by one compensating stock movement tagged
with the loss, so the stock counters stay consistent with the loss
records.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from inventario.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from inventario.domain.model.loss import (
    Loss,
    LossKind,
    LossSummary,
    LossTotals,
    TopLoss,
)
from inventario.domain.model.movement import (
    ENTRADA,
    PERDIDA,
    SALIDA,
    Reference,
    ReferenceKind,
)
from inventario.domain.model.value_objects import ZERO, Money, positive_quantity
from inventario.domain.repository.insumo_repository import InsumoRepository
from inventario.domain.repository.loss_repository import LossRepository
from inventario.domain.repository.product_repository import ProductRepository
from inventario.domain.service.stock_ledger import StockLedger

logger = logging.getLogger("inventario")

TOP_LOSSES = 10


class LossLedger:

    def __init__(
        self,
        loss_repo: LossRepository,
        product_repo: ProductRepository,
        insumo_repo: InsumoRepository,
        ledger: StockLedger,
    ) -> None:
        self._loss_repo = loss_repo
        self._product_repo = product_repo
        self._insumo_repo = insumo_repo
        self._ledger = ledger

    def record(
        self,
        kind: LossKind,
        cantidad: Decimal | int | str,
        producto_id: int | None = None,
        insumo_id: int | None = None,
        valor_unitario: Money | None = None,
        motivo: str | None = None,
        usuario_id: str | None = None,
    ) -> Loss:
        """Register a loss and take the quantity out of stock.

        The unit value defaults to the product's cost; insumos carry no
        cost, so theirs defaults to zero.
        """
        qty = positive_quantity(cantidad)
        if kind is LossKind.PRODUCT and not producto_id:
            raise ValidationError("A product loss requires a product")
        if kind is LossKind.INSUMO and not insumo_id:
            raise ValidationError("An insumo loss requires an insumo")

        loss = Loss(
            id=None,
            kind=kind,
            cantidad=qty,
            producto_id=producto_id if kind is LossKind.PRODUCT else None,
            insumo_id=insumo_id if kind is LossKind.INSUMO else None,
            motivo=motivo,
            usuario_id=usuario_id,
        )
        _, stock, default_value = self._target(loss)
        if stock < qty:
            raise InsufficientStockError(kind.value, loss.resource_id, stock, qty)
        loss.valor_unitario = valor_unitario or default_value

        self._loss_repo.save(loss)
        self._compensate(loss, qty, "Pérdida registrada")
        logger.info(
            "loss.recorded",
            extra={"loss_id": loss.id, "kind": kind.value, "qty": str(qty)},
        )
        return loss

    def update(
        self,
        loss_id: int,
        cantidad: Decimal | int | str | None = None,
        valor_unitario: Money | None = None,
        motivo: str | None = None,
    ) -> Loss:
        """Change a loss; a new quantity moves only the difference."""
        loss = self._get(loss_id)
        delta = ZERO
        if cantidad is not None:
            new_qty = positive_quantity(cantidad)
            delta = new_qty - loss.cantidad
            if delta > ZERO:
                _, stock, _ = self._target(loss)
                if stock < delta:
                    raise InsufficientStockError(
                        loss.kind.value, loss.resource_id, stock, delta
                    )
            loss.cantidad = new_qty
        if valor_unitario is not None:
            loss.valor_unitario = valor_unitario
        if motivo is not None:
            loss.motivo = motivo

        self._loss_repo.save(loss)
        if delta != ZERO:
            self._compensate(loss, delta, "Ajuste por modificación de pérdida")
        logger.info("loss.updated", extra={"loss_id": loss_id, "delta": str(delta)})
        return loss

    def delete(self, loss_id: int) -> None:
        """Remove a loss and return its quantity to stock."""
        loss = self._get(loss_id)
        self._loss_repo.delete(loss_id)
        self._compensate(loss, -loss.cantidad, "Reversión por eliminación de pérdida")
        logger.info("loss.deleted", extra={"loss_id": loss_id})

    def summarize(
        self,
        desde: datetime | None = None,
        hasta: datetime | None = None,
        usuario_id: str | None = None,
    ) -> LossSummary:
        """Totals per kind plus the items with the highest lost value."""
        losses = [
            l
            for l in self._loss_repo.list_all()
            if (desde is None or l.fecha >= desde)
            and (hasta is None or l.fecha <= hasta)
            and (usuario_id is None or l.usuario_id == usuario_id)
        ]

        def totals(kind: LossKind) -> LossTotals:
            subset = [l for l in losses if l.kind is kind]
            return LossTotals(cantidad=len(subset), valor=_sum_money(subset))

        grouped: dict[tuple[LossKind, int], list[Loss]] = {}
        for loss in losses:
            grouped.setdefault((loss.kind, loss.resource_id), []).append(loss)

        top = [
            TopLoss(
                kind=kind,
                id=resource_id,
                nombre=self._name_of(kind, resource_id),
                cantidad_total=sum((l.cantidad for l in items), ZERO),
                valor_total=_sum_money(items),
                frecuencia=len(items),
            )
            for (kind, resource_id), items in grouped.items()
        ]
        top.sort(key=lambda t: t.valor_total, reverse=True)

        return LossSummary(
            total_items=len(losses),
            valor_total=_sum_money(losses),
            productos=totals(LossKind.PRODUCT),
            insumos=totals(LossKind.INSUMO),
            top=tuple(top[:TOP_LOSSES]),
        )

    # --- Internal helpers -----------------------------------------------------

    def _compensate(self, loss: Loss, delta: Decimal, nota: str) -> None:
        if delta > ZERO:
            clave = SALIDA if loss.kind is LossKind.PRODUCT else PERDIDA
        else:
            clave = ENTRADA
        self._ledger.record(
            loss.kind.resource_kind,
            loss.resource_id,
            clave,
            abs(delta),
            Reference(ReferenceKind.LOSS, loss.id),
            notas=nota,
            usuario_id=loss.usuario_id,
        )

    def _target(self, loss: Loss) -> tuple[str, Decimal, Money]:
        """Name, current stock and default unit value of the lost item."""
        if loss.kind is LossKind.PRODUCT:
            product = self._product_repo.get_by_id(loss.resource_id)
            if product is None:
                raise EntityNotFoundError(f"Product #{loss.resource_id} not found")
            return product.name, product.stock, product.costo
        insumo = self._insumo_repo.get_by_id(loss.resource_id)
        if insumo is None:
            raise EntityNotFoundError(f"Insumo #{loss.resource_id} not found")
        return insumo.name, insumo.stock, Money.zero()

    def _name_of(self, kind: LossKind, resource_id: int) -> str:
        if kind is LossKind.PRODUCT:
            product = self._product_repo.get_by_id(resource_id)
            return product.name if product else f"Producto #{resource_id}"
        insumo = self._insumo_repo.get_by_id(resource_id)
        return insumo.name if insumo else f"Insumo #{resource_id}"

    def _get(self, loss_id: int) -> Loss:
        loss = self._loss_repo.get_by_id(loss_id)
        if loss is None:
            raise EntityNotFoundError(f"Loss #{loss_id} not found")
        return loss


def _sum_money(losses: list[Loss]) -> Money:
    result = Money.zero()
    for loss in losses:
        result = result + loss.valor_total
    return result
