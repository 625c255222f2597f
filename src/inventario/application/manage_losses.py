"""Application service: loss (perdida) use cases."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from inventario.application.mappers import fmt
from inventario.domain.exceptions import ValidationError
from inventario.domain.model.loss import Loss, LossKind
from inventario.domain.model.value_objects import Money
from inventario.domain.service.loss_ledger import LossLedger


@dataclass(frozen=True)
class LossDTO:
    id: int
    kind: str
    resource_id: int
    cantidad: str
    valor_unitario: str
    valor_total: str
    motivo: str | None
    fecha: str


@dataclass(frozen=True)
class TopLossDTO:
    kind: str
    id: int
    nombre: str
    cantidad_total: str
    valor_total: str
    frecuencia: int


@dataclass(frozen=True)
class LossSummaryDTO:
    total_items: int
    valor_total: str
    productos: tuple[int, str]
    insumos: tuple[int, str]
    top: list[TopLossDTO]


class LossHandler:

    def __init__(self, loss_ledger: LossLedger) -> None:
        self._loss_ledger = loss_ledger

    def record(
        self,
        kind: str,
        resource_id: int,
        cantidad: str,
        valor_unitario: str | None = None,
        motivo: str | None = None,
        usuario_id: str | None = None,
    ) -> LossDTO:
        try:
            loss_kind = LossKind(kind)
        except ValueError as exc:
            raise ValidationError(f"Invalid loss kind: {kind!r}") from exc
        loss = self._loss_ledger.record(
            loss_kind,
            cantidad,
            producto_id=resource_id if loss_kind is LossKind.PRODUCT else None,
            insumo_id=resource_id if loss_kind is LossKind.INSUMO else None,
            valor_unitario=Money.of(valor_unitario) if valor_unitario is not None else None,
            motivo=motivo,
            usuario_id=usuario_id,
        )
        return self._to_dto(loss)

    def update(
        self,
        loss_id: int,
        cantidad: str | None = None,
        valor_unitario: str | None = None,
        motivo: str | None = None,
    ) -> LossDTO:
        loss = self._loss_ledger.update(
            loss_id,
            cantidad=cantidad,
            valor_unitario=Money.of(valor_unitario) if valor_unitario is not None else None,
            motivo=motivo,
        )
        return self._to_dto(loss)

    def delete(self, loss_id: int) -> None:
        self._loss_ledger.delete(loss_id)

    def summary(
        self,
        desde: datetime | None = None,
        hasta: datetime | None = None,
    ) -> LossSummaryDTO:
        s = self._loss_ledger.summarize(desde=desde, hasta=hasta)
        return LossSummaryDTO(
            total_items=s.total_items,
            valor_total=str(s.valor_total),
            productos=(s.productos.cantidad, str(s.productos.valor)),
            insumos=(s.insumos.cantidad, str(s.insumos.valor)),
            top=[
                TopLossDTO(
                    kind=t.kind.value,
                    id=t.id,
                    nombre=t.nombre,
                    cantidad_total=fmt(t.cantidad_total),
                    valor_total=str(t.valor_total),
                    frecuencia=t.frecuencia,
                )
                for t in s.top
            ],
        )

    @staticmethod
    def _to_dto(loss: Loss) -> LossDTO:
        return LossDTO(
            id=loss.id,  # type: ignore[arg-type]
            kind=loss.kind.value,
            resource_id=loss.resource_id,
            cantidad=fmt(loss.cantidad),
            valor_unitario=str(loss.valor_unitario),
            valor_total=str(loss.valor_total),
            motivo=loss.motivo,
            fecha=loss.fecha.strftime("%Y-%m-%d %H:%M"),
        )
