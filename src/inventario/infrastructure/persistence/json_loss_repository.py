"""JSON-file-backed implementation of LossRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from inventario.domain.model.loss import Loss, LossKind
from inventario.domain.model.value_objects import Money
from inventario.domain.repository.loss_repository import LossRepository
from inventario.infrastructure.persistence.json_table import JsonTable


class JsonLossRepository(LossRepository):

    def __init__(self, file_path: Path) -> None:
        self._table = JsonTable(file_path)

    def get_by_id(self, loss_id: int) -> Loss | None:
        raw = self._table.find(loss_id)
        return self._to_domain(raw) if raw else None

    def list_all(self) -> list[Loss]:
        losses = [self._to_domain(raw) for raw in self._table.load()]
        return sorted(losses, key=lambda l: l.fecha, reverse=True)

    def save(self, loss: Loss) -> None:
        loss.id = self._table.upsert(self._to_raw(loss))

    def delete(self, loss_id: int) -> None:
        self._table.delete_where(id=loss_id)

    @staticmethod
    def _to_raw(loss: Loss) -> dict:
        return {
            "id": loss.id,
            "tipo_item": loss.kind.value,
            "producto_id": loss.producto_id,
            "insumo_id": loss.insumo_id,
            "cantidad": str(loss.cantidad),
            "valor_unitario": str(loss.valor_unitario.amount),
            "currency": loss.valor_unitario.currency,
            "motivo": loss.motivo,
            "usuario_id": loss.usuario_id,
            "fecha": loss.fecha.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Loss:
        return Loss(
            id=raw["id"],
            kind=LossKind(raw["tipo_item"]),
            cantidad=Decimal(raw["cantidad"]),
            producto_id=raw.get("producto_id"),
            insumo_id=raw.get("insumo_id"),
            valor_unitario=Money(Decimal(raw["valor_unitario"]), raw.get("currency", "MXN")),
            motivo=raw.get("motivo"),
            usuario_id=raw.get("usuario_id"),
            fecha=datetime.fromisoformat(raw["fecha"]),
        )
