"""JSON-file-backed implementations of OrderRepository and OrderLineRepository."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

from inventario.domain.model.order import Order, OrderLine
from inventario.domain.repository.order_repository import (
    OrderLineRepository,
    OrderRepository,
)
from inventario.infrastructure.persistence.json_table import JsonTable


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._table = JsonTable(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        raw = self._table.find(order_id)
        return self._to_domain(raw) if raw else None

    def list_all(self) -> list[Order]:
        orders = [self._to_domain(raw) for raw in self._table.load()]
        return sorted(orders, key=lambda o: o.fecha_pedido, reverse=True)

    def save(self, order: Order) -> None:
        order.id = self._table.upsert(self._to_raw(order))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "estado_id": order.estado_id,
            "customer_id": order.customer_id,
            "fecha_pedido": order.fecha_pedido.isoformat(),
            "fecha_entrega": order.fecha_entrega.isoformat() if order.fecha_entrega else None,
            "notas": order.notas,
            "usuario_id": order.usuario_id,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        return Order(
            id=raw["id"],
            estado_id=raw["estado_id"],
            customer_id=raw.get("customer_id"),
            fecha_pedido=datetime.fromisoformat(raw["fecha_pedido"]),
            fecha_entrega=(
                date.fromisoformat(raw["fecha_entrega"]) if raw.get("fecha_entrega") else None
            ),
            notas=raw.get("notas"),
            usuario_id=raw.get("usuario_id"),
        )


class JsonOrderLineRepository(OrderLineRepository):

    def __init__(self, file_path: Path) -> None:
        self._table = JsonTable(file_path)

    def list_by_order(self, order_id: int) -> list[OrderLine]:
        return [
            self._to_domain(raw)
            for raw in self._table.load()
            if raw["order_id"] == order_id
        ]

    def add(self, lines: list[OrderLine]) -> list[OrderLine]:
        for line in lines:
            line.id = self._table.upsert(self._to_raw(line))
        return lines

    def delete_by_order(self, order_id: int) -> None:
        self._table.delete_where(order_id=order_id)

    @staticmethod
    def _to_raw(line: OrderLine) -> dict:
        return {
            "id": line.id,
            "order_id": line.order_id,
            "product_id": line.product_id,
            "cantidad": str(line.cantidad),
        }

    @staticmethod
    def _to_domain(raw: dict) -> OrderLine:
        return OrderLine(
            id=raw["id"],
            order_id=raw["order_id"],
            product_id=raw["product_id"],
            cantidad=Decimal(raw["cantidad"]),
        )
