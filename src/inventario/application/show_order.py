"""Application service: Show Order use case (query)."""

from __future__ import annotations

from inventario.application.dto import OrderDTO, OrderLineDTO
from inventario.application.mappers import fmt
from inventario.domain.exceptions import EntityNotFoundError
from inventario.domain.model.order import Order
from inventario.domain.model.value_objects import ZERO
from inventario.domain.repository.order_repository import (
    OrderLineRepository,
    OrderRepository,
)
from inventario.domain.repository.product_repository import ProductRepository
from inventario.domain.repository.status_repository import StatusRepository
from inventario.domain.service.reservation_engine import ReservationEngine


class ShowOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        line_repo: OrderLineRepository,
        status_repo: StatusRepository,
        product_repo: ProductRepository,
        engine: ReservationEngine,
    ) -> None:
        self._order_repo = order_repo
        self._line_repo = line_repo
        self._status_repo = status_repo
        self._product_repo = product_repo
        self._engine = engine

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return self.to_dto(order)

    def to_dto(self, order: Order) -> OrderDTO:
        order_id: int = order.id  # type: ignore[assignment]
        status = self._status_repo.get_by_id(order.estado_id)
        held = self._engine.reservations(order_id)

        items = []
        for line in self._line_repo.list_by_order(order_id):
            product = self._product_repo.get_by_id(line.product_id)
            items.append(
                OrderLineDTO(
                    product_id=line.product_id,
                    product_name=product.name if product else f"#{line.product_id}",
                    quantity=fmt(line.cantidad),
                    reserved=fmt(held.productos.get(line.product_id, ZERO)),
                )
            )

        return OrderDTO(
            id=order_id,
            customer_id=order.customer_id,
            status=status.clave if status else str(order.estado_id),
            items=items,
            reserved_insumos={k: fmt(v) for k, v in held.insumos.items()},
            fecha_pedido=order.fecha_pedido.strftime("%Y-%m-%d %H:%M UTC"),
            fecha_entrega=order.fecha_entrega.isoformat() if order.fecha_entrega else None,
            notas=order.notas,
        )
