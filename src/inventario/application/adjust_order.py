"""Application service: Adjust Order use case."""

from __future__ import annotations

from inventario.application.dto import LineSpec, OrderDTO
from inventario.application.mappers import to_requests
from inventario.application.show_order import ShowOrderHandler
from inventario.domain.service.reservation_engine import ReservationEngine


class AdjustOrderHandler:

    def __init__(self, engine: ReservationEngine, show_handler: ShowOrderHandler) -> None:
        self._engine = engine
        self._show_handler = show_handler

    def handle(self, order_id: int, specs: list[LineSpec]) -> OrderDTO:
        self._engine.adjust_order(order_id, to_requests(specs))
        return self._show_handler.handle(order_id)
