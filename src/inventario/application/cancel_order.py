"""Application service: Cancel Order use case.

Releases every reservation the ledger still holds for the order, then
marks it cancelled. Cancelling twice is harmless.
"""

from __future__ import annotations

from inventario.domain.service.reservation_engine import ReservationEngine


class CancelOrderHandler:

    def __init__(self, engine: ReservationEngine) -> None:
        self._engine = engine

    def handle(self, order_id: int) -> None:
        self._engine.cancel_order(order_id)
