"""Abstract repositories for Order aggregate and its lines."""

from __future__ import annotations

from abc import ABC, abstractmethod

from inventario.domain.model.order import Order, OrderLine


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order, assigning an ID if missing."""


class OrderLineRepository(ABC):

    @abstractmethod
    def list_by_order(self, order_id: int) -> list[OrderLine]:
        """Return the lines of one order."""

    @abstractmethod
    def add(self, lines: list[OrderLine]) -> list[OrderLine]:
        """Insert lines and return them with IDs assigned."""

    @abstractmethod
    def delete_by_order(self, order_id: int) -> None:
        """Remove every line of one order."""
