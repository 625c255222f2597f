"""Abstract repository for lifecycle status reference data."""

from __future__ import annotations

from abc import ABC, abstractmethod

from inventario.domain.model.order import Status


class StatusRepository(ABC):

    @abstractmethod
    def get_by_clave(self, categoria: str, clave: str) -> Status | None:
        """Resolve a status by its semantic key within a category."""

    @abstractmethod
    def get_by_id(self, status_id: int) -> Status | None:
        """Return a status by its ID, or None."""

    @abstractmethod
    def save(self, status: Status) -> Status:
        """Persist a status and return it with its ID assigned."""
