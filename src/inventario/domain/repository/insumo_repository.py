"""Abstract repository for Insumo aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from inventario.domain.model.insumo import Insumo


class InsumoRepository(ABC):

    @abstractmethod
    def get_by_id(self, insumo_id: int) -> Insumo | None:
        """Return an insumo by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Insumo | None:
        """Return an insumo by its exact name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Insumo]:
        """Return every insumo, active or not."""

    @abstractmethod
    def save(self, insumo: Insumo) -> None:
        """Persist a new or updated insumo, assigning an ID if missing."""
