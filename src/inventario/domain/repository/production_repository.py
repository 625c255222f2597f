"""Abstract repository for production runs."""

from __future__ import annotations

from abc import ABC, abstractmethod

from inventario.domain.model.production import Production, ProductionInsumo


class ProductionRepository(ABC):

    @abstractmethod
    def get_by_id(self, production_id: int) -> Production | None:
        """Return a production run, or None."""

    @abstractmethod
    def save(self, production: Production) -> None:
        """Persist a production run, assigning an ID if missing."""

    @abstractmethod
    def add_insumo(self, row: ProductionInsumo) -> ProductionInsumo:
        """Record one consumed insumo for a production run."""

    @abstractmethod
    def list_insumos(self, production_id: int) -> list[ProductionInsumo]:
        """Return the consumption audit trail of a production run."""
