"""Abstract repositories for the two stock ledgers and their reference data."""

from __future__ import annotations

from abc import ABC, abstractmethod

from inventario.domain.model.movement import (
    Movement,
    MovementType,
    Reference,
    ResourceKind,
)


class MovementTypeRepository(ABC):

    @abstractmethod
    def get_by_clave(self, kind: ResourceKind, clave: str) -> MovementType | None:
        """Resolve a movement type by its semantic key within one ledger."""

    @abstractmethod
    def get_by_id(self, kind: ResourceKind, type_id: int) -> MovementType | None:
        """Return a movement type by its ID within one ledger, or None."""

    @abstractmethod
    def list_by_kind(self, kind: ResourceKind) -> list[MovementType]:
        """Return every movement type of one ledger."""

    @abstractmethod
    def save(self, movement_type: MovementType) -> MovementType:
        """Persist a movement type and return it with its ID assigned."""


class MovementRepository(ABC):
    """Append-only store. Rows are never updated or deleted."""

    @abstractmethod
    def add(self, movement: Movement) -> Movement:
        """Insert a ledger row and return it with its ID assigned."""

    @abstractmethod
    def list_by_reference(
        self, kind: ResourceKind, reference: Reference
    ) -> list[Movement]:
        """Return every row of one ledger tagged with ``reference``."""

    @abstractmethod
    def list_by_resource(self, kind: ResourceKind, resource_id: int) -> list[Movement]:
        """Return every row of one ledger for a single product or insumo."""
