"""Abstract repository for Loss records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from inventario.domain.model.loss import Loss


class LossRepository(ABC):

    @abstractmethod
    def get_by_id(self, loss_id: int) -> Loss | None:
        """Return a loss by its ID, or None."""

    @abstractmethod
    def list_all(self) -> list[Loss]:
        """Return every loss, newest first."""

    @abstractmethod
    def save(self, loss: Loss) -> None:
        """Persist a new or updated loss, assigning an ID if missing."""

    @abstractmethod
    def delete(self, loss_id: int) -> None:
        """Physically remove a loss record."""
