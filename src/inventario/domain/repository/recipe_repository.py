"""Abstract repository for recipe lines."""

from __future__ import annotations

from abc import ABC, abstractmethod

from inventario.domain.model.recipe import RecipeLine


class RecipeRepository(ABC):

    @abstractmethod
    def list_by_product(self, product_id: int) -> list[RecipeLine]:
        """Return the recipe lines of a product, mandatory lines first."""

    @abstractmethod
    def get_by_id(self, line_id: int) -> RecipeLine | None:
        """Return a single recipe line, or None."""

    @abstractmethod
    def save(self, line: RecipeLine) -> None:
        """Persist a new or updated recipe line."""

    @abstractmethod
    def delete(self, line_id: int) -> None:
        """Remove a recipe line. Missing IDs are ignored."""
