"""Domain service: Recipe Catalog.

Read side of the bill of materials. Joins recipe lines with the current
stock of their insumos and derives how many finished units the raw stock
could produce.
"""

from __future__ import annotations

import math
from decimal import Decimal

from inventario.domain.exceptions import EntityNotFoundError
from inventario.domain.model.recipe import RecipeEntry
from inventario.domain.model.value_objects import ZERO
from inventario.domain.repository.insumo_repository import InsumoRepository
from inventario.domain.repository.recipe_repository import RecipeRepository


class RecipeCatalog:

    def __init__(
        self,
        recipe_repo: RecipeRepository,
        insumo_repo: InsumoRepository,
    ) -> None:
        self._recipe_repo = recipe_repo
        self._insumo_repo = insumo_repo

    def recipe_for(self, product_id: int) -> list[RecipeEntry]:
        """Return the product's recipe, mandatory lines first."""
        entries: list[RecipeEntry] = []
        for line in self._recipe_repo.list_by_product(product_id):
            insumo = self._insumo_repo.get_by_id(line.insumo_id)
            if insumo is None:
                raise EntityNotFoundError(
                    f"Insumo #{line.insumo_id} referenced by recipe of product "
                    f"#{product_id} not found"
                )
            entries.append(RecipeEntry(line=line, insumo=insumo))
        entries.sort(key=lambda e: not e.obligatorio)
        return entries

    def mandatory_lines(self, product_id: int) -> list[RecipeEntry]:
        return [e for e in self.recipe_for(product_id) if e.obligatorio]

    def producible_units(self, product_id: int) -> Decimal:
        """Whole units the current raw stock could produce."""
        return self.units_from(self.recipe_for(product_id))

    @staticmethod
    def units_from(entries: list[RecipeEntry]) -> Decimal:
        """floor(min(stock / quantity per unit)) over lines with a positive ratio.

        Lines with a zero quantity per unit are left out of the ratio; a
        product without recipe lines can produce nothing.
        """
        ratios = [
            e.stock / e.cantidad_por_unidad
            for e in entries
            if e.cantidad_por_unidad > ZERO
        ]
        if not ratios:
            return ZERO
        return Decimal(max(0, math.floor(min(ratios))))
