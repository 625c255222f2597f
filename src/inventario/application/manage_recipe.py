"""Application service: recipe maintenance.

Plain CRUD over recipe lines. The reservation and production engines
only ever read recipes.
"""

from __future__ import annotations

from dataclasses import dataclass

from inventario.application.mappers import fmt
from inventario.domain.exceptions import EntityNotFoundError, ValidationError
from inventario.domain.model.recipe import RecipeLine
from inventario.domain.model.value_objects import positive_quantity
from inventario.domain.repository.insumo_repository import InsumoRepository
from inventario.domain.repository.product_repository import ProductRepository
from inventario.domain.repository.recipe_repository import RecipeRepository
from inventario.domain.service.recipe_catalog import RecipeCatalog


@dataclass(frozen=True)
class RecipeLineDTO:
    id: int
    insumo_id: int
    insumo_name: str
    cantidad_por_unidad: str
    unidad_medida: str
    obligatorio: bool
    stock: str


@dataclass(frozen=True)
class RecipeDTO:
    product_id: int
    product_name: str
    lines: list[RecipeLineDTO]
    producible_units: str


class RecipeService:

    def __init__(
        self,
        recipe_repo: RecipeRepository,
        product_repo: ProductRepository,
        insumo_repo: InsumoRepository,
        catalog: RecipeCatalog,
    ) -> None:
        self._recipe_repo = recipe_repo
        self._product_repo = product_repo
        self._insumo_repo = insumo_repo
        self._catalog = catalog

    def show(self, product_id: int) -> RecipeDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")
        entries = self._catalog.recipe_for(product_id)
        return RecipeDTO(
            product_id=product_id,
            product_name=product.name,
            lines=[
                RecipeLineDTO(
                    id=e.line.id,  # type: ignore[arg-type]
                    insumo_id=e.insumo_id,
                    insumo_name=e.insumo.name,
                    cantidad_por_unidad=fmt(e.cantidad_por_unidad),
                    unidad_medida=e.insumo.unidad_medida,
                    obligatorio=e.obligatorio,
                    stock=fmt(e.stock),
                )
                for e in entries
            ],
            producible_units=fmt(RecipeCatalog.units_from(entries)),
        )

    def add_insumo(
        self,
        product_id: int,
        insumo_id: int,
        cantidad_por_unidad: str,
        obligatorio: bool = True,
    ) -> RecipeLine:
        if self._product_repo.get_by_id(product_id) is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")
        if self._insumo_repo.get_by_id(insumo_id) is None:
            raise EntityNotFoundError(f"Insumo #{insumo_id} not found")
        if any(l.insumo_id == insumo_id for l in self._recipe_repo.list_by_product(product_id)):
            raise ValidationError(
                f"Insumo #{insumo_id} is already part of the recipe of product #{product_id}"
            )

        line = RecipeLine(
            id=None,
            product_id=product_id,
            insumo_id=insumo_id,
            cantidad_por_unidad=positive_quantity(cantidad_por_unidad),
            obligatorio=obligatorio,
        )
        self._recipe_repo.save(line)
        return line

    def update_line(
        self,
        line_id: int,
        cantidad_por_unidad: str | None = None,
        obligatorio: bool | None = None,
    ) -> RecipeLine:
        line = self._recipe_repo.get_by_id(line_id)
        if line is None:
            raise EntityNotFoundError(f"Recipe line #{line_id} not found")
        if cantidad_por_unidad is not None:
            line.cantidad_por_unidad = positive_quantity(cantidad_por_unidad)
        if obligatorio is not None:
            line.obligatorio = obligatorio
        self._recipe_repo.save(line)
        return line

    def remove_line(self, line_id: int) -> None:
        if self._recipe_repo.get_by_id(line_id) is None:
            raise EntityNotFoundError(f"Recipe line #{line_id} not found")
        self._recipe_repo.delete(line_id)
