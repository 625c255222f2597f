"""JSON-file-backed implementations of the catalog repositories."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from inventario.domain.model.insumo import Insumo
from inventario.domain.model.product import Product
from inventario.domain.model.recipe import RecipeLine
from inventario.domain.model.value_objects import Money
from inventario.domain.repository.insumo_repository import InsumoRepository
from inventario.domain.repository.product_repository import ProductRepository
from inventario.domain.repository.recipe_repository import RecipeRepository
from inventario.infrastructure.persistence.json_table import JsonTable


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._table = JsonTable(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        raw = self._table.find(product_id)
        return self._to_domain(raw) if raw else None

    def get_by_name(self, name: str) -> Product | None:
        for raw in self._table.load():
            if raw["name"].lower() == name.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._table.load()]

    def save(self, product: Product) -> None:
        product.id = self._table.upsert(self._to_raw(product))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "stock": str(product.stock),
            "stock_minimo": str(product.stock_minimo),
            "precio": str(product.precio.amount),
            "costo": str(product.costo.amount),
            "currency": product.precio.currency,
            "activo": product.activo,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        currency = raw.get("currency", "MXN")
        return Product(
            id=raw["id"],
            name=raw["name"],
            stock=Decimal(raw["stock"]),
            stock_minimo=Decimal(raw.get("stock_minimo", "0")),
            precio=Money(Decimal(raw.get("precio", "0")), currency),
            costo=Money(Decimal(raw.get("costo", "0")), currency),
            activo=raw.get("activo", True),
        )


class JsonInsumoRepository(InsumoRepository):

    def __init__(self, file_path: Path) -> None:
        self._table = JsonTable(file_path)

    def get_by_id(self, insumo_id: int) -> Insumo | None:
        raw = self._table.find(insumo_id)
        return self._to_domain(raw) if raw else None

    def get_by_name(self, name: str) -> Insumo | None:
        for raw in self._table.load():
            if raw["name"].lower() == name.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Insumo]:
        return [self._to_domain(raw) for raw in self._table.load()]

    def save(self, insumo: Insumo) -> None:
        insumo.id = self._table.upsert(self._to_raw(insumo))

    @staticmethod
    def _to_raw(insumo: Insumo) -> dict:
        return {
            "id": insumo.id,
            "name": insumo.name,
            "stock": str(insumo.stock),
            "stock_minimo": str(insumo.stock_minimo),
            "unidad_medida": insumo.unidad_medida,
            "activo": insumo.activo,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Insumo:
        return Insumo(
            id=raw["id"],
            name=raw["name"],
            stock=Decimal(raw["stock"]),
            stock_minimo=Decimal(raw.get("stock_minimo", "0")),
            unidad_medida=raw.get("unidad_medida", "unidad"),
            activo=raw.get("activo", True),
        )


class JsonRecipeRepository(RecipeRepository):

    def __init__(self, file_path: Path) -> None:
        self._table = JsonTable(file_path)

    def list_by_product(self, product_id: int) -> list[RecipeLine]:
        lines = [
            self._to_domain(raw)
            for raw in self._table.load()
            if raw["product_id"] == product_id
        ]
        return sorted(lines, key=lambda l: not l.obligatorio)

    def get_by_id(self, line_id: int) -> RecipeLine | None:
        raw = self._table.find(line_id)
        return self._to_domain(raw) if raw else None

    def save(self, line: RecipeLine) -> None:
        line.id = self._table.upsert(self._to_raw(line))

    def delete(self, line_id: int) -> None:
        self._table.delete_where(id=line_id)

    @staticmethod
    def _to_raw(line: RecipeLine) -> dict:
        return {
            "id": line.id,
            "product_id": line.product_id,
            "insumo_id": line.insumo_id,
            "cantidad_por_unidad": str(line.cantidad_por_unidad),
            "obligatorio": line.obligatorio,
        }

    @staticmethod
    def _to_domain(raw: dict) -> RecipeLine:
        return RecipeLine(
            id=raw["id"],
            product_id=raw["product_id"],
            insumo_id=raw["insumo_id"],
            cantidad_por_unidad=Decimal(raw["cantidad_por_unidad"]),
            obligatorio=raw.get("obligatorio", True),
        )
