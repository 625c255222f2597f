"""Application service: Add Product / Add Insumo use cases.

New items always start with zero stock; stock enters through the ledger
(manual setting, production) so that it stays reconciled.
"""

from __future__ import annotations

from inventario.domain.exceptions import ValidationError
from inventario.domain.model.insumo import Insumo
from inventario.domain.model.product import Product
from inventario.domain.model.value_objects import Money, as_quantity
from inventario.domain.repository.insumo_repository import InsumoRepository
from inventario.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        precio: str = "0",
        costo: str = "0",
        stock_minimo: str = "0",
    ) -> Product:
        """Add a new product to the catalog."""
        if self._product_repo.get_by_name(name.strip()) is not None:
            raise ValidationError(f"Product '{name}' already exists")

        product = Product.create(
            name=name,
            stock_minimo=as_quantity(stock_minimo),
            precio=Money.of(precio),
            costo=Money.of(costo),
        )
        self._product_repo.save(product)
        return product


class AddInsumoHandler:

    def __init__(self, insumo_repo: InsumoRepository) -> None:
        self._insumo_repo = insumo_repo

    def handle(
        self,
        name: str,
        unidad_medida: str = "unidad",
        stock_minimo: str = "0",
    ) -> Insumo:
        """Add a new raw material."""
        if self._insumo_repo.get_by_name(name.strip()) is not None:
            raise ValidationError(f"Insumo '{name}' already exists")

        insumo = Insumo.create(
            name=name,
            unidad_medida=unidad_medida,
            stock_minimo=as_quantity(stock_minimo),
        )
        self._insumo_repo.save(insumo)
        return insumo
