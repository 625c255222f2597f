"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from inventario.config import settings
from inventario.domain.model.movement import (
    AJUSTE,
    CONSUMO,
    ENTRADA,
    PERDIDA,
    SALIDA,
    MovementType,
    ResourceKind,
)
from inventario.domain.model.order import (
    CANCELLED,
    DELIVERED,
    IN_PROGRESS,
    ORDER_CATEGORY,
    PENDING,
    Status,
)
from inventario.domain.repository.movement_repository import MovementTypeRepository
from inventario.domain.repository.status_repository import StatusRepository
from inventario.domain.service.availability_calculator import AvailabilityCalculator
from inventario.domain.service.loss_ledger import LossLedger
from inventario.domain.service.production_engine import ProductionEngine
from inventario.domain.service.recipe_catalog import RecipeCatalog
from inventario.domain.service.reservation_engine import ReservationEngine
from inventario.domain.service.stock_ledger import StockLedger
from inventario.infrastructure.persistence.json_catalog_repository import (
    JsonInsumoRepository,
    JsonProductRepository,
    JsonRecipeRepository,
)
from inventario.infrastructure.persistence.json_ledger_repository import (
    JsonMovementRepository,
    JsonMovementTypeRepository,
    JsonStatusRepository,
)
from inventario.infrastructure.persistence.json_loss_repository import JsonLossRepository
from inventario.infrastructure.persistence.json_order_repository import (
    JsonOrderLineRepository,
    JsonOrderRepository,
)
from inventario.infrastructure.persistence.json_production_repository import (
    JsonProductionRepository,
)

MOVEMENT_TYPES: list[tuple[ResourceKind, str, str, bool]] = [
    (ResourceKind.PRODUCT, ENTRADA, "Entrada", True),
    (ResourceKind.PRODUCT, SALIDA, "Salida", False),
    (ResourceKind.INSUMO, ENTRADA, "Entrada", True),
    (ResourceKind.INSUMO, SALIDA, "Salida", False),
    (ResourceKind.INSUMO, CONSUMO, "Consumo", False),
    (ResourceKind.INSUMO, PERDIDA, "Pérdida", False),
    (ResourceKind.INSUMO, AJUSTE, "Ajuste", False),
]

ORDER_STATUSES: list[tuple[str, str]] = [
    (PENDING, "Pendiente"),
    (IN_PROGRESS, "En proceso"),
    (DELIVERED, "Entregado"),
    (CANCELLED, "Cancelado"),
]


@dataclass(frozen=True)
class Services:
    """Fully wired domain services sharing one set of repositories."""

    products: JsonProductRepository
    insumos: JsonInsumoRepository
    recipes: JsonRecipeRepository
    movement_types: JsonMovementTypeRepository
    movements: JsonMovementRepository
    statuses: JsonStatusRepository
    orders: JsonOrderRepository
    order_lines: JsonOrderLineRepository
    productions: JsonProductionRepository
    losses: JsonLossRepository
    ledger: StockLedger
    catalog: RecipeCatalog
    calculator: AvailabilityCalculator
    reservations: ReservationEngine
    production: ProductionEngine
    loss_ledger: LossLedger


def seed_reference_data(
    type_repo: MovementTypeRepository,
    status_repo: StatusRepository,
) -> None:
    """Insert the movement types and order statuses that are missing."""
    for kind, clave, nombre, increases in MOVEMENT_TYPES:
        if type_repo.get_by_clave(kind, clave) is None:
            type_repo.save(
                MovementType(
                    id=None,
                    kind=kind,
                    clave=clave,
                    nombre=nombre,
                    incrementa_stock=increases,
                )
            )
    for clave, nombre in ORDER_STATUSES:
        if status_repo.get_by_clave(ORDER_CATEGORY, clave) is None:
            status_repo.save(Status(id=None, categoria=ORDER_CATEGORY, clave=clave, nombre=nombre))


def build_services(data_dir: Path | None = None) -> Services:
    data_dir = Path(data_dir) if data_dir else settings.DATA_DIR

    products = JsonProductRepository(data_dir / "productos.json")
    insumos = JsonInsumoRepository(data_dir / "insumos.json")
    recipes = JsonRecipeRepository(data_dir / "receta_insumos.json")
    movement_types = JsonMovementTypeRepository(data_dir / "tipos_movimiento.json")
    movements = JsonMovementRepository(
        data_dir / "movimientos_inventario.json",
        data_dir / "movimientos_insumos.json",
        movement_types,
    )
    statuses = JsonStatusRepository(data_dir / "estados.json")
    orders = JsonOrderRepository(data_dir / "pedidos.json")
    order_lines = JsonOrderLineRepository(data_dir / "pedido_items.json")
    productions = JsonProductionRepository(
        data_dir / "producciones.json", data_dir / "produccion_insumos.json"
    )
    losses = JsonLossRepository(data_dir / "perdidas.json")

    seed_reference_data(movement_types, statuses)

    ledger = StockLedger(products, insumos, movements, movement_types)
    catalog = RecipeCatalog(recipes, insumos)
    calculator = AvailabilityCalculator(products, catalog)

    return Services(
        products=products,
        insumos=insumos,
        recipes=recipes,
        movement_types=movement_types,
        movements=movements,
        statuses=statuses,
        orders=orders,
        order_lines=order_lines,
        productions=productions,
        losses=losses,
        ledger=ledger,
        catalog=catalog,
        calculator=calculator,
        reservations=ReservationEngine(
            calculator, ledger, catalog, orders, order_lines, statuses
        ),
        production=ProductionEngine(catalog, ledger, products, productions),
        loss_ledger=LossLedger(losses, products, insumos, ledger),
    )
