"""Domain service: Stock Ledger.

Owns the two append-only movement ledgers (finished products and raw
insumos) and the mutable stock counters they feed. Every stock change in
the system goes through ``record()`` so that, for any resource,

    stock == initial stock + sum of signed movements

holds whenever no operation is mid-flight.

There is no transaction wrapper: each call is an independent
read-then-write against the store, and concurrent callers can race.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from decimal import Decimal

from inventario.domain.exceptions import EntityNotFoundError, InsufficientStockError
from inventario.domain.model.insumo import Insumo
from inventario.domain.model.movement import (
    Movement,
    MovementType,
    Reference,
    ResourceKind,
)
from inventario.domain.model.product import Product
from inventario.domain.model.value_objects import ZERO, positive_quantity
from inventario.domain.repository.insumo_repository import InsumoRepository
from inventario.domain.repository.movement_repository import (
    MovementRepository,
    MovementTypeRepository,
)
from inventario.domain.repository.product_repository import ProductRepository

logger = logging.getLogger("inventario")


class StockLedger:

    def __init__(
        self,
        product_repo: ProductRepository,
        insumo_repo: InsumoRepository,
        movement_repo: MovementRepository,
        movement_type_repo: MovementTypeRepository,
    ) -> None:
        self._product_repo = product_repo
        self._insumo_repo = insumo_repo
        self._movement_repo = movement_repo
        self._movement_type_repo = movement_type_repo

    # --- Writes ---------------------------------------------------------------

    def record(
        self,
        kind: ResourceKind,
        resource_id: int,
        clave: str,
        quantity: Decimal | int | str,
        reference: Reference | None = None,
        notas: str | None = None,
        usuario_id: str | None = None,
    ) -> Movement:
        """Append a movement and apply it to the resource's stock counter.

        Decreasing movements that would leave the counter below zero are
        rejected with InsufficientStockError before anything is written.
        The result is never clamped.
        """
        qty = positive_quantity(quantity)
        tipo = self.movement_type(kind, clave)
        resource = self._load(kind, resource_id)

        if tipo.incrementa_stock:
            new_stock = resource.stock + qty
        else:
            new_stock = resource.stock - qty

        if new_stock < ZERO:
            logger.warning(
                "stock.rejected",
                extra={
                    "kind": kind.value,
                    "resource_id": resource_id,
                    "clave": clave,
                    "qty": str(qty),
                    "stock": str(resource.stock),
                    "reference": str(reference) if reference else None,
                },
            )
            raise InsufficientStockError(
                kind.value, resource_id, resource.stock, qty, resource.name
            )

        movement = self._movement_repo.add(
            Movement(
                id=None,
                kind=kind,
                resource_id=resource_id,
                tipo=tipo,
                cantidad=qty,
                reference=reference,
                notas=notas,
                usuario_id=usuario_id,
            )
        )
        resource.stock = new_stock
        self._save(kind, resource)

        logger.info(
            "stock.record",
            extra={
                "kind": kind.value,
                "resource_id": resource_id,
                "clave": clave,
                "qty": str(qty),
                "stock": str(new_stock),
                "reference": str(reference) if reference else None,
            },
        )
        return movement

    # --- Queries --------------------------------------------------------------

    def movement_type(self, kind: ResourceKind, clave: str) -> MovementType:
        tipo = self._movement_type_repo.get_by_clave(kind, clave)
        if tipo is None:
            raise EntityNotFoundError(
                f"Movement type '{clave}' not found for {kind.value} ledger"
            )
        return tipo

    def net_reservation(
        self, reference: Reference, kind: ResourceKind, resource_id: int
    ) -> Decimal:
        """Quantity currently held back from ``resource_id`` by ``reference``.

        Decreasing movements under the reference count as reservation,
        increasing ones as release. A net release reads as zero.
        """
        total = sum(
            (
                m.signed_quantity
                for m in self._movement_repo.list_by_reference(kind, reference)
                if m.resource_id == resource_id
            ),
            ZERO,
        )
        return max(ZERO, -total)

    def net_reservations(
        self, reference: Reference, kind: ResourceKind
    ) -> dict[int, Decimal]:
        """Net reservation per resource for every resource ``reference`` touched."""
        totals: dict[int, Decimal] = defaultdict(lambda: ZERO)
        for m in self._movement_repo.list_by_reference(kind, reference):
            totals[m.resource_id] += m.signed_quantity
        return {rid: max(ZERO, -total) for rid, total in totals.items()}

    def balance(self, kind: ResourceKind, resource_id: int) -> Decimal:
        """Signed sum of every movement ever recorded for a resource."""
        return sum(
            (m.signed_quantity for m in self._movement_repo.list_by_resource(kind, resource_id)),
            ZERO,
        )

    def history(self, kind: ResourceKind, resource_id: int) -> list[Movement]:
        self._load(kind, resource_id)
        return sorted(
            self._movement_repo.list_by_resource(kind, resource_id),
            key=lambda m: (m.fecha, m.id or 0),
        )

    # --- Internal helpers -----------------------------------------------------

    def _load(self, kind: ResourceKind, resource_id: int) -> Product | Insumo:
        resource: Product | Insumo | None
        if kind is ResourceKind.PRODUCT:
            resource = self._product_repo.get_by_id(resource_id)
        else:
            resource = self._insumo_repo.get_by_id(resource_id)
        if resource is None:
            raise EntityNotFoundError(f"{kind.value.capitalize()} #{resource_id} not found")
        return resource

    def _save(self, kind: ResourceKind, resource: Product | Insumo) -> None:
        if kind is ResourceKind.PRODUCT:
            self._product_repo.save(resource)  # type: ignore[arg-type]
        else:
            self._insumo_repo.save(resource)  # type: ignore[arg-type]
