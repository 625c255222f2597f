"""JSON-file-backed implementations of the ledger and reference-data repositories.

Each ledger lives in its own file; movement types of both ledgers share
one file, keyed by ledger kind.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from inventario.domain.exceptions import EntityNotFoundError
from inventario.domain.model.movement import (
    Movement,
    MovementType,
    Reference,
    ReferenceKind,
    ResourceKind,
)
from inventario.domain.model.order import Status
from inventario.domain.repository.movement_repository import (
    MovementRepository,
    MovementTypeRepository,
)
from inventario.domain.repository.status_repository import StatusRepository
from inventario.infrastructure.persistence.json_table import JsonTable


class JsonMovementTypeRepository(MovementTypeRepository):

    def __init__(self, file_path: Path) -> None:
        self._table = JsonTable(file_path)

    def get_by_clave(self, kind: ResourceKind, clave: str) -> MovementType | None:
        for raw in self._table.load():
            if raw["kind"] == kind.value and raw["clave"] == clave:
                return self._to_domain(raw)
        return None

    def get_by_id(self, kind: ResourceKind, type_id: int) -> MovementType | None:
        raw = self._table.find(type_id)
        if raw is None or raw["kind"] != kind.value:
            return None
        return self._to_domain(raw)

    def list_by_kind(self, kind: ResourceKind) -> list[MovementType]:
        return [self._to_domain(raw) for raw in self._table.load() if raw["kind"] == kind.value]

    def save(self, movement_type: MovementType) -> MovementType:
        new_id = self._table.upsert(
            {
                "id": movement_type.id,
                "kind": movement_type.kind.value,
                "clave": movement_type.clave,
                "nombre": movement_type.nombre,
                "incrementa_stock": movement_type.incrementa_stock,
            }
        )
        return MovementType(
            id=new_id,
            kind=movement_type.kind,
            clave=movement_type.clave,
            nombre=movement_type.nombre,
            incrementa_stock=movement_type.incrementa_stock,
        )

    @staticmethod
    def _to_domain(raw: dict) -> MovementType:
        return MovementType(
            id=raw["id"],
            kind=ResourceKind(raw["kind"]),
            clave=raw["clave"],
            nombre=raw["nombre"],
            incrementa_stock=raw["incrementa_stock"],
        )


class JsonMovementRepository(MovementRepository):

    def __init__(
        self,
        product_ledger_path: Path,
        insumo_ledger_path: Path,
        type_repo: MovementTypeRepository,
    ) -> None:
        self._tables = {
            ResourceKind.PRODUCT: JsonTable(product_ledger_path),
            ResourceKind.INSUMO: JsonTable(insumo_ledger_path),
        }
        self._type_repo = type_repo

    # --- MovementRepository interface -----------------------------------------

    def add(self, movement: Movement) -> Movement:
        raw = self._to_raw(movement)
        raw["id"] = None
        new_id = self._tables[movement.kind].upsert(raw)
        return Movement(
            id=new_id,
            kind=movement.kind,
            resource_id=movement.resource_id,
            tipo=movement.tipo,
            cantidad=movement.cantidad,
            reference=movement.reference,
            notas=movement.notas,
            usuario_id=movement.usuario_id,
            fecha=movement.fecha,
        )

    def list_by_reference(
        self, kind: ResourceKind, reference: Reference
    ) -> list[Movement]:
        return [
            self._to_domain(kind, raw)
            for raw in self._tables[kind].load()
            if raw["referencia_tipo"] == reference.kind.value
            and raw["referencia_id"] == reference.id
        ]

    def list_by_resource(self, kind: ResourceKind, resource_id: int) -> list[Movement]:
        return [
            self._to_domain(kind, raw)
            for raw in self._tables[kind].load()
            if raw["resource_id"] == resource_id
        ]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(movement: Movement) -> dict:
        return {
            "id": movement.id,
            "resource_id": movement.resource_id,
            "tipo_id": movement.tipo.id,
            "cantidad": str(movement.cantidad),
            "referencia_tipo": movement.reference.kind.value if movement.reference else None,
            "referencia_id": movement.reference.id if movement.reference else None,
            "notas": movement.notas,
            "usuario_id": movement.usuario_id,
            "fecha": movement.fecha.isoformat(),
        }

    def _to_domain(self, kind: ResourceKind, raw: dict) -> Movement:
        tipo = self._type_repo.get_by_id(kind, raw["tipo_id"])
        if tipo is None:
            raise EntityNotFoundError(
                f"Movement type #{raw['tipo_id']} not found for {kind.value} ledger"
            )
        reference = None
        if raw.get("referencia_tipo"):
            reference = Reference(ReferenceKind(raw["referencia_tipo"]), raw.get("referencia_id"))
        return Movement(
            id=raw["id"],
            kind=kind,
            resource_id=raw["resource_id"],
            tipo=tipo,
            cantidad=Decimal(raw["cantidad"]),
            reference=reference,
            notas=raw.get("notas"),
            usuario_id=raw.get("usuario_id"),
            fecha=datetime.fromisoformat(raw["fecha"]),
        )


class JsonStatusRepository(StatusRepository):

    def __init__(self, file_path: Path) -> None:
        self._table = JsonTable(file_path)

    def get_by_clave(self, categoria: str, clave: str) -> Status | None:
        for raw in self._table.load():
            if raw["categoria"] == categoria and raw["clave"] == clave:
                return self._to_domain(raw)
        return None

    def get_by_id(self, status_id: int) -> Status | None:
        raw = self._table.find(status_id)
        return self._to_domain(raw) if raw else None

    def save(self, status: Status) -> Status:
        new_id = self._table.upsert(
            {
                "id": status.id,
                "categoria": status.categoria,
                "clave": status.clave,
                "nombre": status.nombre,
            }
        )
        return Status(id=new_id, categoria=status.categoria, clave=status.clave, nombre=status.nombre)

    @staticmethod
    def _to_domain(raw: dict) -> Status:
        return Status(
            id=raw["id"],
            categoria=raw["categoria"],
            clave=raw["clave"],
            nombre=raw["nombre"],
        )
