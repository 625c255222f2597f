"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations

from decimal import Decimal


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InsufficientStockError(DomainException):
    """A movement would drive a stock counter below zero.

    Raised before the counter is written. Movements applied earlier in the
    same operation stay applied.
    """

    def __init__(
        self,
        kind: str,
        resource_id: int,
        stock: Decimal,
        requested: Decimal,
        name: str | None = None,
    ) -> None:
        self.kind = kind
        self.resource_id = resource_id
        self.stock = stock
        self.requested = requested
        label = name or f"{kind} #{resource_id}"
        super().__init__(
            f"Insufficient stock for {label} "
            f"(need {requested}, have {stock})"
        )
