"""Application service: Check Availability use case (query)."""

from __future__ import annotations

from inventario.application.dto import AvailabilityDTO, LineSpec
from inventario.application.mappers import availability_to_dto, to_requests
from inventario.domain.repository.product_repository import ProductRepository
from inventario.domain.service.availability_calculator import AvailabilityCalculator


class CheckAvailabilityHandler:

    def __init__(
        self,
        calculator: AvailabilityCalculator,
        product_repo: ProductRepository,
    ) -> None:
        self._calculator = calculator
        self._product_repo = product_repo

    def handle(self, specs: list[LineSpec]) -> AvailabilityDTO:
        report = self._calculator.calculate(to_requests(specs))
        return availability_to_dto(report, self._product_repo)
