"""Unit tests for the AvailabilityCalculator domain service."""

from decimal import Decimal

import pytest

from inventario.domain.exceptions import EntityNotFoundError, ValidationError
from inventario.domain.model.availability import InsumoReservation, LineRequest
from inventario.domain.model.insumo import Insumo
from inventario.domain.model.product import Product
from inventario.domain.model.recipe import RecipeLine
from tests.fakes import World, make_world


def _setup(
    product_stock: str = "2",
    insumo_stock: str = "10",
    qpu: str = "1",
    with_recipe: bool = True,
) -> World:
    """Product #1 'Pastel' with a single mandatory insumo #1 'Harina'."""
    recipe = []
    if with_recipe:
        recipe = [
            RecipeLine(id=None, product_id=1, insumo_id=1, cantidad_por_unidad=Decimal(qpu))
        ]
    return make_world(
        products=[Product(id=1, name="Pastel", stock=Decimal(product_stock))],
        insumos=[Insumo(id=1, name="Harina", stock=Decimal(insumo_stock))],
        recipe=recipe,
    )


class TestFromFinishedStock:

    def test_served_entirely_from_stock(self):
        world = _setup(product_stock="5", with_recipe=False)
        line = world.calculator.calculate_line(1, 3)
        assert line.reserved_from_stock == Decimal("3")
        assert line.producible_from_insumos == Decimal("0")
        assert line.missing_mandatory_insumos == ()
        assert line.line_satisfiable is True
        assert line.planned_reservation.reserve_from_stock == Decimal("3")
        assert line.planned_reservation.insumos == ()

    def test_stock_covering_request_skips_recipe(self):
        world = _setup(product_stock="5", insumo_stock="0")
        line = world.calculator.calculate_line(1, 5)
        assert line.remaining == Decimal("0")
        assert line.missing_mandatory_insumos == ()
        assert line.planned_reservation.insumos == ()


class TestFromProduction:

    def test_remainder_covered_by_insumos(self):
        world = _setup(product_stock="2", insumo_stock="10")
        line = world.calculator.calculate_line(1, 5)
        assert line.reserved_from_stock == Decimal("2")
        assert line.remaining == Decimal("3")
        assert line.producible_from_insumos == Decimal("3")
        assert line.missing_mandatory_insumos == ()
        assert line.line_satisfiable is True
        assert line.planned_reservation.insumos == (
            InsumoReservation(insumo_id=1, cantidad=Decimal("3")),
        )

    def test_shortage_reported_against_full_remainder(self):
        world = _setup(product_stock="2", insumo_stock="1")
        line = world.calculator.calculate_line(1, 5)
        assert line.producible_from_insumos == Decimal("1")
        assert len(line.missing_mandatory_insumos) == 1
        missing = line.missing_mandatory_insumos[0]
        assert missing.insumo_id == 1
        assert missing.nombre == "Harina"
        assert missing.requerido == Decimal("3")
        assert missing.stock == Decimal("1")
        assert line.line_satisfiable is False

    def test_plan_only_covers_producible_units(self):
        world = _setup(product_stock="2", insumo_stock="1")
        line = world.calculator.calculate_line(1, 5)
        assert line.planned_reservation.reserve_from_stock == Decimal("2")
        assert line.planned_reservation.insumos == (
            InsumoReservation(insumo_id=1, cantidad=Decimal("1")),
        )

    def test_fractional_quantity_per_unit(self):
        world = _setup(product_stock="0", insumo_stock="1", qpu="0.25")
        line = world.calculator.calculate_line(1, 3)
        assert line.producible_from_insumos == Decimal("3")
        assert line.planned_reservation.insumos[0].cantidad == Decimal("0.75")

    def test_optional_lines_are_not_reserved(self):
        world = make_world(
            products=[Product(id=1, name="Pastel")],
            insumos=[
                Insumo(id=1, name="Harina", stock=Decimal("10")),
                Insumo(id=2, name="Chispas", stock=Decimal("10")),
            ],
            recipe=[
                RecipeLine(None, 1, 1, Decimal("1")),
                RecipeLine(None, 1, 2, Decimal("1"), obligatorio=False),
            ],
        )
        line = world.calculator.calculate_line(1, 2)
        assert [r.insumo_id for r in line.planned_reservation.insumos] == [1]

    def test_no_recipe_and_no_stock(self):
        world = _setup(product_stock="0", with_recipe=False)
        line = world.calculator.calculate_line(1, 2)
        assert line.producible_from_insumos == Decimal("0")
        assert line.missing_mandatory_insumos == ()
        assert line.line_satisfiable is False
        assert line.planned_reservation.is_empty

    def test_zero_quantity_per_unit_does_not_block(self):
        world = _setup(product_stock="0", insumo_stock="0", qpu="0")
        line = world.calculator.calculate_line(1, 2)
        assert line.producible_from_insumos == Decimal("0")
        assert line.missing_mandatory_insumos == ()
        assert line.planned_reservation.is_empty


class TestEdgeCases:

    def test_zero_quantity_line(self):
        world = _setup()
        line = world.calculator.calculate_line(1, 0)
        assert line.line_satisfiable is True
        assert line.planned_reservation.is_empty

    def test_negative_quantity_rejected(self):
        world = _setup()
        with pytest.raises(ValidationError, match="cannot be negative"):
            world.calculator.calculate_line(1, -1)

    def test_unknown_product(self):
        world = _setup()
        with pytest.raises(EntityNotFoundError, match="Product #9"):
            world.calculator.calculate_line(9, 1)

    def test_never_writes(self):
        world = _setup(product_stock="2", insumo_stock="10")
        world.calculator.calculate([LineRequest(1, Decimal("5"))])
        assert world.product_stock(1) == Decimal("2")
        assert world.insumo_stock(1) == Decimal("10")

    def test_deterministic_for_fixed_stock(self):
        world = _setup(product_stock="2", insumo_stock="1")
        request = [LineRequest(1, Decimal("5"))]
        assert world.calculator.calculate(request) == world.calculator.calculate(request)


class TestReport:

    def test_all_satisfiable_needs_every_line(self):
        world = make_world(
            products=[
                Product(id=1, name="Pastel", stock=Decimal("5")),
                Product(id=2, name="Galleta", stock=Decimal("0")),
            ]
        )
        report = world.calculator.calculate(
            [LineRequest(1, Decimal("3")), LineRequest(2, Decimal("1"))]
        )
        assert report.line_for(1).line_satisfiable is True
        assert report.line_for(2).line_satisfiable is False
        assert report.all_satisfiable is False

    def test_empty_request(self):
        world = _setup()
        assert world.calculator.calculate([]).all_satisfiable is True

    def test_customer_does_not_change_result(self):
        world = _setup(product_stock="2", insumo_stock="1")
        request = [LineRequest(1, Decimal("5"))]
        assert world.calculator.calculate(request, customer_id=7) == world.calculator.calculate(
            request
        )
