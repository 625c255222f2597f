"""Integration tests for the order use cases.

Uses in-memory fake repositories — no file I/O.
"""

from decimal import Decimal

import pytest

from inventario.application.adjust_order import AdjustOrderHandler
from inventario.application.cancel_order import CancelOrderHandler
from inventario.application.check_availability import CheckAvailabilityHandler
from inventario.application.create_order import CreateOrderHandler
from inventario.application.dto import LineSpec
from inventario.application.show_order import ShowOrderHandler
from inventario.domain.exceptions import EntityNotFoundError, ValidationError
from inventario.domain.model.insumo import Insumo
from inventario.domain.model.product import Product
from inventario.domain.model.recipe import RecipeLine
from tests.fakes import World, make_world


def _setup(
    pastel_stock: str = "2",
    harina_stock: str = "10",
) -> tuple[CreateOrderHandler, ShowOrderHandler, World]:
    """Pastel (#1) made from Harina (#1); Refresco (#2) bought in, no recipe."""
    world = make_world(
        products=[
            Product(id=1, name="Pastel", stock=Decimal(pastel_stock)),
            Product(id=2, name="Refresco", stock=Decimal("12")),
        ],
        insumos=[Insumo(id=1, name="Harina", stock=Decimal(harina_stock))],
        recipe=[RecipeLine(None, 1, 1, Decimal("1"))],
    )
    show = ShowOrderHandler(
        world.orders, world.order_lines, world.statuses, world.products, world.reservations
    )
    create = CreateOrderHandler(world.reservations, world.calculator, show)
    return create, show, world


class TestCheckAvailability:

    def test_reports_per_line(self):
        _, _, world = _setup(pastel_stock="2", harina_stock="1")
        handler = CheckAvailabilityHandler(world.calculator, world.products)

        dto = handler.handle([LineSpec(1, "5"), LineSpec(2, "3")])

        pastel, refresco = dto.lines
        assert pastel.product_name == "Pastel"
        assert pastel.reserved_from_stock == "2"
        assert pastel.producible_from_insumos == "1"
        assert pastel.satisfiable is False
        assert [(m.nombre, m.requerido, m.stock) for m in pastel.missing] == [("Harina", "3", "1")]
        assert refresco.satisfiable is True
        assert dto.all_satisfiable is False

    def test_invalid_quantity(self):
        _, _, world = _setup()
        handler = CheckAvailabilityHandler(world.calculator, world.products)
        with pytest.raises(ValidationError, match="Invalid quantity"):
            handler.handle([LineSpec(1, "many")])


class TestCreateOrderHandler:

    def test_creates_pending_order(self):
        create, _, _ = _setup()
        dto = create.handle([LineSpec(1, "5"), LineSpec(2, "1")], customer_id=3, notas="fiesta")

        assert dto.id == 1
        assert dto.status == "pendiente"
        assert dto.customer_id == 3
        assert dto.notas == "fiesta"
        assert [(i.product_name, i.quantity, i.reserved) for i in dto.items] == [
            ("Pastel", "5", "2"),
            ("Refresco", "1", "1"),
        ]
        assert dto.reserved_insumos == {1: "3"}

    def test_partial_coverage_allowed_by_default(self):
        create, _, world = _setup(pastel_stock="0", harina_stock="1")
        dto = create.handle([LineSpec(1, "4")])
        assert dto.reserved_insumos == {1: "1"}
        assert world.insumo_stock(1) == Decimal("0")

    def test_require_full_refuses_partial_order(self):
        create, _, world = _setup(pastel_stock="0", harina_stock="1")
        with pytest.raises(ValidationError, match=r"cannot be fully covered \(products #1\)"):
            create.handle([LineSpec(1, "4")], require_full=True)
        assert world.orders.list_all() == []
        assert world.insumo_stock(1) == Decimal("1")

    def test_require_full_accepts_coverable_order(self):
        create, _, _ = _setup()
        dto = create.handle([LineSpec(1, "5")], require_full=True)
        assert dto.status == "pendiente"

    def test_unknown_product(self):
        create, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            create.handle([LineSpec(42, "1")])


class TestAdjustAndCancelHandlers:

    def test_adjust_returns_refreshed_order(self):
        create, show, world = _setup()
        order = create.handle([LineSpec(1, "5")])

        dto = AdjustOrderHandler(world.reservations, show).handle(order.id, [LineSpec(1, "2")])

        assert [(i.quantity, i.reserved) for i in dto.items] == [("2", "1")]
        assert dto.reserved_insumos == {}

    def test_cancel_releases_and_marks_cancelled(self):
        create, show, world = _setup()
        order = create.handle([LineSpec(1, "5"), LineSpec(2, "4")])

        CancelOrderHandler(world.reservations).handle(order.id)

        dto = show.handle(order.id)
        assert dto.status == "cancelado"
        assert all(i.reserved == "0" for i in dto.items)
        assert world.product_stock(1) == Decimal("2")
        assert world.product_stock(2) == Decimal("12")
        assert world.insumo_stock(1) == Decimal("10")

    def test_show_unknown_order(self):
        _, show, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Order #8"):
            show.handle(8)
