"""Unit tests for the StockLedger domain service."""

from decimal import Decimal

import pytest

from inventario.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from inventario.domain.model.insumo import Insumo
from inventario.domain.model.movement import (
    CONSUMO,
    ENTRADA,
    SALIDA,
    Reference,
    ReferenceKind,
    ResourceKind,
)
from inventario.domain.model.product import Product
from tests.fakes import World, make_world

PRODUCT = ResourceKind.PRODUCT
INSUMO = ResourceKind.INSUMO
ORDER_1 = Reference(ReferenceKind.ORDER, 1)
ORDER_2 = Reference(ReferenceKind.ORDER, 2)


def _setup(product_stock: str = "10", insumo_stock: str = "5") -> World:
    return make_world(
        products=[Product(id=1, name="Pastel", stock=Decimal(product_stock))],
        insumos=[Insumo(id=1, name="Harina", stock=Decimal(insumo_stock), unidad_medida="kg")],
    )


class TestRecord:

    def test_entrada_increases_stock(self):
        world = _setup()
        world.ledger.record(PRODUCT, 1, ENTRADA, 4)
        assert world.product_stock(1) == Decimal("14")

    def test_salida_decreases_stock(self):
        world = _setup()
        world.ledger.record(PRODUCT, 1, SALIDA, 4)
        assert world.product_stock(1) == Decimal("6")

    def test_returns_persisted_movement(self):
        world = _setup()
        m = world.ledger.record(INSUMO, 1, CONSUMO, "1.5", ORDER_1, notas="test")
        assert m.id is not None
        assert m.tipo.clave == CONSUMO
        assert m.cantidad == Decimal("1.5")
        assert m.signed_quantity == Decimal("-1.5")
        assert m.reference == ORDER_1
        assert m.notas == "test"

    def test_fractional_insumo_quantities(self):
        world = _setup(insumo_stock="2.5")
        world.ledger.record(INSUMO, 1, SALIDA, "0.75")
        assert world.insumo_stock(1) == Decimal("1.75")

    def test_can_drain_to_exactly_zero(self):
        world = _setup(product_stock="3")
        world.ledger.record(PRODUCT, 1, SALIDA, 3)
        assert world.product_stock(1) == Decimal("0")

    def test_rejects_going_negative(self):
        world = _setup(product_stock="3")
        with pytest.raises(InsufficientStockError, match="need 4, have 3") as exc_info:
            world.ledger.record(PRODUCT, 1, SALIDA, 4)
        assert exc_info.value.resource_id == 1
        assert exc_info.value.kind == "producto"

    def test_rejection_writes_nothing(self):
        world = _setup(product_stock="3")
        with pytest.raises(InsufficientStockError):
            world.ledger.record(PRODUCT, 1, SALIDA, 4)
        assert world.product_stock(1) == Decimal("3")
        assert world.movements.all(PRODUCT) == []

    def test_zero_quantity_rejected(self):
        world = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            world.ledger.record(PRODUCT, 1, SALIDA, 0)

    def test_unknown_resource(self):
        world = _setup()
        with pytest.raises(EntityNotFoundError, match="Producto #99 not found"):
            world.ledger.record(PRODUCT, 99, ENTRADA, 1)

    def test_unknown_movement_type(self):
        world = _setup()
        with pytest.raises(EntityNotFoundError, match="Movement type 'consumo'"):
            world.ledger.record(PRODUCT, 1, CONSUMO, 1)

    def test_insumo_and_product_ledgers_are_separate(self):
        world = _setup()
        world.ledger.record(INSUMO, 1, ENTRADA, 2)
        assert len(world.movements.all(INSUMO)) == 1
        assert world.movements.all(PRODUCT) == []
        assert world.product_stock(1) == Decimal("10")


class TestNetReservation:

    def test_sums_salida_minus_entrada(self):
        world = _setup()
        world.ledger.record(PRODUCT, 1, SALIDA, 5, ORDER_1)
        world.ledger.record(PRODUCT, 1, ENTRADA, 2, ORDER_1)
        assert world.ledger.net_reservation(ORDER_1, PRODUCT, 1) == Decimal("3")

    def test_only_counts_its_own_reference(self):
        world = _setup()
        world.ledger.record(PRODUCT, 1, SALIDA, 5, ORDER_1)
        world.ledger.record(PRODUCT, 1, SALIDA, 1, ORDER_2)
        assert world.ledger.net_reservation(ORDER_2, PRODUCT, 1) == Decimal("1")

    def test_net_release_reads_as_zero(self):
        world = _setup()
        world.ledger.record(PRODUCT, 1, SALIDA, 1, ORDER_1)
        world.ledger.record(PRODUCT, 1, ENTRADA, 3, ORDER_1)
        assert world.ledger.net_reservation(ORDER_1, PRODUCT, 1) == Decimal("0")

    def test_nothing_recorded(self):
        world = _setup()
        assert world.ledger.net_reservation(ORDER_1, PRODUCT, 1) == Decimal("0")

    def test_per_resource(self):
        world = make_world(
            insumos=[
                Insumo(id=1, name="Harina", stock=Decimal("10")),
                Insumo(id=2, name="Azúcar", stock=Decimal("10")),
            ]
        )
        world.ledger.record(INSUMO, 1, SALIDA, 3, ORDER_1)
        world.ledger.record(INSUMO, 2, SALIDA, 2, ORDER_1)
        world.ledger.record(INSUMO, 2, ENTRADA, 2, ORDER_1)
        assert world.ledger.net_reservations(ORDER_1, INSUMO) == {
            1: Decimal("3"),
            2: Decimal("0"),
        }


class TestBalanceAndHistory:

    def test_stock_equals_initial_plus_balance(self):
        world = _setup(product_stock="10")
        world.ledger.record(PRODUCT, 1, SALIDA, 4, ORDER_1)
        world.ledger.record(PRODUCT, 1, ENTRADA, 1, ORDER_1)
        world.ledger.record(PRODUCT, 1, ENTRADA, 6)
        assert world.product_stock(1) == Decimal("10") + world.ledger.balance(PRODUCT, 1)

    def test_history_in_recording_order(self):
        world = _setup()
        world.ledger.record(PRODUCT, 1, SALIDA, 1)
        world.ledger.record(PRODUCT, 1, ENTRADA, 2)
        assert [m.tipo.clave for m in world.ledger.history(PRODUCT, 1)] == [SALIDA, ENTRADA]

    def test_history_of_unknown_resource(self):
        world = _setup()
        with pytest.raises(EntityNotFoundError):
            world.ledger.history(INSUMO, 42)
