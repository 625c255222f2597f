"""Unit tests for the LossLedger domain service."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from inventario.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from inventario.domain.model.insumo import Insumo
from inventario.domain.model.loss import LossKind
from inventario.domain.model.movement import (
    ENTRADA,
    PERDIDA,
    SALIDA,
    Reference,
    ReferenceKind,
    ResourceKind,
)
from inventario.domain.model.product import Product
from inventario.domain.model.value_objects import Money
from tests.fakes import World, make_world


def _setup() -> World:
    return make_world(
        products=[
            Product(id=1, name="Pastel", stock=Decimal("10"), costo=Money.of("40.00")),
            Product(id=2, name="Galleta", stock=Decimal("50"), costo=Money.of("2.50")),
        ],
        insumos=[Insumo(id=1, name="Harina", stock=Decimal("20"), unidad_medida="kg")],
    )


def _moves(world: World, kind: ResourceKind, loss_id: int) -> list[tuple[str, Decimal]]:
    ref = Reference(ReferenceKind.LOSS, loss_id)
    return [(m.tipo.clave, m.cantidad) for m in world.movements.list_by_reference(kind, ref)]


class TestRecordLoss:

    def test_product_loss_takes_stock_out(self):
        world = _setup()
        loss = world.loss_ledger.record(LossKind.PRODUCT, 3, producto_id=1, motivo="caída")

        assert world.product_stock(1) == Decimal("7")
        assert _moves(world, ResourceKind.PRODUCT, loss.id) == [(SALIDA, Decimal("3"))]

    def test_insumo_loss_uses_perdida_movement(self):
        world = _setup()
        loss = world.loss_ledger.record(LossKind.INSUMO, "1.5", insumo_id=1)

        assert world.insumo_stock(1) == Decimal("18.5")
        assert _moves(world, ResourceKind.INSUMO, loss.id) == [(PERDIDA, Decimal("1.5"))]

    def test_product_value_defaults_to_cost(self):
        world = _setup()
        loss = world.loss_ledger.record(LossKind.PRODUCT, 2, producto_id=1)
        assert loss.valor_unitario == Money.of("40.00")
        assert loss.valor_total == Money.of("80.00")

    def test_insumo_value_defaults_to_zero(self):
        world = _setup()
        loss = world.loss_ledger.record(LossKind.INSUMO, 2, insumo_id=1)
        assert loss.valor_total == Money.zero()

    def test_explicit_value(self):
        world = _setup()
        loss = world.loss_ledger.record(
            LossKind.INSUMO, 2, insumo_id=1, valor_unitario=Money.of("18.00")
        )
        assert loss.valor_total == Money.of("36.00")

    def test_more_than_stock_rejected_before_saving(self):
        world = _setup()
        with pytest.raises(InsufficientStockError):
            world.loss_ledger.record(LossKind.PRODUCT, 11, producto_id=1)
        assert world.losses.list_all() == []
        assert world.product_stock(1) == Decimal("10")

    def test_missing_target(self):
        world = _setup()
        with pytest.raises(ValidationError, match="requires a product"):
            world.loss_ledger.record(LossKind.PRODUCT, 1, insumo_id=1)

    def test_unknown_target(self):
        world = _setup()
        with pytest.raises(EntityNotFoundError, match="Insumo #9"):
            world.loss_ledger.record(LossKind.INSUMO, 1, insumo_id=9)

    def test_non_positive_quantity(self):
        world = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            world.loss_ledger.record(LossKind.PRODUCT, 0, producto_id=1)


class TestUpdateLoss:

    def test_increase_moves_only_the_difference(self):
        world = _setup()
        loss = world.loss_ledger.record(LossKind.PRODUCT, 3, producto_id=1)

        world.loss_ledger.update(loss.id, cantidad=5)

        assert world.product_stock(1) == Decimal("5")
        assert _moves(world, ResourceKind.PRODUCT, loss.id) == [
            (SALIDA, Decimal("3")),
            (SALIDA, Decimal("2")),
        ]

    def test_decrease_returns_the_difference(self):
        world = _setup()
        loss = world.loss_ledger.record(LossKind.PRODUCT, 3, producto_id=1)

        world.loss_ledger.update(loss.id, cantidad=1)

        assert world.product_stock(1) == Decimal("9")
        assert _moves(world, ResourceKind.PRODUCT, loss.id)[-1] == (ENTRADA, Decimal("2"))

    def test_value_only_change_moves_nothing(self):
        world = _setup()
        loss = world.loss_ledger.record(LossKind.INSUMO, 3, insumo_id=1)

        updated = world.loss_ledger.update(
            loss.id, valor_unitario=Money.of("5"), motivo="humedad"
        )

        assert updated.valor_total == Money.of("15")
        assert updated.motivo == "humedad"
        assert len(_moves(world, ResourceKind.INSUMO, loss.id)) == 1

    def test_increase_beyond_stock_rejected(self):
        world = _setup()
        loss = world.loss_ledger.record(LossKind.PRODUCT, 3, producto_id=1)
        with pytest.raises(InsufficientStockError):
            world.loss_ledger.update(loss.id, cantidad=20)
        assert world.losses.get_by_id(loss.id).cantidad == Decimal("3")

    def test_unknown_loss(self):
        world = _setup()
        with pytest.raises(EntityNotFoundError, match="Loss #4"):
            world.loss_ledger.update(4, cantidad=1)


class TestDeleteLoss:

    def test_returns_quantity_to_stock(self):
        world = _setup()
        loss = world.loss_ledger.record(LossKind.PRODUCT, 4, producto_id=1)

        world.loss_ledger.delete(loss.id)

        assert world.product_stock(1) == Decimal("10")
        assert world.losses.get_by_id(loss.id) is None

    def test_insumo_reversal(self):
        world = _setup()
        loss = world.loss_ledger.record(LossKind.INSUMO, 2, insumo_id=1)
        world.loss_ledger.delete(loss.id)
        assert world.insumo_stock(1) == Decimal("20")
        assert world.ledger.balance(ResourceKind.INSUMO, 1) == Decimal("0")


class TestSummary:

    def test_totals_by_kind(self):
        world = _setup()
        world.loss_ledger.record(LossKind.PRODUCT, 1, producto_id=1)
        world.loss_ledger.record(LossKind.PRODUCT, 4, producto_id=2)
        world.loss_ledger.record(LossKind.INSUMO, 1, insumo_id=1, valor_unitario=Money.of("3"))

        summary = world.loss_ledger.summarize()

        assert summary.total_items == 3
        assert summary.valor_total == Money.of("53.00")
        assert summary.productos.cantidad == 2
        assert summary.productos.valor == Money.of("50.00")
        assert summary.insumos.cantidad == 1

    def test_top_ordered_by_value(self):
        world = _setup()
        world.loss_ledger.record(LossKind.PRODUCT, 10, producto_id=2)
        world.loss_ledger.record(LossKind.PRODUCT, 1, producto_id=1)
        world.loss_ledger.record(LossKind.PRODUCT, 1, producto_id=1)

        top = world.loss_ledger.summarize().top

        assert [(t.nombre, t.frecuencia) for t in top] == [("Pastel", 2), ("Galleta", 1)]
        assert top[0].cantidad_total == Decimal("2")
        assert top[0].valor_total == Money.of("80.00")

    def test_date_window(self):
        world = _setup()
        loss = world.loss_ledger.record(LossKind.PRODUCT, 1, producto_id=1)
        tomorrow = loss.fecha + timedelta(days=1)

        assert world.loss_ledger.summarize(desde=tomorrow).total_items == 0
        assert world.loss_ledger.summarize(hasta=tomorrow).total_items == 1

    def test_empty(self):
        world = _setup()
        summary = world.loss_ledger.summarize(desde=datetime(2020, 1, 1, tzinfo=timezone.utc))
        assert summary.total_items == 0
        assert summary.valor_total == Money.zero()
        assert summary.top == ()
