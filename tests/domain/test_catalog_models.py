"""Unit tests for the Product, Insumo and Loss models."""

from decimal import Decimal

import pytest

from inventario.domain.exceptions import ValidationError
from inventario.domain.model.insumo import Insumo
from inventario.domain.model.loss import Loss, LossKind
from inventario.domain.model.movement import ResourceKind
from inventario.domain.model.product import Product
from inventario.domain.model.value_objects import Money


class TestProduct:

    def test_create_starts_without_stock(self):
        p = Product.create("  Pastel ", precio=Money.of("120"))
        assert p.id is None
        assert p.name == "Pastel"
        assert p.stock == Decimal("0")
        assert p.precio == Money.of("120")
        assert p.activo is True

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            Product.create("   ")

    def test_negative_minimum_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Product.create("Pastel", stock_minimo=Decimal("-1"))

    def test_low_stock_at_threshold(self):
        p = Product(id=1, name="Pastel", stock=Decimal("3"), stock_minimo=Decimal("3"))
        assert p.is_low_stock is True
        p.stock = Decimal("4")
        assert p.is_low_stock is False

    def test_deactivate(self):
        p = Product(id=1, name="Pastel")
        p.deactivate()
        assert p.activo is False


class TestInsumo:

    def test_create(self):
        i = Insumo.create("Harina", unidad_medida="kg", stock_minimo=Decimal("2.5"))
        assert i.unidad_medida == "kg"
        assert i.stock == Decimal("0")
        assert i.is_low_stock is True

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            Insumo.create("")


class TestLoss:

    def test_resource_follows_kind(self):
        loss = Loss(id=None, kind=LossKind.INSUMO, cantidad=Decimal("1"), insumo_id=3)
        assert loss.resource_id == 3
        assert loss.kind.resource_kind is ResourceKind.INSUMO

    def test_missing_target_rejected(self):
        loss = Loss(id=None, kind=LossKind.PRODUCT, cantidad=Decimal("1"), insumo_id=3)
        with pytest.raises(ValidationError, match="has no target"):
            loss.resource_id

    def test_total_value(self):
        loss = Loss(
            id=None,
            kind=LossKind.PRODUCT,
            cantidad=Decimal("1.5"),
            producto_id=1,
            valor_unitario=Money.of("10"),
        )
        assert loss.valor_total == Money.of("15")
