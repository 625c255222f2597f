"""Smoke tests for the click CLI against a temporary data directory."""

import pytest
from click.testing import CliRunner

from inventario.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path, monkeypatch):
    monkeypatch.setenv("INVENTARIO_DATA_DIR", str(tmp_path))
    runner = CliRunner()

    def invoke(*args: str):
        return runner.invoke(cli, list(args))

    return invoke


@pytest.fixture
def bakery(run):
    """Pastel (#1) made from half a kilo of Harina (#1); two cakes in stock."""
    assert run("product", "add", "--name", "Pastel", "--price", "120", "--cost", "45").exit_code == 0
    assert run("insumo", "add", "--name", "Harina", "--unit", "kg").exit_code == 0
    assert run("recipe", "add", "--product", "1", "--insumo", "1", "--per-unit", "0.5").exit_code == 0
    assert run("stock", "set", "--kind", "producto", "--id", "1", "--quantity", "2").exit_code == 0
    assert run("stock", "set", "--kind", "insumo", "--id", "1", "--quantity", "10").exit_code == 0
    return run


class TestCatalogCommands:

    def test_product_add_and_list(self, run):
        result = run("product", "add", "--name", "Pastel", "--price", "120")
        assert result.exit_code == 0
        assert "Product #1 'Pastel' added at $120.00" in result.output

        listing = run("product", "list")
        assert "Pastel" in listing.output

    def test_duplicate_product_is_an_error(self, run):
        run("product", "add", "--name", "Pastel")
        result = run("product", "add", "--name", "Pastel")
        assert result.exit_code != 0
        assert "already exists" in result.output

    def test_empty_lists(self, run):
        assert "No products found." in run("product", "list").output
        assert "No insumos found." in run("insumo", "list").output

    def test_recipe_show(self, bakery):
        result = bakery("recipe", "show", "--product", "1")
        assert result.exit_code == 0
        assert "Harina" in result.output
        assert "Producible units: 20" in result.output


class TestStockCommands:

    def test_show_and_movements(self, bakery):
        show = bakery("stock", "show")
        assert "Pastel" in show.output and "Harina" in show.output

        moves = bakery("stock", "movements", "--kind", "producto", "--id", "1")
        assert moves.exit_code == 0
        assert "ajuste_manual" in moves.output

    def test_negative_stock_rejected(self, bakery):
        result = bakery("stock", "set", "--kind", "producto", "--id", "1", "--quantity", "-3")
        assert result.exit_code != 0
        assert "cannot be negative" in result.output


class TestOrderCommands:

    def test_availability(self, bakery):
        result = bakery("order", "availability", "--items", "1:5")
        assert result.exit_code == 0
        assert "Fully available." in result.output

    def test_create_show_adjust_cancel(self, bakery):
        created = bakery("order", "create", "--items", "1:5", "--delivery", "2026-12-24")
        assert created.exit_code == 0, created.output
        assert "Order #1 created" in created.output
        assert "status=pendiente" in created.output

        adjusted = bakery("order", "adjust", "--id", "1", "--items", "1:2")
        assert adjusted.exit_code == 0, adjusted.output

        cancelled = bakery("order", "cancel", "--id", "1")
        assert "Order #1 cancelled" in cancelled.output

        shown = bakery("order", "show", "--id", "1")
        assert "status=cancelado" in shown.output

    def test_require_full(self, bakery):
        result = bakery("order", "create", "--items", "1:50", "--require-full")
        assert result.exit_code != 0
        assert "cannot be fully covered" in result.output

    def test_bad_items_format(self, bakery):
        result = bakery("order", "create", "--items", "Pastel")
        assert result.exit_code != 0
        assert "Expected 'ProductID:Quantity'" in result.output

    def test_unknown_order(self, run):
        result = run("order", "show", "--id", "9")
        assert result.exit_code != 0
        assert "Order #9 not found" in result.output


class TestProductionAndLossCommands:

    def test_production_run(self, bakery):
        result = bakery("production", "run", "--product", "1", "--quantity", "4")
        assert result.exit_code == 0, result.output
        assert "Production #1" in result.output

    def test_production_shortage(self, bakery):
        result = bakery("production", "run", "--product", "1", "--quantity", "30")
        assert result.exit_code != 0
        assert "Insufficient stock of mandatory insumos" in result.output

    def test_loss_record_and_summary(self, bakery):
        recorded = bakery("loss", "record", "--kind", "producto", "--id", "1", "--quantity", "1")
        assert recorded.exit_code == 0, recorded.output
        assert "$45.00" in recorded.output

        summary = bakery("loss", "summary")
        assert "Losses: 1" in summary.output
        assert "Pastel" in summary.output
