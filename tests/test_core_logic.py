"""Unit tests verifying the application layer."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from unittest.mock import Mock

import pytest

from stationery_store import core_logic, data_manager
from stationery_store.cart import CheckoutStatus
from stationery_store.constants import PaymentMethod, Role


# ---------------------------------------------------------------------------
# Runtime/context management
# ---------------------------------------------------------------------------


def test_load_settings_falls_back_to_defaults_without_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    settings = core_logic.load_settings()

    assert settings == data_manager.StoreSettings.defaults()


def test_load_settings_with_missing_explicit_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        core_logic.load_settings(tmp_path / "missing.ini")


def test_load_settings_discovers_config_upward(tmp_path, monkeypatch, config_factory):
    bundle = config_factory(store_name="Upstairs Store")
    nested = bundle.directory / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    settings = core_logic.load_settings()

    assert settings.store_name == "Upstairs Store"


def test_load_runtime_context_seeds_default_catalogue(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    context = core_logic.load_runtime_context()

    assert [product.code for product in core_logic.list_products(context)] == ["P001", "P002", "V001"]
    assert context.cart.is_empty


def test_seed_inventory_uses_seed_file_when_configured(monkeypatch, notebook):
    loader = Mock(return_value=[notebook])
    monkeypatch.setattr(data_manager, "load_seed_products", loader)
    settings = data_manager.StoreSettings(store_name="S", currency_label="S/.", seed_file=Path("/seed.xlsx"))

    inventory = core_logic.seed_inventory(settings)

    assert inventory.list_all() == [notebook]
    loader.assert_called_once_with(Path("/seed.xlsx"))


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def test_find_product_returns_match(context, crayons):
    assert core_logic.find_product(context, "P002") == crayons


def test_find_product_strips_whitespace(context, crayons):
    assert core_logic.find_product(context, "  P002 \n") == crayons


def test_find_product_unknown_returns_none(context):
    assert core_logic.find_product(context, "X") is None


def test_get_product_unknown_raises_missing_reference(context):
    with pytest.raises(core_logic.MissingReferenceError):
        core_logic.get_product(context, "X")


# ---------------------------------------------------------------------------
# Cart operations
# ---------------------------------------------------------------------------


def test_add_to_cart_aggregates_quantities(context):
    core_logic.add_to_cart(context, core_logic.AddToCartCommand(code="P001", quantity=1))
    line = core_logic.add_to_cart(context, core_logic.AddToCartCommand(code="P001", quantity=4))

    assert line.quantity == 5
    assert len(context.cart) == 1


@pytest.mark.parametrize("quantity", [0, -3, True, 1.5])
def test_add_to_cart_rejects_invalid_quantity(context, quantity):
    with pytest.raises(ValueError):
        core_logic.add_to_cart(context, core_logic.AddToCartCommand(code="P001", quantity=quantity))
    assert context.cart.is_empty


def test_add_to_cart_unknown_product_is_business_violation(context):
    with pytest.raises(core_logic.BusinessRuleViolation):
        core_logic.add_to_cart(context, core_logic.AddToCartCommand(code="NOPE", quantity=1))


def test_summarize_cart_applies_discount(context):
    core_logic.add_to_cart(context, core_logic.AddToCartCommand(code="P002", quantity=2))

    summary = core_logic.summarize_cart(context)

    assert summary.total == Decimal("18")


def test_checkout_empty_cart_reports_empty(context):
    result = core_logic.checkout(context, core_logic.CheckoutCommand(method=PaymentMethod.YAPE))

    assert result.status is CheckoutStatus.EMPTY


def test_checkout_pays_with_selected_gateway(context):
    core_logic.add_to_cart(context, core_logic.AddToCartCommand(code="P001", quantity=3))

    result = core_logic.checkout(context, core_logic.CheckoutCommand(method=PaymentMethod.PLIN))

    assert result.status is CheckoutStatus.PAID
    assert result.receipt is not None
    assert result.receipt.method is PaymentMethod.PLIN
    assert result.receipt.amount == Decimal("15")


def test_describe_roles_lists_every_role():
    assert {role for role, _ in core_logic.describe_roles()} == set(Role)
