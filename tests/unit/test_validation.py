"""Unit tests for margin input validation"""

import dataclasses
from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace
from stock_margins.domain.models import VehicleMarginInput
from stock_margins.domain.validation import MAX_AMOUNT, to_decimal, validate_margin_data


def test_complete_data_is_valid(sample_input: VehicleMarginInput):
    """Test a fully populated record passes"""
    validation = validate_margin_data(sample_input)

    assert validation.is_valid is True
    assert validation.errors == []


def test_zero_prices_report_both_errors(sample_input: VehicleMarginInput):
    """Test every problem is reported, not just the first"""
    validation = validate_margin_data(
        dataclasses.replace(sample_input, purchase_price=Decimal("0"), sale_price=Decimal("0"))
    )

    assert validation.is_valid is False
    assert "Valid purchase price is required" in validation.errors
    assert "Valid sale price is required" in validation.errors


def test_zero_costs_are_valid(sample_input: VehicleMarginInput):
    """Test a vehicle with no recorded costs is accepted"""
    validation = validate_margin_data(
        dataclasses.replace(
            sample_input,
            total_costs=Decimal("0"),
            vatable_costs=Decimal("0"),
            non_vatable_costs=Decimal("0"),
        )
    )

    assert validation.is_valid is True


def test_negative_and_missing_costs_rejected(sample_input: VehicleMarginInput):
    """Test each cost bucket is checked independently"""
    validation = validate_margin_data(
        dataclasses.replace(
            sample_input,
            total_costs=Decimal("-1"),
            vatable_costs=None,
            non_vatable_costs=float("nan"),
        )
    )

    assert validation.errors == [
        "Total costs must be provided (can be 0)",
        "Vatable costs must be provided (can be 0)",
        "Non-vatable costs must be provided (can be 0)",
    ]


def test_non_finite_and_non_numeric_prices_rejected(sample_input: VehicleMarginInput):
    """Test infinity, text and booleans are not prices"""
    for bad in (float("inf"), Decimal("Infinity"), "abc", True, None, -500):
        validation = validate_margin_data(dataclasses.replace(sample_input, purchase_price=bad))
        assert validation.errors == ["Valid purchase price is required"], bad


def test_numeric_strings_accepted(sample_input: VehicleMarginInput):
    """Test numbers read from text columns pass"""
    validation = validate_margin_data(
        dataclasses.replace(sample_input, purchase_price="10000.00", sale_price=" 15000 ")
    )

    assert validation.is_valid is True


def test_missing_vehicle_id(sample_input: VehicleMarginInput):
    """Test vehicle identifier must be non-empty"""
    validation = validate_margin_data(dataclasses.replace(sample_input, vehicle_id="  "))

    assert validation.errors == ["Vehicle ID is required"]


def test_dates_checked(sample_input: VehicleMarginInput):
    """Test purchase date is required and sale date must parse when present"""
    validation = validate_margin_data(
        dataclasses.replace(sample_input, purchase_date=None, sale_date="2024-13-45")
    )

    assert validation.errors == [
        "Valid purchase date is required",
        "Sale date must be a valid date",
    ]


def test_date_formats_accepted(sample_input: VehicleMarginInput):
    """Test datetimes and ISO strings count as calendar dates"""
    validation = validate_margin_data(
        dataclasses.replace(
            sample_input,
            purchase_date=datetime(2024, 1, 15, 9, 30),
            sale_date="2024-03-15T10:00:00Z",
        )
    )

    assert validation.is_valid is True


def test_unsold_vehicle_is_valid(sample_input: VehicleMarginInput):
    """Test absent sale date is not an error"""
    validation = validate_margin_data(dataclasses.replace(sample_input, sale_date=None))

    assert validation.is_valid is True


def test_partial_record_never_raises():
    """Test an object missing every field yields a full error list"""
    validation = validate_margin_data(SimpleNamespace())

    assert validation.is_valid is False
    assert len(validation.errors) == 7


def test_to_decimal_conversions():
    """Test numeric coercion rules"""
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(42) == Decimal(42)
    assert to_decimal("12.50") == Decimal("12.50")
    assert to_decimal(Decimal("-3")) == Decimal("-3")
    assert to_decimal("") is None
    assert to_decimal(False) is None
    assert to_decimal(float("nan")) is None
    assert to_decimal([1]) is None
    assert to_decimal(date(2024, 1, 1)) is None


def test_amounts_above_column_limit_rejected(sample_input: VehicleMarginInput):
    """Test prices and costs larger than the stored money column are itemized"""
    validation = validate_margin_data(
        dataclasses.replace(
            sample_input,
            sale_price=Decimal("1e9999999"),
            total_costs=Decimal("100000000"),
        )
    )

    assert validation.is_valid is False
    assert validation.errors == [
        "Sale price must not exceed 99,999,999.99",
        "Total costs must not exceed 99,999,999.99",
    ]


def test_amount_at_column_limit_accepted(sample_input: VehicleMarginInput):
    validation = validate_margin_data(
        dataclasses.replace(sample_input, sale_price=MAX_AMOUNT, vatable_costs=MAX_AMOUNT)
    )

    assert validation.is_valid is True
