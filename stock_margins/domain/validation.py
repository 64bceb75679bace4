"""Pre-calculation checks for vehicle margin input"""

from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from stock_margins.domain.models import ValidationResult, VehicleMarginInput
from stock_margins.utils.date_utils import to_date

# Largest amount a Numeric(10, 2) money column holds
MAX_AMOUNT = Decimal("99999999.99")


def to_decimal(value: Any) -> Optional[Decimal]:
    """
    Convert a numeric value to Decimal.

    Accepts int, float, Decimal and numeric strings. Returns None for bools,
    non-numeric values and NaN/Infinity.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float, str)):
        try:
            # str() keeps 0.1 as Decimal("0.1") rather than its binary expansion
            number = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    else:
        return None

    if not number.is_finite():
        return None
    return number


def _too_large(amount: Optional[Decimal]) -> bool:
    return amount is not None and amount > MAX_AMOUNT


def validate_margin_data(data: VehicleMarginInput) -> ValidationResult:
    """
    Check that a record can be fed to the margin calculator.

    Collects every problem rather than stopping at the first, so callers can
    show all of them at once. Never raises.

    Rules:
    - vehicle_id: non-empty
    - purchase_price, sale_price: finite, > 0 and <= MAX_AMOUNT
    - total_costs, vatable_costs, non_vatable_costs: finite, >= 0 (zero is valid) and <= MAX_AMOUNT
    - purchase_date: valid calendar date
    - sale_date: valid calendar date when present
    """
    errors: List[str] = []

    vehicle_id = getattr(data, "vehicle_id", None)
    if not isinstance(vehicle_id, str) or not vehicle_id.strip():
        errors.append("Vehicle ID is required")

    price_fields = [
        ("purchase_price", "Valid purchase price is required", "Purchase price"),
        ("sale_price", "Valid sale price is required", "Sale price"),
    ]
    for field_name, message, label in price_fields:
        amount = to_decimal(getattr(data, field_name, None))
        if amount is None or amount <= 0:
            errors.append(message)
        elif _too_large(amount):
            errors.append(f"{label} must not exceed {MAX_AMOUNT:,}")

    cost_fields = [
        ("total_costs", "Total costs must be provided (can be 0)", "Total costs"),
        ("vatable_costs", "Vatable costs must be provided (can be 0)", "Vatable costs"),
        ("non_vatable_costs", "Non-vatable costs must be provided (can be 0)", "Non-vatable costs"),
    ]
    for field_name, message, label in cost_fields:
        amount = to_decimal(getattr(data, field_name, None))
        if amount is None or amount < 0:
            errors.append(message)
        elif _too_large(amount):
            errors.append(f"{label} must not exceed {MAX_AMOUNT:,}")

    if to_date(getattr(data, "purchase_date", None)) is None:
        errors.append("Valid purchase date is required")

    sale_date = getattr(data, "sale_date", None)
    if sale_date is not None and to_date(sale_date) is None:
        errors.append("Sale date must be a valid date")

    return ValidationResult(is_valid=not errors, errors=errors)
