"""Margin calculation engine - VAT, profit and margin metrics for a vehicle"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional, Union

from stock_margins.domain.exceptions import MarginValidationError
from stock_margins.domain.models import ProfitCategory, VehicleMarginInput, VehicleMarginResult
from stock_margins.domain.validation import to_decimal, validate_margin_data
from stock_margins.utils.date_utils import days_between, format_month_year, format_quarter, to_date

# 20% VAT: the VAT content of a VAT-inclusive amount is amount / 6
VAT_FRACTION_DIVISOR = Decimal(6)

LOW_MARGIN_CEILING = 10.0  # net margin % at or below this is LOW
MEDIUM_MARGIN_CEILING = 20.0  # above LOW and at or below this is MEDIUM

_ZERO = Decimal(0)
_HUNDRED = Decimal(100)


def _money(value: Any) -> Decimal:
    amount = to_decimal(value)
    return amount if amount is not None else _ZERO


def _percent(numerator: Decimal, denominator: Decimal) -> float:
    if denominator == 0:
        return 0.0
    return float(numerator / denominator * _HUNDRED)


def categorize_profit(net_margin_percent: float) -> ProfitCategory:
    """
    Map net margin percent to a profit tier.

    - <= 10%:       LOW
    - > 10%, <= 20%: MEDIUM
    - > 20%:         HIGH
    """
    if net_margin_percent <= LOW_MARGIN_CEILING:
        return ProfitCategory.LOW
    elif net_margin_percent <= MEDIUM_MARGIN_CEILING:
        return ProfitCategory.MEDIUM
    else:
        return ProfitCategory.HIGH


def calculate_detailed_margins(
    data: VehicleMarginInput,
    now: Optional[Union[date, datetime]] = None,
) -> VehicleMarginResult:
    """
    Derive VAT, profit, margin and holding-period metrics for one vehicle.

    Expects input that already passed validate_margin_data. It does not
    re-validate; degenerate input (zero sale price, zero investment, same-day
    sale) falls back to defined values instead of raising.

    Formulas (VAT at 20%, margin scheme):
        vat_on_spend      = vatable_costs / 6
        vat_on_purchase   = purchase_price / 6 if commercial purchase else 0
        vat_on_sale_price = (sale_price - purchase_price) / 6
        vat_to_pay        = vat_on_sale_price - vat_on_spend - vat_on_purchase
        gross_profit      = sale_price - purchase_price
        net_profit        = gross_profit - vat_on_spend - outlay_on_vehicle
        profit_margin_pre_vat  = sale_price - purchase_price - outlay_on_vehicle
        profit_margin_post_vat = profit_margin_pre_vat - vat_to_pay

    Args:
        data: Vehicle financial record (not mutated)
        now: Reference date for unsold vehicles (default: today)

    Example:
        purchase 10000, sale 15000, costs 1200 (600 vatable), 60 days
        -> net_profit 3700, net margin 25.33% (HIGH), profit_per_day 61.67
    """
    purchase_price = _money(data.purchase_price)
    sale_price = _money(data.sale_price)
    total_costs = _money(data.total_costs)
    vatable_costs = _money(data.vatable_costs)
    non_vatable_costs = _money(data.non_vatable_costs)

    outlay_on_vehicle = total_costs

    # VAT
    vat_on_spend = vatable_costs / VAT_FRACTION_DIVISOR
    vat_on_purchase = purchase_price / VAT_FRACTION_DIVISOR if data.is_commercial_purchase else _ZERO
    vat_on_sale_price = (sale_price - purchase_price) / VAT_FRACTION_DIVISOR
    # Negative means a reclaim position; kept as-is
    vat_to_pay = vat_on_sale_price - vat_on_spend - vat_on_purchase

    # Profit
    gross_profit = sale_price - purchase_price
    net_profit = gross_profit - vat_on_spend - outlay_on_vehicle
    profit_margin_pre_vat = sale_price - purchase_price - outlay_on_vehicle
    profit_margin_post_vat = profit_margin_pre_vat - vat_to_pay

    # Percentages
    total_investment = purchase_price + total_costs
    percentage_uplift = _percent(sale_price - total_investment, total_investment)
    gross_margin_percent = _percent(sale_price - purchase_price, sale_price)
    net_margin_percent = _percent(sale_price - total_investment, sale_price)

    # Holding period
    purchase_date = to_date(data.purchase_date)
    sale_date = to_date(data.sale_date)
    end_date = sale_date or to_date(now) or date.today()
    days_in_stock = days_between(purchase_date, end_date) if purchase_date else 0
    profit_per_day = net_profit / days_in_stock if days_in_stock > 0 else net_profit

    return VehicleMarginResult(
        vehicle_id=data.vehicle_id,
        registration=data.registration,
        purchase_price=purchase_price,
        sale_price=sale_price,
        total_costs=total_costs,
        vatable_costs=vatable_costs,
        non_vatable_costs=non_vatable_costs,
        purchase_date=purchase_date,
        sale_date=sale_date,
        outlay_on_vehicle=outlay_on_vehicle,
        vat_on_spend=vat_on_spend,
        vat_on_purchase=vat_on_purchase,
        vat_on_sale_price=vat_on_sale_price,
        vat_to_pay=vat_to_pay,
        gross_profit=gross_profit,
        net_profit=net_profit,
        profit_margin_pre_vat=profit_margin_pre_vat,
        profit_margin_post_vat=profit_margin_post_vat,
        total_investment=total_investment,
        percentage_uplift_after_all_costs=percentage_uplift,
        gross_margin_percent=gross_margin_percent,
        net_margin_percent=net_margin_percent,
        profit_category=categorize_profit(net_margin_percent),
        days_in_stock=days_in_stock,
        profit_per_day=profit_per_day,
        purchase_month=format_month_year(purchase_date) if purchase_date else "Unknown",
        purchase_quarter=format_quarter(purchase_date) if purchase_date else "Unknown",
        sale_month=format_month_year(sale_date) if sale_date else None,
        sale_quarter=format_quarter(sale_date) if sale_date else None,
    )


def compute_vehicle_margin(
    data: VehicleMarginInput,
    now: Optional[Union[date, datetime]] = None,
) -> VehicleMarginResult:
    """
    Main entry point: validate then calculate.

    Raises:
        MarginValidationError: With every validation error found
    """
    validation = validate_margin_data(data)
    if not validation.is_valid:
        raise MarginValidationError(validation.errors)

    return calculate_detailed_margins(data, now=now)
