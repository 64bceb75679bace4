"""Dealer-wide margins overview: completeness checks, summary, pagination"""

import math
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Union

from stock_margins.domain.exceptions import MarginValidationError
from stock_margins.domain.margins import compute_vehicle_margin
from stock_margins.domain.models import (
    MarginOverview,
    MarginOverviewItem,
    MarginOverviewSummary,
    Pagination,
    StockMarginRecord,
    VehicleMarginInput,
)


def build_margin_input(record: StockMarginRecord, is_commercial_purchase: bool = False) -> VehicleMarginInput:
    """
    Assemble calculator input from a raw stock record.

    - Sale price: recorded sale price, else the forecourt (advertised) price
    - Vatable costs: inc-VAT costs total (VAT paid can be reclaimed)
    - Non-vatable costs: ex-VAT total + fixed costs total
    - Missing cost totals count as zero
    """
    sale_price = record.sale_price if record.sale_price is not None else record.forecourt_price
    inc_vat = record.inc_vat_costs_total or Decimal(0)
    ex_vat = record.ex_vat_costs_total or Decimal(0)
    fixed = record.fixed_costs_total or Decimal(0)

    return VehicleMarginInput(
        vehicle_id=record.stock_id,
        registration=record.registration or "N/A",
        purchase_price=record.purchase_price,
        sale_price=sale_price,
        total_costs=record.grand_total or Decimal(0),
        vatable_costs=inc_vat,
        non_vatable_costs=ex_vat + fixed,
        purchase_date=record.purchase_date,
        sale_date=record.sale_date,
        is_commercial_purchase=is_commercial_purchase,
    )


def missing_data_reasons(record: StockMarginRecord) -> List[str]:
    """List what the record lacks before margins can be worked out"""
    reasons = []
    if not record.purchase_price or record.purchase_date is None:
        reasons.append("Purchase info missing")
    if record.grand_total is None:
        reasons.append("Costs data missing")
    if not record.sale_price and not record.forecourt_price:
        reasons.append("Sale price missing")
    return reasons


def build_overview_item(
    record: StockMarginRecord,
    now: Optional[Union[date, datetime]] = None,
) -> MarginOverviewItem:
    """Calculate margins for a record, or flag it as pending with reasons"""
    item = MarginOverviewItem(
        stock_id=record.stock_id,
        registration=record.registration or "Unknown",
        make=record.make,
        model=record.model,
        has_complete_data=False,
        missing_data_reasons=missing_data_reasons(record),
    )
    if item.missing_data_reasons:
        return item

    try:
        item.margins = compute_vehicle_margin(build_margin_input(record), now=now)
    except MarginValidationError as e:
        item.missing_data_reasons = e.errors
        return item

    item.has_complete_data = True
    return item


def summarize_margins(items: List[MarginOverviewItem], total_vehicles: int) -> MarginOverviewSummary:
    """
    Aggregate overview items.

    Averages cover complete items only and are 0 when there are none.
    """
    complete = [item.margins for item in items if item.has_complete_data and item.margins]
    pending_count = sum(1 for item in items if not item.has_complete_data)

    total_net_profit = sum((m.net_profit for m in complete), Decimal(0))
    average_net_margin = sum(m.net_margin_percent for m in complete) / len(complete) if complete else 0.0
    average_days = sum(m.days_in_stock for m in complete) / len(complete) if complete else 0.0

    return MarginOverviewSummary(
        total_vehicles=total_vehicles,
        complete_data_items=len(complete),
        pending_data_items=pending_count,
        total_net_profit=total_net_profit,
        average_net_margin=average_net_margin,
        average_days_in_stock=average_days,
    )


def paginate(page: int, limit: int, total_items: int) -> Pagination:
    """Page metadata; an empty result still reports one page"""
    total_pages = math.ceil(max(total_items, 1) / limit)
    return Pagination(
        current_page=page,
        total_pages=total_pages,
        total_items=total_items,
        items_per_page=limit,
        has_next_page=page < total_pages,
        has_previous_page=page > 1,
    )


def build_margin_overview(
    records: List[StockMarginRecord],
    page: int,
    limit: int,
    total_items: int,
    now: Optional[Union[date, datetime]] = None,
) -> MarginOverview:
    """
    Main entry point: one page of dealer stock with margins and summary.

    Every record is returned; incomplete ones carry their reasons instead of
    margins so the caller can filter on has_complete_data.
    """
    items = [build_overview_item(record, now=now) for record in records]
    return MarginOverview(
        items=items,
        pagination=paginate(page, limit, total_items),
        summary=summarize_margins(items, total_vehicles=total_items),
    )
