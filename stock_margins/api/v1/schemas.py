"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from stock_margins.domain.formatting import format_currency, format_percentage
from stock_margins.domain.models import MarginOverview, MarginOverviewItem, VehicleMarginInput, VehicleMarginResult


class MarginCalculationRequest(BaseModel):
    """
    Request body for POST /v1/margins/calculate.

    Fields are optional and accept raw strings at the schema level so the
    margin validator can report every missing, malformed or invalid value in
    one response.
    """

    vehicle_id: Optional[str] = Field(None, description="Stock identifier, for traceability")
    registration: str = Field("N/A", description="Display-only registration")
    purchase_price: Optional[Union[Decimal, str]] = Field(None, description="Cost of purchase (GBP)")
    sale_price: Optional[Union[Decimal, str]] = Field(None, description="Sale or forecourt price (GBP)")
    total_costs: Optional[Union[Decimal, str]] = Field(None, description="All ancillary costs (GBP)")
    vatable_costs: Optional[Union[Decimal, str]] = Field(None, description="Inc-VAT costs, VAT reclaimable")
    non_vatable_costs: Optional[Union[Decimal, str]] = Field(None, description="Ex-VAT and fixed costs")
    purchase_date: Optional[Union[date, str]] = None
    sale_date: Optional[Union[date, str]] = Field(None, description="Omit when the vehicle is unsold")
    is_commercial_purchase: bool = False

    def to_margin_input(self) -> VehicleMarginInput:
        return VehicleMarginInput(
            vehicle_id=self.vehicle_id,
            registration=self.registration,
            purchase_price=self.purchase_price,
            sale_price=self.sale_price,
            total_costs=self.total_costs,
            vatable_costs=self.vatable_costs,
            non_vatable_costs=self.non_vatable_costs,
            purchase_date=self.purchase_date,
            sale_date=self.sale_date,
            is_commercial_purchase=self.is_commercial_purchase,
        )


class MarginDisplay(BaseModel):
    """Pre-formatted headline figures for UI cards"""

    gross_profit: str
    net_profit: str
    vat_to_pay: str
    profit_margin_post_vat: str
    gross_margin_percent: str
    net_margin_percent: str


class MarginResponse(BaseModel):
    """Full margin breakdown for one vehicle (amounts unrounded)"""

    vehicle_id: str
    registration: str
    purchase_price: float
    sale_price: float
    total_costs: float
    vatable_costs: float
    non_vatable_costs: float
    purchase_date: date
    sale_date: Optional[date] = None

    outlay_on_vehicle: float
    vat_on_spend: float
    vat_on_purchase: float
    vat_on_sale_price: float
    vat_to_pay: float

    gross_profit: float
    net_profit: float
    profit_margin_pre_vat: float
    profit_margin_post_vat: float

    total_investment: float
    percentage_uplift_after_all_costs: float
    gross_margin_percent: float
    net_margin_percent: float
    profit_category: str
    days_in_stock: int
    profit_per_day: float

    purchase_month: str
    purchase_quarter: str
    sale_month: Optional[str] = None
    sale_quarter: Optional[str] = None

    display: MarginDisplay

    @classmethod
    def from_result(cls, result: VehicleMarginResult) -> "MarginResponse":
        return cls(
            vehicle_id=result.vehicle_id,
            registration=result.registration,
            purchase_price=float(result.purchase_price),
            sale_price=float(result.sale_price),
            total_costs=float(result.total_costs),
            vatable_costs=float(result.vatable_costs),
            non_vatable_costs=float(result.non_vatable_costs),
            purchase_date=result.purchase_date,
            sale_date=result.sale_date,
            outlay_on_vehicle=float(result.outlay_on_vehicle),
            vat_on_spend=float(result.vat_on_spend),
            vat_on_purchase=float(result.vat_on_purchase),
            vat_on_sale_price=float(result.vat_on_sale_price),
            vat_to_pay=float(result.vat_to_pay),
            gross_profit=float(result.gross_profit),
            net_profit=float(result.net_profit),
            profit_margin_pre_vat=float(result.profit_margin_pre_vat),
            profit_margin_post_vat=float(result.profit_margin_post_vat),
            total_investment=float(result.total_investment),
            percentage_uplift_after_all_costs=result.percentage_uplift_after_all_costs,
            gross_margin_percent=result.gross_margin_percent,
            net_margin_percent=result.net_margin_percent,
            profit_category=result.profit_category.value,
            days_in_stock=result.days_in_stock,
            profit_per_day=float(result.profit_per_day),
            purchase_month=result.purchase_month,
            purchase_quarter=result.purchase_quarter,
            sale_month=result.sale_month,
            sale_quarter=result.sale_quarter,
            display=MarginDisplay(
                gross_profit=format_currency(result.gross_profit),
                net_profit=format_currency(result.net_profit),
                vat_to_pay=format_currency(result.vat_to_pay),
                profit_margin_post_vat=format_currency(result.profit_margin_post_vat),
                gross_margin_percent=format_percentage(result.gross_margin_percent),
                net_margin_percent=format_percentage(result.net_margin_percent),
            ),
        )


class OverviewItemSchema(BaseModel):
    """Single vehicle in the margins overview"""

    stock_id: str
    registration: str
    make: Optional[str] = None
    model: Optional[str] = None
    has_complete_data: bool
    missing_data_reasons: List[str]
    margins: Optional[MarginResponse] = None

    @classmethod
    def from_item(cls, item: MarginOverviewItem) -> "OverviewItemSchema":
        return cls(
            stock_id=item.stock_id,
            registration=item.registration,
            make=item.make,
            model=item.model,
            has_complete_data=item.has_complete_data,
            missing_data_reasons=item.missing_data_reasons,
            margins=MarginResponse.from_result(item.margins) if item.margins else None,
        )


class PaginationSchema(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_previous_page: bool


class OverviewSummarySchema(BaseModel):
    total_vehicles: int
    complete_data_items: int
    pending_data_items: int
    total_net_profit: float
    average_net_margin: float
    average_days_in_stock: float


class OverviewResponse(BaseModel):
    """Response for GET /v1/margins"""

    dealer_id: str
    items: List[OverviewItemSchema]
    pagination: PaginationSchema
    summary: OverviewSummarySchema

    @classmethod
    def from_overview(cls, dealer_id: str, overview: MarginOverview) -> "OverviewResponse":
        p = overview.pagination
        s = overview.summary
        return cls(
            dealer_id=dealer_id,
            items=[OverviewItemSchema.from_item(item) for item in overview.items],
            pagination=PaginationSchema(
                current_page=p.current_page,
                total_pages=p.total_pages,
                total_items=p.total_items,
                items_per_page=p.items_per_page,
                has_next_page=p.has_next_page,
                has_previous_page=p.has_previous_page,
            ),
            summary=OverviewSummarySchema(
                total_vehicles=s.total_vehicles,
                complete_data_items=s.complete_data_items,
                pending_data_items=s.pending_data_items,
                total_net_profit=float(s.total_net_profit),
                average_net_margin=s.average_net_margin,
                average_days_in_stock=s.average_days_in_stock,
            ),
        )
