"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class ProfitCategory(str, Enum):
    """Coarse profit tier derived from net margin percent"""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass(frozen=True)
class VehicleMarginInput:
    """Financial record for one vehicle, assembled by the caller"""

    vehicle_id: str
    registration: str
    purchase_price: Decimal
    sale_price: Decimal
    total_costs: Decimal
    vatable_costs: Decimal  # inc-VAT costs, VAT reclaimable
    non_vatable_costs: Decimal  # ex-VAT + fixed costs
    purchase_date: date
    sale_date: Optional[date] = None  # None = not sold yet
    is_commercial_purchase: bool = False


@dataclass(frozen=True)
class VehicleMarginResult:
    """Output of the margin calculation"""

    vehicle_id: str
    registration: str
    purchase_price: Decimal
    sale_price: Decimal
    total_costs: Decimal
    vatable_costs: Decimal
    non_vatable_costs: Decimal
    purchase_date: date
    sale_date: Optional[date]

    outlay_on_vehicle: Decimal

    vat_on_spend: Decimal
    vat_on_purchase: Decimal
    vat_on_sale_price: Decimal
    vat_to_pay: Decimal

    gross_profit: Decimal
    net_profit: Decimal
    profit_margin_pre_vat: Decimal
    profit_margin_post_vat: Decimal

    total_investment: Decimal
    percentage_uplift_after_all_costs: float
    gross_margin_percent: float
    net_margin_percent: float
    profit_category: ProfitCategory
    days_in_stock: int
    profit_per_day: Decimal

    purchase_month: str
    purchase_quarter: str
    sale_month: Optional[str] = None
    sale_quarter: Optional[str] = None


@dataclass
class ValidationResult:
    """Outcome of the pre-calculation check"""

    is_valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass
class StockMarginRecord:
    """Raw joined row from the stock, purchase, sale and cost tables"""

    stock_id: str
    registration: Optional[str] = None
    make: Optional[str] = None
    model: Optional[str] = None
    purchase_price: Optional[Decimal] = None
    purchase_date: Optional[date] = None
    sale_price: Optional[Decimal] = None
    forecourt_price: Optional[Decimal] = None
    sale_date: Optional[date] = None
    grand_total: Optional[Decimal] = None
    inc_vat_costs_total: Optional[Decimal] = None
    ex_vat_costs_total: Optional[Decimal] = None
    fixed_costs_total: Optional[Decimal] = None


@dataclass
class MarginOverviewItem:
    """One vehicle in the dealer margins overview"""

    stock_id: str
    registration: str
    make: Optional[str]
    model: Optional[str]
    has_complete_data: bool
    missing_data_reasons: List[str]
    margins: Optional[VehicleMarginResult] = None


@dataclass
class MarginOverviewSummary:
    """Aggregates over the complete overview items"""

    total_vehicles: int
    complete_data_items: int
    pending_data_items: int
    total_net_profit: Decimal
    average_net_margin: float
    average_days_in_stock: float


@dataclass
class Pagination:
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_previous_page: bool


@dataclass
class MarginOverview:
    items: List[MarginOverviewItem]
    pagination: Pagination
    summary: MarginOverviewSummary
