"""Vehicle margin endpoints: ad-hoc calculation, per-vehicle lookup, dealer overview"""

import logging
import time
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from stock_margins.api.v1.schemas import MarginCalculationRequest, MarginResponse, OverviewResponse
from stock_margins.api.dependencies import get_dealer_id, get_request_id
from stock_margins.config import settings
from stock_margins.infrastructure.database.session import get_db
from stock_margins.infrastructure.database.repositories import MarginRecordRepository
from stock_margins.domain.margins import compute_vehicle_margin
from stock_margins.domain.overview import build_margin_input, build_margin_overview
from stock_margins.domain.exceptions import MarginValidationError, VehicleNotFoundError
from stock_margins.infrastructure.observability.metrics import (
    overview_size_histogram,
    record_margin_calculated,
    record_margin_rejected,
)
from stock_margins.infrastructure.observability.logging import log_margin_calculation, log_margin_rejected

router = APIRouter()

INCOMPLETE_DATA_ERROR = "Incomplete data for margin calculations"


def _validation_failed(request_id: str, vehicle_id: str | None, e: MarginValidationError) -> HTTPException:
    record_margin_rejected()
    log_margin_rejected(request_id, vehicle_id, e.errors)
    return HTTPException(status_code=422, detail={"error": INCOMPLETE_DATA_ERROR, "details": e.errors})


@router.post("/margins/calculate", response_model=MarginResponse)
def calculate_margins(request_body: MarginCalculationRequest, request: Request):
    """
    Calculate margins for a vehicle record supplied in the request body.

    Nothing is read from or written to the database. Unsold vehicles (no
    sale_date) are measured against today.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = compute_vehicle_margin(request_body.to_margin_input())
    except MarginValidationError as e:
        raise _validation_failed(request_id, request_body.vehicle_id, e)

    response = MarginResponse.from_result(result)

    record_margin_calculated(result.profit_category)
    log_margin_calculation(request_id, None, result, (time.time() - start_time) * 1000)

    return response


@router.get("/margins/{stock_id}", response_model=MarginResponse)
def get_vehicle_margins(
    stock_id: str,
    request: Request,
    is_commercial_purchase: bool = Query(False, description="Purchase itself attracted VAT"),
    dealer_id: str = Depends(get_dealer_id),
    db: Session = Depends(get_db),
):
    """
    Calculate margins for a vehicle in the dealer's stock.

    Flow:
    1. Load stock, purchase, sale and cost rows for the vehicle
    2. Assemble the margin input (sale price falls back to forecourt price)
    3. Validate and calculate

    Returns:
        404 if the vehicle or its purchase record is missing
        422 with every validation error if the record is incomplete
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        record = MarginRecordRepository(db).get_record(stock_id, dealer_id)
        if record is None:
            raise VehicleNotFoundError(f"No stock or purchase record for {stock_id}")

        result = compute_vehicle_margin(build_margin_input(record, is_commercial_purchase))

    except VehicleNotFoundError as e:
        logging.warning(
            "Vehicle not found",
            extra={"request_id": request_id, "dealer_id": dealer_id, "vehicle_id": stock_id, "error": str(e)},
        )
        raise HTTPException(
            status_code=404,
            detail="Vehicle data not found or incomplete. Please ensure purchase info, costs, and sale details are filled.",
        )

    except MarginValidationError as e:
        raise _validation_failed(request_id, stock_id, e)

    except Exception as e:
        db.rollback()
        logging.error(
            "Unexpected error",
            extra={"request_id": request_id, "dealer_id": dealer_id, "vehicle_id": stock_id, "error": str(e)},
        )
        raise HTTPException(status_code=500, detail="Internal server error")

    response = MarginResponse.from_result(result)

    record_margin_calculated(result.profit_category)
    log_margin_calculation(request_id, dealer_id, result, (time.time() - start_time) * 1000)

    return response


@router.get("/margins", response_model=OverviewResponse)
def get_margins_overview(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.overview_default_limit, ge=1, le=settings.overview_max_limit),
    dealer_id: str = Depends(get_dealer_id),
    db: Session = Depends(get_db),
):
    """
    Margins for every vehicle in the dealer's stock, one page at a time.

    Vehicles lacking purchase, cost or price data are still listed with
    has_complete_data=false and the reasons; summary averages cover complete
    vehicles only.
    """
    request_id = get_request_id(request)

    try:
        repo = MarginRecordRepository(db)
        records = repo.list_records(dealer_id, limit=limit, offset=(page - 1) * limit)
        total_items = repo.count_stock(dealer_id)
    except Exception as e:
        db.rollback()
        logging.error(
            "Overview query failed",
            extra={"request_id": request_id, "dealer_id": dealer_id, "page": page, "error": str(e)},
        )
        raise HTTPException(status_code=500, detail="Internal server error")

    overview = build_margin_overview(records, page=page, limit=limit, total_items=total_items)
    overview_size_histogram.observe(len(overview.items))

    logging.info(
        "Margins overview built",
        extra={
            "request_id": request_id,
            "dealer_id": dealer_id,
            "step": "overview_complete",
            "complete_items": overview.summary.complete_data_items,
            "pending_items": overview.summary.pending_data_items,
        },
    )

    return OverviewResponse.from_overview(dealer_id, overview)
