"""Pytest fixtures for testing"""

import os

# Point settings at SQLite before the app modules build their engine
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from datetime import date
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from stock_margins.api.main import create_app
from stock_margins.infrastructure.database.models import (
    Base,
    InventoryDetails,
    SaleDetails,
    StockCache,
    VehicleCosts,
)
from stock_margins.infrastructure.database.session import get_db
from stock_margins.domain.models import VehicleMarginInput


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEALER_ID = "5b0c3f8e-2a61-4d1e-9f3a-7c2d9e4b1a00"
OTHER_DEALER_ID = "9e7d6c5b-4a39-4281-b7f6-e5d4c3b2a100"


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def sample_input() -> VehicleMarginInput:
    """Private purchase bought for £10,000, sold for £15,000 sixty days later"""
    return VehicleMarginInput(
        vehicle_id="TEST001",
        registration="AB12 CDE",
        purchase_price=Decimal("10000"),
        sale_price=Decimal("15000"),
        total_costs=Decimal("1200"),
        vatable_costs=Decimal("600"),  # inc-VAT costs, VAT reclaimable
        non_vatable_costs=Decimal("600"),  # ex-VAT + fixed costs
        purchase_date=date(2024, 1, 15),
        sale_date=date(2024, 3, 15),
        is_commercial_purchase=False,
    )


@pytest.fixture
def seeded_stock(db: Session) -> Session:
    """
    Dealer stock covering each overview case:

    - SOLD01:    complete, sold (same figures as sample_input)
    - LISTED01:  unsold, priced from forecourt, no sale row
    - NOCOST01:  purchase recorded but no cost row
    - NOPURCH01: stock only, no purchase row
    - plus one vehicle belonging to another dealer
    """
    db.add_all(
        [
            StockCache(stock_id="SOLD01", dealer_id=DEALER_ID, make="Ford", model="Focus",
                       registration="AB12 CDE", forecourt_price_gbp=Decimal("15500.00")),
            InventoryDetails(stock_id="SOLD01", dealer_id=DEALER_ID, registration="AB12 CDE",
                             date_of_purchase=date(2024, 1, 15), cost_of_purchase=Decimal("10000.00")),
            SaleDetails(stock_id="SOLD01", dealer_id=DEALER_ID,
                        sale_date=date(2024, 3, 15), sale_price=Decimal("15000.00")),
            VehicleCosts(stock_id="SOLD01", dealer_id=DEALER_ID, inc_vat_costs_total=Decimal("600.00"),
                         ex_vat_costs_total=Decimal("400.00"), fixed_costs_total=Decimal("200.00"),
                         grand_total=Decimal("1200.00")),

            StockCache(stock_id="LISTED01", dealer_id=DEALER_ID, make="Vauxhall", model="Corsa",
                       registration="CD34 EFG", forecourt_price_gbp=Decimal("9000.00")),
            InventoryDetails(stock_id="LISTED01", dealer_id=DEALER_ID,
                             date_of_purchase=date(2024, 5, 1), cost_of_purchase=Decimal("7000.00")),
            VehicleCosts(stock_id="LISTED01", dealer_id=DEALER_ID, inc_vat_costs_total=Decimal("0.00"),
                         ex_vat_costs_total=Decimal("0.00"), fixed_costs_total=Decimal("0.00"),
                         grand_total=Decimal("0.00")),

            StockCache(stock_id="NOCOST01", dealer_id=DEALER_ID, make="BMW", model="320d",
                       registration="EF56 GHI", forecourt_price_gbp=Decimal("18000.00")),
            InventoryDetails(stock_id="NOCOST01", dealer_id=DEALER_ID,
                             date_of_purchase=date(2024, 6, 1), cost_of_purchase=Decimal("14000.00")),

            StockCache(stock_id="NOPURCH01", dealer_id=DEALER_ID, make="Audi", model="A3",
                       registration="GH78 IJK", forecourt_price_gbp=Decimal("16000.00")),

            StockCache(stock_id="OTHER01", dealer_id=OTHER_DEALER_ID, make="Kia", model="Ceed",
                       registration="JK90 LMN", forecourt_price_gbp=Decimal("12000.00")),
        ]
    )
    db.commit()
    return db


@pytest.fixture
def dealer_id() -> str:
    return DEALER_ID


@pytest.fixture
def other_dealer_id() -> str:
    return OTHER_DEALER_ID
